"""Tests for notice classification."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nickguard.classifier import NoticeIntent, classify_notice, is_identified_confirmation


class TestClassifyNotice:
    def test_auth_request(self):
        text = "This nickname is registered. Please choose a different nickname."
        assert classify_notice("NickServ", text) is NoticeIntent.AUTH_REQUEST

    def test_ghost_notification(self):
        assert classify_notice("NickServ", "Phergie has been ghosted.") is NoticeIntent.GHOST_NOTIFICATION

    @pytest.mark.parametrize("text", ["Ghost with your nick has been killed.", "GHOSTED"])
    def test_ghost_marker_any_case(self, text):
        assert classify_notice("NickServ", text) is NoticeIntent.GHOST_NOTIFICATION

    def test_registered_marker_is_case_sensitive(self):
        assert classify_notice("NickServ", "Nickname REGISTERED") is NoticeIntent.UNRELATED

    def test_both_markers_prefers_auth(self):
        text = "registered nickname; ghost removed"
        assert classify_notice("NickServ", text) is NoticeIntent.AUTH_REQUEST

    def test_unrelated_text(self):
        assert classify_notice("NickServ", "You are now identified for Phergie") is NoticeIntent.UNRELATED

    def test_none_text(self):
        assert classify_notice("NickServ", None) is NoticeIntent.UNRELATED

    def test_custom_agent(self):
        assert classify_notice("AuthServ", "registered", agent="AuthServ") is NoticeIntent.AUTH_REQUEST
        assert classify_notice("NickServ", "registered", agent="AuthServ") is NoticeIntent.UNRELATED

    @given(st.text().filter(lambda s: s != "NickServ"), st.text())
    def test_other_senders_always_unrelated(self, sender, text):
        assert classify_notice(sender, text) is NoticeIntent.UNRELATED

    @given(st.text(), st.text())
    def test_registered_always_auth(self, prefix, suffix):
        assert classify_notice("NickServ", prefix + "registered" + suffix) is NoticeIntent.AUTH_REQUEST


class TestIdentifiedConfirmation:
    def test_matches_acknowledgement(self):
        assert is_identified_confirmation("NickServ", "You are now identified for Phergie.")

    def test_rejects_other_sender(self):
        assert not is_identified_confirmation("foo", "You are now identified for Phergie.")

    def test_rejects_other_text(self):
        assert not is_identified_confirmation("NickServ", "Invalid password for Phergie.")
