"""Tests for event variants, commands and factories."""

from __future__ import annotations

import pytest

from nickguard.events import (
    Connection,
    Nick,
    NicknameInUse,
    Notice,
    OutboundQueue,
    Quit,
    SendPrivateMessage,
    SetNickname,
    nick_change,
    nickname_in_use,
    notice,
    quit,
)
from nickguard.queue import CommandQueue
from tests.mocks import MockConnection, RecordingQueue


def test_event_factories() -> None:
    """Factories build the matching event around the connection."""
    connection = MockConnection()

    evt = notice("NickServ", "hi", connection)
    assert isinstance(evt, Notice)
    assert evt.connection is connection

    evt = quit("Phergie", connection, reason="bye")
    assert isinstance(evt, Quit)
    assert evt.reason == "bye"

    evt = nick_change("Phergie_", "Phergie", connection)
    assert isinstance(evt, Nick)
    assert evt.new_nickname == "Phergie"

    evt = nickname_in_use("irc.example.net", connection, nickname="Phergie")
    assert isinstance(evt, NicknameInUse)
    assert evt.nickname == "Phergie"


def test_notice_factory_normalises_missing_text() -> None:
    evt = notice("NickServ", None, MockConnection())

    assert evt.text == ""


def test_params_views() -> None:
    connection = MockConnection()

    assert dict(Notice("NickServ", "hi", connection).params) == {"text": "hi"}
    assert dict(Nick("a", "b", connection).params) == {"nickname": "b"}
    assert dict(Quit("a", connection).params) == {}
    assert dict(NicknameInUse("s", connection).params) == {}
    assert dict(NicknameInUse("s", connection, nickname="x").params) == {"nickname": "x"}


def test_params_are_read_only() -> None:
    evt = Notice("NickServ", "hi", MockConnection())

    with pytest.raises(TypeError):
        evt.params["text"] = "changed"  # type: ignore[index]


def test_events_are_frozen() -> None:
    evt = Quit("Phergie", MockConnection())

    with pytest.raises(AttributeError):
        evt.source = "other"  # type: ignore[misc]


def test_commands_compare_by_value() -> None:
    assert SetNickname("Phergie") == SetNickname("Phergie")
    assert SendPrivateMessage("NickServ", "GHOST Phergie pw") != SendPrivateMessage(
        "NickServ", "IDENTIFY Phergie pw"
    )


def test_protocols_accept_doubles() -> None:
    assert isinstance(MockConnection(), Connection)
    assert isinstance(RecordingQueue(), OutboundQueue)
    assert isinstance(CommandQueue(), OutboundQueue)
