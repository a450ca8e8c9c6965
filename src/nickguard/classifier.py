"""NickServ notice classification.

Matching is done on short, stable substrings rather than the full service
grammar, so differently worded services (Atheme, Anope, Ergo) classify the
same way. Rules are evaluated in order and the first match wins:

1. ``"registered"`` (case-sensitive) -> AUTH_REQUEST
2. ``"ghost"`` (any case) -> GHOST_NOTIFICATION
3. anything else -> UNRELATED

A notice containing both markers is an AUTH_REQUEST.
"""

from __future__ import annotations

from enum import Enum

from nickguard.core.constants import AUTH_MARKER, DEFAULT_AGENT, GHOST_MARKER, IDENTIFIED_MARKER


class NoticeIntent(Enum):
    AUTH_REQUEST = "auth_request"
    GHOST_NOTIFICATION = "ghost_notification"
    UNRELATED = "unrelated"


def classify_notice(sender: str, text: str | None, agent: str = DEFAULT_AGENT) -> NoticeIntent:
    """Classify a notice body sent by ``sender``."""
    if sender != agent:
        return NoticeIntent.UNRELATED
    body = text or ""
    if AUTH_MARKER in body:
        return NoticeIntent.AUTH_REQUEST
    if GHOST_MARKER in body.lower():
        return NoticeIntent.GHOST_NOTIFICATION
    return NoticeIntent.UNRELATED


def is_identified_confirmation(sender: str, text: str | None, agent: str = DEFAULT_AGENT) -> bool:
    """True for the service's "You are now identified" acknowledgement."""
    return sender == agent and IDENTIFIED_MARKER in (text or "").lower()
