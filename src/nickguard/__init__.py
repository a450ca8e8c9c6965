"""NickServ identify, ghost recovery and nickname tracking for IRC clients."""

from nickguard.classifier import NoticeIntent, classify_notice
from nickguard.config.session import ConfigResult, SessionConfig, parse_session_config
from nickguard.core.errors import ConfigurationError, NickGuardError
from nickguard.events import (
    Connection,
    Nick,
    NicknameInUse,
    Notice,
    OutboundQueue,
    Quit,
    SendPrivateMessage,
    SetNickname,
)
from nickguard.handlers import NickServHandlers
from nickguard.identity import IdentityTracker
from nickguard.queue import CommandQueue

__version__ = "0.1.0"

__all__ = [
    "CommandQueue",
    "ConfigResult",
    "ConfigurationError",
    "Connection",
    "IdentityTracker",
    "Nick",
    "NickGuardError",
    "NickServHandlers",
    "NicknameInUse",
    "Notice",
    "NoticeIntent",
    "OutboundQueue",
    "Quit",
    "SendPrivateMessage",
    "SessionConfig",
    "SetNickname",
    "__version__",
    "classify_notice",
    "parse_session_config",
]
