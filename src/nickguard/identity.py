"""Per-connection view of the client's own and protected nicknames."""

from __future__ import annotations

from nickguard.config.session import SessionConfig
from nickguard.core.constants import FALLBACK_SUFFIX
from nickguard.events import Connection


class IdentityTracker:
    """Wraps a connection's nickname field; holds no nickname storage of its own."""

    def __init__(self, connection: Connection, config: SessionConfig) -> None:
        self._connection = connection
        self._config = config

    def current_nickname(self) -> str:
        return self._connection.current_nickname()

    def set_nickname(self, nickname: str) -> None:
        self._connection.set_nickname(nickname)

    @property
    def desired_nickname(self) -> str:
        """Protected nickname, resolved on every access."""
        return self._config.desired_nickname(self._connection)

    @property
    def fallback_nickname(self) -> str:
        return self.desired_nickname + FALLBACK_SUFFIX

    def is_desired(self, nickname: str | None) -> bool:
        return nickname is not None and nickname == self.desired_nickname
