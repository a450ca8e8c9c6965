"""Validated NickServ session settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from nickguard.core.constants import DEFAULT_AGENT
from nickguard.core.errors import ConfigurationError, NickGuardError

if TYPE_CHECKING:
    from nickguard.events import Connection


def _require_text(value: Any, name: str, code: str) -> None:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(
            f"{name} must be a non-empty string",
            code=code,
            details={"type": type(value).__name__},
        )


@dataclass(frozen=True)
class SessionConfig:
    """Immutable NickServ settings for one connection.

    ``nickname`` is the nickname to protect. When omitted it is resolved
    against the connection's current nickname each time it is needed.
    """

    password: str = field(repr=False)
    nickname: str | None = None
    agent: str = DEFAULT_AGENT
    ghost: bool = True

    def __post_init__(self) -> None:
        _require_text(self.password, "password", "invalid_password")
        if self.nickname is not None:
            _require_text(self.nickname, "nickname", "invalid_nickname")
        _require_text(self.agent, "agent", "invalid_agent")
        if not isinstance(self.ghost, bool):
            raise ConfigurationError(
                "ghost must be a boolean",
                code="invalid_ghost",
                details={"type": type(self.ghost).__name__},
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SessionConfig:
        """Build from a raw config mapping; raise ConfigurationError on failure."""
        return cls(
            password=data.get("password"),
            nickname=data.get("nickname"),
            agent=data.get("agent", DEFAULT_AGENT),
            ghost=data.get("ghost", True),
        )

    def desired_nickname(self, connection: Connection) -> str:
        """Nickname to protect, falling back to the connection's own."""
        if self.nickname is not None:
            return self.nickname
        return connection.current_nickname()


@dataclass(frozen=True)
class ConfigResult:
    """Either a valid SessionConfig or the error that prevented one."""

    config: SessionConfig | None = None
    error: ConfigurationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.config is not None

    def unwrap(self) -> SessionConfig:
        if self.error is not None:
            raise self.error
        if self.config is None:
            raise NickGuardError(
                "config result holds neither a config nor an error",
                code="empty_result",
            )
        return self.config


def parse_session_config(data: Mapping[str, Any]) -> ConfigResult:
    """Non-raising variant of SessionConfig.from_mapping."""
    try:
        return ConfigResult(config=SessionConfig.from_mapping(data))
    except ConfigurationError as exc:
        return ConfigResult(error=exc)
