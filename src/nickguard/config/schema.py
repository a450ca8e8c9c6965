"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from nickguard.config.session import SessionConfig
from nickguard.core.errors import ConfigurationError

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "IRC_NICK",
    "NICKSERV_PASSWORD",
)

def _load_env_overrides() -> dict[str, str]:
    """Load env overrides once per reload."""
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}

class Config:
    """Config accessor with attribute-style access for nested keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data (e.g. on SIGHUP reload)."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: server={} nick={}", self.irc_server, self.irc_nick)

    def _validate(self) -> None:
        """Validate config structure; raise ConfigurationError on failure."""
        irc = self._data.get("irc")
        if irc is not None and not isinstance(irc, dict):
            raise ConfigurationError(
                "irc must be a mapping",
                code="invalid_irc",
                details={"type": type(irc).__name__},
            )
        if not self.irc_server:
            raise ConfigurationError("irc.server is required", code="missing_irc_server")
        channels = self.get("irc.channels")
        if channels is not None and not isinstance(channels, list):
            raise ConfigurationError(
                "irc.channels must be a list",
                code="invalid_irc_channels",
                details={"type": type(channels).__name__},
            )
        nickserv = self._data.get("nickserv")
        if nickserv is not None and not isinstance(nickserv, dict):
            raise ConfigurationError(
                "nickserv must be a mapping",
                code="invalid_nickserv",
                details={"type": type(nickserv).__name__},
            )
        self.session()

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path (e.g. 'irc.server')."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    @property
    def irc_server(self) -> str:
        return str(self.get("irc.server", "") or "")

    @property
    def irc_tls(self) -> bool:
        return bool(self.get("irc.tls", True))

    @property
    def irc_port(self) -> int:
        return int(self.get("irc.port", 6697 if self.irc_tls else 6667))

    @property
    def irc_nick(self) -> str:
        env_val = self._env.get("IRC_NICK", "")
        if env_val:
            return env_val
        return str(self.get("irc.nick", "nickguard"))

    @property
    def irc_realname(self) -> str | None:
        val = self.get("irc.realname")
        return str(val) if val else None

    @property
    def irc_channels(self) -> list[str]:
        val = self.get("irc.channels")
        if isinstance(val, list):
            return [str(c) for c in val]
        return []

    @property
    def irc_throttle_limit(self) -> int:
        return int(self.get("irc.throttle_limit", 10))

    @property
    def nickserv(self) -> dict[str, Any]:
        """NickServ section with env overrides applied."""
        val = self._data.get("nickserv")
        section = dict(val) if isinstance(val, dict) else {}
        env_password = self._env.get("NICKSERV_PASSWORD", "")
        if env_password:
            section["password"] = env_password
        return section

    def session(self) -> SessionConfig:
        """Build the validated session; the protected nickname defaults to irc.nick."""
        section = self.nickserv
        section.setdefault("nickname", self.irc_nick)
        return SessionConfig.from_mapping(section)

cfg: Config = Config({})
