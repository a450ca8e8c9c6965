"""Configuration: YAML + env overlay, NickServ session settings."""

from nickguard.config.loader import load_config, load_config_with_env
from nickguard.config.schema import Config, cfg
from nickguard.config.session import ConfigResult, SessionConfig, parse_session_config

__all__ = [
    "Config",
    "ConfigResult",
    "SessionConfig",
    "cfg",
    "load_config",
    "load_config_with_env",
    "parse_session_config",
]
