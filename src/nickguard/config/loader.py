"""Read the YAML settings file, optionally after a .env overlay."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger


def load_config(path: str | Path) -> dict[str, Any]:
    """Parse ``path`` with ``yaml.safe_load``.

    A missing file, an empty document or a top level that is not a mapping
    all give ``{}`` and leave the complaint to validation. Malformed YAML is
    logged and re-raised.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("No config file at {}", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Config {} is not valid YAML: {}", path, exc)
        raise

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config {} must be a mapping, got {}", path, type(data).__name__)
        return {}
    return data


def load_config_with_env(path: str | Path) -> dict[str, Any]:
    """Populate the environment from ``.env``, then read ``path``.

    NICKSERV_PASSWORD and IRC_NICK from the environment win over the file;
    Config applies them.
    """
    from dotenv import load_dotenv

    load_dotenv()
    return load_config(path)
