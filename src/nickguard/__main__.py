"""NickGuard entrypoint. Loads config, connects to IRC and guards the nickname."""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from pathlib import Path

import yaml
from loguru import logger

from nickguard import __version__
from nickguard.adapters.irc import IRCService
from nickguard.config import Config, cfg, load_config_with_env
from nickguard.core.errors import ConfigurationError


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru. Replace default logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        ),
    )


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path)
    cfg.reload(data)
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="NickGuard: NickServ identify and ghost recovery for an IRC nickname"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    if not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        sys.exit(1)

    try:
        config = reload_config(args.config)
    except (ConfigurationError, yaml.YAMLError) as exc:
        logger.error("Invalid config {}: {}", args.config, exc)
        sys.exit(1)
    logger.info("Config loaded from {}", args.config)

    asyncio.run(_run(config, args.config))


async def _run(config: Config, config_path: Path) -> None:
    """Async run loop. Start the IRC service and wait."""
    service = IRCService(config)

    def on_sighup() -> None:
        try:
            reload_config(config_path)
        except (ConfigurationError, yaml.YAMLError) as exc:
            logger.error("Config reload rejected: {}", exc)
            return
        service.reload()
        logger.info("Config reloaded (SIGHUP)")

    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGHUP, on_sighup)

    await service.start()
    try:
        while True:
            await asyncio.sleep(60)
    except asyncio.CancelledError:
        logger.info("NickGuard shutting down")
        await service.stop()


if __name__ == "__main__":
    main()
