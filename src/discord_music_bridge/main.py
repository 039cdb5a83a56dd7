#!/usr/bin/env python3
"""Console entry point: configure logging, check credentials and run the bridge."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from discord_music_bridge.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_bridge.utils.logging import ColoredFormatter

if TYPE_CHECKING:
    from discord_music_bridge.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"
_FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FALLBACK_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _read_logging_config(path: Path) -> dict[str, Any] | None:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return None


def _fallback_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        ColoredFormatter(_FALLBACK_FORMAT, _FALLBACK_DATEFMT, stream=handler.stream)
    )
    return handler


def setup_logging(log_level: str = "INFO", *, config_path: Path = _LOGGING_CONFIG_PATH) -> None:
    """Apply the shipped dictConfig, or a colored console handler when it is unusable.

    The root level always follows *log_level* so settings win over the file.
    """
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    config = _read_logging_config(config_path)
    if config is not None:
        try:
            logging.config.dictConfig(config)
        except ValueError:
            config = None

    if config is None:
        logging.basicConfig(level=resolved_level, handlers=[_fallback_handler()])
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, config_path)

    logging.getLogger().setLevel(resolved_level)


def _command_scope(settings: Settings) -> str:
    guild_id = settings.discord.guild_id
    return f"to guild {guild_id}" if guild_id else "globally"


def main() -> int:
    from discord_music_bridge.config.settings import get_settings
    from discord_music_bridge.utils.logging import install_exception_hooks

    settings = get_settings()
    setup_logging(settings.effective_log_level)
    install_exception_hooks()

    logger = logging.getLogger(__name__)

    token = settings.discord.token.get_secret_value()
    if not token:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))
    logger.info(LogTemplates.BOT_COMMAND_SCOPE, _command_scope(settings))

    from discord_music_bridge.config.container import create_container
    from discord_music_bridge.infrastructure.discord.bot import create_bot

    bot = create_bot(create_container(settings), settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token, shutdown_timeout=settings.discord.shutdown_timeout_s)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1
    else:
        logger.info(LogTemplates.BOT_STOPPED)
    return 0


def cli() -> None:
    """Console script entry point (``discord-music-bridge``)."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
