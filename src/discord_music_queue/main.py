#!/usr/bin/env python3
"""Entry point for the music queue bot.

Startup order: load settings, configure logging, refuse to start without a
token, report the queue configuration, then build the container and run the
bot. The idle session reaper and the blacklist database come up later in
the bot's ``setup_hook``.
"""

from __future__ import annotations

import logging
import shutil
import sys
from typing import TYPE_CHECKING

from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.utils.logging import setup_logging

if TYPE_CHECKING:
    from discord_music_queue.config.settings import Settings


def _log_startup(settings: Settings, logger: logging.Logger) -> None:
    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))
    logger.info(
        LogTemplates.BOT_QUEUE_CONFIG,
        settings.database.url,
        settings.audio.default_volume_percent,
        settings.audio.resolve_timeout_seconds,
    )
    logger.info(
        LogTemplates.BOT_REAPER_CONFIG,
        settings.cleanup.idle_session_minutes,
        settings.cleanup.interval_seconds,
    )
    # Streams are decoded by an external ffmpeg process.
    if shutil.which("ffmpeg") is None:
        logger.warning(LogTemplates.BOT_FFMPEG_MISSING)


def main() -> int:
    from discord_music_queue.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    _log_startup(settings, logger)

    from discord_music_queue.config.container import create_container
    from discord_music_queue.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    bot = create_bot(container, settings)

    try:
        bot.run_with_graceful_shutdown(token_value)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1

    logger.info(LogTemplates.BOT_STOPPED)
    return 0


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
