"""Main Discord bot class integrating the DI container, cog lifecycle, and background jobs."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_music_queue.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_music_queue.infrastructure.discord.cogs.music_cog import ERROR_HANDLED_KEY

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

COGS: tuple[str, ...] = (
    "discord_music_queue.infrastructure.discord.cogs.music_cog",
    "discord_music_queue.infrastructure.discord.cogs.admin_cog",
    "discord_music_queue.infrastructure.discord.cogs.event_cog",
)


class MusicBot(commands.Bot):
    def __init__(
        self,
        container: Container,
        settings: Settings,
        **kwargs,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.voice_states = True
        intents.guilds = True

        super().__init__(
            command_prefix=settings.discord.command_prefix,
            intents=intents,
            owner_ids=set(settings.discord.owner_ids) or None,
            **kwargs,
        )

        self.container = container
        self.settings = settings
        container.set_bot(self)

    async def setup_hook(self) -> None:
        logger.info(LogTemplates.BOT_SETUP)

        await self.container.initialize()
        await self._load_cogs()
        self.tree.on_error = self._on_app_command_error

        self.container.idle_reaper.start()

        if self.settings.discord.sync_on_startup:
            await self._sync_commands()

        logger.info(LogTemplates.BOT_SETUP_COMPLETE)

    async def _load_cogs(self) -> None:
        loaded = 0
        failed = 0

        for cog in COGS:
            try:
                await self.load_extension(cog)
                logger.info(LogTemplates.BOT_COG_LOADED, cog)
                loaded += 1
            except Exception as e:
                logger.exception(LogTemplates.BOT_COG_LOAD_FAILED, cog, e)
                failed += 1

        logger.info(LogTemplates.BOT_COGS_LOADED_SUMMARY, loaded, failed)

    async def _on_app_command_error(
        self, interaction: discord.Interaction, error: discord.app_commands.AppCommandError
    ) -> None:
        """Last-resort slash-command error handler for errors no cog rendered."""
        if interaction.extras.get(ERROR_HANDLED_KEY):
            return

        original = getattr(error, "original", error)
        logger.error(
            LogTemplates.BOT_SLASH_COMMAND_ERROR,
            getattr(interaction.command, "name", "<unknown>"),
            original,
        )

        try:
            if interaction.response.is_done():
                await interaction.followup.send(DiscordUIMessages.ERROR_UNEXPECTED, ephemeral=True)
            else:
                await interaction.response.send_message(
                    DiscordUIMessages.ERROR_UNEXPECTED, ephemeral=True
                )
        except discord.HTTPException:
            logger.warning(LogTemplates.BOT_ERROR_MESSAGE_SEND_FAILED)

    async def _sync_commands(self) -> None:
        try:
            for guild_id in self.settings.discord.guild_ids:
                synced = await self.tree.sync(guild=discord.Object(id=guild_id))
                logger.info(LogTemplates.BOT_SYNCED_GUILD, len(synced), guild_id)

            if not self.settings.discord.guild_ids:
                synced = await self.tree.sync()
                logger.info(LogTemplates.BOT_SYNCED_GLOBAL, len(synced))
        except discord.HTTPException as e:
            logger.warning(LogTemplates.BOT_SYNC_FAILED, e)

    async def on_ready(self) -> None:
        logger.info(
            LogTemplates.BOT_READY,
            self.user,
            getattr(self.user, "id", "?"),
        )
        logger.info(LogTemplates.BOT_CONNECTED_GUILDS, len(self.guilds))

        activity = discord.Activity(type=discord.ActivityType.listening, name="/music play")
        await self.change_presence(activity=activity)

    async def close(self) -> None:
        logger.info(LogTemplates.BOT_SHUTTING_DOWN)

        try:
            await self.container.idle_reaper.stop()
        except Exception as e:
            logger.warning(LogTemplates.BOT_REAPER_STOP_ERROR, e)

        for vc in list(self.voice_clients):
            try:
                await vc.disconnect(force=True)
            except Exception:
                logger.debug(LogTemplates.VOICE_CLEANUP_ERROR, exc_info=True)

        try:
            await self.container.shutdown()
        except Exception as e:
            logger.warning(LogTemplates.BOT_CONTAINER_SHUTDOWN_ERROR, e)

        await super().close()
        logger.info(LogTemplates.BOT_SHUTDOWN_COMPLETE)

    def run_with_graceful_shutdown(self, token: str, *, shutdown_timeout: float = 30.0) -> None:
        async def runner() -> None:
            async with self:
                loop = asyncio.get_running_loop()

                async def _graceful_close() -> None:
                    try:
                        await asyncio.wait_for(self.close(), timeout=shutdown_timeout)
                    except TimeoutError:
                        logger.warning(LogTemplates.BOT_SHUTDOWN_TIMEOUT, shutdown_timeout)

                for sig in (signal.SIGINT, signal.SIGTERM):
                    loop.add_signal_handler(sig, lambda: asyncio.create_task(_graceful_close()))
                await self.start(token)

        asyncio.run(runner())


def create_bot(container: Container, settings: Settings) -> MusicBot:
    return MusicBot(container=container, settings=settings)
