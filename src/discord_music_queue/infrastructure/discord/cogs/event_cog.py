"""Discord event listeners that feed voice and guild changes into the playback driver."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class EventCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @commands.Cog.listener()
    async def on_voice_state_update(
        self, member: discord.Member, before: discord.VoiceState, after: discord.VoiceState
    ) -> None:
        """Only the bot's own voice state matters here.

        A disconnect we did not initiate is a fatal transport error for the
        guild; a move by a moderator just rebinds the session.
        """
        if self.bot.user is None or member.id != self.bot.user.id:
            return
        if before.channel is None:
            return

        guild_id = member.guild.id
        if after.channel is None:
            await self.container.playback_driver.handle_connection_lost(guild_id)
            return

        if after.channel.id != before.channel.id:
            registry = self.container.registry
            session = registry.get(guild_id)
            if session is not None and session.is_bound:
                registry.bind(guild_id, after.channel.id)

    @commands.Cog.listener()
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        logger.info(LogTemplates.EVENT_GUILD_LEFT, guild.name, guild.id)
        await self.container.playback_driver.handle_connection_lost(guild.id)
        self.container.registry.discard(guild.id)

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        if isinstance(error, commands.CommandNotFound):
            return
        if ctx.cog is not None and ctx.cog.has_error_handler():
            return

        original = getattr(error, "original", error)
        logger.error(
            LogTemplates.EVENT_UNHANDLED_COMMAND_ERROR,
            getattr(ctx.command, "qualified_name", "<unknown>"),
            exc_info=original,
        )


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(EventCog(bot, container))
