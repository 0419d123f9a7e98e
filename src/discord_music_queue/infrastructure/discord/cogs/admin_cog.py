"""Owner-only prefix commands for managing the user and server blacklists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_music_queue.domain.shared.messages import (
    DiscordUIMessages,
    ErrorMessages,
    LogTemplates,
)
from discord_music_queue.infrastructure.discord import embeds

if TYPE_CHECKING:
    from ....config.container import Container
    from ....domain.access.entities import BlacklistPage

logger = logging.getLogger(__name__)


def _is_bot_owner(ctx: commands.Context) -> bool:
    """Check if the user is a configured bot owner or the application owner."""
    app_info = ctx.bot.application
    if app_info and app_info.owner and ctx.author.id == app_info.owner.id:
        return True

    container = getattr(ctx.bot, "container", None)
    if container and ctx.author.id in container.settings.discord.owner_ids:
        return True

    return False


class AdminCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def cog_check(self, ctx: commands.Context) -> bool:
        """Every command here is restricted to bot owners."""
        return _is_bot_owner(ctx)

    async def _reply(
        self,
        ctx: commands.Context,
        content: str | None = None,
        *,
        embed: discord.Embed | None = None,
    ) -> None:
        if embed:
            await ctx.send(content or "", embed=embed)
        else:
            await ctx.send(content or "")

    async def cog_command_error(self, ctx: commands.Context, error: Exception) -> None:
        if isinstance(error, commands.CheckFailure):
            await self._reply(ctx, DiscordUIMessages.ERROR_REQUIRES_OWNER)
            return

        if isinstance(error, commands.MissingRequiredArgument):
            await self._reply(
                ctx, DiscordUIMessages.ERROR_MISSING_ARGUMENT.format(param_name=error.param.name)
            )
            return

        if isinstance(error, commands.BadArgument):
            await self._reply(ctx, DiscordUIMessages.ERROR_INVALID_ARGUMENT)
            return

        original = getattr(error, "original", error)
        if isinstance(original, ValueError):
            await self._reply(ctx, DiscordUIMessages.ERROR_INVALID_ARGUMENT)
            return

        logger.exception(LogTemplates.ADMIN_COMMAND_FAILED, exc_info=original)
        await self._reply(ctx, DiscordUIMessages.ERROR_COMMAND_FAILED_SEE_LOGS)

    async def _send_page(self, ctx: commands.Context, page: BlacklistPage, title: str, kind: str) -> None:
        if page.total == 0:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_EMPTY.format(kind=kind))
            return
        await self._reply(ctx, embed=embeds.blacklist_embed(page, title))

    # ── Blacklist ───────────────────────────────────────────────────

    @commands.group(name="blacklist", invoke_without_command=True)
    async def blacklist(self, ctx: commands.Context) -> None:
        await ctx.send_help(ctx.command)

    @blacklist.group(name="user", invoke_without_command=True)
    async def blacklist_user(self, ctx: commands.Context) -> None:
        await ctx.send_help(ctx.command)

    @blacklist_user.command(name="add")
    async def blacklist_user_add(self, ctx: commands.Context, user_id: int, *, name: str = "") -> None:
        if not name:
            user = self.bot.get_user(user_id)
            name = str(user) if user is not None else ""

        added = await self.container.access_service.add_user(user_id, name)
        if added:
            await self._reply(
                ctx, DiscordUIMessages.BLACKLIST_USER_ADDED.format(name=name or user_id, id=user_id)
            )
        else:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_USER_EXISTS.format(id=user_id))

    @blacklist_user.command(name="remove")
    async def blacklist_user_remove(self, ctx: commands.Context, user_id: int) -> None:
        removed = await self.container.access_service.remove_user(user_id)
        if removed:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_USER_REMOVED.format(id=user_id))
        else:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_USER_NOT_FOUND.format(id=user_id))

    @blacklist.group(name="server", invoke_without_command=True)
    async def blacklist_server(self, ctx: commands.Context) -> None:
        await ctx.send_help(ctx.command)

    @blacklist_server.command(name="add")
    async def blacklist_server_add(self, ctx: commands.Context, guild_id: int, *, name: str = "") -> None:
        if not name:
            guild = self.bot.get_guild(guild_id)
            name = guild.name if guild is not None else ""

        added = await self.container.access_service.add_server(guild_id, name)
        if added:
            await self._reply(
                ctx, DiscordUIMessages.BLACKLIST_SERVER_ADDED.format(name=name or guild_id, id=guild_id)
            )
        else:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_SERVER_EXISTS.format(id=guild_id))

    @blacklist_server.command(name="remove")
    async def blacklist_server_remove(self, ctx: commands.Context, guild_id: int) -> None:
        removed = await self.container.access_service.remove_server(guild_id)
        if removed:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_SERVER_REMOVED.format(id=guild_id))
        else:
            await self._reply(ctx, DiscordUIMessages.BLACKLIST_SERVER_NOT_FOUND.format(id=guild_id))

    @blacklist.command(name="users")
    async def blacklist_users(self, ctx: commands.Context, page: int = 1) -> None:
        """List blacklisted users, ten per page (pages start at 1)."""
        result = await self.container.access_service.list_users(max(page, 1) - 1)
        await self._send_page(ctx, result, DiscordUIMessages.EMBED_BLACKLISTED_USERS, "user")

    @blacklist.command(name="servers")
    async def blacklist_servers(self, ctx: commands.Context, page: int = 1) -> None:
        result = await self.container.access_service.list_servers(max(page, 1) - 1)
        await self._send_page(ctx, result, DiscordUIMessages.EMBED_BLACKLISTED_SERVERS, "server")


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(AdminCog(bot, container))
