"""Access Service - blacklist checks and management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.access.entities import BlacklistEntry, BlacklistKind, BlacklistPage
from ...domain.shared.constants import LimitConstants
from ...domain.shared.exceptions import BlacklistedError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.access.repository import BlacklistRepository

logger = logging.getLogger(__name__)


class AccessService:
    """Denies blacklisted users and servers, and edits the blacklists."""

    def __init__(self, *, blacklist_repository: BlacklistRepository) -> None:
        self._repo = blacklist_repository

    async def ensure_allowed(
        self, user_id: DiscordSnowflake, guild_id: DiscordSnowflake | None
    ) -> None:
        """Raise :class:`BlacklistedError` if the server or the user is blacklisted."""
        if guild_id is not None and await self._repo.contains(BlacklistKind.SERVER, guild_id):
            raise BlacklistedError("server", guild_id)
        if await self._repo.contains(BlacklistKind.USER, user_id):
            raise BlacklistedError("user", user_id)

    async def add_user(self, user_id: DiscordSnowflake, name: str) -> bool:
        added = await self._repo.add(BlacklistKind.USER, BlacklistEntry(id=user_id, name=name))
        if added:
            logger.info(LogTemplates.BLACKLIST_USER_ADDED, user_id, name)
        return added

    async def remove_user(self, user_id: DiscordSnowflake) -> bool:
        removed = await self._repo.remove(BlacklistKind.USER, user_id)
        if removed:
            logger.info(LogTemplates.BLACKLIST_USER_REMOVED, user_id)
        return removed

    async def add_server(self, guild_id: DiscordSnowflake, name: str) -> bool:
        added = await self._repo.add(BlacklistKind.SERVER, BlacklistEntry(id=guild_id, name=name))
        if added:
            logger.info(LogTemplates.BLACKLIST_SERVER_ADDED, guild_id, name)
        return added

    async def remove_server(self, guild_id: DiscordSnowflake) -> bool:
        removed = await self._repo.remove(BlacklistKind.SERVER, guild_id)
        if removed:
            logger.info(LogTemplates.BLACKLIST_SERVER_REMOVED, guild_id)
        return removed

    async def list_users(self, page: int = 0) -> BlacklistPage:
        return await self._repo.list_page(
            BlacklistKind.USER, page, LimitConstants.BLACKLIST_PAGE_SIZE
        )

    async def list_servers(self, page: int = 0) -> BlacklistPage:
        return await self._repo.list_page(
            BlacklistKind.SERVER, page, LimitConstants.BLACKLIST_PAGE_SIZE
        )
