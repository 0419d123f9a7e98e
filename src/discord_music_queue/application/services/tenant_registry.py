"""Tenant Registry - owns every guild's queue, lock and voice binding."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ...domain.music.entities import PlaybackQueue
from ...domain.music.value_objects import VoiceBinding
from ...domain.shared.datetime_utils import utcnow
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake

logger = logging.getLogger(__name__)


@dataclass
class TenantSession:
    """Everything one guild owns: its queue, the lock guarding it, and its voice binding."""

    guild_id: DiscordSnowflake
    queue: PlaybackQueue
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    binding: VoiceBinding | None = None
    announce_channel_id: DiscordSnowflake | None = None

    @property
    def is_bound(self) -> bool:
        return self.binding is not None


class TenantRegistry:
    """Maps guild IDs to their :class:`TenantSession`.

    Sessions are independent: each has its own lock, and nothing here is
    shared between guilds. Callers mutate a session's queue only while
    holding ``session.lock``.
    """

    def __init__(self, *, default_volume_percent: int = 50) -> None:
        self._sessions: dict[DiscordSnowflake, TenantSession] = {}
        self._default_volume_percent = default_volume_percent

    @property
    def count(self) -> int:
        return len(self._sessions)

    def guild_ids(self) -> list[DiscordSnowflake]:
        return list(self._sessions)

    def get_or_create(self, guild_id: DiscordSnowflake) -> TenantSession:
        """Return the guild's session, creating an empty one on first access."""
        session = self._sessions.get(guild_id)
        if session is None:
            session = TenantSession(
                guild_id=guild_id,
                queue=PlaybackQueue(
                    guild_id=guild_id, volume_percent=self._default_volume_percent
                ),
            )
            self._sessions[guild_id] = session
            logger.debug(LogTemplates.SESSION_CREATED, guild_id)
        return session

    def get(self, guild_id: DiscordSnowflake) -> TenantSession | None:
        return self._sessions.get(guild_id)

    def get_transport(self, guild_id: DiscordSnowflake) -> VoiceBinding | None:
        session = self._sessions.get(guild_id)
        return session.binding if session is not None else None

    def bind(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake) -> VoiceBinding:
        session = self.get_or_create(guild_id)
        session.binding = VoiceBinding(channel_id=channel_id, bound_at=utcnow())
        return session.binding

    def set_announce_channel(
        self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake | None
    ) -> None:
        self.get_or_create(guild_id).announce_channel_id = channel_id

    def teardown(self, guild_id: DiscordSnowflake, *, clear_queue: bool = True) -> VoiceBinding | None:
        """Drop the guild's voice binding and optionally discard its tracks.

        Returns the binding that was removed, if any.
        """
        session = self._sessions.get(guild_id)
        if session is None:
            return None

        binding = session.binding
        session.binding = None
        if clear_queue:
            session.queue.reset()
        logger.info(LogTemplates.SESSION_TORN_DOWN, guild_id, clear_queue)
        return binding

    def discard(self, guild_id: DiscordSnowflake) -> bool:
        """Forget a guild entirely; the next command starts from a fresh session."""
        removed = self._sessions.pop(guild_id, None) is not None
        if removed:
            logger.debug(LogTemplates.SESSION_DISCARDED, guild_id)
        return removed

    def idle_sessions(
        self, older_than: timedelta, *, now: datetime | None = None
    ) -> list[DiscordSnowflake]:
        """Guild IDs whose queue is idle and untouched for at least ``older_than``."""
        cutoff = (now or utcnow()) - older_than
        return [
            guild_id
            for guild_id, session in self._sessions.items()
            if session.queue.is_idle and session.queue.last_activity <= cutoff
        ]
