"""Port interface for Discord voice operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from discord_music_queue.domain.shared.types import DiscordSnowflake, PercentInt

if TYPE_CHECKING:
    from ...domain.music.entities import Track

TrackEndCallback = Callable[[int, "Track", "Exception | None"], Awaitable[None]]
"""Called with ``(guild_id, track_that_ended, stream_error)`` when a stream finishes."""


class VoiceAdapter(ABC):
    """Interface for a guild's voice transport.

    A connection doubles as the player: there is at most one per guild, and
    it streams at most one track at a time.
    """

    @abstractmethod
    async def connect(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake) -> None:
        """Connect to (or move to) a voice channel.

        Raises:
            TransportFailureError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    async def disconnect(self, guild_id: DiscordSnowflake) -> bool:
        """Disconnect from voice in a guild."""
        ...

    @abstractmethod
    async def play(self, guild_id: DiscordSnowflake, track: "Track", volume_percent: PercentInt) -> None:
        """Start streaming ``track`` with an initial gain.

        Raises:
            TransportFailureError: If the stream cannot be started.
        """
        ...

    @abstractmethod
    async def stop(self, guild_id: DiscordSnowflake) -> bool:
        """Stop the active stream; its end callback still fires."""
        ...

    @abstractmethod
    async def pause(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    async def resume(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    def set_volume(self, guild_id: DiscordSnowflake, volume_percent: PercentInt) -> bool:
        """Adjust the gain of the active stream at runtime."""
        ...

    @abstractmethod
    def is_connected(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        ...
