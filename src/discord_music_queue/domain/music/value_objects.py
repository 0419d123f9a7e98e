"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PlaybackState(Enum):
    """Canonical playback state of one guild's queue.

    State transitions:
    - IDLE -> PLAYING (a track starts)
    - PLAYING -> PAUSED (pause)
    - PAUSED -> PLAYING (resume)
    - PLAYING/PAUSED -> IDLE (track finished, stop, teardown)
    """

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"

    @property
    def is_active(self) -> bool:
        """True while a playback session exists, paused or not."""
        return self in {PlaybackState.PLAYING, PlaybackState.PAUSED}


class SessionEndReason(Enum):
    """Reasons a guild's voice binding can be torn down."""

    STOPPED = "stopped"
    CONNECTION_LOST = "connection_lost"
    IDLE_TIMEOUT = "idle_timeout"


@dataclass(frozen=True)
class VoiceBinding:
    """The live voice connection a guild is bound to.

    discord.py's ``VoiceClient`` is both the connection and the player, so a
    single binding stands for both handles; they are created and destroyed
    together.
    """

    channel_id: int
    bound_at: datetime

    def __post_init__(self) -> None:
        if self.channel_id <= 0:
            raise ValueError("Voice channel ID must be positive")
        if self.bound_at.tzinfo is None:
            raise ValueError("bound_at must be timezone-aware")
