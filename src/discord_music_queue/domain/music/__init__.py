"""
Music Bounded Context

Domain logic for tracks, per-guild queues and playback state.
"""

from discord_music_queue.domain.music.entities import PlaybackQueue, QueueSnapshot, Track
from discord_music_queue.domain.music.value_objects import (
    PlaybackState,
    SessionEndReason,
    VoiceBinding,
)

__all__ = [
    # Entities
    "Track",
    "PlaybackQueue",
    "QueueSnapshot",
    # Value Objects
    "PlaybackState",
    "SessionEndReason",
    "VoiceBinding",
]
