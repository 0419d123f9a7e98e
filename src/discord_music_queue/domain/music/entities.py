"""Core domain entities for the music bounded context."""

from __future__ import annotations

import random
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from discord_music_queue.domain.music.value_objects import PlaybackState
from discord_music_queue.domain.shared.datetime_utils import utcnow
from discord_music_queue.domain.shared.exceptions import (
    InsufficientItemsError,
    InvalidRangeError,
    NotPausedError,
    NotPlayingError,
    OutOfRangeError,
)
from discord_music_queue.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    NonNegativeInt,
    PercentInt,
    TrackTitleStr,
    UtcDatetimeField,
)

UNKNOWN_DURATION = "Unknown"


def format_duration_display(seconds: int | float | None) -> str:
    """Format a duration as ``M:SS`` or ``H:MM:SS``; ``Unknown`` when absent."""
    if seconds is None or seconds < 0:
        return UNKNOWN_DURATION

    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class Track(BaseModel):
    """Immutable value object representing one resolved, playable item.

    ``source_locator`` is opaque to the queue: the resolver produces it and
    the voice transport consumes it.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    title: TrackTitleStr
    source_locator: NonEmptyStr
    duration_display: NonEmptyStr = UNKNOWN_DURATION
    thumbnail_ref: str | None = None
    webpage_url: str | None = None
    requested_by: NonEmptyStr | None = None

    def with_requester(self, requested_by: str) -> Track:
        """Return a copy of this track stamped with the requester's display tag."""
        return self.model_copy(update={"requested_by": requested_by})


class QueueSnapshot(BaseModel):
    """Read-only view of a queue for listings."""

    model_config = ConfigDict(frozen=True)

    current: Track | None
    upcoming: tuple[Track, ...]
    total_pending: NonNegativeInt
    state: PlaybackState
    loop_enabled: bool
    volume_percent: PercentInt
    bass_boost_percent: PercentInt

    @property
    def overflow(self) -> int:
        return self.total_pending - len(self.upcoming)

    @property
    def is_empty(self) -> bool:
        return self.current is None and self.total_pending == 0


class PlaybackQueue(BaseModel):
    """Per-guild queue state: pending tracks, the current track, and modifiers.

    ``state`` is the single source of truth for playback; ``playing`` and
    ``paused`` are derived from it so they cannot disagree.
    """

    DEFAULT_SNAPSHOT_LIMIT: ClassVar[int] = 10

    guild_id: DiscordSnowflake
    pending: list[Track] = Field(default_factory=list)
    current: Track | None = None
    state: PlaybackState = PlaybackState.IDLE
    loop_enabled: bool = False
    shuffle_requested: bool = False
    volume_percent: PercentInt = 50
    bass_boost_percent: PercentInt = 0
    last_activity: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def playing(self) -> bool:
        return self.state.is_active

    @property
    def paused(self) -> bool:
        return self.state == PlaybackState.PAUSED

    @property
    def is_idle(self) -> bool:
        return self.state == PlaybackState.IDLE

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    def touch(self) -> None:
        self.last_activity = utcnow()

    # ── Pending list ────────────────────────────────────────────────

    def enqueue(self, track: Track) -> int:
        """Append a track and return the new pending length."""
        self.pending.append(track)
        self.touch()
        return len(self.pending)

    def dequeue_next(self) -> Track | None:
        """Pop the front of the pending list; ``None`` means the queue is exhausted."""
        if not self.pending:
            return None
        track = self.pending.pop(0)
        self.touch()
        return track

    def validate_position(self, position: int) -> None:
        """Raise OutOfRangeError unless ``position`` is a valid 1-based pending index."""
        if position < 1 or position > len(self.pending):
            raise OutOfRangeError(position=position, length=len(self.pending))

    def remove_at(self, position: int) -> Track:
        """Remove the track at a 1-based position, keeping the others in order."""
        self.validate_position(position)
        track = self.pending.pop(position - 1)
        self.touch()
        return track

    def skip_to(self, position: int) -> Track:
        """Drop every pending track before ``position`` and return the new front.

        Does not touch the current track; the caller stops the stream so the
        playback cycle picks up the new front.
        """
        self.validate_position(position)
        del self.pending[: position - 1]
        self.touch()
        return self.pending[0]

    def shuffle(self) -> None:
        """Randomly permute the pending tracks; the current track is untouched."""
        if len(self.pending) < 2:
            raise InsufficientItemsError(required=2, actual=len(self.pending))
        random.shuffle(self.pending)
        self.shuffle_requested = True
        self.touch()

    def clear(self) -> int:
        """Empty the pending list only and return how many tracks were removed."""
        count = len(self.pending)
        self.pending.clear()
        self.touch()
        return count

    # ── Settings ────────────────────────────────────────────────────

    def set_volume(self, value: int) -> None:
        if not 0 <= value <= 100:
            raise InvalidRangeError(setting="Volume", value=value)
        self.volume_percent = value
        self.touch()

    def set_bass_boost(self, value: int) -> None:
        if not 0 <= value <= 100:
            raise InvalidRangeError(setting="Bass boost", value=value)
        self.bass_boost_percent = value
        self.touch()

    def toggle_loop(self) -> bool:
        self.loop_enabled = not self.loop_enabled
        self.touch()
        return self.loop_enabled

    # ── Playback state ──────────────────────────────────────────────

    def begin(self, track: Track) -> None:
        """Make ``track`` current and enter PLAYING."""
        self.current = track
        self.state = PlaybackState.PLAYING
        self.shuffle_requested = False
        self.touch()

    def pause(self) -> None:
        if self.state != PlaybackState.PLAYING:
            raise NotPlayingError()
        self.state = PlaybackState.PAUSED
        self.touch()

    def resume(self) -> None:
        if self.state != PlaybackState.PAUSED:
            raise NotPausedError()
        self.state = PlaybackState.PLAYING
        self.touch()

    def requeue_current(self) -> Track | None:
        """Move the current track back to the front of the pending list.

        Returns the requeued track, or ``None`` when nothing was current.
        """
        track = self.current
        if track is not None:
            self.pending.insert(0, track)
        self.mark_idle()
        return track

    def mark_idle(self) -> None:
        self.current = None
        self.state = PlaybackState.IDLE
        self.touch()

    def reset(self) -> None:
        """Discard pending and current tracks and return to IDLE."""
        self.pending.clear()
        self.mark_idle()

    def snapshot(self, limit: int = DEFAULT_SNAPSHOT_LIMIT) -> QueueSnapshot:
        return QueueSnapshot(
            current=self.current,
            upcoming=tuple(self.pending[:limit]),
            total_pending=len(self.pending),
            state=self.state,
            loop_enabled=self.loop_enabled,
            volume_percent=self.volume_percent,
            bass_boost_percent=self.bass_boost_percent,
        )
