"""Playback Driver - the per-guild play-next state machine.

Every command and every transport finish signal for a guild runs under that
guild's lock, so a user command can never interleave with a half-finished
advance. Events produced while the lock is held are published after it is
released.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ...domain.music.entities import QueueSnapshot, Track
from ...domain.music.value_objects import SessionEndReason
from ...domain.shared.events import (
    DomainEvent,
    EventBus,
    PlaybackHalted,
    PlaybackStopped,
    QueueExhausted,
    SessionCreated,
    SessionDestroyed,
    TrackPlaybackFailed,
    TrackQueued,
    TrackStartedPlaying,
    get_event_bus,
)
from ...domain.shared.exceptions import (
    EmptyQueueError,
    NoActivePlaybackError,
    NoPlayerError,
    NotPausedError,
    NotPlayingError,
    TransportFailureError,
    UnsupportedOperationError,
)
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake
from .queue_models import EnqueueResult

if TYPE_CHECKING:
    from ..interfaces.voice_adapter import VoiceAdapter
    from .tenant_registry import TenantRegistry, TenantSession

logger = logging.getLogger(__name__)


class PlaybackDriver:
    """Orchestrates queue mutations and the voice transport for every guild."""

    def __init__(
        self,
        *,
        registry: TenantRegistry,
        voice_adapter: VoiceAdapter,
        event_bus: EventBus | None = None,
    ) -> None:
        self._registry = registry
        self._voice_adapter = voice_adapter
        self._event_bus = event_bus

        self._voice_adapter.set_on_track_end_callback(self.handle_track_end)

    @property
    def registry(self) -> TenantRegistry:
        return self._registry

    @asynccontextmanager
    async def _session(self, guild_id: DiscordSnowflake) -> AsyncIterator[TenantSession]:
        """Hold the guild's lock on the session the registry currently maps it to.

        A session can be discarded while a caller waits for its lock; the
        caller then retries on the fresh session.
        """
        while True:
            session = self._registry.get_or_create(guild_id)
            async with session.lock:
                if self._registry.get(guild_id) is session:
                    yield session
                    return

    async def _publish(self, events: list[DomainEvent]) -> None:
        bus = self._event_bus or get_event_bus()
        for event in events:
            await bus.publish(event)

    # ── Advance cycle ───────────────────────────────────────────────

    async def _advance(
        self,
        session: TenantSession,
        events: list[DomainEvent],
        *,
        finished: Track | None = None,
    ) -> Track | None:
        """Start the next pending track. Caller holds ``session.lock``.

        Every track pending when the cycle starts gets one start attempt;
        each one that fails is dropped. The cycle halts only when all of
        them failed. ``finished`` is the track whose stream just ended, if
        any, and is named when the queue runs dry.
        """
        queue = session.queue
        guild_id = session.guild_id

        if not queue.pending:
            queue.mark_idle()
            logger.info(LogTemplates.QUEUE_EXHAUSTED, guild_id)
            events.append(
                QueueExhausted(
                    guild_id=guild_id,
                    last_track_title=finished.title if finished is not None else "",
                )
            )
            return None

        attempts = len(queue.pending)
        for _ in range(attempts):
            track = queue.dequeue_next()
            if track is None:
                break

            queue.begin(track)
            try:
                await self._voice_adapter.play(guild_id, track, queue.volume_percent)
            except TransportFailureError as exc:
                queue.mark_idle()
                logger.warning(LogTemplates.PLAYBACK_START_FAILED, track.title, guild_id, exc.reason)
                events.append(TrackPlaybackFailed(guild_id=guild_id, track=track, reason=exc.reason))
                continue

            logger.info(LogTemplates.PLAYBACK_STARTED, track.title, guild_id)
            events.append(TrackStartedPlaying(guild_id=guild_id, track=track))
            return track

        queue.mark_idle()
        logger.error(LogTemplates.PLAYBACK_HALTED, guild_id, attempts)
        events.append(PlaybackHalted(guild_id=guild_id, attempts=attempts))
        return None

    async def handle_track_end(
        self, guild_id: DiscordSnowflake, track: Track, error: Exception | None = None
    ) -> None:
        """Finish signal from the transport for the stream of ``track``.

        Signals for anything other than the current track are stale (the
        guild was stopped or the stream was replaced) and are ignored. A
        stream that ended with an error is not looped.
        """
        session = self._registry.get(guild_id)
        if session is None:
            return

        events: list[DomainEvent] = []
        async with session.lock:
            queue = session.queue
            if queue.current is not track:
                logger.debug(LogTemplates.PLAYBACK_STALE_SIGNAL, track.title, guild_id)
                return

            if error is not None:
                logger.warning(LogTemplates.PLAYBACK_STREAM_ERROR, track.title, guild_id, error)
                events.append(TrackPlaybackFailed(guild_id=guild_id, track=track, reason=str(error)))
                queue.mark_idle()
            elif queue.loop_enabled:
                queue.requeue_current()
            else:
                queue.mark_idle()

            await self._advance(session, events, finished=track)

        await self._publish(events)

    # ── Commands ────────────────────────────────────────────────────

    async def enqueue(
        self,
        guild_id: DiscordSnowflake,
        track: Track,
        *,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake | None = None,
    ) -> EnqueueResult:
        """Append a resolved track, connecting and starting playback if idle.

        Raises:
            TransportFailureError: If no voice connection could be established.
        """
        events: list[DomainEvent] = []

        async with self._session(guild_id) as session:
            if session.binding is None or not self._voice_adapter.is_connected(guild_id):
                newly_bound = session.binding is None
                await self._voice_adapter.connect(guild_id, voice_channel_id)
                self._registry.bind(guild_id, voice_channel_id)
                if newly_bound:
                    events.append(SessionCreated(guild_id=guild_id))
            if text_channel_id is not None:
                self._registry.set_announce_channel(guild_id, text_channel_id)

            queue = session.queue
            queue.enqueue(track)
            if queue.is_idle:
                await self._advance(session, events)

            started = queue.current is track
            position = next(
                (index for index, queued in enumerate(queue.pending, start=1) if queued is track),
                0,
            )
            if position:
                logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, guild_id)
                events.append(TrackQueued(guild_id=guild_id, track=track, queue_position=position))

        await self._publish(events)
        return EnqueueResult(track=track, position=position, started=started)

    async def pause(self, guild_id: DiscordSnowflake) -> None:
        """Pause the live stream.

        Raises:
            NotPlayingError: If nothing is playing, or the voice client had
                already stopped; the queue state is left unchanged.
        """
        async with self._session(guild_id) as session:
            session.queue.pause()
            if not await self._voice_adapter.pause(guild_id):
                session.queue.resume()
                logger.warning(LogTemplates.PLAYBACK_TRANSPORT_REFUSED, "pause", guild_id)
                raise NotPlayingError()
        logger.info(LogTemplates.PLAYBACK_PAUSED, guild_id)

    async def resume(self, guild_id: DiscordSnowflake) -> None:
        async with self._session(guild_id) as session:
            session.queue.resume()
            if not await self._voice_adapter.resume(guild_id):
                session.queue.pause()
                logger.warning(LogTemplates.PLAYBACK_TRANSPORT_REFUSED, "resume", guild_id)
                raise NotPausedError()
        logger.info(LogTemplates.PLAYBACK_RESUMED, guild_id)

    async def skip(self, guild_id: DiscordSnowflake) -> Track:
        """Stop the current stream; the transport's finish signal advances the queue."""
        async with self._session(guild_id) as session:
            current = session.queue.current
            if current is None or not session.queue.playing:
                raise NotPlayingError()
            await self._voice_adapter.stop(guild_id)
        logger.info(LogTemplates.PLAYBACK_SKIPPED, current.title, guild_id)
        return current

    async def stop(
        self, guild_id: DiscordSnowflake, *, stopped_by_id: DiscordSnowflake | None = None
    ) -> None:
        """Stop playback, disconnect, and discard every pending and current track."""
        async with self._session(guild_id):
            await self._voice_adapter.stop(guild_id)
            await self._voice_adapter.disconnect(guild_id)
            binding = self._registry.teardown(guild_id, clear_queue=True)
        logger.info(LogTemplates.PLAYBACK_STOPPED, guild_id)

        events: list[DomainEvent] = [PlaybackStopped(guild_id=guild_id, stopped_by_id=stopped_by_id)]
        if binding is not None:
            events.append(SessionDestroyed(guild_id=guild_id, reason=SessionEndReason.STOPPED.value))
        await self._publish(events)

    async def clear(self, guild_id: DiscordSnowflake) -> int:
        async with self._session(guild_id) as session:
            count = session.queue.clear()
        logger.info(LogTemplates.QUEUE_CLEARED, count, guild_id)
        return count

    async def set_volume(self, guild_id: DiscordSnowflake, level: int) -> None:
        """Store the volume and apply it to the live stream.

        Raises:
            NoActivePlaybackError: If nothing is playing on a bound transport.
        """
        async with self._session(guild_id) as session:
            if session.binding is None or not session.queue.playing:
                raise NoActivePlaybackError()
            session.queue.set_volume(level)
            self._voice_adapter.set_volume(guild_id, level)
        logger.info(LogTemplates.PLAYBACK_VOLUME_CHANGED, level, guild_id)

    async def set_bass_boost(self, guild_id: DiscordSnowflake, level: int) -> None:
        """Store the bass boost level. It is a display setting and never reaches the stream."""
        async with self._session(guild_id) as session:
            session.queue.set_bass_boost(level)

    async def toggle_loop(self, guild_id: DiscordSnowflake) -> bool:
        async with self._session(guild_id) as session:
            enabled = session.queue.toggle_loop()
        logger.info(LogTemplates.LOOP_TOGGLED, "enabled" if enabled else "disabled", guild_id)
        return enabled

    async def shuffle(self, guild_id: DiscordSnowflake) -> None:
        async with self._session(guild_id) as session:
            session.queue.shuffle()
        logger.info(LogTemplates.QUEUE_SHUFFLED, guild_id)

    async def remove(self, guild_id: DiscordSnowflake, position: int) -> Track:
        async with self._session(guild_id) as session:
            track = session.queue.remove_at(position)
        logger.info(LogTemplates.QUEUE_REMOVED, track.title, guild_id)
        return track

    async def skip_to(self, guild_id: DiscordSnowflake, position: int) -> Track:
        """Drop pending tracks before ``position`` and move playback to it.

        Raises:
            OutOfRangeError: If ``position`` is not a pending index.
            NoPlayerError: If the guild has no voice transport.
        """
        events: list[DomainEvent] = []

        async with self._session(guild_id) as session:
            queue = session.queue
            queue.validate_position(position)
            if session.binding is None:
                raise NoPlayerError()

            target = queue.skip_to(position)
            if queue.current is not None:
                await self._voice_adapter.stop(guild_id)
            else:
                await self._advance(session, events)

        logger.info(LogTemplates.QUEUE_SKIPPED_TO, position, guild_id)
        await self._publish(events)
        return target

    # ── Queries ─────────────────────────────────────────────────────

    def queue_snapshot(self, guild_id: DiscordSnowflake, limit: int = 10) -> QueueSnapshot:
        snapshot = self._registry.get_or_create(guild_id).queue.snapshot(limit)
        if snapshot.is_empty:
            raise EmptyQueueError()
        return snapshot

    def now_playing(self, guild_id: DiscordSnowflake) -> QueueSnapshot:
        snapshot = self._registry.get_or_create(guild_id).queue.snapshot(0)
        if snapshot.current is None:
            raise NoActivePlaybackError()
        return snapshot

    # ── Accepted but unsupported ────────────────────────────────────

    async def seek(self, guild_id: DiscordSnowflake, timestamp: str | None = None) -> None:
        raise UnsupportedOperationError("seek", ErrorMessages.SEEK_UNSUPPORTED)

    async def previous(self, guild_id: DiscordSnowflake) -> None:
        raise UnsupportedOperationError("previous", ErrorMessages.PREVIOUS_UNSUPPORTED)

    async def lyrics(self, guild_id: DiscordSnowflake) -> None:
        snapshot = self.now_playing(guild_id)
        title = snapshot.current.title if snapshot.current is not None else ""
        raise UnsupportedOperationError("lyrics", ErrorMessages.LYRICS_UNSUPPORTED.format(title=title))

    # ── Session end ─────────────────────────────────────────────────

    async def handle_connection_lost(self, guild_id: DiscordSnowflake) -> bool:
        """Treat a dropped voice connection as fatal: unbind and clear the queue."""
        session = self._registry.get(guild_id)
        if session is None:
            return False

        async with session.lock:
            if session.binding is None:
                return False
            await self._voice_adapter.disconnect(guild_id)
            self._registry.teardown(guild_id, clear_queue=True)

        logger.warning(LogTemplates.VOICE_CONNECTION_LOST, guild_id)
        await self._publish(
            [SessionDestroyed(guild_id=guild_id, reason=SessionEndReason.CONNECTION_LOST.value)]
        )
        return True

    async def evict_if_idle(self, guild_id: DiscordSnowflake) -> bool:
        """Disconnect and forget an idle guild. Returns False if it became active meanwhile."""
        session = self._registry.get(guild_id)
        if session is None:
            return False

        async with session.lock:
            if not session.queue.is_idle:
                return False
            await self._voice_adapter.disconnect(guild_id)
            self._registry.teardown(guild_id, clear_queue=True)
            self._registry.discard(guild_id)

        await self._publish(
            [SessionDestroyed(guild_id=guild_id, reason=SessionEndReason.IDLE_TIMEOUT.value)]
        )
        return True
