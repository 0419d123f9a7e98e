"""Domain event bus for publishing and subscribing to events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.shared.datetime_utils import utcnow
from discord_music_queue.domain.shared.messages import LogTemplates
from discord_music_queue.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    NonNegativeInt,
    UtcDatetimeField,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Playback Events ===


class TrackQueued(DomainEvent):
    guild_id: DiscordSnowflake
    track: Track
    queue_position: NonNegativeInt = 0


class TrackStartedPlaying(DomainEvent):
    guild_id: DiscordSnowflake
    track: Track


class TrackPlaybackFailed(DomainEvent):
    """A track could not be started, or its stream broke mid-play."""

    guild_id: DiscordSnowflake
    track: Track
    reason: str = ""


class PlaybackHalted(DomainEvent):
    """Every start attempt in one advance cycle failed; the queue is now idle."""

    guild_id: DiscordSnowflake
    attempts: NonNegativeInt = 0


class QueueExhausted(DomainEvent):
    guild_id: DiscordSnowflake
    last_track_title: str = ""


class PlaybackStopped(DomainEvent):
    guild_id: DiscordSnowflake
    stopped_by_id: DiscordSnowflake | None = None


# === Session Events ===


class SessionCreated(DomainEvent):
    """A guild bound a fresh voice connection."""

    guild_id: DiscordSnowflake


class SessionDestroyed(DomainEvent):
    guild_id: DiscordSnowflake
    reason: str = ""


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus for domain events.

    Handlers are called concurrently. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug("Subscribed handler to: %s", event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("Unsubscribed handler from %s", event_type.__name__)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("No handlers for %s", event_type.__name__)
            return

        logger.debug("Publishing %s to %d handlers", event_type.__name__, len(handlers))

        async def safe_call(handler: EventHandler[Any]) -> None:
            try:
                await handler(event)
            except Exception:
                logger.exception(LogTemplates.EVENT_HANDLER_FAILED, event_type.__name__)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug("Cleared all event handlers")


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get or create the global event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus (for testing)."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
