"""Date/time helpers.

All timestamps are timezone-aware UTC. The persistence layer stores them as
ISO-8601 strings with an explicit ``+00:00`` offset.
"""

from __future__ import annotations

from datetime import UTC, datetime

from discord_music_queue.domain.shared.messages import ErrorMessages


def utcnow() -> datetime:
    """Return a timezone-aware datetime in UTC."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        raise ValueError(ErrorMessages.TIMEZONE_REQUIRED)
    return dt.astimezone(UTC).isoformat()


def from_iso(value: str) -> datetime:
    """Parse an ISO-8601 string; a trailing ``Z`` and naive values are read as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
