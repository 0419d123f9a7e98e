"""Reusable Pydantic Annotated types for domain-wide validation.

Constrained types are defined here once so models can annotate fields::

    from discord_music_queue.domain.shared.types import DiscordSnowflake, PercentInt

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        volume: PercentInt
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

from discord_music_queue.domain.shared.messages import ErrorMessages

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

PercentInt = Annotated[int, Field(ge=0, le=100)]
"""Percentage setting: 0 … 100."""

QueuePositionInt = Annotated[int, Field(ge=1)]
"""One-based queue position as shown to users."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

CommandPrefixStr = Annotated[str, Field(min_length=1, max_length=5)]
"""Bot command prefix: 1-5 characters."""


# ── Datetime constraints ────────────────────────────────────────────


def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if isinstance(v, datetime):
        if v.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED)
        return v.astimezone(UTC)
    return v


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
