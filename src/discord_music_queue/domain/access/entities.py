"""Blacklist entries for users and servers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from discord_music_queue.domain.shared.datetime_utils import utcnow
from discord_music_queue.domain.shared.types import (
    DiscordSnowflake,
    NonNegativeInt,
    UtcDatetimeField,
)


class BlacklistKind(Enum):
    USER = "user"
    SERVER = "server"


class BlacklistEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: DiscordSnowflake
    name: str = ""
    added_at: UtcDatetimeField = Field(default_factory=utcnow)


class BlacklistPage(BaseModel):
    """One page of a blacklist listing (pages are 0-based)."""

    model_config = ConfigDict(frozen=True)

    kind: BlacklistKind
    entries: tuple[BlacklistEntry, ...]
    page: NonNegativeInt
    total: NonNegativeInt
    has_more: bool
