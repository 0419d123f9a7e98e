"""SQLite repository implementations."""

from discord_music_queue.infrastructure.persistence.repositories.blacklist_repository import (
    SQLiteBlacklistRepository,
)

__all__ = [
    "SQLiteBlacklistRepository",
]
