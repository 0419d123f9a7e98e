"""
Access Domain Repository Interfaces

Abstract base class for blacklist persistence. Implementations live in the
infrastructure layer.
"""

from abc import ABC, abstractmethod

from discord_music_queue.domain.access.entities import BlacklistEntry, BlacklistKind, BlacklistPage


class BlacklistRepository(ABC):
    """Abstract repository for the user and server blacklists."""

    @abstractmethod
    async def add(self, kind: BlacklistKind, entry: BlacklistEntry) -> bool:
        """Add an entry.

        Returns:
            True if the entry was added, False if the ID was already listed.
        """
        ...

    @abstractmethod
    async def remove(self, kind: BlacklistKind, entry_id: int) -> bool:
        """Remove an entry.

        Returns:
            True if an entry was removed, False if the ID was not listed.
        """
        ...

    @abstractmethod
    async def contains(self, kind: BlacklistKind, entry_id: int) -> bool: ...

    @abstractmethod
    async def list_page(self, kind: BlacklistKind, page: int = 0, limit: int = 10) -> BlacklistPage:
        """Return one 0-based page of entries in insertion order."""
        ...
