"""Port interface for resolving tracks from queries and URLs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_music_queue.domain.shared.types import NonEmptyStr, PositiveInt

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class AudioResolver(ABC):
    """Interface for turning direct URLs and search text into playable tracks.

    Both paths return the same :class:`Track` shape. ``requested_by`` is left
    unset; the resolution service stamps it.
    """

    @abstractmethod
    async def resolve_url(self, url: NonEmptyStr) -> "Track | None":
        """Resolve a direct media URL to exactly one track, or ``None``."""
        ...

    @abstractmethod
    async def search(self, query: NonEmptyStr, limit: PositiveInt = 1) -> list["Track"]:
        """Search for tracks matching free text, best match first."""
        ...
