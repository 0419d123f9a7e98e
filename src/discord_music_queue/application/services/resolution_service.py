"""Track Resolution Service - turns raw user input into exactly one Track."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING, Final

from ...domain.shared.exceptions import InvalidSourceError, NoResultsError, ResolutionTimeoutError
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ..interfaces.audio_resolver import AudioResolver

logger = logging.getLogger(__name__)

DEFAULT_RESOLVE_TIMEOUT: Final[float] = 30.0

URL_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"^https?://", re.IGNORECASE),
    re.compile(r"^www\.", re.IGNORECASE),
    re.compile(r"(?:^|\.)(?:youtube\.com|youtu\.be)/", re.IGNORECASE),
]


def looks_like_url(query: str) -> bool:
    return any(pattern.search(query) for pattern in URL_PATTERNS)


def normalize_url(query: str) -> str:
    """Give scheme-less URLs an ``https://`` prefix."""
    if re.match(r"^https?://", query, re.IGNORECASE):
        return query
    return f"https://{query}"


class TrackResolutionService:
    """Classifies input as URL or free text and resolves it through the AudioResolver.

    The URL path fails with :class:`InvalidSourceError`; the search path takes
    the top result and fails with :class:`NoResultsError`. The whole call is
    bounded by ``timeout_seconds``.
    """

    def __init__(
        self,
        *,
        audio_resolver: AudioResolver,
        timeout_seconds: float = DEFAULT_RESOLVE_TIMEOUT,
    ) -> None:
        self._resolver = audio_resolver
        self._timeout = timeout_seconds

    async def resolve(self, query: str, requested_by: str) -> Track:
        query = query.strip()
        if not query:
            raise NoResultsError(query)

        is_url = looks_like_url(query)
        logger.debug(LogTemplates.RESOLVE_STARTED, query, is_url)

        try:
            async with asyncio.timeout(self._timeout):
                if is_url:
                    track = await self._resolve_url(query)
                else:
                    track = await self._search(query)
        except TimeoutError:
            logger.warning(LogTemplates.RESOLVE_TIMEOUT, query, self._timeout)
            raise ResolutionTimeoutError(query, self._timeout) from None

        return track.with_requester(requested_by)

    async def _resolve_url(self, query: str) -> Track:
        track = await self._resolver.resolve_url(normalize_url(query))
        if track is None:
            raise InvalidSourceError(query)
        return track

    async def _search(self, query: str) -> Track:
        results = await self._resolver.search(query, limit=1)
        if not results:
            raise NoResultsError(query)
        return results[0]
