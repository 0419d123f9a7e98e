"""AudioResolver implementation backed by yt-dlp."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Final, cast

from yt_dlp import YoutubeDL

from discord_music_queue.application.interfaces.audio_resolver import AudioResolver
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.music.entities import Track, format_duration_display
from discord_music_queue.domain.shared.messages import LogTemplates
from discord_music_queue.infrastructure.audio.models import (
    CACHE_MAX_SIZE,
    CACHE_TTL,
    AudioFormatInfo,
    CacheEntry,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

LOG_URL_TRUNCATE: Final[int] = 60
MAX_TITLE_LENGTH: Final[int] = 500


class YtDlpResolver(AudioResolver):
    """Runs yt-dlp in worker threads and maps its output to :class:`Track`.

    ``source_locator`` is the direct stream URL FFmpeg reads from;
    ``webpage_url`` keeps the human-facing page for display.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._opts = YtDlpOpts(format=self._settings.ytdlp_format)
        self._cache: dict[str, CacheEntry] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _info_to_track(self, info: YtDlpTrackInfo) -> Track | None:
        try:
            stream_url = self._extract_stream_url(info)
            if not stream_url:
                logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, info.title)
                return None

            return Track(
                title=info.title[:MAX_TITLE_LENGTH],
                source_locator=stream_url,
                duration_display=format_duration_display(info.duration),
                thumbnail_ref=info.thumbnail,
                webpage_url=info.webpage_url,
            )
        except Exception:
            logger.exception(LogTemplates.YTDLP_FAILED_INFO_TO_TRACK)
            return None

    def _extract_stream_url(self, info: YtDlpTrackInfo) -> str | None:
        if info.url:
            return info.url
        return self._extract_stream_from_formats(info.formats)

    @staticmethod
    def _extract_stream_from_formats(formats: list[AudioFormatInfo]) -> str | None:
        # yt-dlp sorts formats worst to best.
        audio_formats = [f for f in formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None

    def _cached(self, url: str, now: float) -> CacheEntry | None:
        entry = self._cache.get(url)
        if entry is None:
            return None
        if now - entry.cached_at < CACHE_TTL:
            logger.debug(LogTemplates.CACHE_HIT, url[:LOG_URL_TRUNCATE])
            return entry
        self._cache.pop(url, None)
        return None

    def _store(self, url: str, info: YtDlpTrackInfo | None, now: float) -> None:
        self._cache[url] = CacheEntry(info=info, cached_at=now)

        if len(self._cache) > CACHE_MAX_SIZE:
            expired = [k for k, entry in self._cache.items() if now - entry.cached_at >= CACHE_TTL]
            for k in expired:
                self._cache.pop(k, None)
            if expired:
                logger.debug(LogTemplates.CACHE_EXPIRED_PRUNED, len(expired))
            # Still over the cap: drop the oldest entries.
            overflow = len(self._cache) - CACHE_MAX_SIZE
            for k in list(self._cache)[:max(overflow, 0)]:
                self._cache.pop(k, None)

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo | None:
        now = time.time()
        cached = self._cached(url, now)
        if cached is not None:
            return cached.info

        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump(exclude_none=True))) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception:
            logger.exception(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            return None

        if isinstance(data, dict) and isinstance(data.get("entries"), list):
            entries = [e for e in data["entries"] if isinstance(e, dict)]
            data = entries[0] if entries else None

        result = YtDlpTrackInfo.model_validate(dict(data)) if isinstance(data, dict) else None
        self._store(url, result, now)
        return result

    def _search_sync(self, query: str, limit: int = 1) -> list[YtDlpTrackInfo]:
        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump(exclude_none=True))) as ydl:
                data = ydl.extract_info(f"ytsearch{limit}:{query}", download=False)
        except Exception:
            logger.exception(LogTemplates.YTDLP_FAILED_SEARCH, query)
            return []

        if not isinstance(data, dict):
            return []

        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return []

        return [YtDlpTrackInfo.model_validate(dict(e)) for e in entries if isinstance(e, dict)]

    async def resolve_url(self, url: str) -> Track | None:
        info = await asyncio.to_thread(self._extract_info_sync, url)
        if info is None:
            return None
        return self._info_to_track(info)

    async def search(self, query: str, limit: int = 1) -> list[Track]:
        infos = await asyncio.to_thread(self._search_sync, query, limit)
        tracks: list[Track] = []
        for info in infos:
            track = self._info_to_track(info)
            if track is not None:
                tracks.append(track)
        return tracks
