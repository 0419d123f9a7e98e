"""Audio infrastructure - yt-dlp resolver and its models."""

from discord_music_queue.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    YtDlpOpts,
    YtDlpTrackInfo,
)
from discord_music_queue.infrastructure.audio.ytdlp_resolver import YtDlpResolver

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "YtDlpOpts",
    "YtDlpResolver",
    "YtDlpTrackInfo",
]
