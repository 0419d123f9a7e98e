"""Centralized constants for database schema, audio and limits."""

from __future__ import annotations


class DatabaseTables:
    BLACKLISTED_USERS = "blacklisted_users"
    BLACKLISTED_SERVERS = "blacklisted_servers"


class SQLPragmas:
    """SQLite PRAGMA statements applied to each connection."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class DatabaseURLSchemes:
    SQLITE = "sqlite://"
    MEMORY = ":memory:"
    MEMORY_SHARED_URI = "file:discord-music-queue?mode=memory&cache=shared"


class AudioConstants:
    """Audio and FFmpeg configuration constants."""

    FFMPEG_BEFORE_OPTIONS_DEFAULT = "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5"
    FFMPEG_OPTIONS_DEFAULT = "-vn"

    YTDLP_FORMAT_DEFAULT = "bestaudio/best"

    CONNECT_TIMEOUT_SECONDS = 10.0


class LimitConstants:
    """Numeric limits and defaults."""

    MIN_PERCENT = 0
    MAX_PERCENT = 100
    DEFAULT_VOLUME_PERCENT = 50

    QUEUE_LISTING_LIMIT = 10
    BLACKLIST_PAGE_SIZE = 10

    MAX_DISCORD_SNOWFLAKE = 2**64
