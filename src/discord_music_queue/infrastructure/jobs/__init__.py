"""Background jobs."""

from discord_music_queue.infrastructure.jobs.idle_reaper import IdleSessionReaper, ReaperStats

__all__ = ["IdleSessionReaper", "ReaperStats"]
