"""Configuration: settings and the dependency container."""

from discord_music_queue.config.settings import Settings, clear_settings_cache, get_settings

__all__ = ["Settings", "clear_settings_cache", "get_settings"]
