"""Discord adapters for application ports."""

from discord_music_queue.infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter

__all__ = ["DiscordVoiceAdapter"]
