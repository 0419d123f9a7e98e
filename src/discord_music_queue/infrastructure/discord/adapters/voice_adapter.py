"""Discord voice adapter implementing VoiceAdapter for connection and playback."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_music_queue.application.interfaces.voice_adapter import TrackEndCallback, VoiceAdapter
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.shared.exceptions import TransportFailureError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ....domain.music.entities import Track

logger = logging.getLogger(__name__)

VoiceChannelLike = discord.VoiceChannel | discord.StageChannel


class DiscordVoiceAdapter(VoiceAdapter):
    """One ``discord.VoiceClient`` per guild, used both as connection and player.

    Streams go through FFmpeg wrapped in a ``PCMVolumeTransformer`` so the
    gain can change mid-track. When a stream ends, discord.py calls ``after``
    on its audio thread; the adapter hops back onto the bot loop before
    invoking the registered callback.
    """

    def __init__(self, bot: discord.Client, settings: AudioSettings | None = None) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._ffmpeg_options = self._settings.ffmpeg_options
        self._connect_timeout = self._settings.connect_timeout_seconds
        self._on_track_end: TrackEndCallback | None = None

    def _get_guild(self, guild_id: int) -> discord.Guild | None:
        return self._bot.get_guild(guild_id)

    def _get_voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._get_guild(guild_id)
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    def _get_voice_channel(self, guild_id: int, channel_id: int) -> tuple[discord.Guild, VoiceChannelLike]:
        guild = self._get_guild(guild_id)
        if not guild:
            raise TransportFailureError(guild_id, ErrorMessages.GUILD_NOT_FOUND.format(guild_id=guild_id))

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, VoiceChannelLike):
            raise TransportFailureError(
                guild_id, ErrorMessages.CHANNEL_NOT_VOICE.format(channel_id=channel_id)
            )
        return guild, channel

    async def connect(self, guild_id: int, channel_id: int) -> None:
        """Join ``channel_id``, moving there if already connected elsewhere in the guild."""
        guild, channel = self._get_voice_channel(guild_id, channel_id)

        vc = self._get_voice_client(guild_id)
        if vc is not None and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLIENT, guild_id)
            await self.disconnect(guild_id)
            vc = None

        try:
            async with asyncio.timeout(self._connect_timeout):
                if vc is None:
                    await channel.connect(self_deaf=True)
                    logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
                elif vc.channel is None or vc.channel.id != channel_id:
                    await vc.move_to(channel)
                    logger.info(LogTemplates.VOICE_MOVED, channel.name)
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            raise TransportFailureError(
                guild_id, ErrorMessages.CONNECT_TIMED_OUT.format(channel_id=channel_id)
            ) from None
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            raise TransportFailureError(
                guild_id, ErrorMessages.CONNECT_FORBIDDEN.format(channel_id=channel_id)
            ) from None
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise TransportFailureError(guild_id, str(e)) from e

    async def disconnect(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return True

        try:
            await vc.disconnect(force=True)
        except Exception:
            logger.exception(LogTemplates.VOICE_DISCONNECT_FAILED, guild_id)
            return False

        logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)
        return True

    def _build_source(self, track: Track, volume_percent: int) -> discord.PCMVolumeTransformer:
        source = discord.FFmpegPCMAudio(
            track.source_locator,
            before_options=self._ffmpeg_options.get("before_options", ""),
            options=self._ffmpeg_options.get("options", ""),
        )
        return discord.PCMVolumeTransformer(source, volume=volume_percent / 100)

    async def play(self, guild_id: int, track: Track, volume_percent: int) -> None:
        vc = self._get_voice_client(guild_id)
        if not vc or not vc.is_connected():
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED, guild_id)
            raise TransportFailureError(guild_id, ErrorMessages.NOT_CONNECTED.format(guild_id=guild_id))

        if vc.is_playing() or vc.is_paused():
            vc.stop()

        loop = self._bot.loop

        def after_callback(error: Exception | None = None) -> None:
            asyncio.run_coroutine_threadsafe(self._handle_track_end(guild_id, track, error), loop)

        try:
            vc.play(self._build_source(track, volume_percent), after=after_callback)
        except Exception as e:
            raise TransportFailureError(guild_id, str(e) or type(e).__name__) from e

    async def stop(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return False

        if vc.is_playing() or vc.is_paused():
            vc.stop()
            return True
        return False

    async def pause(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if vc and vc.is_playing():
            vc.pause()
            return True
        return False

    async def resume(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if vc and vc.is_paused():
            vc.resume()
            return True
        return False

    def set_volume(self, guild_id: int, volume_percent: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc or not vc.source:
            return False

        if isinstance(vc.source, discord.PCMVolumeTransformer):
            vc.source.volume = max(0.0, min(1.0, volume_percent / 100))
            return True
        return False

    def is_connected(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        return vc is not None and vc.is_connected()

    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        self._on_track_end = callback

    async def _handle_track_end(self, guild_id: int, track: Track, error: Exception | None) -> None:
        if self._on_track_end is None:
            return
        try:
            await self._on_track_end(guild_id, track, error)
        except Exception:
            logger.exception(LogTemplates.PLAYBACK_CALLBACK_ERROR, guild_id)
