"""The ``/music`` command group: every playback and queue command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_music_queue.domain.music.value_objects import SessionEndReason
from discord_music_queue.domain.shared.constants import LimitConstants
from discord_music_queue.domain.shared.events import (
    PlaybackHalted,
    QueueExhausted,
    SessionDestroyed,
    TrackPlaybackFailed,
    TrackStartedPlaying,
)
from discord_music_queue.domain.shared.exceptions import BlacklistedError, DomainError
from discord_music_queue.domain.shared.messages import (
    DiscordUIMessages,
    ErrorMessages,
    LogTemplates,
)
from discord_music_queue.infrastructure.discord import embeds
from discord_music_queue.utils.reply import truncate

if TYPE_CHECKING:
    from ....config.container import Container
    from ....domain.music.entities import Track
    from ....domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

ERROR_HANDLED_KEY = "error_handled"

PercentRange = app_commands.Range[int, 0, 100]
PositionRange = app_commands.Range[int, 1]


@app_commands.guild_only()
class MusicCog(commands.GroupCog, group_name="music", group_description="Music commands"):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container
        # Tracks a play command is still replying about, keyed by id().
        self._replying: dict[int, Track] = {}
        super().__init__()

    # ── Lifecycle ───────────────────────────────────────────────────

    def _subscriptions(self) -> list[tuple[type[DomainEvent], object]]:
        return [
            (TrackStartedPlaying, self._on_track_started),
            (TrackPlaybackFailed, self._on_track_failed),
            (PlaybackHalted, self._on_playback_halted),
            (QueueExhausted, self._on_queue_exhausted),
            (SessionDestroyed, self._on_session_destroyed),
        ]

    async def cog_load(self) -> None:
        bus = self.container.event_bus
        for event_type, handler in self._subscriptions():
            bus.subscribe(event_type, handler)

    async def cog_unload(self) -> None:
        bus = self.container.event_bus
        for event_type, handler in self._subscriptions():
            bus.unsubscribe(event_type, handler)
        self._replying.clear()

    # ── Checks and error rendering ──────────────────────────────────

    async def _send_ephemeral(self, interaction: discord.Interaction, message: str) -> None:
        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)

    async def _reply(
        self,
        interaction: discord.Interaction,
        content: str | None = None,
        *,
        embed: discord.Embed | None = None,
    ) -> None:
        kwargs = {"embed": embed} if embed is not None else {}
        if interaction.response.is_done():
            await interaction.followup.send(content or "", **kwargs)
        else:
            await interaction.response.send_message(content, **kwargs)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        """Deny blacklisted servers and users before any command runs."""
        guild_id = interaction.guild.id if interaction.guild else None
        try:
            await self.container.access_service.ensure_allowed(interaction.user.id, guild_id)
        except BlacklistedError as e:
            logger.info(
                LogTemplates.BLACKLIST_DENIED,
                getattr(interaction.command, "name", "<unknown>"),
                interaction.user.id,
                guild_id,
                e.subject,
            )
            await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_PREFIX.format(message=e.message))
            return False
        return True

    async def cog_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        interaction.extras[ERROR_HANDLED_KEY] = True

        if isinstance(error, app_commands.NoPrivateMessage):
            await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_SERVER_ONLY)
            return
        if isinstance(error, app_commands.CheckFailure):
            # interaction_check already replied.
            return

        original = getattr(error, "original", error)
        if isinstance(original, DomainError):
            await self._send_ephemeral(
                interaction, DiscordUIMessages.ERROR_PREFIX.format(message=original.message)
            )
            return

        logger.error(
            LogTemplates.BOT_SLASH_COMMAND_ERROR,
            getattr(interaction.command, "name", "<unknown>"),
            original,
            exc_info=original,
        )
        await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_UNEXPECTED)

    async def _require_voice(self, interaction: discord.Interaction) -> int | None:
        """Return the caller's voice channel ID, or reply and return ``None``."""
        user = interaction.user
        voice = getattr(user, "voice", None)
        if not isinstance(user, discord.Member) or voice is None or voice.channel is None:
            await self._send_ephemeral(interaction, DiscordUIMessages.ERROR_MUST_BE_IN_VOICE)
            return None
        return voice.channel.id

    # ── Announcements ───────────────────────────────────────────────

    async def _announce(self, guild_id: int, content: str | None = None, *, embed: discord.Embed | None = None) -> None:
        session = self.container.registry.get(guild_id)
        if session is None or session.announce_channel_id is None:
            return

        channel = self.bot.get_channel(session.announce_channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            return

        try:
            if embed is not None:
                await channel.send(content, embed=embed)
            else:
                await channel.send(content)
        except discord.HTTPException:
            logger.warning(LogTemplates.ANNOUNCE_FAILED, guild_id, exc_info=True)

    def _is_replying(self, track: Track) -> bool:
        return self._replying.get(id(track)) is track

    async def _on_track_started(self, event: TrackStartedPlaying) -> None:
        if self._is_replying(event.track):
            return
        await self._announce(event.guild_id, embed=embeds.now_playing_embed(event.track))

    async def _on_track_failed(self, event: TrackPlaybackFailed) -> None:
        if self._is_replying(event.track):
            return
        await self._announce(
            event.guild_id,
            DiscordUIMessages.ANNOUNCE_TRACK_FAILED.format(track_title=truncate(event.track.title)),
        )

    async def _on_playback_halted(self, event: PlaybackHalted) -> None:
        await self._announce(
            event.guild_id, DiscordUIMessages.ANNOUNCE_PLAYBACK_HALTED.format(attempts=event.attempts)
        )

    async def _on_queue_exhausted(self, event: QueueExhausted) -> None:
        await self._announce(event.guild_id, DiscordUIMessages.ANNOUNCE_QUEUE_ENDED)

    async def _on_session_destroyed(self, event: SessionDestroyed) -> None:
        if event.reason == SessionEndReason.CONNECTION_LOST.value:
            await self._announce(event.guild_id, DiscordUIMessages.ANNOUNCE_CONNECTION_LOST)

    # ── Commands ────────────────────────────────────────────────────

    @app_commands.command(name="help", description="Get information about the music category commands")
    async def help(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message(embed=embeds.help_embed())

    @app_commands.command(name="play", description="Start the music")
    @app_commands.describe(query="Song name or YouTube URL")
    async def play(self, interaction: discord.Interaction, query: str) -> None:
        channel_id = await self._require_voice(interaction)
        if channel_id is None:
            return

        assert interaction.guild is not None
        guild_id = interaction.guild.id

        # Resolution can take longer than the 3-second interaction deadline.
        await interaction.response.defer()

        track = await self.container.resolution_service.resolve(query, str(interaction.user))

        self._replying[id(track)] = track
        try:
            result = await self.container.playback_driver.enqueue(
                guild_id,
                track,
                voice_channel_id=channel_id,
                text_channel_id=interaction.channel_id,
            )
        finally:
            self._replying.pop(id(track), None)

        if result.started:
            await self._reply(interaction, embed=embeds.now_playing_embed(result.track))
        elif result.queued:
            await self._reply(interaction, embed=embeds.queued_embed(result.track, result.position))
        else:
            await self._reply(interaction, DiscordUIMessages.PLAY_FAILED)

    @app_commands.command(name="pause", description="Pause the music")
    async def pause(self, interaction: discord.Interaction) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.pause(interaction.guild.id)
        await self._reply(interaction, DiscordUIMessages.ACTION_PAUSED)

    @app_commands.command(name="resume", description="Resume the music")
    async def resume(self, interaction: discord.Interaction) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.resume(interaction.guild.id)
        await self._reply(interaction, DiscordUIMessages.ACTION_RESUMED)

    @app_commands.command(name="skip", description="Skip the current song")
    async def skip(self, interaction: discord.Interaction) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.skip(interaction.guild.id)
        await self._reply(interaction, DiscordUIMessages.ACTION_SKIPPED)

    @app_commands.command(name="stop", description="Stop the music")
    async def stop(self, interaction: discord.Interaction) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.stop(
            interaction.guild.id, stopped_by_id=interaction.user.id
        )
        await self._reply(interaction, DiscordUIMessages.ACTION_STOPPED)

    @app_commands.command(name="queue", description="See the music queue")
    async def queue(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        snapshot = self.container.playback_driver.queue_snapshot(
            interaction.guild.id, LimitConstants.QUEUE_LISTING_LIMIT
        )
        await self._reply(interaction, embed=embeds.queue_embed(snapshot))

    @app_commands.command(name="clear", description="Delete the music queue")
    async def clear(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.clear(interaction.guild.id)
        await self._reply(interaction, DiscordUIMessages.ACTION_QUEUE_CLEARED)

    @app_commands.command(name="volume", description="Set the music volume")
    @app_commands.describe(level="Volume level (0-100)")
    async def volume(self, interaction: discord.Interaction, level: PercentRange) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.set_volume(interaction.guild.id, level)
        await self._reply(interaction, DiscordUIMessages.ACTION_VOLUME_SET.format(level=level))

    @app_commands.command(name="bassboost", description="Set the bassboost level")
    @app_commands.describe(level="Bassboost level (0-100)")
    async def bassboost(self, interaction: discord.Interaction, level: PercentRange) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.set_bass_boost(interaction.guild.id, level)
        await self._reply(interaction, DiscordUIMessages.ACTION_BASS_BOOST_SET.format(level=level))

    @app_commands.command(name="loop", description="Loop the music")
    async def loop(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        enabled = await self.container.playback_driver.toggle_loop(interaction.guild.id)
        await self._reply(
            interaction,
            DiscordUIMessages.ACTION_LOOP_ENABLED if enabled else DiscordUIMessages.ACTION_LOOP_DISABLED,
        )

    @app_commands.command(name="shuffle", description="Shuffle the music")
    async def shuffle(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.shuffle(interaction.guild.id)
        await self._reply(interaction, DiscordUIMessages.ACTION_SHUFFLED)

    @app_commands.command(name="playing", description="See which song is playing now")
    async def playing(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        snapshot = self.container.playback_driver.now_playing(interaction.guild.id)
        await self._reply(interaction, embed=embeds.currently_playing_embed(snapshot))

    @app_commands.command(name="remove", description="Remove a song from the queue")
    @app_commands.describe(position="Position in queue to remove")
    async def remove(self, interaction: discord.Interaction, position: PositionRange) -> None:
        assert interaction.guild is not None

        track = await self.container.playback_driver.remove(interaction.guild.id, position)
        await self._reply(
            interaction, DiscordUIMessages.ACTION_TRACK_REMOVED.format(track_title=truncate(track.title))
        )

    @app_commands.command(name="skipto", description="Skip to a new song")
    @app_commands.describe(position="Position in queue to skip to")
    async def skipto(self, interaction: discord.Interaction, position: PositionRange) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.skip_to(interaction.guild.id, position)
        await self._reply(interaction, DiscordUIMessages.ACTION_SKIPPED_TO.format(position=position))

    @app_commands.command(name="seek", description="Seek the current playing music")
    @app_commands.describe(time="Time to seek to (e.g., 1:30)")
    async def seek(self, interaction: discord.Interaction, time: str) -> None:
        if await self._require_voice(interaction) is None:
            return
        assert interaction.guild is not None

        await self.container.playback_driver.seek(interaction.guild.id, time)

    @app_commands.command(name="previous", description="Play previous song")
    async def previous(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.previous(interaction.guild.id)

    @app_commands.command(name="lyrics", description="Get the lyrics of the current song")
    async def lyrics(self, interaction: discord.Interaction) -> None:
        assert interaction.guild is not None

        await self.container.playback_driver.lyrics(interaction.guild.id)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
