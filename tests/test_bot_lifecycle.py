"""
Unit Tests for Bot Lifecycle

Covers MusicBot construction, setup_hook ordering, cog loading, command sync,
the last-resort slash command error handler, presence, and shutdown.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord
import pytest
from discord.ext import commands

from discord_music_queue.config.settings import DiscordSettings, Settings
from discord_music_queue.domain.shared.messages import DiscordUIMessages
from discord_music_queue.infrastructure.discord.bot import COGS, MusicBot, create_bot
from discord_music_queue.infrastructure.discord.cogs.music_cog import ERROR_HANDLED_KEY

OWNER_ID = 123456789012345678
GUILD_A = 200000000000000001
GUILD_B = 200000000000000002


def make_settings(**discord_overrides) -> Settings:
    return Settings(discord=DiscordSettings(**discord_overrides))


@pytest.fixture
def mock_settings():
    return make_settings(command_prefix="?")


@pytest.fixture
def mock_container():
    """Create mock container with the pieces the bot touches."""
    container = MagicMock()
    container.initialize = AsyncMock()
    container.shutdown = AsyncMock()
    container.idle_reaper.start = MagicMock()
    container.idle_reaper.stop = AsyncMock()
    return container


@pytest.fixture
def bot(mock_container, mock_settings):
    return MusicBot(container=mock_container, settings=mock_settings)


# =============================================================================
# Initialization
# =============================================================================


class TestBotInitialization:
    @pytest.mark.asyncio
    async def test_intents(self, bot):
        assert bot.intents.message_content is True
        assert bot.intents.voice_states is True
        assert bot.intents.guilds is True

    @pytest.mark.asyncio
    async def test_command_prefix(self, bot):
        assert bot.command_prefix == "?"

    @pytest.mark.asyncio
    async def test_owner_ids(self, mock_container):
        bot = MusicBot(container=mock_container, settings=make_settings(owner_ids=[OWNER_ID]))

        assert bot.owner_ids == {OWNER_ID}

    @pytest.mark.asyncio
    async def test_no_owner_ids(self, bot):
        assert bot.owner_ids is None

    @pytest.mark.asyncio
    async def test_registers_with_container(self, bot, mock_container, mock_settings):
        assert bot.container is mock_container
        assert bot.settings is mock_settings
        mock_container.set_bot.assert_called_once_with(bot)

    @pytest.mark.asyncio
    async def test_create_bot(self, mock_container, mock_settings):
        bot = create_bot(mock_container, mock_settings)

        assert isinstance(bot, MusicBot)
        assert bot.container is mock_container


# =============================================================================
# setup_hook
# =============================================================================


class TestSetupHook:
    @pytest.mark.asyncio
    async def test_order(self, bot, mock_container):
        """Container first, then cogs, then the reaper."""
        calls = []
        mock_container.initialize.side_effect = lambda: calls.append("initialize")
        mock_container.idle_reaper.start.side_effect = lambda: calls.append("reaper")

        async def load():
            calls.append("cogs")

        with patch.object(bot, "_load_cogs", side_effect=load):
            await bot.setup_hook()

        assert calls == ["initialize", "cogs", "reaper"]

    @pytest.mark.asyncio
    async def test_installs_error_handler(self, bot):
        with patch.object(bot, "_load_cogs", new_callable=AsyncMock):
            await bot.setup_hook()

        assert bot.tree.on_error == bot._on_app_command_error

    @pytest.mark.asyncio
    async def test_no_sync_by_default(self, bot):
        with (
            patch.object(bot, "_load_cogs", new_callable=AsyncMock),
            patch.object(bot, "_sync_commands", new_callable=AsyncMock) as sync,
        ):
            await bot.setup_hook()

        sync.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_syncs_when_enabled(self, mock_container):
        bot = MusicBot(container=mock_container, settings=make_settings(sync_on_startup=True))

        with (
            patch.object(bot, "_load_cogs", new_callable=AsyncMock),
            patch.object(bot, "_sync_commands", new_callable=AsyncMock) as sync,
        ):
            await bot.setup_hook()

        sync.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_container_failure_propagates(self, bot, mock_container):
        mock_container.initialize.side_effect = RuntimeError("db unavailable")

        with pytest.raises(RuntimeError):
            await bot.setup_hook()

        mock_container.idle_reaper.start.assert_not_called()


class TestLoadCogs:
    @pytest.mark.asyncio
    async def test_loads_every_cog(self, bot):
        with patch.object(bot, "load_extension", new_callable=AsyncMock) as load:
            await bot._load_cogs()

        assert [c.args[0] for c in load.await_args_list] == list(COGS)

    @pytest.mark.asyncio
    async def test_continues_after_failure(self, bot, caplog):
        with patch.object(
            bot, "load_extension", new_callable=AsyncMock, side_effect=[None, RuntimeError("bad"), None]
        ) as load:
            await bot._load_cogs()

        assert load.await_count == len(COGS)
        assert any(record.levelname == "ERROR" for record in caplog.records)


class TestSyncCommands:
    @pytest.mark.asyncio
    async def test_global_sync(self, bot):
        with patch.object(bot.tree, "sync", new_callable=AsyncMock, return_value=[1, 2]) as sync:
            await bot._sync_commands()

        sync.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_guild_sync(self, mock_container):
        bot = MusicBot(container=mock_container, settings=make_settings(guild_ids=[GUILD_A, GUILD_B]))

        with patch.object(bot.tree, "sync", new_callable=AsyncMock, return_value=[]) as sync:
            await bot._sync_commands()

        synced = [c.kwargs["guild"].id for c in sync.await_args_list]
        assert synced == [GUILD_A, GUILD_B]

    @pytest.mark.asyncio
    async def test_sync_failure_is_logged(self, bot, caplog):
        response = MagicMock(status=500, reason="Server Error")
        with patch.object(
            bot.tree, "sync", new_callable=AsyncMock, side_effect=discord.HTTPException(response, "oops")
        ):
            await bot._sync_commands()

        assert any(record.levelname == "WARNING" for record in caplog.records)


# =============================================================================
# Slash Command Error Handler
# =============================================================================


class TestAppCommandErrorHandler:
    @pytest.mark.asyncio
    async def test_sends_ephemeral_error(self, bot, mock_interaction):
        await bot._on_app_command_error(mock_interaction, discord.app_commands.AppCommandError("x"))

        mock_interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.ERROR_UNEXPECTED, ephemeral=True
        )

    @pytest.mark.asyncio
    async def test_uses_followup_when_responded(self, bot, mock_interaction):
        mock_interaction.response.is_done.return_value = True

        await bot._on_app_command_error(mock_interaction, discord.app_commands.AppCommandError("x"))

        mock_interaction.followup.send.assert_awaited_once_with(
            DiscordUIMessages.ERROR_UNEXPECTED, ephemeral=True
        )

    @pytest.mark.asyncio
    async def test_skips_errors_a_cog_rendered(self, bot, mock_interaction):
        mock_interaction.extras[ERROR_HANDLED_KEY] = True

        await bot._on_app_command_error(mock_interaction, discord.app_commands.AppCommandError("x"))

        mock_interaction.response.send_message.assert_not_awaited()
        mock_interaction.followup.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_is_swallowed(self, bot, mock_interaction, caplog):
        response = MagicMock(status=404, reason="Unknown Interaction")
        mock_interaction.response.send_message.side_effect = discord.NotFound(response, "gone")

        await bot._on_app_command_error(mock_interaction, discord.app_commands.AppCommandError("x"))

        assert any(record.levelname == "WARNING" for record in caplog.records)


# =============================================================================
# on_ready / close
# =============================================================================


class TestOnReady:
    @pytest.mark.asyncio
    async def test_sets_listening_presence(self, bot):
        with (
            patch.object(MusicBot, "guilds", new_callable=PropertyMock, return_value=[]),
            patch.object(bot, "change_presence", new_callable=AsyncMock) as change_presence,
        ):
            await bot.on_ready()

        activity = change_presence.call_args.kwargs["activity"]
        assert activity.type == discord.ActivityType.listening
        assert activity.name == "/music play"


class TestBotClose:
    @pytest.fixture
    def voice_clients(self):
        clients = [MagicMock(), MagicMock()]
        for vc in clients:
            vc.disconnect = AsyncMock()
        return clients

    @pytest.mark.asyncio
    async def test_close_sequence(self, bot, mock_container, voice_clients):
        with (
            patch.object(MusicBot, "voice_clients", new_callable=PropertyMock, return_value=voice_clients),
            patch.object(commands.Bot, "close", new_callable=AsyncMock) as base_close,
        ):
            await bot.close()

        mock_container.idle_reaper.stop.assert_awaited_once()
        for vc in voice_clients:
            vc.disconnect.assert_awaited_once_with(force=True)
        mock_container.shutdown.assert_awaited_once()
        base_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_survives_failures(self, bot, mock_container, voice_clients):
        mock_container.idle_reaper.stop.side_effect = RuntimeError("reaper")
        voice_clients[0].disconnect.side_effect = RuntimeError("voice")
        mock_container.shutdown.side_effect = RuntimeError("db")

        with (
            patch.object(MusicBot, "voice_clients", new_callable=PropertyMock, return_value=voice_clients),
            patch.object(commands.Bot, "close", new_callable=AsyncMock) as base_close,
        ):
            await bot.close()

        voice_clients[1].disconnect.assert_awaited_once()
        base_close.assert_awaited_once()


class TestRunWithGracefulShutdown:
    def test_runs_event_loop(self, bot):
        with patch("discord_music_queue.infrastructure.discord.bot.asyncio.run") as run:
            bot.run_with_graceful_shutdown("token")

        coro = run.call_args.args[0]
        assert asyncio.iscoroutine(coro)
        coro.close()
