from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

GUILD_ID = 111111111
OTHER_GUILD_ID = 555555555
VOICE_CHANNEL_ID = 444444444
TEXT_CHANNEL_ID = 222222222
USER_ID = 333333333


# ============================================================================
# Global State Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset the event bus singleton and the cached settings around each test."""
    from discord_music_queue.config.settings import clear_settings_cache
    from discord_music_queue.domain.shared.events import reset_event_bus

    reset_event_bus()
    clear_settings_cache()
    yield
    reset_event_bus()
    clear_settings_cache()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from discord_music_queue.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def blacklist_repository(in_memory_database):
    """Create a blacklist repository with in-memory database."""
    from discord_music_queue.infrastructure.persistence.repositories.blacklist_repository import (
        SQLiteBlacklistRepository,
    )

    return SQLiteBlacklistRepository(in_memory_database)


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def make_track():
    """Factory for tracks with distinct titles and stream URLs."""
    from discord_music_queue.domain.music.entities import Track

    def _make(title: str = "Test Track", **overrides):
        fields = {
            "title": title,
            "source_locator": f"https://stream.example.com/{title.replace(' ', '-').lower()}",
            "duration_display": "3:00",
            "thumbnail_ref": "https://thumbnail.example.com/test.jpg",
            "webpage_url": "https://youtube.com/watch?v=test123",
            "requested_by": "TestUser#0001",
        }
        fields.update(overrides)
        return Track(**fields)

    return _make


@pytest.fixture
def sample_track(make_track):
    return make_track()


@pytest.fixture
def sample_queue():
    """Create an empty playback queue for the test guild."""
    from discord_music_queue.domain.music.entities import PlaybackQueue

    return PlaybackQueue(guild_id=GUILD_ID)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def mock_voice_adapter():
    """Voice adapter double: connects, plays and stops successfully by default."""
    adapter = MagicMock()
    adapter.connect = AsyncMock()
    adapter.disconnect = AsyncMock(return_value=True)
    adapter.play = AsyncMock()
    adapter.stop = AsyncMock(return_value=True)
    adapter.pause = AsyncMock(return_value=True)
    adapter.resume = AsyncMock(return_value=True)
    adapter.set_volume = MagicMock(return_value=True)
    adapter.is_connected = MagicMock(return_value=True)
    adapter.set_on_track_end_callback = MagicMock()
    return adapter


@pytest.fixture
def event_bus():
    from discord_music_queue.domain.shared.events import EventBus

    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """List that collects every event the driver publishes on ``event_bus``."""
    from discord_music_queue.domain.shared.events import (
        PlaybackHalted,
        PlaybackStopped,
        QueueExhausted,
        SessionCreated,
        SessionDestroyed,
        TrackPlaybackFailed,
        TrackQueued,
        TrackStartedPlaying,
    )

    events: list = []

    async def record(event) -> None:
        events.append(event)

    for event_type in (
        TrackQueued,
        TrackStartedPlaying,
        TrackPlaybackFailed,
        PlaybackHalted,
        QueueExhausted,
        PlaybackStopped,
        SessionCreated,
        SessionDestroyed,
    ):
        event_bus.subscribe(event_type, record)

    return events


@pytest.fixture
def registry():
    from discord_music_queue.application.services.tenant_registry import TenantRegistry

    return TenantRegistry()


@pytest.fixture
def playback_driver(registry, mock_voice_adapter, event_bus):
    from discord_music_queue.application.services.playback_driver import PlaybackDriver

    return PlaybackDriver(
        registry=registry,
        voice_adapter=mock_voice_adapter,
        event_bus=event_bus,
    )


# ============================================================================
# Discord Fixtures
# ============================================================================


@pytest.fixture
def mock_interaction():
    """Create a mock Discord Interaction from a member sitting in a voice channel."""
    import discord

    interaction = MagicMock(spec=discord.Interaction)
    interaction.response = MagicMock()
    interaction.response.is_done.return_value = False
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    interaction.extras = {}
    interaction.command = MagicMock()
    interaction.command.name = "play"

    interaction.guild = MagicMock()
    interaction.guild.id = GUILD_ID
    interaction.channel_id = TEXT_CHANNEL_ID

    member = MagicMock(spec=discord.Member)
    member.id = USER_ID
    member.display_name = "TestUser"
    member.__str__ = MagicMock(return_value="TestUser#0001")
    member.voice = MagicMock()
    member.voice.channel = MagicMock()
    member.voice.channel.id = VOICE_CHANNEL_ID

    interaction.user = member
    return interaction
