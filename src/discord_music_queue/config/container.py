"""Dependency Injection Container

Builds the application's object graph lazily: each component is created on
first access and cached for the life of the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.audio_resolver import AudioResolver
    from ..application.interfaces.voice_adapter import VoiceAdapter
    from ..application.services.access_service import AccessService
    from ..application.services.playback_driver import PlaybackDriver
    from ..application.services.resolution_service import TrackResolutionService
    from ..application.services.tenant_registry import TenantRegistry
    from ..domain.access.repository import BlacklistRepository
    from ..domain.shared.events import EventBus
    from ..infrastructure.jobs.idle_reaper import IdleSessionReaper
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    The voice adapter, and everything built on it, needs the bot; call
    :meth:`set_bot` before touching those properties.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence
    _database: Database | None = None
    _blacklist_repository: BlacklistRepository | None = None

    # Infrastructure adapters
    _audio_resolver: AudioResolver | None = None
    _voice_adapter: VoiceAdapter | None = None

    # Application services
    _event_bus: EventBus | None = None
    _registry: TenantRegistry | None = None
    _playback_driver: PlaybackDriver | None = None
    _resolution_service: TrackResolutionService | None = None
    _access_service: AccessService | None = None

    # Background jobs
    _idle_reaper: IdleSessionReaper | None = None

    def set_bot(self, bot: Bot) -> None:
        self._bot = bot

    @property
    def bot(self) -> Bot:
        if self._bot is None:
            raise RuntimeError("Bot not initialized. Call set_bot() first.")
        return self._bot

    # === Persistence ===

    @property
    def database(self) -> Database:
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    @property
    def blacklist_repository(self) -> BlacklistRepository:
        if self._blacklist_repository is None:
            from ..infrastructure.persistence.repositories.blacklist_repository import (
                SQLiteBlacklistRepository,
            )

            self._blacklist_repository = SQLiteBlacklistRepository(self.database)
        return self._blacklist_repository

    # === Infrastructure Adapters ===

    @property
    def audio_resolver(self) -> AudioResolver:
        if self._audio_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._audio_resolver = YtDlpResolver(self.settings.audio)
        return self._audio_resolver

    @property
    def voice_adapter(self) -> VoiceAdapter:
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter

            self._voice_adapter = DiscordVoiceAdapter(self.bot, self.settings.audio)
        return self._voice_adapter

    # === Application Services ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def registry(self) -> TenantRegistry:
        if self._registry is None:
            from ..application.services.tenant_registry import TenantRegistry

            self._registry = TenantRegistry(
                default_volume_percent=self.settings.audio.default_volume_percent
            )
        return self._registry

    @property
    def playback_driver(self) -> PlaybackDriver:
        if self._playback_driver is None:
            from ..application.services.playback_driver import PlaybackDriver

            self._playback_driver = PlaybackDriver(
                registry=self.registry,
                voice_adapter=self.voice_adapter,
                event_bus=self.event_bus,
            )
        return self._playback_driver

    @property
    def resolution_service(self) -> TrackResolutionService:
        if self._resolution_service is None:
            from ..application.services.resolution_service import TrackResolutionService

            self._resolution_service = TrackResolutionService(
                audio_resolver=self.audio_resolver,
                timeout_seconds=self.settings.audio.resolve_timeout_seconds,
            )
        return self._resolution_service

    @property
    def access_service(self) -> AccessService:
        if self._access_service is None:
            from ..application.services.access_service import AccessService

            self._access_service = AccessService(blacklist_repository=self.blacklist_repository)
        return self._access_service

    # === Background Jobs ===

    @property
    def idle_reaper(self) -> IdleSessionReaper:
        if self._idle_reaper is None:
            from ..infrastructure.jobs.idle_reaper import IdleSessionReaper

            self._idle_reaper = IdleSessionReaper(
                registry=self.registry,
                playback_driver=self.playback_driver,
                settings=self.settings.cleanup,
            )
        return self._idle_reaper

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        if self._idle_reaper is not None and self._idle_reaper.is_running:
            await self._idle_reaper.stop()

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
