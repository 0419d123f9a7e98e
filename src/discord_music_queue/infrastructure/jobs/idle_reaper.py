"""Periodic eviction of guild sessions that have sat idle too long."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel

from discord_music_queue.domain.shared.messages import LogTemplates
from discord_music_queue.domain.shared.types import NonNegativeInt

if TYPE_CHECKING:
    from ...application.services.playback_driver import PlaybackDriver
    from ...application.services.tenant_registry import TenantRegistry
    from ...config.settings import CleanupSettings

logger = logging.getLogger(__name__)


class ReaperStats(BaseModel):
    candidates: NonNegativeInt = 0
    evicted: NonNegativeInt = 0
    failed: NonNegativeInt = 0


class IdleSessionReaper:
    def __init__(
        self,
        *,
        registry: TenantRegistry,
        playback_driver: PlaybackDriver,
        settings: CleanupSettings,
    ) -> None:
        self._registry = registry
        self._driver = playback_driver
        self._settings = settings
        self._running = False
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        if self._running:
            logger.warning(LogTemplates.REAPER_ALREADY_RUNNING)
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(LogTemplates.REAPER_STARTED)

    async def stop(self) -> None:
        self._running = False

        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info(LogTemplates.REAPER_STOPPED)

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.run_once()
            except Exception:
                logger.exception(LogTemplates.REAPER_CYCLE_FAILED)

            try:
                await asyncio.sleep(self._settings.interval_seconds)
            except asyncio.CancelledError:
                break

    async def run_once(self) -> ReaperStats:
        """Evict every session idle for longer than the configured threshold."""
        stats = ReaperStats()
        threshold = timedelta(minutes=self._settings.idle_session_minutes)

        for guild_id in self._registry.idle_sessions(threshold):
            stats.candidates += 1
            try:
                if await self._driver.evict_if_idle(guild_id):
                    stats.evicted += 1
            except Exception:
                stats.failed += 1
                logger.exception(LogTemplates.REAPER_EVICT_FAILED, guild_id)

        if stats.evicted > 0:
            logger.info(LogTemplates.REAPER_EVICTED, stats.evicted)

        return stats

    @property
    def is_running(self) -> bool:
        return self._running
