"""
Application Services

Orchestrate the playback queue, the voice transport and the media resolver.
"""

from discord_music_queue.application.services.access_service import AccessService
from discord_music_queue.application.services.playback_driver import PlaybackDriver
from discord_music_queue.application.services.queue_models import EnqueueResult
from discord_music_queue.application.services.resolution_service import TrackResolutionService
from discord_music_queue.application.services.tenant_registry import TenantRegistry, TenantSession

__all__ = [
    "AccessService",
    "EnqueueResult",
    "PlaybackDriver",
    "TenantRegistry",
    "TenantSession",
    "TrackResolutionService",
]
