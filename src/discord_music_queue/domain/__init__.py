# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, exceptions, messages and events
- music/: Track, playback queue and playback state
- access/: User and server blacklist
"""

from discord_music_queue.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
