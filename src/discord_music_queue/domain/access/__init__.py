"""
Access Bounded Context

User and server blacklists checked before every music command.
"""

from discord_music_queue.domain.access.entities import BlacklistEntry, BlacklistKind, BlacklistPage
from discord_music_queue.domain.access.repository import BlacklistRepository

__all__ = [
    "BlacklistEntry",
    "BlacklistKind",
    "BlacklistPage",
    "BlacklistRepository",
]
