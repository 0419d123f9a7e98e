"""
Shared Domain Kernel

Contains types, exceptions and messages shared across all bounded contexts.
"""

from discord_music_queue.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
