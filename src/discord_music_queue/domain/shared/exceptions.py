"""Domain error taxonomy.

Every error a command can surface derives from :class:`DomainError`, so the
command surface can render any of them as a user-visible reply without
crashing the process.
"""

from __future__ import annotations

from discord_music_queue.domain.shared.messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


# ── Resolution ──────────────────────────────────────────────────────


class InvalidSourceError(DomainError):
    """Raised when a direct media URL cannot be resolved."""

    def __init__(self, url: str, message: str | None = None) -> None:
        super().__init__(message or ErrorMessages.INVALID_SOURCE, code="INVALID_SOURCE")
        self.url = url


class NoResultsError(DomainError):
    """Raised when a free-text search returns no candidate."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(message or ErrorMessages.NO_RESULTS, code="NO_RESULTS")
        self.query = query


class ResolutionTimeoutError(DomainError):
    """Raised when the resolver does not answer within the configured timeout."""

    def __init__(self, query: str, timeout: float) -> None:
        super().__init__(
            ErrorMessages.RESOLUTION_TIMEOUT.format(timeout=timeout), code="RESOLUTION_TIMEOUT"
        )
        self.query = query
        self.timeout = timeout


# ── Queue ───────────────────────────────────────────────────────────


class OutOfRangeError(DomainError):
    """Raised when a 1-based queue position does not exist."""

    def __init__(self, position: int, length: int) -> None:
        super().__init__(ErrorMessages.OUT_OF_RANGE, code="OUT_OF_RANGE")
        self.position = position
        self.length = length


class InsufficientItemsError(DomainError):
    """Raised when an operation needs more pending tracks than are queued."""

    def __init__(self, required: int, actual: int) -> None:
        super().__init__(ErrorMessages.INSUFFICIENT_ITEMS, code="INSUFFICIENT_ITEMS")
        self.required = required
        self.actual = actual


class EmptyQueueError(DomainError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.EMPTY_QUEUE, code="EMPTY_QUEUE")


class InvalidRangeError(DomainError):
    """Raised when a percentage setting falls outside 0-100."""

    def __init__(self, setting: str, value: int) -> None:
        super().__init__(
            ErrorMessages.INVALID_RANGE.format(setting=setting, value=value),
            code="INVALID_RANGE",
        )
        self.setting = setting
        self.value = value


# ── Playback ────────────────────────────────────────────────────────


class NotPlayingError(DomainError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or ErrorMessages.NOT_PLAYING, code="NOT_PLAYING")


class NotPausedError(DomainError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.NOT_PAUSED, code="NOT_PAUSED")


class NoActivePlaybackError(DomainError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.NO_ACTIVE_PLAYBACK, code="NO_ACTIVE_PLAYBACK")


class NoPlayerError(DomainError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.NO_PLAYER, code="NO_PLAYER")


class TransportFailureError(DomainError):
    """Raised when the voice transport cannot connect or start a stream."""

    def __init__(self, guild_id: int, reason: str) -> None:
        super().__init__(
            ErrorMessages.TRANSPORT_FAILURE.format(reason=reason), code="TRANSPORT_FAILURE"
        )
        self.guild_id = guild_id
        self.reason = reason


class UnsupportedOperationError(DomainError):
    """Raised by operations that are accepted but intentionally not implemented."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message, code="UNSUPPORTED_OPERATION")
        self.operation = operation


# ── Access ──────────────────────────────────────────────────────────


class BlacklistedError(DomainError):
    def __init__(self, subject: str, subject_id: int) -> None:
        message = (
            ErrorMessages.SERVER_BLACKLISTED if subject == "server" else ErrorMessages.USER_BLACKLISTED
        )
        super().__init__(message, code="BLACKLISTED")
        self.subject = subject
        self.subject_id = subject_id
