"""
Domain Exceptions Tests

Every user-visible failure derives from DomainError and carries a stable code.
"""

import pytest

from discord_music_queue.domain.shared.exceptions import (
    BlacklistedError,
    DomainError,
    EmptyQueueError,
    InsufficientItemsError,
    InvalidRangeError,
    InvalidSourceError,
    NoActivePlaybackError,
    NoPlayerError,
    NoResultsError,
    NotPausedError,
    NotPlayingError,
    OutOfRangeError,
    ResolutionTimeoutError,
    TransportFailureError,
    UnsupportedOperationError,
)
from discord_music_queue.domain.shared.messages import ErrorMessages


class TestDomainError:
    def test_domain_error_with_message(self):
        """Should create DomainError with message."""
        error = DomainError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "DomainError"

    def test_domain_error_with_custom_code(self):
        error = DomainError("Custom error", code="CUSTOM_CODE")
        assert error.code == "CUSTOM_CODE"


class TestTaxonomy:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (InvalidSourceError("https://x"), "INVALID_SOURCE"),
            (NoResultsError("query"), "NO_RESULTS"),
            (ResolutionTimeoutError("query", 30.0), "RESOLUTION_TIMEOUT"),
            (OutOfRangeError(position=5, length=2), "OUT_OF_RANGE"),
            (InsufficientItemsError(required=2, actual=1), "INSUFFICIENT_ITEMS"),
            (EmptyQueueError(), "EMPTY_QUEUE"),
            (InvalidRangeError("Volume", 120), "INVALID_RANGE"),
            (NotPlayingError(), "NOT_PLAYING"),
            (NotPausedError(), "NOT_PAUSED"),
            (NoActivePlaybackError(), "NO_ACTIVE_PLAYBACK"),
            (NoPlayerError(), "NO_PLAYER"),
            (TransportFailureError(1, "boom"), "TRANSPORT_FAILURE"),
            (UnsupportedOperationError("seek", "nope"), "UNSUPPORTED_OPERATION"),
            (BlacklistedError("user", 1), "BLACKLISTED"),
        ],
    )
    def test_every_error_is_a_domain_error_with_code(self, error, code):
        assert isinstance(error, DomainError)
        assert error.code == code
        assert error.message

    def test_resolution_timeout_message_includes_timeout(self):
        error = ResolutionTimeoutError("query", 12.5)

        assert "12.5s" in error.message
        assert error.timeout == 12.5

    def test_invalid_range_message(self):
        error = InvalidRangeError("Volume", 120)

        assert error.message == "Volume must be between 0 and 100 (got 120)."

    def test_transport_failure_keeps_reason(self):
        error = TransportFailureError(42, "socket closed")

        assert error.guild_id == 42
        assert error.reason == "socket closed"
        assert "socket closed" in error.message

    def test_source_errors_keep_input(self):
        assert InvalidSourceError("https://bad").url == "https://bad"
        assert NoResultsError("nothing").query == "nothing"


class TestBlacklistedError:
    def test_server_message(self):
        error = BlacklistedError("server", 10)

        assert error.message == ErrorMessages.SERVER_BLACKLISTED
        assert error.subject_id == 10

    def test_user_message(self):
        error = BlacklistedError("user", 20)

        assert error.message == ErrorMessages.USER_BLACKLISTED
        assert error.subject == "user"
