"""DTOs returned by the playback driver."""

from __future__ import annotations

from pydantic import BaseModel

from ...domain.music.entities import Track
from ...domain.shared.types import NonNegativeInt


class EnqueueResult(BaseModel):
    """Outcome of a ``play`` request.

    ``position`` is the 1-based position in the pending list, or 0 when the
    track is already current (``started``) or was dropped because it failed
    to start.
    """

    track: Track
    position: NonNegativeInt = 0
    started: bool = False

    @property
    def queued(self) -> bool:
        return self.position > 0

    @property
    def failed(self) -> bool:
        return not self.started and not self.queued
