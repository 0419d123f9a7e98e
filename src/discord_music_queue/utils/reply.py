"""Utility functions for formatting Discord messages."""

from __future__ import annotations

from collections.abc import Iterable
from functools import cache

from discord_music_queue.domain.shared.messages import DiscordUIMessages

EMBED_DESCRIPTION_LIMIT = 4096


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def format_numbered(titles: Iterable[str], start: int = 1) -> list[str]:
    """Render titles as ``1. title`` lines, numbering from ``start``."""
    return [f"{index}. {truncate(title)}" for index, title in enumerate(titles, start=start)]


def format_queue_description(
    current_title: str | None, upcoming_titles: list[str], overflow: int
) -> str:
    """Build the ``queue`` listing: current track, up to ten upcoming, and the overflow count."""
    parts: list[str] = []

    if current_title is not None:
        parts.append(f"{DiscordUIMessages.EMBED_QUEUE_NOW_PLAYING}\n{truncate(current_title)}")

    if upcoming_titles:
        lines = [DiscordUIMessages.EMBED_QUEUE_UP_NEXT, *format_numbered(upcoming_titles)]
        if overflow > 0:
            lines.append("")
            lines.append(DiscordUIMessages.EMBED_QUEUE_OVERFLOW.format(count=overflow))
        parts.append("\n".join(lines))

    return truncate("\n\n".join(parts), EMBED_DESCRIPTION_LIMIT)


def format_on_off(enabled: bool) -> str:
    return "On" if enabled else "Off"
