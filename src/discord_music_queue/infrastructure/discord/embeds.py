"""Embed builders shared by the cogs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from discord_music_queue.domain.shared.messages import DiscordUIMessages
from discord_music_queue.utils.reply import format_on_off, format_queue_description, truncate

if TYPE_CHECKING:
    from ...domain.access.entities import BlacklistPage
    from ...domain.music.entities import QueueSnapshot, Track

EMBED_COLOR = discord.Color.blurple()
UNKNOWN_REQUESTER = "Unknown"


def _track_embed(title: str, track: Track) -> discord.Embed:
    embed = discord.Embed(
        title=title,
        description=f"**{truncate(track.title, 250)}**",
        color=EMBED_COLOR,
        url=track.webpage_url,
    )
    if track.thumbnail_ref:
        embed.set_thumbnail(url=track.thumbnail_ref)
    embed.add_field(name=DiscordUIMessages.FIELD_DURATION, value=track.duration_display, inline=True)
    return embed


def now_playing_embed(track: Track) -> discord.Embed:
    embed = _track_embed(DiscordUIMessages.PLAY_NOW_PLAYING, track)
    embed.add_field(
        name=DiscordUIMessages.FIELD_REQUESTED_BY,
        value=track.requested_by or UNKNOWN_REQUESTER,
        inline=True,
    )
    return embed


def queued_embed(track: Track, position: int) -> discord.Embed:
    embed = _track_embed(DiscordUIMessages.PLAY_ADDED_TO_QUEUE, track)
    embed.add_field(name=DiscordUIMessages.FIELD_POSITION, value=str(position), inline=True)
    embed.add_field(
        name=DiscordUIMessages.FIELD_REQUESTED_BY,
        value=track.requested_by or UNKNOWN_REQUESTER,
        inline=True,
    )
    return embed


def currently_playing_embed(snapshot: QueueSnapshot) -> discord.Embed:
    """Current track plus the playback settings."""
    assert snapshot.current is not None
    track = snapshot.current

    embed = _track_embed(DiscordUIMessages.EMBED_CURRENTLY_PLAYING, track)
    embed.add_field(
        name=DiscordUIMessages.FIELD_REQUESTED_BY,
        value=track.requested_by or UNKNOWN_REQUESTER,
        inline=True,
    )
    embed.add_field(
        name=DiscordUIMessages.FIELD_VOLUME, value=f"{snapshot.volume_percent}%", inline=True
    )
    embed.add_field(
        name=DiscordUIMessages.FIELD_LOOP, value=format_on_off(snapshot.loop_enabled), inline=True
    )
    embed.add_field(
        name=DiscordUIMessages.FIELD_BASS_BOOST,
        value=f"{snapshot.bass_boost_percent}%",
        inline=True,
    )
    embed.add_field(
        name=DiscordUIMessages.FIELD_STATE, value=snapshot.state.value.title(), inline=True
    )
    return embed


def queue_embed(snapshot: QueueSnapshot) -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_QUEUE,
        description=format_queue_description(
            snapshot.current.title if snapshot.current is not None else None,
            [track.title for track in snapshot.upcoming],
            snapshot.overflow,
        ),
        color=EMBED_COLOR,
    )
    embed.set_footer(text=DiscordUIMessages.EMBED_QUEUE_FOOTER.format(count=snapshot.total_pending))
    return embed


def help_embed() -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_HELP,
        description=DiscordUIMessages.EMBED_HELP_DESCRIPTION,
        color=EMBED_COLOR,
    )
    for name, value in DiscordUIMessages.HELP_SECTIONS:
        embed.add_field(name=name, value=value, inline=False)
    return embed


def blacklist_embed(page: BlacklistPage, title: str) -> discord.Embed:
    """One page of a blacklist; pages are shown 1-based."""
    lines = [
        f"`{entry.id}` · {truncate(entry.name, 60) or '-'} · <t:{int(entry.added_at.timestamp())}:d>"
        for entry in page.entries
    ]
    embed = discord.Embed(title=title, description="\n".join(lines), color=discord.Color.red())

    if page.has_more:
        footer = DiscordUIMessages.EMBED_BLACKLIST_FOOTER_MORE.format(
            page=page.page + 1, total=page.total, next_page=page.page + 2
        )
    else:
        footer = DiscordUIMessages.EMBED_BLACKLIST_FOOTER.format(page=page.page + 1, total=page.total)
    embed.set_footer(text=footer)
    return embed
