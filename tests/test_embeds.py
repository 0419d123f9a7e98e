"""Tests for the embed builders used by the cogs."""

from datetime import UTC, datetime

import discord

from discord_music_queue.domain.access.entities import BlacklistEntry, BlacklistKind, BlacklistPage
from discord_music_queue.domain.music.entities import QueueSnapshot
from discord_music_queue.domain.music.value_objects import PlaybackState
from discord_music_queue.domain.shared.messages import DiscordUIMessages
from discord_music_queue.infrastructure.discord import embeds


def fields(embed: discord.Embed) -> dict[str, str]:
    return {field.name: field.value for field in embed.fields}


def make_snapshot(current, upcoming=(), total_pending=None, **overrides):
    values = {
        "current": current,
        "upcoming": tuple(upcoming),
        "total_pending": len(upcoming) if total_pending is None else total_pending,
        "state": PlaybackState.PLAYING,
        "loop_enabled": False,
        "volume_percent": 50,
        "bass_boost_percent": 0,
    }
    values.update(overrides)
    return QueueSnapshot(**values)


class TestTrackEmbeds:
    def test_now_playing(self, sample_track):
        embed = embeds.now_playing_embed(sample_track)

        assert embed.title == DiscordUIMessages.PLAY_NOW_PLAYING
        assert sample_track.title in embed.description
        assert embed.url == sample_track.webpage_url
        assert embed.thumbnail.url == sample_track.thumbnail_ref
        assert fields(embed)[DiscordUIMessages.FIELD_REQUESTED_BY] == "TestUser#0001"

    def test_unknown_requester_and_no_thumbnail(self, make_track):
        track = make_track(requested_by=None, thumbnail_ref=None)

        embed = embeds.now_playing_embed(track)

        assert fields(embed)[DiscordUIMessages.FIELD_REQUESTED_BY] == embeds.UNKNOWN_REQUESTER
        assert embed.thumbnail.url is None

    def test_queued_shows_position(self, sample_track):
        embed = embeds.queued_embed(sample_track, 4)

        assert embed.title == DiscordUIMessages.PLAY_ADDED_TO_QUEUE
        assert fields(embed)[DiscordUIMessages.FIELD_POSITION] == "4"


class TestSnapshotEmbeds:
    def test_currently_playing_shows_settings(self, sample_track):
        snapshot = make_snapshot(
            sample_track,
            state=PlaybackState.PAUSED,
            loop_enabled=True,
            volume_percent=30,
            bass_boost_percent=20,
        )

        values = fields(embeds.currently_playing_embed(snapshot))

        assert values[DiscordUIMessages.FIELD_VOLUME] == "30%"
        assert values[DiscordUIMessages.FIELD_LOOP] == "On"
        assert values[DiscordUIMessages.FIELD_BASS_BOOST] == "20%"
        assert values[DiscordUIMessages.FIELD_STATE] == "Paused"

    def test_queue_listing(self, make_track):
        snapshot = make_snapshot(
            make_track("Current"), [make_track("Up Next")], total_pending=11
        )

        embed = embeds.queue_embed(snapshot)

        assert "Current" in embed.description
        assert "1. Up Next" in embed.description
        assert embed.footer.text == DiscordUIMessages.EMBED_QUEUE_FOOTER.format(count=11)

    def test_empty_queue(self):
        embed = embeds.queue_embed(make_snapshot(None))

        assert embed.description is None or embed.description == ""


class TestHelpEmbed:
    def test_lists_every_section(self):
        embed = embeds.help_embed()

        assert embed.title == DiscordUIMessages.EMBED_HELP
        assert len(embed.fields) == len(DiscordUIMessages.HELP_SECTIONS)


class TestBlacklistEmbed:
    def _page(self, *, page=0, total=2, has_more=False):
        entries = (
            BlacklistEntry(id=123456789, name="spammer", added_at=datetime(2024, 1, 1, tzinfo=UTC)),
            BlacklistEntry(id=987654321, name="", added_at=datetime(2024, 1, 2, tzinfo=UTC)),
        )
        return BlacklistPage(
            kind=BlacklistKind.USER, entries=entries, page=page, total=total, has_more=has_more
        )

    def test_lines(self):
        embed = embeds.blacklist_embed(self._page(), DiscordUIMessages.EMBED_BLACKLISTED_USERS)

        lines = embed.description.splitlines()
        assert lines[0].startswith("`123456789` · spammer")
        assert lines[1].startswith("`987654321` · -")
        assert f"<t:{int(datetime(2024, 1, 1, tzinfo=UTC).timestamp())}:d>" in lines[0]

    def test_footer_is_one_based(self):
        embed = embeds.blacklist_embed(self._page(page=0, total=2), "t")

        assert embed.footer.text == DiscordUIMessages.EMBED_BLACKLIST_FOOTER.format(page=1, total=2)

    def test_footer_points_to_next_page(self):
        embed = embeds.blacklist_embed(self._page(page=1, total=25, has_more=True), "t")

        assert embed.footer.text == DiscordUIMessages.EMBED_BLACKLIST_FOOTER_MORE.format(
            page=2, total=25, next_page=3
        )
