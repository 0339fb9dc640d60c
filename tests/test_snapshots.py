"""
tests/test_snapshots.py — Snapshot Builder Tests
=================================================
Tests the pure mapping from cached guilds, members and channels to
document dataclasses: member-count resolution, placeholder images,
discriminator padding, and the status token mapping.
"""

from __future__ import annotations

from types import SimpleNamespace

import discord
import pytest

from conftest import make_guild, make_lookup, make_member
from diswidgets.constants import DEFAULT_AVATAR_URL
from diswidgets.services.snapshots import (
    GuildNotFound,
    SnapshotError,
    UserNotFound,
    build_channel_snapshot,
    build_guild_snapshot,
    build_user_presence_snapshot,
    format_discriminator,
    resolve_member_count,
    status_token,
)

GUILD_ID = 111222333


class TestResolveMemberCount:

    def test_all_empty_is_zero(self):
        guild = make_guild(GUILD_ID, member_count=0, approximate_member_count=None)
        assert resolve_member_count(guild) == 0

    def test_none_member_count_is_zero(self):
        assert resolve_member_count(make_guild(GUILD_ID)) == 0

    @pytest.mark.parametrize("count", [1, 7, 250_000])
    def test_authoritative_count_wins(self, count):
        guild = make_guild(
            GUILD_ID,
            member_count=count,
            members=[make_member(i) for i in range(3)],
            approximate_member_count=999,
        )
        assert resolve_member_count(guild) == count

    def test_falls_back_to_member_list(self):
        guild = make_guild(
            GUILD_ID,
            member_count=0,
            members=[make_member(1), make_member(2)],
            approximate_member_count=50,
        )
        assert resolve_member_count(guild) == 2

    def test_falls_back_to_approximate(self):
        guild = make_guild(GUILD_ID, member_count=0, approximate_member_count=50)
        assert resolve_member_count(guild) == 50


class TestBuildGuildSnapshot:

    def test_builds_document(self):
        guild = make_guild(
            GUILD_ID, "Rustaceans", member_count=12,
            icon="https://cdn.discordapp.com/icons/1/abc.png",
        )
        snap = build_guild_snapshot(make_lookup(guild), GUILD_ID)

        assert snap.to_document() == {
            "id": str(GUILD_ID),
            "name": "Rustaceans",
            "icon": "https://cdn.discordapp.com/icons/1/abc.png",
            "member_count": 12,
        }
        assert snap.key() == {"id": str(GUILD_ID)}

    def test_missing_icon_uses_placeholder(self):
        guild = make_guild(GUILD_ID)
        snap = build_guild_snapshot(make_lookup(guild), GUILD_ID)
        assert snap.icon == DEFAULT_AVATAR_URL

    def test_custom_placeholder(self):
        guild = make_guild(GUILD_ID)
        snap = build_guild_snapshot(make_lookup(guild), GUILD_ID, default_icon="x.png")
        assert snap.icon == "x.png"

    def test_uncached_guild_raises(self):
        with pytest.raises(GuildNotFound) as exc_info:
            build_guild_snapshot(make_lookup(), GUILD_ID)
        assert exc_info.value.guild_id == GUILD_ID
        assert isinstance(exc_info.value, SnapshotError)

    def test_snapshot_is_frozen(self):
        snap = build_guild_snapshot(make_lookup(make_guild(GUILD_ID)), GUILD_ID)
        with pytest.raises(AttributeError):
            snap.name = "renamed"  # type: ignore[misc]


class TestStatusToken:

    @pytest.mark.parametrize(
        "status, expected",
        [
            (discord.Status.online, "online"),
            (discord.Status.idle, "idle"),
            (discord.Status.dnd, "dnd"),
            (discord.Status.do_not_disturb, "dnd"),
            (discord.Status.offline, "offline"),
            (discord.Status.invisible, "invisible"),
        ],
    )
    def test_known_statuses(self, status, expected):
        assert status_token(status) == expected

    @pytest.mark.parametrize("status", [None, "online", "streaming", 3, object()])
    def test_anything_else_is_unknown(self, status):
        assert status_token(status) == "unknown"


class TestBuildUserPresenceSnapshot:

    def test_builds_document(self):
        member = make_member(
            42, "ferris", discriminator="7",
            avatar="https://cdn.discordapp.com/avatars/42/a.png",
        )
        snap = build_user_presence_snapshot(GUILD_ID, member, discord.Status.idle)

        assert snap.to_document() == {
            "id": "42",
            "guild_id": str(GUILD_ID),
            "name": "ferris",
            "discriminator": "0007",
            "avatar": "https://cdn.discordapp.com/avatars/42/a.png",
            "status": "idle",
        }
        assert snap.key() == {"id": "42", "guild_id": str(GUILD_ID)}

    def test_missing_avatar_uses_placeholder(self):
        snap = build_user_presence_snapshot(GUILD_ID, make_member(1), discord.Status.online)
        assert snap.avatar == DEFAULT_AVATAR_URL

    def test_status_argument_overrides_member_status(self):
        member = make_member(1, status=discord.Status.offline)
        snap = build_user_presence_snapshot(GUILD_ID, member, discord.Status.dnd)
        assert snap.status == "dnd"

    def test_missing_member_raises(self):
        with pytest.raises(UserNotFound):
            build_user_presence_snapshot(GUILD_ID, None, discord.Status.online)


class TestFormatDiscriminator:

    @pytest.mark.parametrize(
        "raw, expected",
        [("0", "0000"), ("42", "0042"), ("1234", "1234"), (7, "0007"), (None, "0000")],
    )
    def test_zero_pads_to_four_digits(self, raw, expected):
        assert format_discriminator(raw) == expected


class TestBuildChannelSnapshot:

    def _channel(self, category=None):
        return SimpleNamespace(
            id=10,
            name="general",
            type=discord.ChannelType.text,
            guild=SimpleNamespace(id=GUILD_ID),
            category=category,
        )

    def test_categorised_channel(self):
        category = SimpleNamespace(id=99, name="Lobby")
        snap = build_channel_snapshot(self._channel(category))
        assert snap.to_document() == {
            "id": "10",
            "guild_id": str(GUILD_ID),
            "name": "general",
            "channel_type": "text",
            "category_name": "Lobby",
            "category_id": "99",
        }

    def test_uncategorised_channel_has_empty_category(self):
        snap = build_channel_snapshot(self._channel())
        assert snap.category_name == ""
        assert snap.category_id == ""
