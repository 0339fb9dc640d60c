"""
diswidgets.services.snapshots — Cached Discord Objects → Documents
===================================================================

Pure mapping layer.  Each builder reads a guild, member or channel out of
the discord.py cache and flattens it into one of the frozen document
types in :mod:`diswidgets.database.models`.  No I/O happens here, so every
function is safe to call from tests with plain stand-in objects.

Lookups that come back empty raise a :class:`SnapshotError` subclass; the
presence service decides whether that drops the whole event or just one
member of a back-fill.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import discord

from diswidgets.constants import (
    DEFAULT_AVATAR_URL,
    STATUS_DND,
    STATUS_IDLE,
    STATUS_INVISIBLE,
    STATUS_OFFLINE,
    STATUS_ONLINE,
    STATUS_UNKNOWN,
)
from diswidgets.database.models import (
    ChannelSnapshot,
    GuildSnapshot,
    UserPresenceSnapshot,
)

GuildLookup = Callable[[int], "discord.Guild | None"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class SnapshotError(Exception):
    """A snapshot could not be built from the cache."""


class GuildNotFound(SnapshotError):
    def __init__(self, guild_id: int) -> None:
        super().__init__(f"Guild not found in cache: gid={guild_id}")
        self.guild_id = guild_id


class UserNotFound(SnapshotError):
    def __init__(self, guild_id: int, user_id: int | None) -> None:
        super().__init__(f"User not found in cache: gid={guild_id}, uid={user_id}")
        self.guild_id = guild_id
        self.user_id = user_id


# ---------------------------------------------------------------------------
# Status mapping
# ---------------------------------------------------------------------------
# ``discord.Status.do_not_disturb`` is an alias of ``dnd`` and hashes the same.
_STATUS_TOKENS: dict[discord.Status, str] = {
    discord.Status.online: STATUS_ONLINE,
    discord.Status.idle: STATUS_IDLE,
    discord.Status.dnd: STATUS_DND,
    discord.Status.offline: STATUS_OFFLINE,
    discord.Status.invisible: STATUS_INVISIBLE,
}


def status_token(status: Any) -> str:
    """Map a :class:`discord.Status` to its lowercase token.

    Anything outside the five known variants, including ``None`` and raw
    strings, maps to ``"unknown"``.
    """
    if not isinstance(status, discord.Status):
        return STATUS_UNKNOWN
    return _STATUS_TOKENS.get(status, STATUS_UNKNOWN)


# ---------------------------------------------------------------------------
# Guilds
# ---------------------------------------------------------------------------
def resolve_member_count(guild: Any) -> int:
    """Best available member count for *guild*.

    Order: the gateway's ``member_count`` when positive, then the size of
    the cached member list, then ``approximate_member_count``, then 0.
    """
    member_count = guild.member_count or 0
    if member_count > 0:
        return member_count

    members = guild.members
    if members:
        return len(members)

    return guild.approximate_member_count or 0


def build_guild_snapshot(
    guild_lookup: GuildLookup,
    guild_id: int,
    *,
    default_icon: str = DEFAULT_AVATAR_URL,
) -> GuildSnapshot:
    """Resolve *guild_id* through *guild_lookup* and flatten it.

    Raises
    ------
    GuildNotFound
        If the guild isn't in the cache.  There is no REST fallback: a
        fetched guild carries no members or presences to back-fill from.
    """
    guild = guild_lookup(guild_id)
    if guild is None:
        raise GuildNotFound(guild_id)

    return GuildSnapshot(
        id=str(guild_id),
        name=guild.name,
        icon=guild.icon.url if guild.icon else default_icon,
        member_count=resolve_member_count(guild),
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
def format_discriminator(discriminator: Any) -> str:
    """Zero-pad to four digits (``"0"`` → ``"0000"``, ``42`` → ``"0042"``)."""
    return str(discriminator or 0).zfill(4)


def build_user_presence_snapshot(
    guild_id: int,
    member: Any,
    status: Any,
    *,
    default_avatar: str = DEFAULT_AVATAR_URL,
) -> UserPresenceSnapshot:
    """Flatten *member* with *status* into a per-guild presence row.

    Raises
    ------
    UserNotFound
        If *member* is ``None`` (not in the guild's member cache).
    """
    if member is None:
        raise UserNotFound(guild_id, None)

    return UserPresenceSnapshot(
        id=str(member.id),
        guild_id=str(guild_id),
        name=member.name,
        discriminator=format_discriminator(member.discriminator),
        avatar=member.avatar.url if member.avatar else default_avatar,
        status=status_token(status),
    )


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
def build_channel_snapshot(channel: Any) -> ChannelSnapshot:
    category = channel.category
    return ChannelSnapshot(
        id=str(channel.id),
        guild_id=str(channel.guild.id),
        name=channel.name,
        channel_type=channel.type.name,
        category_name=category.name if category else "",
        category_id=str(category.id) if category else "",
    )
