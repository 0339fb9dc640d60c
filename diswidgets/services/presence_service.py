"""
diswidgets.services.presence_service — Per-Event Guild & User Sync
===================================================================

**Why this file exists:**
Every presence update is the bot's chance to refresh what widgets know
about a guild.  :class:`PresenceSync` turns one gateway presence event
into store writes:

1. No ``guild_id`` on the event → nothing to do (DM/relationship presences).
2. Rebuild the guild document and upsert it.
3. If that upsert **created** the guild document, the guild is new to us:
   back-fill a presence row for every cached member who isn't offline.
4. Otherwise write only the row for the user who triggered the event.

Writes are awaited one after another.  A failure stops the event where it
is; rows already written stay written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import discord

from diswidgets.constants import DEFAULT_AVATAR_URL
from diswidgets.database.engine import WidgetStore
from diswidgets.services.snapshots import (
    GuildLookup,
    GuildNotFound,
    SnapshotError,
    UserNotFound,
    build_guild_snapshot,
    build_user_presence_snapshot,
)
from diswidgets.services.sync_service import add_or_update, upsert_atomic

logger = logging.getLogger(__name__)


@dataclass
class PresenceSyncResult:
    """What one :meth:`PresenceSync.handle` call wrote."""
    guild_inserted: bool = False
    users_written: int = 0
    users_skipped: int = 0


class PresenceSync:
    """Drives the guild and user collections from presence events.

    Parameters
    ----------
    store:
        The :class:`WidgetStore` to write to.
    guild_lookup:
        Cache lookup for guilds, normally ``bot.get_guild``.
    atomic:
        Use single-round-trip upserts instead of find-then-write.
    default_avatar:
        Placeholder for guild icons and user avatars that aren't set.
    """

    def __init__(
        self,
        store: WidgetStore,
        guild_lookup: GuildLookup,
        *,
        atomic: bool = False,
        default_avatar: str = DEFAULT_AVATAR_URL,
    ) -> None:
        self.store = store
        self.guild_lookup = guild_lookup
        self.default_avatar = default_avatar
        self._write = upsert_atomic if atomic else add_or_update

    async def handle(self, event: Any) -> PresenceSyncResult:
        """Synchronise the guild and user rows touched by *event*.

        *event* is a :class:`discord.RawPresenceUpdateEvent`: ``guild_id``
        (optional), ``user_id``, and the new status under
        ``client_status.status``.

        Raises
        ------
        GuildNotFound, UserNotFound
            The guild, or the triggering member on the warm path, is not
            cached.
        pymongo.errors.PyMongoError
            Any store failure, unretried.
        """
        result = PresenceSyncResult()

        guild_id = event.guild_id
        if guild_id is None:
            logger.info("Presence update without guild id: uid=%s", event.user_id)
            return result

        try:
            guild_doc = build_guild_snapshot(
                self.guild_lookup, guild_id, default_icon=self.default_avatar,
            )
        except GuildNotFound:
            logger.error("Guild not found in cache, dropping presence: gid=%s", guild_id)
            raise

        result.guild_inserted = await self._write(
            self.store.servers, guild_doc.key(), guild_doc.to_document(),
        )

        if result.guild_inserted:
            logger.info("Inserted new guild, adding current presences: gid=%s", guild_id)
            await self._backfill(guild_id, result)
        else:
            logger.info("Adding new presence: gid=%s, uid=%s", guild_id, event.user_id)
            await self._sync_member(guild_id, event.user_id, event.client_status.status)
            result.users_written = 1

        return result

    async def _backfill(self, guild_id: int, result: PresenceSyncResult) -> None:
        """Write a presence row for every cached member the gateway reports
        as present.  Offline members get their row on their next update."""
        guild = self.guild_lookup(guild_id)
        if guild is None:
            raise GuildNotFound(guild_id)

        docs = []
        for member in list(guild.members):
            status = member.status if member is not None else None
            if status is discord.Status.offline:
                continue
            try:
                docs.append(build_user_presence_snapshot(
                    guild_id, member, status, default_avatar=self.default_avatar,
                ))
            except SnapshotError as exc:
                logger.error("Failed to build presence document: %s", exc)
                result.users_skipped += 1

        for doc in docs:
            await self._write(self.store.users, doc.key(), doc.to_document())
            result.users_written += 1

        logger.info(
            "Back-fill complete for gid=%s: %d written, %d skipped",
            guild_id, result.users_written, result.users_skipped,
        )

    async def _sync_member(self, guild_id: int, user_id: int, status: Any) -> None:
        guild = self.guild_lookup(guild_id)
        if guild is None:
            raise GuildNotFound(guild_id)

        member = guild.get_member(user_id)
        if member is None:
            logger.error("Member not found in cache: gid=%s, uid=%s", guild_id, user_id)
            raise UserNotFound(guild_id, user_id)

        doc = build_user_presence_snapshot(
            guild_id, member, status, default_avatar=self.default_avatar,
        )
        await self._write(self.store.users, doc.key(), doc.to_document())
