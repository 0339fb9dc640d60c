"""
diswidgets.services.channel_service — Guild Channel Mirror
===========================================================

Keeps ``bot__server_channel`` in step with each guild's channel list so
widgets can render a channel tree without talking to Discord.  Channels
are keyed by ``(id, guild_id)`` and written with the same insert-or-update
primitive as guilds and users.
"""

from __future__ import annotations

import logging
from typing import Any

from diswidgets.database.engine import WidgetStore
from diswidgets.services.snapshots import build_channel_snapshot
from diswidgets.services.sync_service import add_or_update

logger = logging.getLogger(__name__)


async def sync_channel(store: WidgetStore, channel: Any) -> bool:
    """Upsert one channel.  Returns ``True`` if it was newly inserted."""
    doc = build_channel_snapshot(channel)
    return await add_or_update(store.channels, doc.key(), doc.to_document())


async def sync_guild_channels(store: WidgetStore, guild: Any) -> int:
    """Upsert every channel in *guild*.

    Returns the number of channel documents written.
    """
    written = 0
    for channel in guild.channels:
        await sync_channel(store, channel)
        written += 1

    logger.info(
        "Channel sync complete: %d channels written for guild %s.",
        written, guild.id,
    )
    return written


async def remove_channel(store: WidgetStore, channel: Any) -> bool:
    """Delete the document for *channel*.  Returns whether one existed."""
    result = await store.channels.delete_one(
        {"id": str(channel.id), "guild_id": str(channel.guild.id)}
    )
    removed = result.deleted_count > 0
    logger.info(
        "Removed channel #%s (%s) from guild %s: %s",
        channel.name, channel.id, channel.guild.id, removed,
    )
    return removed
