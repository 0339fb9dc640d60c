"""
diswidgets.bot.cogs.presence — Presence Update Capture
=======================================================

Feeds PRESENCE_UPDATE gateway events to :class:`PresenceSync`.  Requires
the GUILD_PRESENCES privileged intent and raw presence dispatch, which
:class:`DiswidgetsBot` enables.

Errors are left to propagate to ``DiswidgetsBot.on_error``; the event is
dropped and nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

if TYPE_CHECKING:
    from diswidgets.bot.core import DiswidgetsBot

logger = logging.getLogger(__name__)


class Presence(commands.Cog, name="Presence"):
    """Mirrors guild and member presence into the store."""

    def __init__(self, bot: DiswidgetsBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_raw_presence_update(self, payload: discord.RawPresenceUpdateEvent) -> None:
        result = await self.bot.presence_sync.handle(payload)
        logger.debug(
            "Presence synced: gid=%s uid=%s inserted_guild=%s users=%d skipped=%d",
            payload.guild_id, payload.user_id, result.guild_inserted,
            result.users_written, result.users_skipped,
        )


async def setup(bot: DiswidgetsBot) -> None:
    await bot.add_cog(Presence(bot))
