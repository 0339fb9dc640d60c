"""
diswidgets.bot.cogs.channels — Channel Metadata Capture
========================================================

Keeps the channel collection current:

- on_ready / on_guild_join → full channel sync for the guild(s)
- GUILD_CHANNEL_CREATE / GUILD_CHANNEL_UPDATE → upsert one channel
- GUILD_CHANNEL_DELETE → delete its document
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from diswidgets.services.channel_service import (
    remove_channel,
    sync_channel,
    sync_guild_channels,
)

if TYPE_CHECKING:
    from diswidgets.bot.core import DiswidgetsBot

logger = logging.getLogger(__name__)


class Channels(commands.Cog, name="Channels"):
    """Mirrors guild channel structure into the store."""

    def __init__(self, bot: DiswidgetsBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        for guild in self.bot.guilds:
            await sync_guild_channels(self.bot.store, guild)

    @commands.Cog.listener()
    async def on_guild_join(self, guild: discord.Guild) -> None:
        logger.info("Joined guild %s (ID: %d)", guild.name, guild.id)
        await sync_guild_channels(self.bot.store, guild)

    @commands.Cog.listener()
    async def on_guild_channel_create(self, channel: discord.abc.GuildChannel) -> None:
        await sync_channel(self.bot.store, channel)

    @commands.Cog.listener()
    async def on_guild_channel_update(
        self, before: discord.abc.GuildChannel, after: discord.abc.GuildChannel,
    ) -> None:
        await sync_channel(self.bot.store, after)

    @commands.Cog.listener()
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        await remove_channel(self.bot.store, channel)


async def setup(bot: DiswidgetsBot) -> None:
    await bot.add_cog(Channels(bot))
