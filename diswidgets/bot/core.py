"""
diswidgets.bot.core — Bot Instance & Cog Loader
================================================

**Why this file exists:**
Defines :class:`DiswidgetsBot`, a ``commands.Bot`` subclass that:

1. Stores the shared config (``bot.cfg``), the Motor client
   (``bot.mongo``) and the :class:`WidgetStore` (``bot.store``) so every
   Cog can reach them via ``self.bot.*``.
2. Owns the :class:`PresenceSync` service, wired to the client cache.
3. Loads every Cog listed in :data:`EXTENSIONS`.
4. Reports exceptions escaping any event listener through
   :meth:`on_error`.  Listeners don't catch store errors themselves.
"""

from __future__ import annotations

import logging

import discord
from discord.ext import commands
from motor.motor_asyncio import AsyncIOMotorClient

from diswidgets.config import DiswidgetsConfig
from diswidgets.database.engine import WidgetStore
from diswidgets.services.presence_service import PresenceSync

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "diswidgets.bot.cogs.presence",
    "diswidgets.bot.cogs.channels",
]


class DiswidgetsBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`DiswidgetsConfig` from ``config.yaml``.
    mongo:
        The long-lived Motor client; closed with the bot.
    store:
        Collections resolved from *mongo* by :func:`open_store`.
    proxy:
        Optional HTTP proxy URL for Discord REST calls.
    """

    def __init__(
        self,
        cfg: DiswidgetsConfig,
        mongo: AsyncIOMotorClient,
        store: WidgetStore,
        proxy: str | None = None,
    ) -> None:
        # Privileged intents (must enable in Developer Portal):
        #   GUILD_PRESENCES — the whole point of the bot
        #   GUILD_MEMBERS   — member cache used for back-fills
        intents = discord.Intents.default()
        intents.presences = True
        intents.members = True

        super().__init__(
            command_prefix=cfg.bot_prefix,
            intents=intents,
            proxy=proxy,
            enable_raw_presences=True,
            description="Mirrors guild and presence state into MongoDB",
        )

        self.cfg = cfg
        self.mongo = mongo
        self.store = store

        self.presence_sync = PresenceSync(
            store,
            self.get_guild,
            atomic=cfg.atomic_upserts,
            default_avatar=cfg.default_avatar_url,
        )

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load all Cog extensions before connecting.

        A broken Cog is logged and skipped rather than stopping the bot.
        """
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

    async def on_ready(self) -> None:
        assert self.user is not None  # guaranteed after on_ready
        logger.info(
            "%s is ready! (ID: %s, guilds: %d)",
            self.user.name, self.user.id, len(self.guilds),
        )

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        logger.info("Interaction received: %s", interaction.id)

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        """Top-level reporter for exceptions raised inside event listeners."""
        logger.exception("Error while handling event %s", event_method)

    async def close(self) -> None:
        logger.info("Bot shutting down…")
        await super().close()
        self.mongo.close()
