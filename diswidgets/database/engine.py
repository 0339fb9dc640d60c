"""
diswidgets.database.engine — MongoDB Connection & Store Handle
===============================================================

**Why this file exists:**
Discord bots run on an ``asyncio`` event loop, so the store client must
never block it.  Motor's :class:`AsyncIOMotorClient` gives awaitable
``find_one`` / ``insert_one`` / ``update_one`` calls that run on the same
loop as discord.py.

The client is opened once at startup and shared by every event.  Services
never reach for it directly; they receive a :class:`WidgetStore`, which
bundles the three collections they write to.  Tests hand services a
``WidgetStore`` built from in-memory collection doubles instead.

Usage::

    from diswidgets.database.engine import create_mongo_client, open_store

    client = create_mongo_client()        # reads MONGODB_URL from .env
    store = open_store(client, cfg)

    # Inside an async Cog method:
    await store.users.find_one({"id": "123", "guild_id": "456"})
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient

from diswidgets.config import DiswidgetsConfig

logger = logging.getLogger(__name__)

# The bot only ever has a handful of in-flight writes.
MAX_POOL_SIZE = 3


# ---------------------------------------------------------------------------
# Client creation
# ---------------------------------------------------------------------------
def create_mongo_client(url: str | None = None) -> AsyncIOMotorClient:
    """Build an :class:`AsyncIOMotorClient` from *url* or ``MONGODB_URL``.

    Motor connects lazily, so this never blocks; the first awaited
    operation opens the pool.

    Raises
    ------
    RuntimeError
        If neither *url* nor ``MONGODB_URL`` is set.
    """
    url = url or os.getenv("MONGODB_URL")
    if not url:
        raise RuntimeError(
            "MONGODB_URL is not set.  "
            "Copy .env.example → .env and set a valid MongoDB connection string."
        )

    client: AsyncIOMotorClient = AsyncIOMotorClient(
        url,
        maxPoolSize=MAX_POOL_SIZE,
        appname="diswidgets",
    )
    logger.info("MongoDB client created (maxPoolSize=%d)", MAX_POOL_SIZE)
    return client


# ---------------------------------------------------------------------------
# Store handle
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class WidgetStore:
    """The collections every synchronisation path writes to.

    Each attribute only needs the async ``find_one`` / ``insert_one`` /
    ``update_one`` / ``delete_one`` surface of a Motor collection.
    """

    servers: Any
    users: Any
    channels: Any


def open_store(client: AsyncIOMotorClient, cfg: DiswidgetsConfig) -> WidgetStore:
    """Resolve the configured database and collections on *client*."""
    db = client[cfg.database_name]
    store = WidgetStore(
        servers=db[cfg.server_collection],
        users=db[cfg.user_collection],
        channels=db[cfg.channel_collection],
    )
    logger.info(
        "Store ready: db=%s servers=%s users=%s channels=%s",
        cfg.database_name, cfg.server_collection,
        cfg.user_collection, cfg.channel_collection,
    )
    return store
