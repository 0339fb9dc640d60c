"""
tests/conftest.py — Shared Test Fixtures
=========================================

Provides an in-memory stand-in for a Motor collection and lightweight
discord.py look-alikes, so no MongoDB server or Discord connection is
needed.
"""

from __future__ import annotations

import asyncio
import copy
import itertools
from types import SimpleNamespace
from unittest.mock import MagicMock

import discord
import pytest

from diswidgets.database.engine import WidgetStore


# Helper to run async tests without pytest-asyncio
def run_async(coro):
    """Run an async coroutine in a new event loop."""
    return asyncio.get_event_loop_policy().new_event_loop().run_until_complete(coro)


# ---------------------------------------------------------------------------
# In-memory collection
# ---------------------------------------------------------------------------
class FakeCollection:
    """Just enough of :class:`AsyncIOMotorCollection` for the services.

    Filters are exact-match dicts; updates support ``$set`` only.  Every
    call is appended to :attr:`calls` as ``(method, filter)`` so tests can
    count round trips.
    """

    _ids = itertools.count(1)

    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict] = []
        self.calls: list[tuple[str, dict]] = []

    @staticmethod
    def _matches(doc: dict, filter: dict) -> bool:
        return all(doc.get(k) == v for k, v in filter.items())

    def find(self, filter: dict) -> list[dict]:
        """Synchronous helper for assertions."""
        return [d for d in self.docs if self._matches(d, filter)]

    async def find_one(self, filter: dict):
        self.calls.append(("find_one", filter))
        found = self.find(filter)
        return copy.deepcopy(found[0]) if found else None

    async def insert_one(self, document: dict):
        self.calls.append(("insert_one", document))
        document.setdefault("_id", next(self._ids))
        self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, filter: dict, update: dict, upsert: bool = False):
        self.calls.append(("update_one", filter))
        fields = update.get("$set", {})
        for doc in self.docs:
            if self._matches(doc, filter):
                doc.update(copy.deepcopy(fields))
                return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)
        if upsert:
            new_doc = {**filter, **copy.deepcopy(fields), "_id": next(self._ids)}
            self.docs.append(new_doc)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=new_doc["_id"])
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

    async def delete_one(self, filter: dict):
        self.calls.append(("delete_one", filter))
        for i, doc in enumerate(self.docs):
            if self._matches(doc, filter):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def writes(self) -> list[str]:
        return [m for m, _ in self.calls if m != "find_one"]


@pytest.fixture
def store() -> WidgetStore:
    return WidgetStore(
        servers=FakeCollection("bot__server_info"),
        users=FakeCollection("bot__server_user"),
        channels=FakeCollection("bot__server_channel"),
    )


# ---------------------------------------------------------------------------
# discord.py look-alikes
# ---------------------------------------------------------------------------
def make_asset(url: str) -> SimpleNamespace:
    return SimpleNamespace(url=url)


def make_member(
    id: int,
    name: str = "member",
    *,
    discriminator: str = "0",
    avatar: str | None = None,
    status: discord.Status = discord.Status.online,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=id,
        name=name,
        discriminator=discriminator,
        avatar=make_asset(avatar) if avatar else None,
        status=status,
    )


def make_guild(
    id: int,
    name: str = "Guild",
    *,
    members: list | None = None,
    member_count: int | None = None,
    approximate_member_count: int | None = None,
    icon: str | None = None,
    channels: list | None = None,
) -> SimpleNamespace:
    members = members or []
    by_id = {m.id: m for m in members if m is not None}
    return SimpleNamespace(
        id=id,
        name=name,
        icon=make_asset(icon) if icon else None,
        members=members,
        member_count=member_count,
        approximate_member_count=approximate_member_count,
        channels=channels or [],
        get_member=by_id.get,
    )


def make_lookup(*guilds):
    by_id = {g.id: g for g in guilds}
    return by_id.get


def make_presence_event(
    user_id: int,
    guild_id: int | None,
    status: discord.Status | str = discord.Status.online,
) -> discord.RawPresenceUpdateEvent:
    """Build a real :class:`discord.RawPresenceUpdateEvent` from a gateway
    PRESENCE_UPDATE payload.  *status* may be a raw gateway string."""
    data = {
        "user": {"id": str(user_id)},
        "status": status.value if isinstance(status, discord.Status) else status,
        "client_status": {},
        "activities": [],
    }
    if guild_id is not None:
        data["guild_id"] = str(guild_id)
    state = MagicMock()
    state._get_guild.return_value = None
    return discord.RawPresenceUpdateEvent(data=data, state=state)
