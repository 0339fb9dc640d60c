"""
diswidgets.services.sync_service — Insert-or-Update Primitives
===============================================================

Two ways to make a collection's document for *filter* match a record:

- :func:`add_or_update` — ``find_one`` then ``insert_one`` or
  ``update_one($set)``.  Two round trips.  Two writers racing on the same
  filter can double-insert or lose an update; presence events for a guild
  arrive on one dispatch path, so that window stays open.
- :func:`upsert_atomic` — one ``update_one(..., upsert=True)``.  Enabled
  with ``atomic_upserts: true`` in ``config.yaml``.

Both return ``True`` when a new document was created and ``False`` when an
existing one was updated.  Store errors propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _collection_name(collection: Any) -> str:
    return getattr(collection, "name", "?")


async def add_or_update(collection: Any, filter: dict, record: dict) -> bool:
    """Insert *record* if nothing matches *filter*, else ``$set`` its fields.

    Fields already on the stored document but absent from *record* are left
    untouched.
    """
    existing = await collection.find_one(filter)

    if existing is None:
        logger.info(
            "Entity not found in mongo, creating new entry (col=%s)",
            _collection_name(collection),
        )
        # insert_one stamps ``_id`` onto the dict it is given
        await collection.insert_one(dict(record))
        return True

    logger.info(
        "Entity found in mongo, updating entity (col=%s)",
        _collection_name(collection),
    )
    await collection.update_one(filter, {"$set": dict(record)})
    return False


async def upsert_atomic(collection: Any, filter: dict, record: dict) -> bool:
    """Single-round-trip variant of :func:`add_or_update`."""
    result = await collection.update_one(filter, {"$set": dict(record)}, upsert=True)
    inserted = result.upserted_id is not None
    logger.info(
        "Upserted entity (col=%s, inserted=%s)",
        _collection_name(collection), inserted,
    )
    return inserted
