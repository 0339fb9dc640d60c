"""
diswidgets.config — YAML Configuration Loader
==============================================

Reads ``config.yaml`` for the non-secret settings: command prefix, the
MongoDB database and collection names, and the placeholder image used
when a guild has no icon or a user has no avatar.  Secrets
(``DISCORD_TOKEN``, ``MONGODB_URL``) come from ``.env``.

Usage::

    from diswidgets.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.database_name)     # "diswidgets"
    print(cfg.user_collection)   # "bot__server_user"
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from diswidgets.constants import (
    DEFAULT_AVATAR_URL,
    DEFAULT_CHANNEL_COLLECTION,
    DEFAULT_DATABASE_NAME,
    DEFAULT_SERVER_COLLECTION,
    DEFAULT_USER_COLLECTION,
)


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DiswidgetsConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Discord
    bot_prefix: str

    # Optional
    database_name: str = DEFAULT_DATABASE_NAME
    server_collection: str = DEFAULT_SERVER_COLLECTION
    user_collection: str = DEFAULT_USER_COLLECTION
    channel_collection: str = DEFAULT_CHANNEL_COLLECTION
    default_avatar_url: str = DEFAULT_AVATAR_URL
    atomic_upserts: bool = False  # Native upsert instead of find-then-write


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> DiswidgetsConfig:
    """Read *path* and return a :class:`DiswidgetsConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return DiswidgetsConfig(
        bot_prefix=raw["bot_prefix"],
        database_name=raw.get("database_name") or DEFAULT_DATABASE_NAME,
        server_collection=raw.get("server_collection") or DEFAULT_SERVER_COLLECTION,
        user_collection=raw.get("user_collection") or DEFAULT_USER_COLLECTION,
        channel_collection=raw.get("channel_collection") or DEFAULT_CHANNEL_COLLECTION,
        default_avatar_url=raw.get("default_avatar_url") or DEFAULT_AVATAR_URL,
        atomic_upserts=bool(raw.get("atomic_upserts", False)),
    )
