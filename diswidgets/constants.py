"""
diswidgets.constants — Shared Constants
========================================

Single source of truth for document defaults.  Import from here instead of
duplicating in cogs and services.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Placeholder image for guilds without an icon and users without an avatar
# ---------------------------------------------------------------------------
DEFAULT_AVATAR_URL = "https://cdn.discordapp.com/embed/avatars/0.png"

# ---------------------------------------------------------------------------
# Presence status tokens written to the user collection
# ---------------------------------------------------------------------------
STATUS_ONLINE = "online"
STATUS_IDLE = "idle"
STATUS_DND = "dnd"
STATUS_OFFLINE = "offline"
STATUS_INVISIBLE = "invisible"
STATUS_UNKNOWN = "unknown"

STATUS_TOKENS: frozenset[str] = frozenset({
    STATUS_ONLINE,
    STATUS_IDLE,
    STATUS_DND,
    STATUS_OFFLINE,
    STATUS_INVISIBLE,
    STATUS_UNKNOWN,
})

# ---------------------------------------------------------------------------
# Default MongoDB layout
# ---------------------------------------------------------------------------
DEFAULT_DATABASE_NAME = "diswidgets"
DEFAULT_SERVER_COLLECTION = "bot__server_info"
DEFAULT_USER_COLLECTION = "bot__server_user"
DEFAULT_CHANNEL_COLLECTION = "bot__server_channel"
