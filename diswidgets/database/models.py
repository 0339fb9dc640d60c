"""
diswidgets.database.models — Document Shapes
=============================================

Every collection document is described by a frozen dataclass.  Instances
are value objects: built fresh for each gateway event, written, then
dropped.  Nothing here touches the network.

Collections (names configurable, see :mod:`diswidgets.config`):

- ``bot__server_info``    → :class:`GuildSnapshot`, keyed by ``id``
- ``bot__server_user``    → :class:`UserPresenceSnapshot`, keyed by ``(id, guild_id)``
- ``bot__server_channel`` → :class:`ChannelSnapshot`, keyed by ``(id, guild_id)``

Snowflakes are stored as strings so widget front-ends never lose
precision on 64-bit ids.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class GuildSnapshot:
    """One row per guild."""

    id: str
    name: str
    icon: str
    member_count: int

    def key(self) -> dict[str, str]:
        return {"id": self.id}

    def to_document(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class UserPresenceSnapshot:
    """One row per user per guild."""

    id: str
    guild_id: str
    name: str
    discriminator: str
    avatar: str
    status: str

    def key(self) -> dict[str, str]:
        return {"id": self.id, "guild_id": self.guild_id}

    def to_document(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ChannelSnapshot:
    """One row per guild channel.  Category fields are ``""`` when the
    channel sits outside any category."""

    id: str
    guild_id: str
    name: str
    channel_type: str
    category_name: str
    category_id: str

    def key(self) -> dict[str, str]:
        return {"id": self.id, "guild_id": self.guild_id}

    def to_document(self) -> dict:
        return asdict(self)
