"""
diswidgets — Discord Server State Mirror for Widgets
=====================================================
Watches presence updates from the Discord gateway and keeps a flat,
denormalized copy of guild, member-presence and channel metadata in
MongoDB, ready for dashboards and embeddable widgets to read.

Package layout::

    diswidgets/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Placeholder URLs, status tokens
    ├── database/
    │   ├── engine.py      # Motor client + WidgetStore
    │   └── models.py      # Document shapes (frozen dataclasses)
    ├── bot/
    │   ├── core.py        # Bot subclass, cog loader, error reporter
    │   └── cogs/
    │       ├── presence.py  # on_raw_presence_update → PresenceSync
    │       └── channels.py  # Guild/channel events → channel mirror
    └── services/
        ├── snapshots.py        # Cached discord objects → documents
        ├── sync_service.py     # Insert-or-update primitives
        ├── presence_service.py # Per-event guild/user synchronisation
        └── channel_service.py  # Channel document mirror
"""

__version__ = "0.1.0"
