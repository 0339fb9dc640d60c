"""
diswidgets.bot.__main__ — Entry point for ``python -m diswidgets.bot``
======================================================================

Wiring:
1. Load .env (secrets).
2. Load config.yaml (soft settings).
3. Create the Motor client and resolve the collections.
4. Create the DiswidgetsBot and hand it config + client + store.
5. Start the bot (blocking — runs the asyncio event loop).

Run with::

    python -m diswidgets.bot
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from diswidgets.bot.core import DiswidgetsBot
from diswidgets.config import load_config
from diswidgets.database.engine import create_mongo_client, open_store

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("diswidgets")


def main() -> None:
    """Bootstrap and run the diswidgets bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    token = os.getenv("DISCORD_TOKEN")
    if not token or token == "your-discord-bot-token-here":
        logger.critical(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
        sys.exit(1)

    proxy = os.getenv("PROXY_URL") or None
    logger.info("Proxy URL: %s", proxy or "(none)")

    # 2. Soft configuration.
    cfg = load_config()
    logger.info("Config loaded — database: %s", cfg.database_name)

    # 3. Database.
    mongo = create_mongo_client()
    store = open_store(mongo, cfg)

    # 4. Bot.
    bot = DiswidgetsBot(cfg=cfg, mongo=mongo, store=store, proxy=proxy)

    # 5. Run (blocks until Ctrl+C or SIGTERM).
    logger.info("Starting diswidgets bot…")
    try:
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
