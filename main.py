#!/usr/bin/env python3
"""
Calendar Announcement Bot - Main Entry Point

A Discord bot that adds, edits and deletes events on the organization's Google
Calendar and keeps one announcement message per event in the announcement channel.
"""

import sys
import signal
import asyncio
from utils.logging import logger, get_log_file_location
from utils.environ import load_bot_config

def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, initiating shutdown...")
    sys.exit(0)

def main():
    """Main application entry point."""
    try:
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        logger.info("=" * 60)
        logger.info("📅 Calendar Announcement Bot Starting")
        logger.info(f"Logging to: {get_log_file_location()}")
        logger.info("=" * 60)

        config = load_bot_config()
        missing = config.missing()
        if missing:
            logger.error(f"❌ Missing required environment variables: {', '.join(missing)}")
            sys.exit(1)

        from bot.dependencies import build_dependencies
        from bot.core import run_bot
        deps = build_dependencies(config)
        logger.info(f"Announcing to channel {config.announce_channel_id} in timezone {config.timezone}")
        asyncio.run(run_bot(deps))

    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.exception(f"Fatal error starting bot: {e}")
        sys.exit(1)
    finally:
        logger.info("📅 Calendar Announcement Bot Shutdown Complete")

if __name__ == "__main__":
    main()
