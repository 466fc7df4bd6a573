# main.py
"""Entry point: load configuration, build the command registry and run the bot."""
from __future__ import annotations

import logging
import sys

from .commands import Services, build_registry
from .config import BotConfig
from .discord_bot import ResellerBot
from .utils.logging_system import configure_logging

logger = logging.getLogger(__name__)


def create_bot(config: BotConfig) -> ResellerBot:
    registry = build_registry(throw_on_error=config.throw_on_error)
    services = Services(config=config, registry=registry)
    logger.info(f"Loaded command modules: {', '.join(registry.modules)}")
    return ResellerBot(
        config.token,
        registry,
        services,
        panel_category_id=config.panel_category_id,
    )


def main() -> int:
    # Provisional setup so configuration errors are visible.
    configure_logging()
    try:
        config = BotConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    # LOG_LEVEL may come from the .env file loaded above.
    configure_logging(config.log_level)

    bot = create_bot(config)
    try:
        bot.run_bot()
    except KeyboardInterrupt:
        logger.debug("Shutting down (KeyboardInterrupt received)…")
    except Exception as e:
        logger.error(f"Bot terminated with an error: {e}", exc_info=True)
        return 1
    logger.info("Bot stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
