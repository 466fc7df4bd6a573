"""
Discord gateway client for ResellerBot.

The client forwards gateway events to an :class:`InteractionRouter`.  Every
event name found in the router's dispatch table is scheduled as a separate
task next to the regular ``on_<event>`` handlers, the same way
``discord.ext.commands.Bot`` schedules its extra listeners.  The
implementation uses the ``discord.py`` library and runs in its own
asynchronous event loop.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import discord

from ..commands import CommandRegistry, Services
from .interaction_router import InteractionRouter

logger = logging.getLogger(__name__)


class ResellerBot(discord.Client):
    """
    Gateway client wired to an interaction router.

    Parameters
    ----------
    token:
        The bot's authentication token.
    registry:
        Command definitions executed for incoming interactions.
    services:
        Shared objects handed to every command.
    panel_category_id:
        Category whose new text channels receive the button panel.
    """

    def __init__(
        self,
        token: str,
        registry: CommandRegistry,
        services: Services,
        *,
        panel_category_id: int,
        intents: Optional[discord.Intents] = None,
    ) -> None:
        # Guild events are enough: commands arrive as interactions.
        super().__init__(intents=intents or discord.Intents.default())
        self.token = token
        self.router = InteractionRouter(self, registry, services, panel_category_id=panel_category_id)

    def dispatch(self, event_name: str, /, *args: Any, **kwargs: Any) -> None:
        super().dispatch(event_name, *args, **kwargs)
        handler = self.router.handlers.get(event_name)
        if handler is not None:
            self._schedule_event(handler, "on_" + event_name, *args, **kwargs)

    async def on_ready(self) -> None:
        logger.info(f"Discord bot ready: logged in as {self.user} (ID: {self.user.id})")

    def run_bot(self) -> None:
        """Start the Discord bot event loop.  This method blocks until closed."""
        try:
            logger.info("Starting Discord bot…")
            # Logging is configured by the caller.
            self.run(self.token, log_handler=None)
        except discord.LoginFailure as e:
            logger.error(f"Discord rejected the bot token: {e}")
            raise
