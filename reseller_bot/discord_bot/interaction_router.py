"""
Routes gateway events to the command registry.

The router owns a dispatch table mapping gateway event names to its own
handlers.  :class:`~reseller_bot.discord_bot.client.ResellerBot` looks
events up in that table and schedules each matching handler as its own
task, so interactions are handled independently of one another.

Failures stop here.  Unmet preconditions are reported privately to the
invoking user; every other failure is logged.  When execution raises, the
original response of a slash command is deleted so the user is not left
looking at a stuck "thinking" indicator.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

import discord

from ..commands import CommandError, CommandRegistry, InteractionContext, Services
from ..commands.panel import build_panel

logger = logging.getLogger(__name__)

EventHandler = Callable[..., Awaitable[None]]


class InteractionRouter:
    """
    Subscribes to gateway events and forwards interactions for execution.

    Parameters
    ----------
    client:
        The gateway client.  The router keeps a reference but does not own it.
    registry:
        Executes interactions and registers command definitions with Discord.
    services:
        Shared objects handed to every command.
    panel_category_id:
        New text channels under this category receive the button panel.
    """

    def __init__(
        self,
        client: discord.Client,
        registry: CommandRegistry,
        services: Services,
        *,
        panel_category_id: int,
    ) -> None:
        self.client = client
        self.registry = registry
        self.services = services
        self.panel_category_id = panel_category_id
        self.handlers: Dict[str, EventHandler] = {
            "ready": self.on_ready,
            "interaction": self.on_interaction,
            "guild_channel_create": self.on_channel_created,
        }

    async def on_ready(self) -> None:
        try:
            await self.registry.register_commands_globally(self.client)
        except discord.HTTPException as e:
            logger.error(f"Failed to register global commands: {e}", exc_info=True)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        context = InteractionContext(self.client, interaction)
        try:
            result = await self.registry.execute(context, self.services)
        except Exception:
            logger.exception(f"Unhandled error while executing interaction {interaction.id}")
            await self._discard_original_response(interaction)
            return

        if result.is_success:
            return
        if result.error is CommandError.UNMET_PRECONDITION:
            try:
                if interaction.response.is_done():
                    await interaction.followup.send(result.error_reason, ephemeral=True)
                else:
                    await interaction.response.send_message(result.error_reason, ephemeral=True)
            except discord.HTTPException as e:
                logger.error(f"Failed to report unmet precondition for interaction {interaction.id}: {e}")
            return
        # No user feedback for the remaining failure kinds.
        logger.warning(
            f"Interaction {interaction.id} failed ({result.error.value}): {result.error_reason}",
            exc_info=result.exception,
        )

    async def _discard_original_response(self, interaction: discord.Interaction) -> None:
        if interaction.type is not discord.InteractionType.application_command:
            return
        try:
            message = await interaction.original_response()
            await message.delete()
        except (discord.HTTPException, discord.ClientException) as e:
            logger.debug(f"Could not delete original response of interaction {interaction.id}: {e}")

    async def on_channel_created(self, channel: Any) -> None:
        if not isinstance(channel, discord.TextChannel):
            return
        if channel.category_id != self.panel_category_id:
            return
        embed, view = build_panel()
        try:
            await channel.send(embed=embed, view=view)
            logger.info(f"Posted button panel in #{channel.name} ({channel.id})")
        except discord.HTTPException as e:
            logger.error(f"Failed to post button panel in channel {channel.id}: {e}", exc_info=True)
