"""General purpose slash commands: ``/ping`` and ``/help``."""
from __future__ import annotations

import math

from .context import InteractionContext, Services
from .registry import CommandModule, SlashCommand


async def ping(ctx: InteractionContext, services: Services) -> None:
    latency = ctx.client.latency
    if math.isnan(latency) or math.isinf(latency):
        await ctx.reply("Pong! Gateway latency is not known yet.", ephemeral=True)
        return
    await ctx.reply(f"Pong! {round(latency * 1000)} ms", ephemeral=True)


async def help_command(ctx: InteractionContext, services: Services) -> None:
    """List every registered command with its description."""
    registry = services["registry"]
    lines = [f"`/{command.name}` - {command.description}" for command in registry.commands]
    await ctx.reply("\n".join(lines) or "No commands are registered.", ephemeral=True)


MODULE = CommandModule(
    name="general",
    commands=(
        SlashCommand("ping", "Check that the bot is responsive", ping),
        SlashCommand("help", "List the available commands", help_command),
    ),
)
