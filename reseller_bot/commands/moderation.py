"""Moderation commands.  These require server permissions."""
from __future__ import annotations

import discord

from .context import InteractionContext, Services
from .preconditions import guild_only, has_permissions
from .registry import CommandModule, CommandOption, SlashCommand

MAX_CLEAR = 100


async def clear(ctx: InteractionContext, services: Services, amount: int) -> None:
    """Bulk delete the most recent ``amount`` messages in the channel."""
    if not 1 <= amount <= MAX_CLEAR:
        await ctx.reply(f"Amount must be between 1 and {MAX_CLEAR}.", ephemeral=True)
        return
    deleted = await ctx.channel.purge(limit=amount)
    await ctx.reply(f"Deleted {len(deleted)} message(s).", ephemeral=True)


MODULE = CommandModule(
    name="moderation",
    commands=(
        SlashCommand(
            "clear",
            "Delete recent messages in this channel",
            clear,
            options=(
                CommandOption(
                    "amount",
                    f"Number of messages to delete (1-{MAX_CLEAR})",
                    discord.AppCommandOptionType.integer,
                ),
            ),
            preconditions=(guild_only(), has_permissions(manage_messages=True)),
            defer=True,
            ephemeral=True,
        ),
    ),
)
