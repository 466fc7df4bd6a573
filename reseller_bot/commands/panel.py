"""
Button panel posted into new channels of the panel category.

:func:`build_panel` produces the embed and the button row sent by the
interaction router; the component handlers below answer button presses.
"""
from __future__ import annotations

from typing import Tuple

import discord

from .context import InteractionContext, Services
from .registry import CommandModule, ComponentHandler

PANEL_TITLE = "This is a message with buttons"
PANEL_DESCRIPTION = "Please select a button"

# (custom_id, label)
PANEL_BUTTONS: Tuple[Tuple[str, str], ...] = (
    ("panel:1", "Button 1"),
    ("panel:2", "Button 2"),
)


def build_panel() -> Tuple[discord.Embed, discord.ui.View]:
    embed = discord.Embed(
        title=PANEL_TITLE,
        description=PANEL_DESCRIPTION,
        colour=discord.Colour.dark_blue(),
    )
    # Presses are routed through the command registry, so the view only
    # carries the buttons and never times out.
    view = discord.ui.View(timeout=None)
    for custom_id, label in PANEL_BUTTONS:
        view.add_item(discord.ui.Button(style=discord.ButtonStyle.primary, label=label, custom_id=custom_id))
    return embed, view


def _button_handler(label: str):
    async def handle(ctx: InteractionContext, services: Services) -> None:
        await ctx.reply(f"You selected {label}.", ephemeral=True)

    return handle


MODULE = CommandModule(
    name="panel",
    components=tuple(
        ComponentHandler(custom_id, _button_handler(label)) for custom_id, label in PANEL_BUTTONS
    ),
)
