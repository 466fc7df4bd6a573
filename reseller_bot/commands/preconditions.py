"""
Built-in command preconditions.

A precondition is an async callable taking ``(ctx, services)``.  It returns
``None`` when the command may run and a user-facing reason otherwise.
"""
from __future__ import annotations

from typing import Awaitable, Callable, Optional

import discord

from .context import InteractionContext, Services

Precondition = Callable[[InteractionContext, Services], Awaitable[Optional[str]]]


def guild_only() -> Precondition:
    async def check(ctx: InteractionContext, services: Services) -> Optional[str]:
        if ctx.guild is None:
            return "This command can only be used in a server."
        return None

    return check


def has_permissions(**perms: bool) -> Precondition:
    """Require the invoking member to hold every permission in ``perms``."""
    invalid = set(perms) - set(discord.Permissions.VALID_FLAGS)
    if invalid:
        raise TypeError(f"Invalid permission(s): {', '.join(sorted(invalid))}")

    async def check(ctx: InteractionContext, services: Services) -> Optional[str]:
        granted = ctx.interaction.permissions
        missing = [name for name, value in perms.items() if getattr(granted, name) != value]
        if not missing:
            return None
        names = ", ".join(name.replace("_", " ").title() for name in missing)
        return f"You are missing the following permission(s): {names}."

    return check


def has_role(name: str) -> Precondition:
    async def check(ctx: InteractionContext, services: Services) -> Optional[str]:
        roles = getattr(ctx.user, "roles", None)
        if roles is None:
            return "This command can only be used in a server."
        if any(role.name == name for role in roles):
            return None
        return f"You need the {name} role to use this command."

    return check
