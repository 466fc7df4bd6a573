"""
ResellerBot package.

A Discord bot that routes slash-command and button interactions to a
registry of command modules, reports failed preconditions privately to the
invoking user and posts a button panel into new channels of a configured
category.
"""

__version__ = "0.1.0"

__all__ = [
    "commands",
    "config",
    "discord_bot",
    "utils",
]
