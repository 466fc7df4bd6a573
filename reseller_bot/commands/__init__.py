"""Command subsystem for ResellerBot.

Each command module exposes a ``MODULE`` descriptor.  ``build_registry``
adds every module listed in ``MODULES`` to a fresh ``CommandRegistry``;
new modules must be appended there to become available.
"""

from . import general, moderation, panel
from .context import InteractionContext, Services  # noqa: F401
from .registry import (  # noqa: F401
    CommandModule,
    CommandOption,
    CommandRegistry,
    ComponentHandler,
    SlashCommand,
)
from .results import CommandError, ExecuteResult  # noqa: F401

MODULES = (general.MODULE, moderation.MODULE, panel.MODULE)


def build_registry(*, throw_on_error: bool = True) -> CommandRegistry:
    registry = CommandRegistry(throw_on_error=throw_on_error)
    for module in MODULES:
        registry.add_module(module)
    return registry


__all__ = [
    "CommandError",
    "CommandModule",
    "CommandOption",
    "CommandRegistry",
    "ComponentHandler",
    "ExecuteResult",
    "InteractionContext",
    "MODULES",
    "Services",
    "SlashCommand",
    "build_registry",
]
