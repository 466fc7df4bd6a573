"""
Per-interaction execution context and the shared service container.

An :class:`InteractionContext` lives only for one dispatch.  The
:class:`Services` container is built once at startup and handed to every
command so handlers can reach shared objects without globals.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import discord


@dataclass
class InteractionContext:
    """Binds the gateway client and one interaction together."""

    client: discord.Client
    interaction: discord.Interaction

    @property
    def user(self) -> discord.User | discord.Member:
        return self.interaction.user

    @property
    def guild(self) -> Optional[discord.Guild]:
        return self.interaction.guild

    @property
    def channel(self) -> Any:
        return self.interaction.channel

    @property
    def responded(self) -> bool:
        return self.interaction.response.is_done()

    async def reply(self, content: Optional[str] = None, *, ephemeral: bool = False, **kwargs: Any) -> None:
        """Send an initial response, or a follow-up if one was already sent."""
        if self.interaction.response.is_done():
            await self.interaction.followup.send(content, ephemeral=ephemeral, **kwargs)
        else:
            await self.interaction.response.send_message(content, ephemeral=ephemeral, **kwargs)


class Services:
    """Name-keyed container for objects shared across commands."""

    def __init__(self, **services: Any) -> None:
        self._services: Dict[str, Any] = dict(services)

    def add(self, name: str, service: Any) -> None:
        if name in self._services:
            raise ValueError(f"Service {name!r} is already registered")
        self._services[name] = service

    def get(self, name: str, default: Any = None) -> Any:
        return self._services.get(name, default)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._services[name]
        except KeyError:
            raise KeyError(f"Service {name!r} is not registered") from None

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)
