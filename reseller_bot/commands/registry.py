"""
Command registry and execution for ResellerBot.

Command modules describe their slash commands and button handlers as plain
data (:class:`CommandModule`) and are added to a :class:`CommandRegistry`
explicitly at startup.  The registry turns those definitions into the JSON
payload Discord expects for global registration and executes incoming
interactions against them.

``execute`` reports unknown commands, unmet preconditions and bad arguments
as an :class:`~reseller_bot.commands.results.ExecuteResult`.  A handler
exception propagates to the caller unless the registry was built with
``throw_on_error=False``, in which case it comes back as an ``EXCEPTION``
result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

import discord

from .context import InteractionContext, Services
from .preconditions import Precondition
from .results import CommandError, ExecuteResult

logger = logging.getLogger(__name__)

CommandCallback = Callable[..., Awaitable[Optional[ExecuteResult]]]
ComponentCallback = Callable[[InteractionContext, Services], Awaitable[Optional[ExecuteResult]]]


@dataclass(frozen=True)
class CommandOption:
    name: str
    description: str
    type: discord.AppCommandOptionType = discord.AppCommandOptionType.string
    required: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "required": self.required,
        }


@dataclass(frozen=True)
class SlashCommand:
    """
    A chat-input command.

    Parameters
    ----------
    name, description:
        Shown to users in the Discord client.
    callback:
        Awaited as ``callback(ctx, services, **options)``.  It may return an
        ``ExecuteResult`` to report a soft failure; ``None`` means success.
    options:
        Declared arguments, passed to the callback by name.
    preconditions:
        Checked in order before the callback runs; the first reason returned
        aborts the command.
    defer:
        Acknowledge the interaction with a deferred response before the
        preconditions run, for commands that may take longer than Discord's
        three second window.
    ephemeral:
        Make the deferred response visible to the invoking user only.
    """

    name: str
    description: str
    callback: CommandCallback
    options: Sequence[CommandOption] = ()
    preconditions: Sequence[Precondition] = ()
    defer: bool = False
    ephemeral: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "type": discord.AppCommandType.chat_input.value,
        }
        if self.options:
            # Discord rejects required options listed after optional ones.
            ordered = sorted(self.options, key=lambda option: not option.required)
            payload["options"] = [option.to_payload() for option in ordered]
        return payload


@dataclass(frozen=True)
class ComponentHandler:
    """Handles presses of message components carrying ``custom_id``."""

    custom_id: str
    callback: ComponentCallback


@dataclass(frozen=True)
class CommandModule:
    name: str
    commands: Sequence[SlashCommand] = ()
    components: Sequence[ComponentHandler] = ()


class CommandRegistry:
    """Holds command definitions and runs interactions against them."""

    def __init__(self, *, throw_on_error: bool = True) -> None:
        self.throw_on_error = throw_on_error
        self._commands: Dict[str, SlashCommand] = {}
        self._components: Dict[str, ComponentHandler] = {}
        self._modules: List[str] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_module(self, module: CommandModule) -> None:
        for command in module.commands:
            self.add_command(command)
        for handler in module.components:
            self.add_component(handler)
        self._modules.append(module.name)
        logger.debug(
            "Loaded module %s (%d commands, %d components)",
            module.name,
            len(module.commands),
            len(module.components),
        )

    def add_command(self, command: SlashCommand) -> None:
        if command.name in self._commands:
            raise ValueError(f"Command {command.name!r} is already registered")
        self._commands[command.name] = command

    def add_component(self, handler: ComponentHandler) -> None:
        if handler.custom_id in self._components:
            raise ValueError(f"Component {handler.custom_id!r} is already registered")
        self._components[handler.custom_id] = handler

    def get_command(self, name: str) -> Optional[SlashCommand]:
        return self._commands.get(name)

    @property
    def commands(self) -> List[SlashCommand]:
        return [self._commands[name] for name in sorted(self._commands)]

    @property
    def modules(self) -> List[str]:
        return list(self._modules)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [command.to_payload() for command in self.commands]

    async def register_commands_globally(self, client: discord.Client) -> int:
        """
        Overwrite the application's global command list with this registry.

        Returns the number of commands sent.  Must be called after login, once
        ``client.application_id`` is known.
        """
        if client.application_id is None:
            raise RuntimeError("Cannot register commands before the client has logged in")
        payload = self.to_payload()
        await client.http.bulk_upsert_global_commands(client.application_id, payload)
        logger.info("Registered %d global command(s)", len(payload))
        return len(payload)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    async def execute(self, ctx: InteractionContext, services: Services) -> ExecuteResult:
        """Run the command or component handler the interaction targets."""
        interaction = ctx.interaction
        data: Mapping[str, Any] = interaction.data or {}
        if interaction.type is discord.InteractionType.application_command:
            return await self._execute_command(ctx, services, data)
        if interaction.type is discord.InteractionType.component:
            return await self._execute_component(ctx, services, data)
        return ExecuteResult.failure(
            CommandError.UNKNOWN_COMMAND, f"Unsupported interaction type: {interaction.type}"
        )

    async def _execute_command(
        self, ctx: InteractionContext, services: Services, data: Mapping[str, Any]
    ) -> ExecuteResult:
        name = data.get("name", "")
        command = self._commands.get(name)
        if command is None:
            return ExecuteResult.failure(CommandError.UNKNOWN_COMMAND, f"Unknown command: {name}")

        try:
            if command.defer and not ctx.interaction.response.is_done():
                await ctx.interaction.response.defer(ephemeral=command.ephemeral, thinking=True)

            for precondition in command.preconditions:
                reason = await precondition(ctx, services)
                if reason is not None:
                    return ExecuteResult.failure(CommandError.UNMET_PRECONDITION, reason)

            kwargs, error = _parse_options(command, data.get("options") or [])
            if error is not None:
                return ExecuteResult.failure(CommandError.BAD_ARGS, error)

            logger.debug("Executing /%s for %s", command.name, ctx.user)
            result = await command.callback(ctx, services, **kwargs)
        except Exception as exc:
            if self.throw_on_error:
                raise
            return ExecuteResult.from_exception(exc)
        return result if result is not None else ExecuteResult.success()

    async def _execute_component(
        self, ctx: InteractionContext, services: Services, data: Mapping[str, Any]
    ) -> ExecuteResult:
        custom_id = data.get("custom_id", "")
        handler = self._components.get(custom_id)
        if handler is None:
            return ExecuteResult.failure(CommandError.UNKNOWN_COMMAND, f"Unknown component: {custom_id}")
        try:
            result = await handler.callback(ctx, services)
        except Exception as exc:
            if self.throw_on_error:
                raise
            return ExecuteResult.from_exception(exc)
        return result if result is not None else ExecuteResult.success()


def _parse_options(command: SlashCommand, raw: Sequence[Mapping[str, Any]]) -> tuple[Dict[str, Any], Optional[str]]:
    declared = {option.name: option for option in command.options}
    values: Dict[str, Any] = {}
    for item in raw:
        name = item.get("name")
        if name not in declared:
            return {}, f"Unexpected option: {name}"
        values[name] = item.get("value")
    for option in command.options:
        if option.name in values:
            continue
        if option.required:
            return {}, f"Missing required option: {option.name}"
        values[option.name] = None
    return values, None
