"""Tests for command registration and execution."""

from unittest.mock import AsyncMock

import discord
import pytest

from reseller_bot.commands import (
    CommandError,
    CommandModule,
    CommandOption,
    CommandRegistry,
    ComponentHandler,
    ExecuteResult,
    InteractionContext,
    Services,
    SlashCommand,
    build_registry,
)
from reseller_bot.commands.preconditions import has_permissions


def _slash_data(name, **options):
    data = {"name": name, "type": 1}
    if options:
        data["options"] = [{"name": key, "type": 4, "value": value} for key, value in options.items()]
    return data


def _registry_with(*commands, throw_on_error=False):
    registry = CommandRegistry(throw_on_error=throw_on_error)
    registry.add_module(CommandModule(name="test", commands=commands))
    return registry


# -------------------------------------------------------------------
# Registration
# -------------------------------------------------------------------

def test_duplicate_command_rejected():
    registry = _registry_with(SlashCommand("ping", "Ping", AsyncMock()))
    with pytest.raises(ValueError):
        registry.add_command(SlashCommand("ping", "Again", AsyncMock()))


def test_duplicate_component_rejected():
    registry = CommandRegistry()
    registry.add_component(ComponentHandler("panel:1", AsyncMock()))
    with pytest.raises(ValueError):
        registry.add_component(ComponentHandler("panel:1", AsyncMock()))


def test_payload_lists_commands_by_name_with_required_options_first():
    registry = _registry_with(
        SlashCommand(
            "zeta",
            "Last",
            AsyncMock(),
            options=(
                CommandOption("reason", "Why", required=False),
                CommandOption("amount", "How many", discord.AppCommandOptionType.integer),
            ),
        ),
        SlashCommand("alpha", "First", AsyncMock()),
    )

    payload = registry.to_payload()

    assert [entry["name"] for entry in payload] == ["alpha", "zeta"]
    assert payload[0] == {"name": "alpha", "description": "First", "type": 1}
    assert payload[1]["options"] == [
        {"name": "amount", "description": "How many", "type": 4, "required": True},
        {"name": "reason", "description": "Why", "type": 3, "required": False},
    ]


def test_build_registry_loads_all_modules():
    registry = build_registry()
    assert registry.throw_on_error is True
    assert registry.modules == ["general", "moderation", "panel"]
    assert [command.name for command in registry.commands] == ["clear", "help", "ping"]


@pytest.mark.asyncio
async def test_register_commands_globally_bulk_upserts(client):
    registry = build_registry()

    count = await registry.register_commands_globally(client)

    assert count == 3
    client.http.bulk_upsert_global_commands.assert_awaited_once_with(987654321, registry.to_payload())


@pytest.mark.asyncio
async def test_register_commands_globally_requires_login(client):
    client.application_id = None
    with pytest.raises(RuntimeError):
        await build_registry().register_commands_globally(client)
    client.http.bulk_upsert_global_commands.assert_not_awaited()


# -------------------------------------------------------------------
# Execution
# -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_execute_runs_callback_with_options(client, make_interaction):
    callback = AsyncMock(return_value=None)
    registry = _registry_with(
        SlashCommand("clear", "Clear", callback, options=(CommandOption("amount", "n", discord.AppCommandOptionType.integer),))
    )
    ctx = InteractionContext(client, make_interaction(data=_slash_data("clear", amount=5)))
    services = Services()

    result = await registry.execute(ctx, services)

    assert result.is_success
    callback.assert_awaited_once_with(ctx, services, amount=5)


@pytest.mark.asyncio
async def test_optional_option_defaults_to_none(client, make_interaction):
    callback = AsyncMock(return_value=None)
    registry = _registry_with(
        SlashCommand("note", "Note", callback, options=(CommandOption("text", "t", required=False),))
    )
    ctx = InteractionContext(client, make_interaction(data=_slash_data("note")))

    await registry.execute(ctx, Services())

    assert callback.await_args.kwargs == {"text": None}


@pytest.mark.asyncio
async def test_unknown_command(client, make_interaction):
    registry = _registry_with()
    ctx = InteractionContext(client, make_interaction(data=_slash_data("missing")))

    result = await registry.execute(ctx, Services())

    assert result.error is CommandError.UNKNOWN_COMMAND


@pytest.mark.asyncio
async def test_missing_required_option_is_bad_args(client, make_interaction):
    callback = AsyncMock()
    registry = _registry_with(SlashCommand("clear", "Clear", callback, options=(CommandOption("amount", "n"),)))
    ctx = InteractionContext(client, make_interaction(data=_slash_data("clear")))

    result = await registry.execute(ctx, Services())

    assert result.error is CommandError.BAD_ARGS
    assert "amount" in result.error_reason
    callback.assert_not_awaited()


@pytest.mark.asyncio
async def test_unexpected_option_is_bad_args(client, make_interaction):
    registry = _registry_with(SlashCommand("ping", "Ping", AsyncMock()))
    ctx = InteractionContext(client, make_interaction(data=_slash_data("ping", extra=1)))

    result = await registry.execute(ctx, Services())

    assert result.error is CommandError.BAD_ARGS


@pytest.mark.asyncio
async def test_failed_precondition_stops_command(client, make_interaction):
    callback = AsyncMock()
    registry = _registry_with(
        SlashCommand("clear", "Clear", callback, preconditions=(has_permissions(manage_messages=True),))
    )
    ctx = InteractionContext(client, make_interaction(data=_slash_data("clear")))

    result = await registry.execute(ctx, Services())

    assert result.error is CommandError.UNMET_PRECONDITION
    assert "Manage Messages" in result.error_reason
    callback.assert_not_awaited()


@pytest.mark.asyncio
async def test_deferred_command_acknowledges_before_preconditions(client, make_interaction):
    registry = _registry_with(
        SlashCommand(
            "clear",
            "Clear",
            AsyncMock(),
            preconditions=(has_permissions(manage_messages=True),),
            defer=True,
            ephemeral=True,
        )
    )
    interaction = make_interaction(data=_slash_data("clear"))

    result = await registry.execute(InteractionContext(client, interaction), Services())

    interaction.response.defer.assert_awaited_once_with(ephemeral=True, thinking=True)
    assert result.error is CommandError.UNMET_PRECONDITION


@pytest.mark.asyncio
async def test_callback_exception_becomes_result(client, make_interaction):
    registry = _registry_with(SlashCommand("ping", "Ping", AsyncMock(side_effect=KeyError("x"))))
    ctx = InteractionContext(client, make_interaction(data=_slash_data("ping")))

    result = await registry.execute(ctx, Services())

    assert result.error is CommandError.EXCEPTION
    assert isinstance(result.exception, KeyError)


@pytest.mark.asyncio
async def test_callback_exception_propagates_when_throw_on_error(client, make_interaction):
    registry = _registry_with(
        SlashCommand("ping", "Ping", AsyncMock(side_effect=KeyError("x"))), throw_on_error=True
    )
    ctx = InteractionContext(client, make_interaction(data=_slash_data("ping")))

    with pytest.raises(KeyError):
        await registry.execute(ctx, Services())


@pytest.mark.asyncio
async def test_callback_can_report_soft_failure(client, make_interaction):
    failure = ExecuteResult.failure(CommandError.UNSUCCESSFUL, "Out of stock")
    registry = _registry_with(SlashCommand("buy", "Buy", AsyncMock(return_value=failure)))
    ctx = InteractionContext(client, make_interaction(data=_slash_data("buy")))

    assert await registry.execute(ctx, Services()) is failure


@pytest.mark.asyncio
async def test_component_interaction_runs_handler(client, make_interaction):
    handler = AsyncMock(return_value=None)
    registry = CommandRegistry()
    registry.add_component(ComponentHandler("panel:2", handler))
    interaction = make_interaction(
        type=discord.InteractionType.component, data={"custom_id": "panel:2", "component_type": 2}
    )

    result = await registry.execute(InteractionContext(client, interaction), Services())

    assert result.is_success
    handler.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_component(client, make_interaction):
    interaction = make_interaction(type=discord.InteractionType.component, data={"custom_id": "nope"})

    result = await CommandRegistry().execute(InteractionContext(client, interaction), Services())

    assert result.error is CommandError.UNKNOWN_COMMAND


@pytest.mark.asyncio
async def test_unsupported_interaction_type(client, make_interaction):
    interaction = make_interaction(type=discord.InteractionType.modal_submit)

    result = await CommandRegistry().execute(InteractionContext(client, interaction), Services())

    assert result.error is CommandError.UNKNOWN_COMMAND


def test_registry_propagates_exceptions_by_default():
    assert CommandRegistry().throw_on_error is True


def test_failure_without_error_kind_is_unsuccessful():
    result = ExecuteResult(is_success=False, error_reason="Out of stock")
    assert result.error is CommandError.UNSUCCESSFUL
    assert ExecuteResult.success().error is None
