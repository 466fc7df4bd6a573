"""Shared fakes for interaction tests."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest


def _make_interaction(
    *,
    type=discord.InteractionType.application_command,
    responded=False,
    data=None,
    guild=True,
    permissions=None,
):
    interaction = MagicMock()
    interaction.id = 1234
    interaction.type = type
    interaction.data = data if data is not None else {}
    interaction.guild = MagicMock(spec=discord.Guild) if guild else None
    interaction.permissions = permissions if permissions is not None else discord.Permissions.none()

    # Answering the interaction flips is_done(), as discord.py does.
    state = {"done": responded}

    def acknowledge(*args, **kwargs):
        state["done"] = True

    interaction.response.is_done = MagicMock(side_effect=lambda: state["done"])
    interaction.response.send_message = AsyncMock(side_effect=acknowledge)
    interaction.response.defer = AsyncMock(side_effect=acknowledge)
    interaction.followup.send = AsyncMock()

    original = MagicMock()
    original.delete = AsyncMock()
    interaction.original_response = AsyncMock(return_value=original)
    return interaction


@pytest.fixture
def make_interaction():
    return _make_interaction


@pytest.fixture
def client():
    client = MagicMock(spec=discord.Client)
    client.application_id = 987654321
    client.latency = 0.042
    client.http = MagicMock()
    client.http.bulk_upsert_global_commands = AsyncMock(return_value=[])
    return client
