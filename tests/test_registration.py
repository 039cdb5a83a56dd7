"""Tests for CommandRegistrar scope selection and failure conversion."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_music_bridge.config.settings import DiscordSettings
from discord_music_bridge.domain.commands.catalog import CATALOG, build_payload
from discord_music_bridge.domain.shared.exceptions import RegistrationError
from discord_music_bridge.infrastructure.discord.registration import CommandRegistrar

APP_ID = 900


@pytest.fixture
def http():
    http = MagicMock()
    http.bulk_upsert_global_commands = AsyncMock(return_value=[{}] * len(CATALOG))
    http.bulk_upsert_guild_commands = AsyncMock(return_value=[{}] * len(CATALOG))
    return http


@pytest.mark.asyncio
async def test_global_registration(http):
    registrar = CommandRegistrar(http, DiscordSettings(client_id=APP_ID))

    registered = await registrar.register()

    http.bulk_upsert_global_commands.assert_awaited_once_with(APP_ID, build_payload())
    http.bulk_upsert_guild_commands.assert_not_awaited()
    assert len(registered) == len(CATALOG)
    assert registrar.scope == "global"


@pytest.mark.asyncio
async def test_guild_scoped_registration(http):
    registrar = CommandRegistrar(http, DiscordSettings(client_id=APP_ID, guild_id=42))

    await registrar.register()

    http.bulk_upsert_guild_commands.assert_awaited_once_with(APP_ID, 42, build_payload())
    http.bulk_upsert_global_commands.assert_not_awaited()
    assert registrar.scope == "guild 42"


@pytest.mark.asyncio
async def test_falls_back_to_logged_in_application_id(http):
    registrar = CommandRegistrar(http, DiscordSettings())

    await registrar.register(application_id=777)

    assert http.bulk_upsert_global_commands.call_args.args[0] == 777


@pytest.mark.asyncio
async def test_missing_application_id(http):
    registrar = CommandRegistrar(http, DiscordSettings())

    with pytest.raises(RegistrationError) as exc_info:
        await registrar.register()

    assert exc_info.value.code == "REGISTRATION_FAILED"
    http.bulk_upsert_global_commands.assert_not_awaited()


@pytest.mark.asyncio
async def test_http_error_becomes_registration_error(http):
    response = MagicMock(status=400, reason="Bad Request")
    http.bulk_upsert_global_commands.side_effect = discord.HTTPException(response, "Invalid Form Body")
    registrar = CommandRegistrar(http, DiscordSettings(client_id=APP_ID))

    with pytest.raises(RegistrationError) as exc_info:
        await registrar.register()

    assert "Invalid Form Body" in exc_info.value.message
    assert exc_info.value.scope == "global"
