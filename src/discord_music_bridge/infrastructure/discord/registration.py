"""Registers the slash-command catalog with Discord at startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import discord

from discord_music_bridge.domain.commands.catalog import CATALOG, CommandSpec, build_payload
from discord_music_bridge.domain.shared.exceptions import RegistrationError
from discord_music_bridge.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from discord.http import HTTPClient

    from ...config.settings import DiscordSettings

logger = logging.getLogger(__name__)


class CommandRegistrar:
    """Overwrites the application's commands with the catalog in one bulk request.

    Commands are registered to a single guild when ``guild_id`` is configured
    (they appear instantly there) and globally otherwise.
    """

    def __init__(
        self,
        http: HTTPClient,
        settings: DiscordSettings,
        catalog: tuple[CommandSpec, ...] = CATALOG,
    ) -> None:
        self._http = http
        self._settings = settings
        self._catalog = catalog

    @property
    def scope(self) -> str:
        guild_id = self._settings.guild_id
        return f"guild {guild_id}" if guild_id is not None else "global"

    async def register(self, application_id: int | None = None) -> list[dict[str, Any]]:
        """Submit the catalog and return Discord's view of the registered commands."""
        app_id = self._settings.client_id or application_id
        if app_id is None:
            raise RegistrationError(self.scope, ErrorMessages.CLIENT_ID_REQUIRED)

        payload = build_payload(self._catalog)
        logger.info(LogTemplates.REGISTRATION_STARTED, len(payload), self.scope)

        guild_id = self._settings.guild_id
        try:
            if guild_id is not None:
                registered = await self._http.bulk_upsert_guild_commands(app_id, guild_id, payload)
                logger.info(LogTemplates.REGISTERED_GUILD, len(registered), guild_id)
            else:
                registered = await self._http.bulk_upsert_global_commands(app_id, payload)
                logger.info(LogTemplates.REGISTERED_GLOBAL, len(registered))
        except discord.HTTPException as e:
            raise RegistrationError(self.scope, f"{e.status} {e.text}".strip()) from e

        return list(registered)
