"""Handlers for voice connection commands: join, leave."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.renderer import render_notice, render_success

if TYPE_CHECKING:
    from ....application.interfaces.playback_controller import PlaybackController
    from ..interaction import InteractionContext


class VoiceHandlers:
    def __init__(self, controller: PlaybackController) -> None:
        self._controller = controller

    async def join(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        voice_channel = ctx.require_voice_channel()

        await ctx.defer()
        await self._controller.connect_to_channel(guild_id, voice_channel.id, ctx.channel_id)
        await ctx.edit_reply(
            render_success(DiscordUIMessages.ACTION_JOINED.format(channel=voice_channel.name))
        )

    async def leave(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()

        await ctx.defer()
        if not self._controller.is_connected(guild_id):
            await ctx.edit_reply(render_notice(DiscordUIMessages.STATE_NOT_CONNECTED_TO_VOICE))
            return

        await self._controller.disconnect(guild_id)
        await ctx.edit_reply(render_success(DiscordUIMessages.ACTION_DISCONNECTED))
