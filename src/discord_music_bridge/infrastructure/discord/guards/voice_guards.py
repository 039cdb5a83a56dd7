"""Voice precondition guard for commands that act on a voice channel."""

from __future__ import annotations

import logging

import discord

from discord_music_bridge.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_music_bridge.infrastructure.discord.interaction import InteractionContext
from discord_music_bridge.infrastructure.discord.renderer import render_error

logger = logging.getLogger(__name__)


async def send_ephemeral(ctx: InteractionContext, message: str) -> None:
    await ctx.reply(render_error(message), ephemeral=True)


def bot_can_join(channel: discord.abc.GuildChannel, me: discord.Member) -> bool:
    permissions = channel.permissions_for(me)
    return permissions.connect and permissions.speak


class VoiceGuard:
    """Checks that the invoker is in voice and the bot may join them there.

    On failure the interaction receives one ephemeral explanation and
    :meth:`check` returns False; on success nothing is sent.
    """

    async def check(self, ctx: InteractionContext) -> bool:
        guild = ctx.interaction.guild
        if guild is None:
            return await self._reject(ctx, DiscordUIMessages.STATE_SERVER_ONLY)

        member = ctx.member
        if member is None:
            return await self._reject(ctx, DiscordUIMessages.STATE_VERIFY_VOICE_FAILED)

        channel = ctx.voice_channel
        if channel is None:
            return await self._reject(ctx, DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE)

        if not bot_can_join(channel, guild.me):
            return await self._reject(
                ctx, DiscordUIMessages.ERROR_BOT_CANNOT_CONNECT.format(channel=channel.mention)
            )

        return True

    @staticmethod
    async def _reject(ctx: InteractionContext, message: str) -> bool:
        logger.info(LogTemplates.GUARD_REJECTED, ctx.command_name, ctx.user_id, message)
        await send_ephemeral(ctx, message)
        return False
