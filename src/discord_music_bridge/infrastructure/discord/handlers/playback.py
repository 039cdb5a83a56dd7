"""Handlers for transport commands: play, pause, resume, skip, stop, volume, nowplaying."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_music_bridge.domain.playback.models import TrackProvider
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.renderer import (
    render_error,
    render_notice,
    render_now_playing,
    render_success,
    render_track_queued,
)
from discord_music_bridge.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.interfaces.playback_controller import PlaybackController
    from ..interaction import InteractionContext

MIN_VOLUME = 0
MAX_VOLUME = 100


def parse_source(value: str | None) -> TrackProvider | None:
    if not value:
        return None
    try:
        return TrackProvider(value.lower())
    except ValueError:
        return None


class PlaybackHandlers:
    def __init__(self, controller: PlaybackController) -> None:
        self._controller = controller

    async def play(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        member = ctx.require_member()
        voice_channel = ctx.require_voice_channel()
        query = ctx.get_string("query") or ""
        source = parse_source(ctx.get_string("source"))

        await ctx.defer()
        track = await self._controller.enqueue(
            guild_id,
            query,
            requester_id=member.id,
            requester_name=member.display_name,
            voice_channel_id=voice_channel.id,
            text_channel_id=ctx.channel_id,
            source=source,
        )
        await ctx.edit_reply(render_track_queued(track))

    async def pause(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NO_ACTIVE_PLAYER), ephemeral=True)
            return
        if snapshot.current is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NOTHING_PLAYING), ephemeral=True)
            return
        if snapshot.paused:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_ALREADY_PAUSED), ephemeral=True)
            return

        await self._controller.pause(guild_id)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_PAUSED))

    async def resume(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NO_ACTIVE_PLAYER), ephemeral=True)
            return
        if snapshot.current is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NOTHING_PLAYING), ephemeral=True)
            return
        if not snapshot.paused:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_ALREADY_PLAYING), ephemeral=True)
            return

        await self._controller.resume(guild_id)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_RESUMED))

    async def skip(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None or snapshot.current is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NOTHING_PLAYING), ephemeral=True)
            return

        skipped = await self._controller.skip(guild_id)
        await ctx.reply(
            render_success(DiscordUIMessages.ACTION_SKIPPED.format(track_title=truncate(skipped.title)))
        )

    async def stop(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        if await self._controller.get_queue_snapshot(guild_id) is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NO_ACTIVE_PLAYER), ephemeral=True)
            return

        await self._controller.stop(guild_id)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_STOPPED))

    async def volume(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        level = ctx.get_integer("level")
        # Discord enforces the range client-side, but raw payloads can still carry anything
        if level is None or not MIN_VOLUME <= level <= MAX_VOLUME:
            await ctx.reply(
                render_error(
                    DiscordUIMessages.ERROR_INVALID_VOLUME.format(
                        minimum=MIN_VOLUME, maximum=MAX_VOLUME
                    )
                ),
                ephemeral=True,
            )
            return

        await self._controller.set_volume(guild_id, level)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_VOLUME_SET.format(level=level)))

    async def nowplaying(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        now_playing = await self._controller.get_now_playing(guild_id)
        if now_playing is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NOTHING_PLAYING), ephemeral=True)
            return

        await ctx.reply(render_now_playing(now_playing))
