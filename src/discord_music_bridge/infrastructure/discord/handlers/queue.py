"""Handlers for queue commands: queue, loop, shuffle, remove, move, related."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_music_bridge.domain.playback.models import LoopMode
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.renderer import (
    render_error,
    render_notice,
    render_queue,
    render_related,
    render_success,
)
from discord_music_bridge.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.interfaces.playback_controller import PlaybackController
    from ....domain.playback.models import QueueSnapshot
    from ..interaction import InteractionContext

DEFAULT_RELATED_COUNT = 3
MAX_RELATED_COUNT = 5


def _position_valid(position: int | None, snapshot: QueueSnapshot) -> bool:
    return position is not None and 1 <= position <= snapshot.size


class QueueHandlers:
    def __init__(self, controller: PlaybackController) -> None:
        self._controller = controller

    async def _invalid_position(
        self, ctx: InteractionContext, position: int | None, snapshot: QueueSnapshot
    ) -> None:
        await ctx.reply(
            render_error(
                DiscordUIMessages.ERROR_INVALID_POSITION.format(
                    position=position, size=snapshot.size
                )
            ),
            ephemeral=True,
        )

    async def queue(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_NO_ACTIVE_PLAYER), ephemeral=True)
            return
        if snapshot.is_empty and snapshot.current is None:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_QUEUE_EMPTY), ephemeral=True)
            return

        await ctx.reply(render_queue(snapshot))

    async def loop(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        raw_mode = ctx.get_integer("mode")
        try:
            mode = LoopMode(raw_mode)
        except ValueError:
            await ctx.reply(
                render_error(DiscordUIMessages.ERROR_INVALID_LOOP_MODE.format(mode=raw_mode)),
                ephemeral=True,
            )
            return

        await self._controller.set_loop_mode(guild_id, mode)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_LOOP_MODE_SET.format(mode=mode.label)))

    async def shuffle(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None or snapshot.size < 2:
            await ctx.reply(
                render_notice(DiscordUIMessages.STATE_NOT_ENOUGH_TRACKS_TO_SHUFFLE), ephemeral=True
            )
            return

        count = await self._controller.shuffle(guild_id)
        await ctx.reply(render_success(DiscordUIMessages.ACTION_SHUFFLED.format(count=count)))

    async def remove(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        position = ctx.get_integer("position")
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None or snapshot.is_empty:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_QUEUE_EMPTY), ephemeral=True)
            return
        if not _position_valid(position, snapshot):
            await self._invalid_position(ctx, position, snapshot)
            return

        assert position is not None
        removed = await self._controller.remove_at(guild_id, position - 1)
        await ctx.reply(
            render_success(
                DiscordUIMessages.ACTION_TRACK_REMOVED.format(track_title=truncate(removed.title))
            )
        )

    async def move(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        from_position = ctx.get_integer("from")
        to_position = ctx.get_integer("to")
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        if snapshot is None or snapshot.is_empty:
            await ctx.reply(render_notice(DiscordUIMessages.STATE_QUEUE_EMPTY), ephemeral=True)
            return
        for position in (from_position, to_position):
            if not _position_valid(position, snapshot):
                await self._invalid_position(ctx, position, snapshot)
                return

        assert from_position is not None and to_position is not None
        moved = await self._controller.move_track(guild_id, from_position - 1, to_position - 1)
        await ctx.reply(
            render_success(
                DiscordUIMessages.ACTION_TRACK_MOVED.format(
                    track_title=truncate(moved.title),
                    from_position=from_position,
                    to_position=to_position,
                )
            )
        )

    async def related(self, ctx: InteractionContext) -> None:
        guild_id = ctx.require_guild_id()
        count = ctx.get_integer("count", DEFAULT_RELATED_COUNT) or DEFAULT_RELATED_COUNT
        count = max(1, min(count, MAX_RELATED_COUNT))

        await ctx.defer()
        snapshot = await self._controller.get_queue_snapshot(guild_id)
        seed = snapshot.current if snapshot is not None else None
        if seed is None:
            await ctx.edit_reply(render_notice(DiscordUIMessages.STATE_NOTHING_PLAYING))
            return

        added = await self._controller.add_related(guild_id, count)
        if not added:
            await ctx.edit_reply(
                render_notice(
                    DiscordUIMessages.STATE_NO_RELATED_TRACKS.format(seed_title=truncate(seed.title))
                )
            )
            return

        await ctx.edit_reply(render_related(seed, added))
