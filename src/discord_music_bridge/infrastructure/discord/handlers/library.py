"""Handlers for lookup commands that never touch the queue: search, lyrics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_music_bridge.config.settings import PlaybackSettings
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.handlers.playback import parse_source
from discord_music_bridge.infrastructure.discord.renderer import (
    render_lyrics,
    render_notice,
    render_search_results,
)
from discord_music_bridge.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.interfaces.playback_controller import PlaybackController
    from ..interaction import InteractionContext


class LibraryHandlers:
    def __init__(
        self, controller: PlaybackController, settings: PlaybackSettings | None = None
    ) -> None:
        self._controller = controller
        self._settings = settings or PlaybackSettings()

    async def search(self, ctx: InteractionContext) -> None:
        query = ctx.get_string("query") or ""
        source = parse_source(ctx.get_string("source"))

        await ctx.defer()
        results = await self._controller.search(
            query, source=source, limit=self._settings.search_limit
        )
        if not results:
            await ctx.edit_reply(
                render_notice(DiscordUIMessages.STATE_NO_SEARCH_RESULTS.format(query=truncate(query)))
            )
            return

        await ctx.edit_reply(render_search_results(query, results))

    async def lyrics(self, ctx: InteractionContext) -> None:
        query = ctx.get_string("query")

        await ctx.defer()
        if query is None and ctx.guild_id is not None:
            now_playing = await self._controller.get_now_playing(ctx.guild_id)
            if now_playing is not None:
                track = now_playing.track
                query = f"{track.artist} {track.title}" if track.artist else track.title

        if query is None:
            await ctx.edit_reply(render_notice(DiscordUIMessages.STATE_LYRICS_NEED_QUERY))
            return

        lyrics = await self._controller.fetch_lyrics(query)
        if lyrics is None:
            await ctx.edit_reply(
                render_notice(DiscordUIMessages.STATE_NO_LYRICS.format(query=truncate(query)))
            )
            return

        await ctx.edit_reply(render_lyrics(lyrics))
