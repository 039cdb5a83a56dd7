"""Tests for search, lyrics, join and leave handlers."""

from __future__ import annotations

import pytest

from conftest import GUILD_ID, TEXT_CHANNEL_ID, USER_ID, VOICE_CHANNEL_ID, edited_embed
from discord_music_bridge.config.settings import PlaybackSettings
from discord_music_bridge.domain.playback.models import Lyrics, TrackProvider
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.handlers.library import LibraryHandlers
from discord_music_bridge.infrastructure.discord.handlers.voice import VoiceHandlers


@pytest.fixture
def library(controller):
    return LibraryHandlers(controller, PlaybackSettings(search_limit=10))


@pytest.fixture
def voice(controller):
    return VoiceHandlers(controller)


class TestSearch:
    @pytest.mark.asyncio
    async def test_lists_up_to_ten_results(self, library, track_source, make_ctx):
        ctx = make_ctx("search", {"query": "lofi", "source": "spotify"})

        await library.search(ctx)

        assert track_source.search_calls[-1] == ("lofi", TrackProvider.SPOTIFY, 10)
        description = edited_embed(ctx.interaction).description
        assert description.count("\n") == 9
        assert ctx.history == ("defer", "edit_reply")

    @pytest.mark.asyncio
    async def test_no_results(self, library, track_source, make_ctx):
        track_source.empty_queries.add("zzz")
        ctx = make_ctx("search", {"query": "zzz"})

        await library.search(ctx)

        assert edited_embed(ctx.interaction).description == (
            DiscordUIMessages.STATE_NO_SEARCH_RESULTS.format(query="zzz")
        )

    @pytest.mark.asyncio
    async def test_does_not_touch_queue(self, library, controller, make_ctx):
        await library.search(make_ctx("search", {"query": "lofi"}))

        assert await controller.get_queue_snapshot(GUILD_ID) is None


class TestLyrics:
    @pytest.mark.asyncio
    async def test_explicit_query(self, library, lyrics_provider, make_ctx):
        lyrics_provider.lyrics = Lyrics(title="Song", artist="Band", text="words")
        ctx = make_ctx("lyrics", {"query": "band song"})

        await library.lyrics(ctx)

        assert lyrics_provider.queries == ["band song"]
        assert edited_embed(ctx.interaction).description == "words"

    @pytest.mark.asyncio
    async def test_defaults_to_current_track(self, library, controller, lyrics_provider, make_ctx):
        lyrics_provider.lyrics = Lyrics(title="Song", text="words")
        await controller.enqueue(
            GUILD_ID,
            "current song",
            requester_id=USER_ID,
            requester_name="Listener",
            voice_channel_id=VOICE_CHANNEL_ID,
            text_channel_id=TEXT_CHANNEL_ID,
        )

        await library.lyrics(make_ctx("lyrics"))

        assert lyrics_provider.queries == ["Test Artist current song"]

    @pytest.mark.asyncio
    async def test_needs_query_when_idle(self, library, lyrics_provider, make_ctx):
        ctx = make_ctx("lyrics")

        await library.lyrics(ctx)

        assert lyrics_provider.queries == []
        assert edited_embed(ctx.interaction).description == DiscordUIMessages.STATE_LYRICS_NEED_QUERY

    @pytest.mark.asyncio
    async def test_not_found(self, library, make_ctx):
        ctx = make_ctx("lyrics", {"query": "unknown"})

        await library.lyrics(ctx)

        assert edited_embed(ctx.interaction).description == (
            DiscordUIMessages.STATE_NO_LYRICS.format(query="unknown")
        )


class TestVoice:
    @pytest.mark.asyncio
    async def test_join_connects_to_invoker_channel(self, voice, controller, make_ctx):
        ctx = make_ctx("join")

        await voice.join(ctx)

        assert controller.is_connected(GUILD_ID)
        assert edited_embed(ctx.interaction).description == DiscordUIMessages.ACTION_JOINED.format(
            channel="Lounge"
        )

    @pytest.mark.asyncio
    async def test_leave_when_not_connected(self, voice, make_ctx):
        ctx = make_ctx("leave")

        await voice.leave(ctx)

        assert edited_embed(ctx.interaction).description == (
            DiscordUIMessages.STATE_NOT_CONNECTED_TO_VOICE
        )

    @pytest.mark.asyncio
    async def test_leave_disconnects(self, voice, controller, make_ctx):
        await controller.connect_to_channel(GUILD_ID, VOICE_CHANNEL_ID)
        ctx = make_ctx("leave")

        await voice.leave(ctx)

        assert not controller.is_connected(GUILD_ID)
        assert edited_embed(ctx.interaction).description == DiscordUIMessages.ACTION_DISCONNECTED
