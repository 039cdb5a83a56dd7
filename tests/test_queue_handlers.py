"""Tests for queue command handlers."""

from __future__ import annotations

import pytest

from conftest import GUILD_ID, TEXT_CHANNEL_ID, USER_ID, VOICE_CHANNEL_ID, edited_embed, sent_embed
from discord_music_bridge.domain.playback.models import LoopMode
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.handlers.queue import QueueHandlers


@pytest.fixture
def handlers(controller):
    return QueueHandlers(controller)


async def _play(controller, query):
    return await controller.enqueue(
        GUILD_ID,
        query,
        requester_id=USER_ID,
        requester_name="Listener",
        voice_channel_id=VOICE_CHANNEL_ID,
        text_channel_id=TEXT_CHANNEL_ID,
    )


async def _fill(controller, count):
    """Start one track playing and queue *count* more behind it."""
    await _play(controller, "now playing")
    return [await _play(controller, f"queued {i}") for i in range(1, count + 1)]


class TestQueue:
    @pytest.mark.asyncio
    async def test_no_player(self, handlers, make_ctx):
        ctx = make_ctx("queue")

        await handlers.queue(ctx)

        assert sent_embed(ctx.interaction).description == DiscordUIMessages.STATE_NO_ACTIVE_PLAYER

    @pytest.mark.asyncio
    async def test_empty_player(self, handlers, controller, make_ctx):
        await controller.connect_to_channel(GUILD_ID, VOICE_CHANNEL_ID)
        ctx = make_ctx("queue")

        await handlers.queue(ctx)

        assert sent_embed(ctx.interaction).description == DiscordUIMessages.STATE_QUEUE_EMPTY

    @pytest.mark.asyncio
    async def test_fifty_tracks_truncated(self, handlers, controller, make_ctx):
        await _play(controller, "now playing")
        for i in range(50):
            await _play(controller, f"A very long track title used to overflow the listing {i:02d}")
        ctx = make_ctx("queue")

        await handlers.queue(ctx)

        lines = sent_embed(ctx.interaction).description.split("\n")
        shown = len(lines) - 1
        assert lines[-1] == f"+{50 - shown} more"


class TestLoop:
    @pytest.mark.asyncio
    async def test_full_queue_label(self, handlers, controller, make_ctx):
        await _fill(controller, 1)
        ctx = make_ctx("loop", {"mode": 2})

        await handlers.loop(ctx)

        assert "Full queue" in sent_embed(ctx.interaction).description
        assert (await controller.get_queue_snapshot(GUILD_ID)).loop_mode is LoopMode.QUEUE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [3, -1])
    async def test_invalid_mode_is_an_error_message(self, handlers, controller, make_ctx, mode):
        await _fill(controller, 1)
        ctx = make_ctx("loop", {"mode": mode})

        await handlers.loop(ctx)

        embed = sent_embed(ctx.interaction)
        assert embed.title == DiscordUIMessages.EMBED_ERROR
        assert str(mode) in embed.description
        assert (await controller.get_queue_snapshot(GUILD_ID)).loop_mode is LoopMode.OFF


class TestShuffle:
    @pytest.mark.asyncio
    async def test_needs_two_tracks(self, handlers, controller, make_ctx):
        await _fill(controller, 1)
        ctx = make_ctx("shuffle")

        await handlers.shuffle(ctx)

        assert (
            sent_embed(ctx.interaction).description
            == DiscordUIMessages.STATE_NOT_ENOUGH_TRACKS_TO_SHUFFLE
        )

    @pytest.mark.asyncio
    async def test_reports_count(self, handlers, controller, make_ctx):
        await _fill(controller, 4)
        ctx = make_ctx("shuffle")

        await handlers.shuffle(ctx)

        assert sent_embed(ctx.interaction).description == DiscordUIMessages.ACTION_SHUFFLED.format(
            count=4
        )


class TestRemove:
    @pytest.mark.asyncio
    async def test_position_one_removes_first(self, handlers, controller, make_ctx):
        queued = await _fill(controller, 3)
        ctx = make_ctx("remove", {"position": 1})

        await handlers.remove(ctx)

        snapshot = await controller.get_queue_snapshot(GUILD_ID)
        assert snapshot.tracks == tuple(queued[1:])
        assert "queued 1" in sent_embed(ctx.interaction).description

    @pytest.mark.asyncio
    async def test_removing_only_track_leaves_empty_queue(self, handlers, controller, make_ctx):
        await _fill(controller, 1)
        ctx = make_ctx("remove", {"position": 1})

        await handlers.remove(ctx)

        assert (await controller.get_queue_snapshot(GUILD_ID)).is_empty
        assert sent_embed(ctx.interaction).title != DiscordUIMessages.EMBED_ERROR

    @pytest.mark.asyncio
    async def test_invalid_position(self, handlers, controller, make_ctx):
        await _fill(controller, 2)
        ctx = make_ctx("remove", {"position": 5})

        await handlers.remove(ctx)

        assert sent_embed(ctx.interaction).description == (
            DiscordUIMessages.ERROR_INVALID_POSITION.format(position=5, size=2)
        )
        assert (await controller.get_queue_snapshot(GUILD_ID)).size == 2

    @pytest.mark.asyncio
    async def test_empty_queue(self, handlers, controller, make_ctx):
        await _fill(controller, 0)
        ctx = make_ctx("remove", {"position": 1})

        await handlers.remove(ctx)

        assert sent_embed(ctx.interaction).description == DiscordUIMessages.STATE_QUEUE_EMPTY


class TestMove:
    @pytest.mark.asyncio
    async def test_move_three_to_one(self, handlers, controller, make_ctx):
        queued = await _fill(controller, 5)
        ctx = make_ctx("move", {"from": 3, "to": 1})

        await handlers.move(ctx)

        snapshot = await controller.get_queue_snapshot(GUILD_ID)
        assert snapshot.tracks[0] == queued[2]
        assert snapshot.tracks[1:3] == (queued[0], queued[1])
        assert sent_embed(ctx.interaction).description == DiscordUIMessages.ACTION_TRACK_MOVED.format(
            track_title="queued 3", from_position=3, to_position=1
        )

    @pytest.mark.asyncio
    async def test_destination_out_of_range(self, handlers, controller, make_ctx):
        queued = await _fill(controller, 3)
        ctx = make_ctx("move", {"from": 1, "to": 9})

        await handlers.move(ctx)

        assert sent_embed(ctx.interaction).description == (
            DiscordUIMessages.ERROR_INVALID_POSITION.format(position=9, size=3)
        )
        assert (await controller.get_queue_snapshot(GUILD_ID)).tracks == tuple(queued)


class TestRelated:
    @pytest.mark.asyncio
    async def test_default_count(self, handlers, controller, make_ctx):
        await _fill(controller, 0)
        ctx = make_ctx("related")

        await handlers.related(ctx)

        snapshot = await controller.get_queue_snapshot(GUILD_ID)
        assert snapshot.size == 3
        assert all(t.auto_added for t in snapshot.tracks)
        assert ctx.history == ("defer", "edit_reply")
        assert "now playing" in edited_embed(ctx.interaction).description

    @pytest.mark.asyncio
    async def test_nothing_playing(self, handlers, make_ctx):
        ctx = make_ctx("related", {"count": 2})

        await handlers.related(ctx)

        assert edited_embed(ctx.interaction).description == DiscordUIMessages.STATE_NOTHING_PLAYING

    @pytest.mark.asyncio
    async def test_none_found(self, handlers, controller, track_source, make_ctx):
        await _fill(controller, 0)
        track_source.related_count = 0
        ctx = make_ctx("related", {"count": 2})

        await handlers.related(ctx)

        assert edited_embed(ctx.interaction).description == (
            DiscordUIMessages.STATE_NO_RELATED_TRACKS.format(seed_title="now playing")
        )
