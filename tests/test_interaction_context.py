"""Tests for InteractionContext option parsing and reply-state discipline."""

from __future__ import annotations

import pytest

from conftest import GUILD_ID, TEXT_CHANNEL_ID, VOICE_CHANNEL_ID, build_interaction
from discord_music_bridge.domain.shared.exceptions import InvalidReplyStateError, PreconditionError
from discord_music_bridge.infrastructure.discord.interaction import (
    InteractionContext,
    ReplyState,
    parse_options,
)
from discord_music_bridge.infrastructure.discord.renderer import render_notice


class TestOptions:
    def test_parse_options(self):
        data = {"name": "move", "options": [{"name": "from", "value": 3}, {"name": "to", "value": 1}]}

        assert parse_options(data) == {"from": 3, "to": 1}

    def test_parse_options_without_options(self):
        assert parse_options({"name": "pause"}) == {}
        assert parse_options(None) == {}

    def test_typed_getters(self):
        ctx = InteractionContext(build_interaction("play", {"query": "  daft punk ", "level": "7"}))

        assert ctx.command_name == "play"
        assert ctx.get_string("query") == "daft punk"
        assert ctx.get_integer("level") == 7
        assert ctx.get_integer("missing", 3) == 3
        assert ctx.get_string("missing") is None

    def test_blank_string_falls_back_to_default(self):
        ctx = InteractionContext(build_interaction("lyrics", {"query": "   "}))

        assert ctx.get_string("query") is None

    def test_invocation_details(self):
        ctx = InteractionContext(build_interaction("join"))

        assert ctx.guild_id == GUILD_ID
        assert ctx.channel_id == TEXT_CHANNEL_ID
        assert ctx.voice_channel.id == VOICE_CHANNEL_ID

    def test_require_guild_outside_server(self):
        ctx = InteractionContext(build_interaction("queue", in_guild=False))

        with pytest.raises(PreconditionError):
            ctx.require_guild_id()

    def test_require_voice_channel(self):
        ctx = InteractionContext(build_interaction("play", in_voice=False))

        assert ctx.voice_channel is None
        with pytest.raises(PreconditionError):
            ctx.require_voice_channel()


class TestReplyState:
    @pytest.mark.asyncio
    async def test_reply_once(self):
        interaction = build_interaction("pause")
        ctx = InteractionContext(interaction)

        await ctx.reply("done", ephemeral=True)

        assert ctx.state is ReplyState.REPLIED
        assert ctx.history == ("reply",)
        interaction.response.send_message.assert_awaited_once_with(content="done", ephemeral=True)

    @pytest.mark.asyncio
    async def test_second_reply_rejected_before_network(self):
        interaction = build_interaction("pause")
        ctx = InteractionContext(interaction)
        await ctx.reply("first")

        with pytest.raises(InvalidReplyStateError):
            await ctx.reply("second")

        assert interaction.response.send_message.await_count == 1
        assert ctx.history == ("reply",)

    @pytest.mark.asyncio
    async def test_defer_then_edit(self):
        interaction = build_interaction("search")
        ctx = InteractionContext(interaction)

        await ctx.defer()
        assert ctx.state is ReplyState.DEFERRED

        await ctx.edit_reply(render_notice("nothing"))

        assert ctx.state is ReplyState.REPLIED
        assert ctx.history == ("defer", "edit_reply")
        assert "embed" in interaction.edit_original_response.call_args.kwargs

    @pytest.mark.asyncio
    async def test_edit_without_defer_rejected(self):
        interaction = build_interaction("search")
        ctx = InteractionContext(interaction)

        with pytest.raises(InvalidReplyStateError):
            await ctx.edit_reply("text")

        interaction.edit_original_response.assert_not_awaited()
        assert ctx.state is ReplyState.UNACKNOWLEDGED

    @pytest.mark.asyncio
    async def test_reply_after_defer_rejected(self):
        ctx = InteractionContext(build_interaction("search"))
        await ctx.defer()

        with pytest.raises(InvalidReplyStateError):
            await ctx.reply("text")

    @pytest.mark.asyncio
    async def test_defer_twice_rejected(self):
        ctx = InteractionContext(build_interaction("search"))
        await ctx.defer()

        with pytest.raises(InvalidReplyStateError):
            await ctx.defer()

    @pytest.mark.asyncio
    async def test_edit_after_final_rejected(self):
        ctx = InteractionContext(build_interaction("search"))
        await ctx.defer()
        await ctx.edit_reply("first")

        with pytest.raises(InvalidReplyStateError):
            await ctx.edit_reply("second")
        assert len(ctx.history) == 2

    @pytest.mark.asyncio
    async def test_failed_send_leaves_state_unacknowledged(self):
        interaction = build_interaction("pause")
        interaction.response.send_message.side_effect = RuntimeError("network down")
        ctx = InteractionContext(interaction)

        with pytest.raises(RuntimeError):
            await ctx.reply("text")

        assert ctx.state is ReplyState.UNACKNOWLEDGED
        assert ctx.history == ()
