"""Tests for the voice precondition guard."""

from __future__ import annotations

import pytest

from conftest import build_interaction, sent_embed
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.guards.voice_guards import VoiceGuard
from discord_music_bridge.infrastructure.discord.interaction import InteractionContext, ReplyState
from discord_music_bridge.infrastructure.discord.renderer import ERROR_COLOR


async def _check(**kwargs):
    interaction = build_interaction("play", {"query": "x"}, **kwargs)
    ctx = InteractionContext(interaction)
    result = await VoiceGuard().check(ctx)
    return result, ctx, interaction


def _assert_rejected_with(interaction, description):
    interaction.response.send_message.assert_awaited_once()
    kwargs = interaction.response.send_message.call_args.kwargs
    assert kwargs["ephemeral"] is True
    assert "content" not in kwargs
    embed = sent_embed(interaction)
    assert embed.title == DiscordUIMessages.EMBED_ERROR
    assert embed.description == description
    assert embed.color.value == ERROR_COLOR


@pytest.mark.asyncio
async def test_passes_without_side_effects():
    result, ctx, interaction = await _check()

    assert result is True
    assert ctx.state is ReplyState.UNACKNOWLEDGED
    interaction.response.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_rejects_outside_server():
    result, _, interaction = await _check(in_guild=False)

    assert result is False
    _assert_rejected_with(interaction, DiscordUIMessages.STATE_SERVER_ONLY)


@pytest.mark.asyncio
async def test_rejects_non_member():
    result, _, interaction = await _check(is_member=False)

    assert result is False
    _assert_rejected_with(interaction, DiscordUIMessages.STATE_VERIFY_VOICE_FAILED)


@pytest.mark.asyncio
async def test_rejects_when_not_in_voice():
    result, ctx, interaction = await _check(in_voice=False)

    assert result is False
    assert ctx.state is ReplyState.REPLIED
    _assert_rejected_with(interaction, DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE)


@pytest.mark.asyncio
@pytest.mark.parametrize(("can_connect", "can_speak"), [(False, True), (True, False)])
async def test_rejects_without_bot_permissions(can_connect, can_speak):
    result, _, interaction = await _check(can_connect=can_connect, can_speak=can_speak)

    assert result is False
    _assert_rejected_with(
        interaction, DiscordUIMessages.ERROR_BOT_CANNOT_CONNECT.format(channel="<#333>")
    )
