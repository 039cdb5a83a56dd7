"""Precondition guards for slash commands."""

from discord_music_bridge.infrastructure.discord.guards.voice_guards import (
    VoiceGuard,
    bot_can_join,
    send_ephemeral,
)

__all__ = [
    "VoiceGuard",
    "bot_can_join",
    "send_ephemeral",
]
