"""Playback collaborator implementations."""

from discord_music_bridge.infrastructure.playback.memory_controller import (
    InMemoryPlaybackController,
)

__all__ = ["InMemoryPlaybackController"]
