"""Slash-command handlers grouped by concern."""

from discord_music_bridge.infrastructure.discord.handlers.library import LibraryHandlers
from discord_music_bridge.infrastructure.discord.handlers.playback import PlaybackHandlers
from discord_music_bridge.infrastructure.discord.handlers.queue import QueueHandlers
from discord_music_bridge.infrastructure.discord.handlers.voice import VoiceHandlers

__all__ = [
    "LibraryHandlers",
    "PlaybackHandlers",
    "QueueHandlers",
    "VoiceHandlers",
]
