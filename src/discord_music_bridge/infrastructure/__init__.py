"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (client, dispatcher, handlers, event bridge, registration)
- Playback (queue-state controller)
- Audio lookup (yt-dlp)
- Lyrics (LRCLIB over httpx)
"""

from discord_music_bridge.infrastructure.audio.ytdlp_source import YtDlpTrackSource
from discord_music_bridge.infrastructure.discord.bot import create_bot
from discord_music_bridge.infrastructure.lyrics.lrclib_client import LrclibLyricsClient
from discord_music_bridge.infrastructure.playback.memory_controller import (
    InMemoryPlaybackController,
)

__all__ = [
    "create_bot",
    "InMemoryPlaybackController",
    "LrclibLyricsClient",
    "YtDlpTrackSource",
]
