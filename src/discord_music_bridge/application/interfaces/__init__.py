"""Port interfaces for infrastructure adapters."""

from discord_music_bridge.application.interfaces.playback_controller import PlaybackController
from discord_music_bridge.application.interfaces.track_source import LyricsProvider, TrackSource

__all__ = [
    "LyricsProvider",
    "PlaybackController",
    "TrackSource",
]
