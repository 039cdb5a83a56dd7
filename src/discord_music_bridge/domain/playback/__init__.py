"""Playback bounded context: tracks, queue snapshots, and lifecycle events."""

from discord_music_bridge.domain.playback.events import (
    Disconnected,
    PlaybackEvent,
    PlaybackEventStream,
    PlayerErrored,
    QueueCleared,
    QueueEnded,
    Subscription,
    TrackAdded,
    TrackEnded,
    TrackErrored,
    TrackStarted,
)
from discord_music_bridge.domain.playback.models import (
    LoopMode,
    Lyrics,
    NowPlaying,
    QueueSnapshot,
    Track,
    TrackProvider,
)

__all__ = [
    "Disconnected",
    "LoopMode",
    "Lyrics",
    "NowPlaying",
    "PlaybackEvent",
    "PlaybackEventStream",
    "PlayerErrored",
    "QueueCleared",
    "QueueEnded",
    "QueueSnapshot",
    "Subscription",
    "Track",
    "TrackAdded",
    "TrackEnded",
    "TrackErrored",
    "TrackProvider",
    "TrackStarted",
]
