"""Audio lookup infrastructure - yt-dlp search and URL resolution."""

from discord_music_bridge.infrastructure.audio.ytdlp_source import (
    SEARCH_PREFIXES,
    ThumbnailInfo,
    YtDlpEntry,
    YtDlpOpts,
    YtDlpTrackSource,
)

__all__ = [
    "SEARCH_PREFIXES",
    "ThumbnailInfo",
    "YtDlpEntry",
    "YtDlpOpts",
    "YtDlpTrackSource",
]
