"""Lyrics lookup infrastructure."""

from discord_music_bridge.infrastructure.lyrics.lrclib_client import LrclibLyricsClient, LrclibRecord

__all__ = ["LrclibLyricsClient", "LrclibRecord"]
