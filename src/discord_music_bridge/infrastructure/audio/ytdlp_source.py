"""TrackSource implementation using yt-dlp for URL resolution and search."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from yt_dlp import YoutubeDL

from discord_music_bridge.application.interfaces.track_source import TrackSource
from discord_music_bridge.config.settings import PlaybackSettings
from discord_music_bridge.domain.playback.models import Track, TrackProvider
from discord_music_bridge.domain.shared.messages import LogTemplates
from discord_music_bridge.domain.shared.types import NonEmptyStr, PositiveInt

logger = logging.getLogger(__name__)

DEFAULT_RETRIES: Final[int] = 3

# yt-dlp cannot stream Spotify, so Spotify requests search the YouTube Music catalogue
SEARCH_PREFIXES: Final[dict[TrackProvider, str]] = {
    TrackProvider.YOUTUBE: "ytsearch",
    TrackProvider.SOUNDCLOUD: "scsearch",
    TrackProvider.SPOTIFY: "ytmsearch",
}

URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(https?://|www\.)")


class ThumbnailInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str | None = None


class YtDlpEntry(BaseModel):
    """Trimmed yt-dlp extraction result; unknown fields are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    webpage_url: str | None = None
    url: str | None = None
    title: NonEmptyStr = "Unknown Title"
    duration: float | None = None
    thumbnail: str | None = None
    thumbnails: list[ThumbnailInfo] = Field(default_factory=list)
    artist: str | None = None
    uploader: str | None = None
    channel: str | None = None

    @field_validator("webpage_url", "url", "thumbnail", mode="before")
    @classmethod
    def _coerce_url(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            return None
        return v

    @field_validator("artist", "uploader", "channel", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "Unknown Title"
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> float | None:
        try:
            val = float(v)
        except (TypeError, ValueError):
            return None
        return val if val >= 0 else None

    @property
    def best_thumbnail(self) -> str | None:
        if self.thumbnail:
            return self.thumbnail
        for thumb in reversed(self.thumbnails):
            if thumb.url and thumb.url.startswith(("http://", "https://")):
                return thumb.url
        return None


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    default_search: NonEmptyStr = "ytsearch"
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = 10
    format: NonEmptyStr | None = None
    skip_download: bool = True
    extract_flat: NonEmptyStr | bool = False


class YtDlpTrackSource(TrackSource):
    def __init__(self, settings: PlaybackSettings | None = None) -> None:
        self._settings = settings or PlaybackSettings()
        self._base_opts = YtDlpOpts(
            format=self._settings.ytdlp_format,
            socket_timeout=self._settings.socket_timeout_s,
        )

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    @staticmethod
    def is_url(query: str) -> bool:
        return bool(URL_PATTERN.search(query.strip()))

    @staticmethod
    def build_search_query(query: str, source: TrackProvider | None, limit: int) -> str:
        provider = source or TrackProvider.YOUTUBE
        return f"{SEARCH_PREFIXES[provider]}{limit}:{query}"

    @staticmethod
    def _entry_to_track(entry: YtDlpEntry, source: TrackProvider) -> Track | None:
        url = entry.webpage_url or entry.url
        if not url:
            logger.debug(LogTemplates.YTDLP_SKIPPED_ENTRY, entry.title)
            return None

        return Track(
            title=entry.title,
            artist=entry.artist or entry.uploader or entry.channel or "Unknown Artist",
            duration_ms=int((entry.duration or 0) * 1000),
            url=url,
            thumbnail_url=entry.best_thumbnail,
            source=source,
        )

    def _extract_sync(self, target: str, *, flat: bool) -> list[YtDlpEntry]:
        opts = self._get_opts(extract_flat="in_playlist" if flat else False)
        try:
            with YoutubeDL(params=cast(Any, opts.model_dump())) as ydl:
                data = ydl.extract_info(target, download=False)
        except Exception:
            logger.exception(LogTemplates.YTDLP_FAILED_SEARCH, target)
            return []

        if not isinstance(data, dict):
            return []

        entries = data.get("entries")
        if entries is None:
            return [YtDlpEntry.model_validate(data)]
        return [YtDlpEntry.model_validate(dict(e)) for e in entries if isinstance(e, dict)]

    async def search(
        self, query: str, *, source: TrackProvider | None = None, limit: int = 10
    ) -> list[Track]:
        provider = source or TrackProvider.YOUTUBE
        if provider is TrackProvider.SPOTIFY:
            logger.debug(LogTemplates.YTDLP_PROVIDER_FALLBACK, provider, SEARCH_PREFIXES[provider])

        if self.is_url(query):
            entries = await asyncio.to_thread(self._extract_sync, query, flat=False)
        else:
            target = self.build_search_query(query, source, limit)
            entries = await asyncio.to_thread(self._extract_sync, target, flat=True)

        tracks: list[Track] = []
        for entry in entries[:limit]:
            track = self._entry_to_track(entry, provider)
            if track is not None:
                tracks.append(track)
        return tracks

    async def related(self, track: Track, *, limit: int) -> list[Track]:
        query = f"{track.artist} {track.title} mix" if track.artist else f"{track.title} mix"
        candidates = await self.search(query, source=track.source, limit=limit + 1)

        seen = {track.title.casefold()}
        related: list[Track] = []
        for candidate in candidates:
            key = candidate.title.casefold()
            if key in seen:
                continue
            seen.add(key)
            related.append(candidate)
            if len(related) >= limit:
                break
        return related
