"""LyricsProvider backed by the LRCLIB public search API."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from discord_music_bridge.application.interfaces.track_source import LyricsProvider
from discord_music_bridge.config.settings import LyricsSettings
from discord_music_bridge.domain.playback.models import Lyrics
from discord_music_bridge.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class LrclibRecord(BaseModel):
    """One entry of ``GET /api/search``; only the fields we display are kept."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    track_name: str = Field(alias="trackName")
    artist_name: str = Field(default="", alias="artistName")
    plain_lyrics: str | None = Field(default=None, alias="plainLyrics")
    instrumental: bool = False


class LrclibLyricsClient(LyricsProvider):
    def __init__(
        self,
        settings: LyricsSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or LyricsSettings()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout_s,
                headers={"User-Agent": "discord-music-bridge"},
            )
        return self._client

    def _record_url(self, record: LrclibRecord) -> str:
        return f"{self._settings.base_url}/api/get/{record.id}"

    async def fetch(self, query: str) -> Lyrics | None:
        try:
            response = await self._get_client().get("/api/search", params={"q": query})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(LogTemplates.LYRICS_REQUEST_FAILED, query, e)
            return None

        if not isinstance(payload, list):
            logger.warning(LogTemplates.LYRICS_REQUEST_FAILED, query, "unexpected payload")
            return None

        for raw in payload:
            try:
                record = LrclibRecord.model_validate(raw)
            except ValidationError:
                continue
            if record.instrumental or not record.plain_lyrics:
                continue
            return Lyrics(
                title=record.track_name or query,
                artist=record.artist_name,
                text=record.plain_lyrics,
                url=self._record_url(record),
            )

        logger.debug(LogTemplates.LYRICS_NOT_FOUND, query)
        return None

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
