"""Port interfaces for track lookup and lyrics providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.playback.models import Lyrics, Track, TrackProvider


class TrackSource(ABC):
    """Interface for resolving user queries into tracks."""

    @abstractmethod
    async def search(
        self, query: str, *, source: TrackProvider | None = None, limit: int = 10
    ) -> list[Track]:
        """Return up to *limit* matches, best first. Empty list when nothing matches."""
        ...

    async def resolve(self, query: str, *, source: TrackProvider | None = None) -> Track | None:
        results = await self.search(query, source=source, limit=1)
        return results[0] if results else None

    @abstractmethod
    async def related(self, track: Track, *, limit: int) -> list[Track]:
        """Return up to *limit* tracks similar to *track*, excluding *track* itself."""
        ...


class LyricsProvider(ABC):
    """Interface for lyrics lookups."""

    @abstractmethod
    async def fetch(self, query: str) -> Lyrics | None: ...

    async def close(self) -> None:
        return None
