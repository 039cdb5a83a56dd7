"""Port interface for the playback collaborator that owns all per-guild player state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_music_bridge.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.playback.events import PlaybackEventStream
    from ...domain.playback.models import (
        LoopMode,
        Lyrics,
        NowPlaying,
        QueueSnapshot,
        Track,
        TrackProvider,
    )


class PlaybackController(ABC):
    """Interface for queueing, transport control, and provider lookups.

    Implementations serialize their own per-guild state; callers treat every
    method as safe to await from any interaction. Rejected operations raise
    :class:`~discord_music_bridge.domain.shared.exceptions.CollaboratorError`.
    """

    @property
    @abstractmethod
    def events(self) -> PlaybackEventStream:
        """Lifecycle event stream; subscribe to receive a cancellable handle."""
        ...

    @abstractmethod
    async def initialize(self) -> None: ...

    @abstractmethod
    async def shutdown(self) -> None: ...

    @abstractmethod
    async def connect_to_channel(
        self,
        guild_id: DiscordSnowflake,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake | None = None,
    ) -> None:
        """Create the guild's player if needed and bind it to a voice channel."""
        ...

    @abstractmethod
    async def disconnect(self, guild_id: DiscordSnowflake) -> bool:
        """Destroy the guild's player. Returns False when there was none."""
        ...

    @abstractmethod
    def is_connected(self, guild_id: DiscordSnowflake) -> bool: ...

    @abstractmethod
    async def enqueue(
        self,
        guild_id: DiscordSnowflake,
        query: str,
        *,
        requester_id: DiscordSnowflake,
        requester_name: str,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake | None = None,
        source: TrackProvider | None = None,
    ) -> Track:
        """Resolve *query* and append the first match; starts playback when idle."""
        ...

    @abstractmethod
    async def pause(self, guild_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    async def resume(self, guild_id: DiscordSnowflake) -> None: ...

    @abstractmethod
    async def skip(self, guild_id: DiscordSnowflake) -> Track:
        """Skip the current track and return it."""
        ...

    @abstractmethod
    async def stop(self, guild_id: DiscordSnowflake) -> None:
        """Stop playback and clear the queue."""
        ...

    @abstractmethod
    async def set_volume(self, guild_id: DiscordSnowflake, level: int) -> None: ...

    @abstractmethod
    async def set_loop_mode(self, guild_id: DiscordSnowflake, mode: LoopMode) -> None: ...

    @abstractmethod
    async def shuffle(self, guild_id: DiscordSnowflake) -> int:
        """Shuffle the upcoming tracks and return how many were shuffled."""
        ...

    @abstractmethod
    async def get_queue_snapshot(self, guild_id: DiscordSnowflake) -> QueueSnapshot | None:
        """Current queue state, or None when the guild has no player."""
        ...

    @abstractmethod
    async def get_now_playing(self, guild_id: DiscordSnowflake) -> NowPlaying | None: ...

    @abstractmethod
    async def remove_at(self, guild_id: DiscordSnowflake, index: int) -> Track:
        """Remove and return the upcoming track at 0-based *index*."""
        ...

    @abstractmethod
    async def move_track(self, guild_id: DiscordSnowflake, from_index: int, to_index: int) -> Track:
        """Move the upcoming track at 0-based *from_index* to *to_index* and return it."""
        ...

    @abstractmethod
    async def add_related(self, guild_id: DiscordSnowflake, count: int) -> list[Track]:
        """Queue up to *count* tracks related to the current one, flagged as auto-added."""
        ...

    @abstractmethod
    async def search(
        self,
        query: str,
        *,
        source: TrackProvider | None = None,
        limit: int = 10,
    ) -> list[Track]: ...

    @abstractmethod
    async def fetch_lyrics(self, query: str) -> Lyrics | None: ...
