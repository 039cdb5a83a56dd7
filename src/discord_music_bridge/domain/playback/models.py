"""Value objects exchanged with the playback collaborator."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from discord_music_bridge.domain.shared.messages import ErrorMessages
from discord_music_bridge.domain.shared.types import (
    DiscordSnowflake,
    DurationMs,
    HttpUrlStr,
    NonEmptyStr,
    VolumeLevel,
)


class TrackProvider(StrEnum):
    """Where a track was found."""

    YOUTUBE = "youtube"
    SPOTIFY = "spotify"
    SOUNDCLOUD = "soundcloud"


class LoopMode(IntEnum):
    """Loop mode settings, numbered the way the ``/loop`` command exposes them."""

    OFF = 0
    TRACK = 1  # Loop current track
    QUEUE = 2  # Loop entire queue

    @property
    def label(self) -> str:
        return _LOOP_LABELS[self]


_LOOP_LABELS: dict[LoopMode, str] = {
    LoopMode.OFF: "Off",
    LoopMode.TRACK: "Current track",
    LoopMode.QUEUE: "Full queue",
}


def format_duration_ms(milliseconds: int | None) -> str:
    """Format milliseconds as M:SS or H:MM:SS."""
    if milliseconds is None:
        return "–"

    total_seconds = milliseconds // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


class Track(BaseModel):
    """Immutable value object representing a queued or playable track.

    ``identifier`` is unique per queued instance, so the same song queued twice
    yields two distinct tracks.
    """

    model_config = ConfigDict(frozen=True)

    identifier: NonEmptyStr = Field(default_factory=lambda: uuid4().hex)
    title: NonEmptyStr
    artist: NonEmptyStr = "Unknown Artist"
    duration_ms: DurationMs = 0
    url: HttpUrlStr | None = None
    thumbnail_url: HttpUrlStr | None = None
    source: TrackProvider = TrackProvider.YOUTUBE

    # Request metadata (set when queued)
    requester_id: DiscordSnowflake | None = None
    requester_name: NonEmptyStr | None = None
    text_channel_id: DiscordSnowflake | None = None

    # Queued by the bot itself (related tracks) rather than by a member
    auto_added: bool = False

    @property
    def duration_formatted(self) -> str:
        return format_duration_ms(self.duration_ms)

    def requested_by(
        self,
        *,
        requester_id: int | None,
        requester_name: str | None,
        text_channel_id: int | None,
        auto_added: bool = False,
    ) -> Track:
        """Return a fresh queue instance of this track owned by the requester."""
        return self.model_copy(
            update={
                "identifier": uuid4().hex,
                "requester_id": requester_id,
                "requester_name": requester_name,
                "text_channel_id": text_channel_id,
                "auto_added": auto_added,
            }
        )


class QueueSnapshot(BaseModel):
    """Point-in-time view of a guild's player. Upcoming tracks are in play order."""

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    tracks: tuple[Track, ...] = ()
    current: Track | None = None
    loop_mode: LoopMode = LoopMode.OFF
    volume: VolumeLevel = 100
    paused: bool = False

    @model_validator(mode="after")
    def _current_not_upcoming(self) -> QueueSnapshot:
        if self.current is not None and any(
            t.identifier == self.current.identifier for t in self.tracks
        ):
            raise ValueError(ErrorMessages.QUEUE_CURRENT_IN_UPCOMING)
        return self

    @property
    def size(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    @property
    def total_duration_ms(self) -> int:
        return sum(t.duration_ms for t in self.tracks)


class NowPlaying(BaseModel):
    """The current track and how far into it playback is."""

    model_config = ConfigDict(frozen=True)

    track: Track
    position_ms: DurationMs = 0
    paused: bool = False

    @property
    def progress(self) -> float:
        """Playback progress as a percentage in [0, 100]."""
        if self.track.duration_ms <= 0:
            return 0.0
        return min(100.0, self.position_ms / self.track.duration_ms * 100)


class Lyrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: NonEmptyStr
    artist: str = ""
    text: str
    url: HttpUrlStr | None = None
