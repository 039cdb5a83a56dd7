from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_music_bridge.application.interfaces.track_source import LyricsProvider, TrackSource
from discord_music_bridge.config.settings import PlaybackSettings
from discord_music_bridge.domain.playback.models import Lyrics, Track, TrackProvider
from discord_music_bridge.domain.shared.service_state import ReadinessGate
from discord_music_bridge.infrastructure.discord.interaction import InteractionContext
from discord_music_bridge.infrastructure.playback.memory_controller import (
    InMemoryPlaybackController,
)

GUILD_ID = 111
TEXT_CHANNEL_ID = 222
VOICE_CHANNEL_ID = 333
USER_ID = 444


# ============================================================================
# Fake collaborators
# ============================================================================


class FakeTrackSource(TrackSource):
    """Returns one synthetic track per query; related tracks are numbered variations."""

    def __init__(self) -> None:
        self.empty_queries: set[str] = set()
        self.related_count: int | None = None
        self.search_calls: list[tuple[str, TrackProvider | None, int]] = []

    async def search(
        self, query: str, *, source: TrackProvider | None = None, limit: int = 10
    ) -> list[Track]:
        self.search_calls.append((query, source, limit))
        if query in self.empty_queries:
            return []
        return [
            Track(
                title=query if i == 0 else f"{query} ({i})",
                artist="Test Artist",
                duration_ms=180_000,
                url=f"https://example.com/watch?v={i}",
                source=source or TrackProvider.YOUTUBE,
            )
            for i in range(limit)
        ]

    async def related(self, track: Track, *, limit: int) -> list[Track]:
        count = limit if self.related_count is None else min(limit, self.related_count)
        return [
            Track(title=f"Related {i}", artist=track.artist, duration_ms=200_000)
            for i in range(1, count + 1)
        ]


class FakeLyricsProvider(LyricsProvider):
    def __init__(self, lyrics: Lyrics | None = None) -> None:
        self.lyrics = lyrics
        self.queries: list[str] = []
        self.closed = False

    async def fetch(self, query: str) -> Lyrics | None:
        self.queries.append(query)
        return self.lyrics

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Domain fixtures
# ============================================================================


@pytest.fixture
def sample_track():
    return Track(
        title="Test Track",
        artist="Test Artist",
        duration_ms=180_000,
        url="https://youtube.com/watch?v=test123",
        thumbnail_url="https://thumbnail.example.com/test.jpg",
        requester_id=USER_ID,
        requester_name="Listener",
        text_channel_id=TEXT_CHANNEL_ID,
    )


@pytest.fixture
def track_source():
    return FakeTrackSource()


@pytest.fixture
def lyrics_provider():
    return FakeLyricsProvider()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(track_source, lyrics_provider, clock):
    return InMemoryPlaybackController(
        track_source,
        lyrics_provider,
        PlaybackSettings(default_volume=80),
        clock=clock,
    )


@pytest.fixture
def ready_gate():
    gate = ReadinessGate()
    gate.open()
    return gate


# ============================================================================
# Discord fixtures
# ============================================================================


def build_interaction(
    name: str,
    options: dict[str, Any] | None = None,
    *,
    in_guild: bool = True,
    is_member: bool = True,
    in_voice: bool = True,
    can_connect: bool = True,
    can_speak: bool = True,
) -> MagicMock:
    interaction = MagicMock(spec=discord.Interaction)
    interaction.type = discord.InteractionType.application_command
    interaction.data = {
        "name": name,
        "options": [{"name": k, "value": v} for k, v in (options or {}).items()],
    }
    interaction.guild_id = GUILD_ID if in_guild else None
    interaction.channel_id = TEXT_CHANNEL_ID

    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.edit_original_response = AsyncMock()

    voice_channel = MagicMock(spec=discord.VoiceChannel)
    voice_channel.id = VOICE_CHANNEL_ID
    voice_channel.name = "Lounge"
    voice_channel.mention = f"<#{VOICE_CHANNEL_ID}>"
    voice_channel.permissions_for = MagicMock(
        return_value=MagicMock(connect=can_connect, speak=can_speak)
    )

    if is_member:
        user = MagicMock(spec=discord.Member)
        user.display_name = "Listener"
        if in_voice:
            user.voice = MagicMock()
            user.voice.channel = voice_channel
        else:
            user.voice = None
    else:
        user = MagicMock(spec=discord.User)
    user.id = USER_ID
    interaction.user = user

    if in_guild:
        guild = MagicMock(spec=discord.Guild)
        guild.id = GUILD_ID
        guild.me = MagicMock(spec=discord.Member)
        interaction.guild = guild
    else:
        interaction.guild = None

    return interaction


@pytest.fixture
def make_ctx():
    def _make(name: str, options: dict[str, Any] | None = None, **kwargs: Any) -> InteractionContext:
        return InteractionContext(build_interaction(name, options, **kwargs))

    return _make


def sent_embed(interaction: MagicMock) -> discord.Embed:
    """The embed passed to the immediate reply."""
    return interaction.response.send_message.call_args.kwargs["embed"]


def edited_embed(interaction: MagicMock) -> discord.Embed:
    """The embed the deferred reply was edited into."""
    return interaction.edit_original_response.call_args.kwargs["embed"]
