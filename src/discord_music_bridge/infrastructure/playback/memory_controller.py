"""Queue-state playback controller.

Owns per-guild player state (current track, upcoming queue, loop mode,
volume, pause clock) and emits lifecycle events. It has no audio transport of
its own: a transport reports natural track ends and failures through
:meth:`finish_current`, :meth:`fail_current` and :meth:`report_player_error`.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from discord_music_bridge.application.interfaces.playback_controller import PlaybackController
from discord_music_bridge.application.interfaces.track_source import LyricsProvider, TrackSource
from discord_music_bridge.config.settings import PlaybackSettings
from discord_music_bridge.domain.playback.events import (
    Disconnected,
    PlaybackEvent,
    PlaybackEventStream,
    PlayerErrored,
    QueueCleared,
    QueueEnded,
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
from discord_music_bridge.domain.shared.exceptions import CollaboratorError
from discord_music_bridge.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

MIN_VOLUME = 0
MAX_VOLUME = 100


@dataclass
class _GuildPlayer:
    guild_id: int
    volume: int
    voice_channel_id: int | None = None
    text_channel_id: int | None = None
    current: Track | None = None
    tracks: list[Track] = field(default_factory=list)
    loop_mode: LoopMode = LoopMode.OFF
    paused: bool = False
    started_at: float = 0.0
    paused_at: float | None = None
    paused_total: float = 0.0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def start(self, track: Track, now: float) -> None:
        self.current = track
        self.paused = False
        self.started_at = now
        self.paused_at = None
        self.paused_total = 0.0

    def position_ms(self, now: float) -> int:
        if self.current is None:
            return 0
        reference = self.paused_at if self.paused_at is not None else now
        elapsed = max(0.0, reference - self.started_at - self.paused_total)
        position = int(elapsed * 1000)
        if self.current.duration_ms > 0:
            position = min(position, self.current.duration_ms)
        return position

    def snapshot(self) -> QueueSnapshot:
        return QueueSnapshot(
            guild_id=self.guild_id,
            tracks=tuple(self.tracks),
            current=self.current,
            loop_mode=self.loop_mode,
            volume=self.volume,
            paused=self.paused,
        )


class InMemoryPlaybackController(PlaybackController):
    def __init__(
        self,
        track_source: TrackSource,
        lyrics_provider: LyricsProvider,
        settings: PlaybackSettings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._track_source = track_source
        self._lyrics_provider = lyrics_provider
        self._settings = settings or PlaybackSettings()
        self._clock = clock
        self._players: dict[int, _GuildPlayer] = {}
        self._events = PlaybackEventStream()

    @property
    def events(self) -> PlaybackEventStream:
        return self._events

    # ─────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        logger.info(LogTemplates.PLAYBACK_INITIALIZED)

    async def shutdown(self) -> None:
        count = len(self._players)
        self._players.clear()
        self._events.clear()
        await self._lyrics_provider.close()
        logger.info(LogTemplates.PLAYBACK_SHUTDOWN, count)

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    def _player(self, guild_id: int, operation: str) -> _GuildPlayer:
        player = self._players.get(guild_id)
        if player is None:
            raise CollaboratorError(operation, ErrorMessages.NO_ACTIVE_PLAYER)
        return player

    def _get_or_create(self, guild_id: int) -> _GuildPlayer:
        player = self._players.get(guild_id)
        if player is None:
            player = _GuildPlayer(guild_id=guild_id, volume=self._settings.default_volume)
            self._players[guild_id] = player
            logger.debug(LogTemplates.PLAYER_CREATED, guild_id)
        return player

    async def _publish(self, events: list[PlaybackEvent]) -> None:
        for event in events:
            await self._events.publish(event)

    def _advance(self, player: _GuildPlayer, ended: Track, *, natural: bool) -> list[PlaybackEvent]:
        """Move past *ended*; honours loop mode. Returns the events to emit."""
        events: list[PlaybackEvent] = []
        now = self._clock()

        if natural and player.loop_mode is LoopMode.TRACK:
            player.start(ended, now)
            events.append(TrackStarted(guild_id=player.guild_id, track=ended))
            return events

        if player.loop_mode is LoopMode.QUEUE:
            player.tracks.append(ended)

        if player.tracks:
            next_track = player.tracks.pop(0)
            player.start(next_track, now)
            events.append(TrackStarted(guild_id=player.guild_id, track=next_track))
            logger.info(LogTemplates.TRACK_STARTED, next_track.title, player.guild_id)
        else:
            player.current = None
            player.paused = False
            events.append(QueueEnded(guild_id=player.guild_id))
        return events

    @staticmethod
    def _check_index(operation: str, index: int, size: int) -> None:
        if not 0 <= index < size:
            raise CollaboratorError(
                operation, ErrorMessages.INVALID_POSITION.format(position=index + 1)
            )

    # ─────────────────────────────────────────────────────────────────
    # Voice
    # ─────────────────────────────────────────────────────────────────

    async def connect_to_channel(
        self,
        guild_id: int,
        voice_channel_id: int,
        text_channel_id: int | None = None,
    ) -> None:
        player = self._get_or_create(guild_id)
        player.voice_channel_id = voice_channel_id
        if text_channel_id is not None:
            player.text_channel_id = text_channel_id

    async def disconnect(self, guild_id: int) -> bool:
        player = self._players.pop(guild_id, None)
        if player is None:
            return False
        logger.debug(LogTemplates.PLAYER_DESTROYED, guild_id)
        await self._publish([Disconnected(guild_id=guild_id)])
        return True

    def is_connected(self, guild_id: int) -> bool:
        return guild_id in self._players

    # ─────────────────────────────────────────────────────────────────
    # Queueing
    # ─────────────────────────────────────────────────────────────────

    async def enqueue(
        self,
        guild_id: int,
        query: str,
        *,
        requester_id: int,
        requester_name: str,
        voice_channel_id: int,
        text_channel_id: int | None = None,
        source: TrackProvider | None = None,
    ) -> Track:
        resolved = await self._track_source.resolve(query, source=source)
        if resolved is None:
            raise CollaboratorError("enqueue", ErrorMessages.NO_TRACKS_FOUND.format(query=query))

        await self.connect_to_channel(guild_id, voice_channel_id, text_channel_id)
        player = self._get_or_create(guild_id)
        track = resolved.requested_by(
            requester_id=requester_id,
            requester_name=requester_name,
            text_channel_id=text_channel_id,
        )

        events: list[PlaybackEvent] = []
        async with player.lock:
            player.tracks.append(track)
            events.append(
                TrackAdded(guild_id=guild_id, track=track, queue_length=len(player.tracks))
            )
            logger.info(LogTemplates.TRACK_ENQUEUED, track.title, guild_id, len(player.tracks))
            if player.current is None:
                player.start(player.tracks.pop(0), self._clock())
                events.append(TrackStarted(guild_id=guild_id, track=track))
                logger.info(LogTemplates.TRACK_STARTED, track.title, guild_id)

        await self._publish(events)
        return track

    async def add_related(self, guild_id: int, count: int) -> list[Track]:
        player = self._player(guild_id, "add_related")
        seed = player.current
        if seed is None:
            raise CollaboratorError("add_related", ErrorMessages.NOTHING_PLAYING)

        found = await self._track_source.related(seed, limit=count)
        added: list[Track] = []
        events: list[PlaybackEvent] = []
        async with player.lock:
            for candidate in found[:count]:
                track = candidate.requested_by(
                    requester_id=seed.requester_id,
                    requester_name=seed.requester_name,
                    text_channel_id=seed.text_channel_id,
                    auto_added=True,
                )
                player.tracks.append(track)
                added.append(track)
                events.append(
                    TrackAdded(guild_id=guild_id, track=track, queue_length=len(player.tracks))
                )

        await self._publish(events)
        return added

    async def remove_at(self, guild_id: int, index: int) -> Track:
        player = self._player(guild_id, "remove_at")
        async with player.lock:
            self._check_index("remove_at", index, len(player.tracks))
            removed = player.tracks.pop(index)
        logger.info(LogTemplates.QUEUE_REMOVED, removed.title, index, guild_id)
        return removed

    async def move_track(self, guild_id: int, from_index: int, to_index: int) -> Track:
        player = self._player(guild_id, "move_track")
        async with player.lock:
            size = len(player.tracks)
            self._check_index("move_track", from_index, size)
            self._check_index("move_track", to_index, size)
            track = player.tracks.pop(from_index)
            player.tracks.insert(to_index, track)
        logger.info(LogTemplates.QUEUE_MOVED, from_index, to_index, guild_id)
        return track

    async def shuffle(self, guild_id: int) -> int:
        player = self._player(guild_id, "shuffle")
        async with player.lock:
            random.shuffle(player.tracks)
            count = len(player.tracks)
        logger.info(LogTemplates.QUEUE_SHUFFLED, count, guild_id)
        return count

    # ─────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────

    async def pause(self, guild_id: int) -> None:
        player = self._player(guild_id, "pause")
        if player.current is None:
            raise CollaboratorError("pause", ErrorMessages.NOTHING_PLAYING)
        if not player.paused:
            player.paused = True
            player.paused_at = self._clock()

    async def resume(self, guild_id: int) -> None:
        player = self._player(guild_id, "resume")
        if player.current is None:
            raise CollaboratorError("resume", ErrorMessages.NOTHING_PLAYING)
        if player.paused:
            if player.paused_at is not None:
                player.paused_total += self._clock() - player.paused_at
            player.paused = False
            player.paused_at = None

    async def skip(self, guild_id: int) -> Track:
        player = self._player(guild_id, "skip")
        async with player.lock:
            skipped = player.current
            if skipped is None:
                raise CollaboratorError("skip", ErrorMessages.NOTHING_PLAYING)
            events: list[PlaybackEvent] = [
                TrackEnded(guild_id=guild_id, track=skipped, reason="skipped")
            ]
            events.extend(self._advance(player, skipped, natural=False))
        logger.info(LogTemplates.TRACK_SKIPPED, skipped.title, guild_id)
        await self._publish(events)
        return skipped

    async def stop(self, guild_id: int) -> None:
        player = self._player(guild_id, "stop")
        events: list[PlaybackEvent] = []
        async with player.lock:
            if player.current is not None:
                events.append(TrackEnded(guild_id=guild_id, track=player.current, reason="stopped"))
            count = len(player.tracks)
            player.tracks.clear()
            player.current = None
            player.paused = False
            player.paused_at = None
            events.append(QueueCleared(guild_id=guild_id, track_count=count))
        await self._publish(events)

    async def set_volume(self, guild_id: int, level: int) -> None:
        if not MIN_VOLUME <= level <= MAX_VOLUME:
            raise CollaboratorError(
                "set_volume",
                ErrorMessages.INVALID_VOLUME.format(minimum=MIN_VOLUME, maximum=MAX_VOLUME),
            )
        player = self._player(guild_id, "set_volume")
        player.volume = level
        logger.info(LogTemplates.VOLUME_CHANGED, level, guild_id)

    async def set_loop_mode(self, guild_id: int, mode: LoopMode) -> None:
        player = self._player(guild_id, "set_loop_mode")
        player.loop_mode = LoopMode(mode)
        logger.info(LogTemplates.LOOP_MODE_CHANGED, player.loop_mode.name, guild_id)

    async def finish_current(self, guild_id: int) -> None:
        """Called by the audio transport when the current track ends on its own."""
        player = self._player(guild_id, "finish_current")
        async with player.lock:
            ended = player.current
            if ended is None:
                return
            events: list[PlaybackEvent] = [TrackEnded(guild_id=guild_id, track=ended)]
            events.extend(self._advance(player, ended, natural=True))
        await self._publish(events)

    async def fail_current(self, guild_id: int, error: str) -> None:
        """Called by the audio transport when the current track cannot be played."""
        player = self._player(guild_id, "fail_current")
        async with player.lock:
            failed = player.current
            if failed is None:
                return
            events: list[PlaybackEvent] = [
                TrackErrored(guild_id=guild_id, track=failed, error=error),
                TrackEnded(guild_id=guild_id, track=failed, reason="loadFailed"),
            ]
            events.extend(self._advance(player, failed, natural=False))
        await self._publish(events)

    async def report_player_error(self, guild_id: int, error: str) -> None:
        """Called by the audio transport when the player itself fails; the queue is kept."""
        self._player(guild_id, "report_player_error")
        await self._publish([PlayerErrored(guild_id=guild_id, error=error)])

    # ─────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────

    async def get_queue_snapshot(self, guild_id: int) -> QueueSnapshot | None:
        player = self._players.get(guild_id)
        return player.snapshot() if player is not None else None

    async def get_now_playing(self, guild_id: int) -> NowPlaying | None:
        player = self._players.get(guild_id)
        if player is None or player.current is None:
            return None
        return NowPlaying(
            track=player.current,
            position_ms=player.position_ms(self._clock()),
            paused=player.paused,
        )

    async def search(
        self,
        query: str,
        *,
        source: TrackProvider | None = None,
        limit: int = 10,
    ) -> list[Track]:
        return await self._track_source.search(query, source=source, limit=limit)

    async def fetch_lyrics(self, query: str) -> Lyrics | None:
        return await self._lyrics_provider.fetch(query)
