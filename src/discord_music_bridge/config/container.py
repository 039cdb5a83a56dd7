"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the playback collaborator, its adapters, and the
Discord-facing dispatcher, event bridge, and command registrar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import discord

    from ..application.interfaces.playback_controller import PlaybackController
    from ..application.interfaces.track_source import LyricsProvider, TrackSource
    from ..domain.shared.service_state import ReadinessGate
    from ..infrastructure.discord.dispatcher import InteractionDispatcher
    from ..infrastructure.discord.event_bridge import PlaybackEventBridge
    from ..infrastructure.discord.guards.voice_guards import VoiceGuard
    from ..infrastructure.discord.registration import CommandRegistrar
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: discord.Client | None = None

    # Process state
    _readiness: ReadinessGate | None = None

    # Playback collaborator and adapters
    _track_source: TrackSource | None = None
    _lyrics_provider: LyricsProvider | None = None
    _playback_controller: PlaybackController | None = None

    # Discord-facing components
    _voice_guard: VoiceGuard | None = None
    _dispatcher: InteractionDispatcher | None = None
    _event_bridge: PlaybackEventBridge | None = None
    _registrar: CommandRegistrar | None = None

    def set_bot(self, bot: discord.Client) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> discord.Client:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    @property
    def readiness(self) -> ReadinessGate:
        if self._readiness is None:
            from ..domain.shared.service_state import ReadinessGate

            self._readiness = ReadinessGate()
        return self._readiness

    # === Adapters ===

    @property
    def track_source(self) -> TrackSource:
        if self._track_source is None:
            from ..infrastructure.audio.ytdlp_source import YtDlpTrackSource

            self._track_source = YtDlpTrackSource(self.settings.playback)
        return self._track_source

    @property
    def lyrics_provider(self) -> LyricsProvider:
        if self._lyrics_provider is None:
            from ..infrastructure.lyrics.lrclib_client import LrclibLyricsClient

            self._lyrics_provider = LrclibLyricsClient(self.settings.lyrics)
        return self._lyrics_provider

    @property
    def playback_controller(self) -> PlaybackController:
        """Get the playback collaborator."""
        if self._playback_controller is None:
            from ..infrastructure.playback.memory_controller import InMemoryPlaybackController

            self._playback_controller = InMemoryPlaybackController(
                self.track_source,
                self.lyrics_provider,
                self.settings.playback,
            )
        return self._playback_controller

    # === Discord ===

    @property
    def voice_guard(self) -> VoiceGuard:
        if self._voice_guard is None:
            from ..infrastructure.discord.guards.voice_guards import VoiceGuard

            self._voice_guard = VoiceGuard()
        return self._voice_guard

    @property
    def dispatcher(self) -> InteractionDispatcher:
        if self._dispatcher is None:
            from ..infrastructure.discord.dispatcher import InteractionDispatcher

            self._dispatcher = InteractionDispatcher(
                self.playback_controller,
                self.readiness,
                guard=self.voice_guard,
                settings=self.settings.playback,
            )
        return self._dispatcher

    @property
    def event_bridge(self) -> PlaybackEventBridge:
        if self._event_bridge is None:
            from ..infrastructure.discord.event_bridge import PlaybackEventBridge

            self._event_bridge = PlaybackEventBridge(self.bot, self.playback_controller.events)
        return self._event_bridge

    @property
    def registrar(self) -> CommandRegistrar:
        if self._registrar is None:
            from ..infrastructure.discord.registration import CommandRegistrar

            self._registrar = CommandRegistrar(self.bot.http, self.settings.discord)
        return self._registrar

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize the playback collaborator and start mirroring its events."""
        await self.playback_controller.initialize()
        self.event_bridge.start()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        try:
            if self._event_bridge is not None:
                self._event_bridge.stop()
        except Exception as exc:
            logger.warning("Failed stopping playback event bridge: %r", exc)

        if self._playback_controller is not None:
            await self._playback_controller.shutdown()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
