"""Mirrors playback lifecycle events into Discord channel notices and log lines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from discord_music_bridge.domain.playback.events import (
    Disconnected,
    PlaybackEvent,
    PlayerErrored,
    QueueCleared,
    QueueEnded,
    Subscription,
    TrackAdded,
    TrackEnded,
    TrackErrored,
    TrackStarted,
)
from discord_music_bridge.domain.shared.exceptions import SendFailure
from discord_music_bridge.domain.shared.messages import LogTemplates
from discord_music_bridge.infrastructure.discord.renderer import (
    RenderedMessage,
    render_track_added,
    render_track_error,
    render_track_started,
    to_embed,
)

if TYPE_CHECKING:
    from ...domain.playback.events import PlaybackEventStream

logger = logging.getLogger(__name__)


class PlaybackEventBridge:
    """Subscribes to a playback event stream and announces events in text channels.

    Notices go to the text channel recorded on the track. Delivery problems are
    logged and never reach the event stream.
    """

    def __init__(self, client: discord.Client, events: PlaybackEventStream) -> None:
        self._client = client
        self._events = events
        self._subscription: Subscription | None = None

    @property
    def is_running(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> None:
        if self.is_running:
            return
        self._subscription = self._events.subscribe(self.handle)
        logger.info(LogTemplates.BRIDGE_STARTED)

    def stop(self) -> None:
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        logger.info(LogTemplates.BRIDGE_STOPPED)

    async def handle(self, event: PlaybackEvent) -> None:
        match event:
            case TrackStarted(track=track):
                await self._announce(event, track.text_channel_id, render_track_started(track))
            case TrackAdded(track=track, queue_length=queue_length):
                # A lone added track starts immediately and is announced as started instead
                if track.auto_added or queue_length <= 1:
                    return
                await self._announce(
                    event, track.text_channel_id, render_track_added(track, queue_length)
                )
            case TrackErrored(track=track, error=error):
                logger.warning(LogTemplates.BRIDGE_TRACK_ERROR, event.guild_id, track.title, error)
                await self._announce(event, track.text_channel_id, render_track_error(track, error))
            case TrackEnded(track=track, reason=reason):
                logger.debug(LogTemplates.BRIDGE_TRACK_ENDED, event.guild_id, track.title, reason)
            case QueueEnded():
                logger.info(LogTemplates.BRIDGE_QUEUE_ENDED, event.guild_id)
            case QueueCleared(track_count=track_count):
                logger.info(LogTemplates.BRIDGE_QUEUE_CLEARED, event.guild_id, track_count)
            case Disconnected():
                logger.info(LogTemplates.BRIDGE_DISCONNECTED, event.guild_id)
            case PlayerErrored(error=error):
                logger.error(LogTemplates.BRIDGE_PLAYER_ERROR, event.guild_id, error)
            case _:
                logger.debug("Ignoring unhandled playback event %s", type(event).__name__)

    async def _announce(
        self, event: PlaybackEvent, channel_id: int | None, message: RenderedMessage
    ) -> None:
        kind = type(event).__name__
        try:
            await self._send(channel_id, message, kind=kind, guild_id=event.guild_id)
        except SendFailure as e:
            logger.warning(LogTemplates.BRIDGE_SEND_FAILED, kind, e.message)
        except Exception as e:
            logger.exception(LogTemplates.BRIDGE_SEND_FAILED, kind, e)

    async def _send(
        self, channel_id: int | None, message: RenderedMessage, *, kind: str, guild_id: int
    ) -> None:
        channel = self._client.get_channel(channel_id) if channel_id is not None else None
        if not isinstance(channel, discord.abc.Messageable):
            logger.debug(LogTemplates.BRIDGE_NO_CHANNEL, kind, guild_id)
            return

        try:
            await channel.send(embed=to_embed(message))
        except discord.HTTPException as e:
            raise SendFailure(channel_id, f"{e.status} {e.text}".strip()) from e
