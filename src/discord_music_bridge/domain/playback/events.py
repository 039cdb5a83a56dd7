"""Playback lifecycle events and the subscription stream that delivers them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from discord_music_bridge.domain.playback.models import Track
from discord_music_bridge.domain.shared.messages import LogTemplates
from discord_music_bridge.domain.shared.types import DiscordSnowflake, NonEmptyStr, NonNegativeInt

logger = logging.getLogger(__name__)


class PlaybackEvent(BaseModel):
    """Base class for all lifecycle events emitted by the playback collaborator."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    guild_id: DiscordSnowflake


class TrackStarted(PlaybackEvent):
    track: Track


class TrackAdded(PlaybackEvent):
    track: Track
    # Upcoming queue length once the track has been added
    queue_length: NonNegativeInt = 0


class TrackEnded(PlaybackEvent):
    track: Track
    reason: str = "finished"


class QueueEnded(PlaybackEvent):
    pass


class QueueCleared(PlaybackEvent):
    track_count: NonNegativeInt = 0


class TrackErrored(PlaybackEvent):
    track: Track
    error: str = ""


class PlayerErrored(PlaybackEvent):
    error: str = ""


class Disconnected(PlaybackEvent):
    pass


EventListener = Callable[[PlaybackEvent], Awaitable[None]]


class Subscription:
    """Handle returned by :meth:`PlaybackEventStream.subscribe`; cancel to stop delivery.

    Each subscription owns a queue drained by a single worker task, so a slow
    listener only delays its own events and never the publisher.
    """

    def __init__(self, stream: PlaybackEventStream, listener: EventListener) -> None:
        self._stream = stream
        self._listener = listener
        self._active = True
        self._queue: asyncio.Queue[PlaybackEvent] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._stream._remove(self)
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
        self._worker = None

    def _enqueue(self, event: PlaybackEvent) -> None:
        self._queue.put_nowait(event)
        if self._worker is None:
            self._worker = asyncio.get_running_loop().create_task(
                self._run(), name=f"playback-events:{self!r}"
            )

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._listener(event)
            except Exception as e:
                logger.exception(LogTemplates.EVENT_LISTENER_FAILED, type(event).__name__, e)
            finally:
                self._queue.task_done()

    async def wait_idle(self) -> None:
        """Wait until every event queued so far has been handled."""
        await self._queue.join()

    def __repr__(self) -> str:
        name = getattr(self._listener, "__qualname__", repr(self._listener))
        return f"<Subscription {name} active={self._active}>"


class PlaybackEventStream:
    """In-process stream of playback events.

    Listeners receive every event published after they subscribe, one at a
    time and in publish order. Publishing only queues the event; a slow or
    failing listener is isolated in its own subscription and never affects
    other listeners or the publisher.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, listener: EventListener) -> Subscription:
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        logger.debug(LogTemplates.EVENT_SUBSCRIBED, subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
            logger.debug(LogTemplates.EVENT_UNSUBSCRIBED, subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def publish(self, event: PlaybackEvent) -> None:
        # No suspension point: a batch published back to back keeps its order
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription._enqueue(event)

    async def drain(self) -> None:
        """Wait until every active listener has handled all events published so far."""
        for subscription in list(self._subscriptions):
            await subscription.wait_idle()

    def clear(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.cancel()
