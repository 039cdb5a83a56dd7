"""Routes slash-command interactions to their handlers.

The routing table is an exhaustive ``match`` over :class:`CommandName`, so a
command added to the catalog without a handler is a type error rather than a
silent no-op. Every handler runs inside one catch boundary that turns any
failure into a single user-visible error message.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, assert_never

from discord_music_bridge.domain.commands.catalog import (
    CommandName,
    get_command_spec,
    lookup_command,
)
from discord_music_bridge.domain.shared.exceptions import CollaboratorError, PreconditionError
from discord_music_bridge.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_music_bridge.infrastructure.discord.guards.voice_guards import VoiceGuard
from discord_music_bridge.infrastructure.discord.handlers import (
    LibraryHandlers,
    PlaybackHandlers,
    QueueHandlers,
    VoiceHandlers,
)
from discord_music_bridge.infrastructure.discord.interaction import InteractionContext, ReplyState
from discord_music_bridge.infrastructure.discord.renderer import render_error, render_notice

if TYPE_CHECKING:
    from ...application.interfaces.playback_controller import PlaybackController
    from ...config.settings import PlaybackSettings
    from ...domain.shared.service_state import ReadinessGate

logger = logging.getLogger(__name__)

Handler = Callable[[InteractionContext], Awaitable[None]]


def describe_failure(error: Exception) -> str:
    """User-facing text for a handler failure."""
    if isinstance(error, (CollaboratorError, PreconditionError)):
        return error.message
    return DiscordUIMessages.ERROR_OCCURRED.format(error=error)


class InteractionDispatcher:
    def __init__(
        self,
        controller: PlaybackController,
        readiness: ReadinessGate,
        *,
        guard: VoiceGuard | None = None,
        settings: PlaybackSettings | None = None,
    ) -> None:
        self._readiness = readiness
        self._guard = guard or VoiceGuard()
        self._playback = PlaybackHandlers(controller)
        self._queue = QueueHandlers(controller)
        self._library = LibraryHandlers(controller, settings)
        self._voice = VoiceHandlers(controller)

    def handler_for(self, name: CommandName) -> Handler:
        match name:
            case CommandName.PLAY:
                return self._playback.play
            case CommandName.PAUSE:
                return self._playback.pause
            case CommandName.RESUME:
                return self._playback.resume
            case CommandName.SKIP:
                return self._playback.skip
            case CommandName.STOP:
                return self._playback.stop
            case CommandName.VOLUME:
                return self._playback.volume
            case CommandName.NOWPLAYING:
                return self._playback.nowplaying
            case CommandName.QUEUE:
                return self._queue.queue
            case CommandName.LOOP:
                return self._queue.loop
            case CommandName.SHUFFLE:
                return self._queue.shuffle
            case CommandName.REMOVE:
                return self._queue.remove
            case CommandName.MOVE:
                return self._queue.move
            case CommandName.RELATED:
                return self._queue.related
            case CommandName.SEARCH:
                return self._library.search
            case CommandName.LYRICS:
                return self._library.lyrics
            case CommandName.JOIN:
                return self._voice.join
            case CommandName.LEAVE:
                return self._voice.leave
            case _:
                assert_never(name)

    async def dispatch(self, ctx: InteractionContext) -> None:
        if not self._readiness.is_ready:
            logger.info(LogTemplates.DISPATCH_NOT_READY, ctx.command_name, ctx.user_id)
            try:
                await ctx.reply(
                    render_notice(DiscordUIMessages.STATE_INITIALIZING), ephemeral=True
                )
            except Exception as e:
                logger.warning(LogTemplates.DISPATCH_ERROR_REPLY_FAILED, ctx.command_name, e)
            return

        name = lookup_command(ctx.command_name)
        if name is None:
            logger.debug(LogTemplates.DISPATCH_UNKNOWN_COMMAND, ctx.command_name)
            return

        logger.debug(LogTemplates.DISPATCH_COMMAND, name.value, ctx.guild_id, ctx.user_id)
        try:
            if get_command_spec(name).requires_voice and not await self._guard.check(ctx):
                return
            await self.handler_for(name)(ctx)
        except Exception as e:
            await self._report_failure(ctx, name, e)

    async def _report_failure(
        self, ctx: InteractionContext, name: CommandName, error: Exception
    ) -> None:
        if isinstance(error, (CollaboratorError, PreconditionError)):
            logger.info(LogTemplates.DISPATCH_HANDLER_FAILED, name.value, error)
        else:
            logger.exception(LogTemplates.DISPATCH_HANDLER_FAILED, name.value, error)

        message = render_error(describe_failure(error))
        try:
            match ctx.state:
                case ReplyState.UNACKNOWLEDGED:
                    await ctx.reply(message, ephemeral=True)
                case ReplyState.DEFERRED:
                    await ctx.edit_reply(message)
                case ReplyState.REPLIED:
                    pass
        except Exception as e:
            logger.warning(LogTemplates.DISPATCH_ERROR_REPLY_FAILED, name.value, e)
