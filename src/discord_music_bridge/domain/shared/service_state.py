"""Process readiness: commands are refused until startup has finished."""

from __future__ import annotations

import logging
from enum import StrEnum

from discord_music_bridge.domain.shared.exceptions import BotError
from discord_music_bridge.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


class ServiceState(StrEnum):
    INITIALIZING = "initializing"
    READY = "ready"


class ReadinessGate:
    """Holds the process-wide service state.

    Starts in ``INITIALIZING`` and moves to ``READY`` exactly once, after the
    playback collaborator is initialized and the command catalog is registered.
    The state is never reset.
    """

    def __init__(self) -> None:
        self._state = ServiceState.INITIALIZING

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ServiceState.READY

    def open(self) -> None:
        if self._state is ServiceState.READY:
            raise BotError(ErrorMessages.ALREADY_READY, code="ALREADY_READY")
        self._state = ServiceState.READY
        logger.info(LogTemplates.SERVICE_READY)
