"""Console log formatting and process-level exception survival hooks."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from types import TracebackType
from typing import Any

from discord_music_bridge.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter that applies ANSI color codes to the levelname field.

    Colors are disabled when the ``NO_COLOR`` environment variable is set or
    when the output stream is not a TTY.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, *args: Any, stream: Any = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stderr
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self._use_color():
            color = self.COLORS.get(record.levelno, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def log_uncaught_exception(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    """``sys.excepthook`` replacement; Ctrl-C keeps the default behaviour."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical(LogTemplates.UNCAUGHT_EXCEPTION, exc, exc_info=(exc_type, exc, tb))


def log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Event-loop exception handler: log and keep the loop running."""
    exc = context.get("exception")
    message = context.get("message", "")
    if exc is not None:
        logger.error(
            LogTemplates.UNHANDLED_LOOP_EXCEPTION,
            message or exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.error(LogTemplates.UNHANDLED_LOOP_EXCEPTION, message)


def install_exception_hooks(loop: asyncio.AbstractEventLoop | None = None) -> None:
    sys.excepthook = log_uncaught_exception
    if loop is not None:
        loop.set_exception_handler(log_loop_exception)
