"""Utility functions for formatting Discord messages."""

from __future__ import annotations

import math
from collections.abc import Sequence
from functools import cache

from discord_music_bridge.domain.shared.messages import DiscordUIMessages, EmojiConstants

PROGRESS_BAR_LENGTH = 15

# Discord allows 4096 characters in an embed description; leave room for headers
LIST_BODY_BUDGET = 3500


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def filled_cells(progress: float, length: int = PROGRESS_BAR_LENGTH) -> int:
    """Number of filled cells for *progress* percent, rounding half up."""
    progress = min(100.0, max(0.0, progress))
    return min(length, math.floor(progress / 100 * length + 0.5))


def progress_bar(progress: float, length: int = PROGRESS_BAR_LENGTH) -> str:
    filled = filled_cells(progress, length)
    return EmojiConstants.PROGRESS_FILLED * filled + EmojiConstants.PROGRESS_EMPTY * (
        length - filled
    )


def join_within_budget(lines: Sequence[str], budget: int = LIST_BODY_BUDGET) -> str:
    """Join *lines* with newlines, stopping before the body exceeds *budget*.

    When lines are dropped a "+N more" line is appended; the suffix is not
    counted against the budget.
    """
    shown: list[str] = []
    used = 0
    for line in lines:
        cost = len(line) + (1 if shown else 0)
        if used + cost > budget:
            break
        shown.append(line)
        used += cost

    hidden = len(lines) - len(shown)
    if hidden > 0:
        shown.append(DiscordUIMessages.QUEUE_MORE_SUFFIX.format(count=hidden))
    return "\n".join(shown)
