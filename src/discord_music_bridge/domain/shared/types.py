"""Reusable Pydantic Annotated types for domain-wide validation."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

VolumeLevel = Annotated[int, Field(ge=0, le=100)]
"""Player volume as a percentage."""

DurationMs = Annotated[int, Field(ge=0)]
"""Track length or position in milliseconds."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

CommandNameStr = Annotated[str, Field(min_length=1, max_length=32, pattern=r"^[a-z0-9_-]+$")]
"""Discord slash-command or option name."""

DescriptionStr = Annotated[str, Field(min_length=1, max_length=100)]
"""Discord slash-command or option description."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""
