"""Declarative slash-command catalog.

The catalog is pure data: names, descriptions, and typed parameter schemas.
It is registered with Discord once at startup and is the single source of
truth for which commands exist and which ones need the invoker in voice.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from discord_music_bridge.domain.playback.models import LoopMode, TrackProvider
from discord_music_bridge.domain.shared.messages import ErrorMessages
from discord_music_bridge.domain.shared.types import CommandNameStr, DescriptionStr

# Discord application command type for slash commands
CHAT_INPUT_COMMAND = 1


class CommandName(StrEnum):
    """Every command the bot answers to. One member per catalog entry."""

    PLAY = "play"
    PAUSE = "pause"
    RESUME = "resume"
    SKIP = "skip"
    STOP = "stop"
    VOLUME = "volume"
    QUEUE = "queue"
    NOWPLAYING = "nowplaying"
    LOOP = "loop"
    SHUFFLE = "shuffle"
    SEARCH = "search"
    REMOVE = "remove"
    LYRICS = "lyrics"
    JOIN = "join"
    LEAVE = "leave"
    RELATED = "related"
    MOVE = "move"


class ParameterKind(IntEnum):
    """Option kinds, valued with Discord's application-command option type."""

    STRING = 3
    INTEGER = 4


class ParameterChoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str | int


class ParameterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: CommandNameStr
    description: DescriptionStr
    kind: ParameterKind = ParameterKind.STRING
    required: bool = False
    min_value: int | None = None
    max_value: int | None = None
    choices: tuple[ParameterChoice, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": int(self.kind),
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }
        if self.min_value is not None:
            payload["min_value"] = self.min_value
        if self.max_value is not None:
            payload["max_value"] = self.max_value
        if self.choices:
            payload["choices"] = [c.model_dump() for c in self.choices]
        return payload


class CommandSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: CommandName
    description: DescriptionStr
    parameters: tuple[ParameterSpec, ...] = ()
    requires_voice: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": CHAT_INPUT_COMMAND,
            "name": self.name.value,
            "description": self.description,
            "options": [p.to_payload() for p in self.parameters],
        }


_SOURCE_CHOICES = (
    ParameterChoice(name="Spotify", value=TrackProvider.SPOTIFY.value),
    ParameterChoice(name="SoundCloud", value=TrackProvider.SOUNDCLOUD.value),
)


def _source_param() -> ParameterSpec:
    return ParameterSpec(
        name="source",
        description="Where to search (defaults to YouTube)",
        choices=_SOURCE_CHOICES,
    )


def _position_param(name: str, description: str) -> ParameterSpec:
    return ParameterSpec(
        name=name,
        description=description,
        kind=ParameterKind.INTEGER,
        required=True,
        min_value=1,
    )


CATALOG: tuple[CommandSpec, ...] = (
    CommandSpec(
        name=CommandName.PLAY,
        description="Play a song or add it to the queue",
        parameters=(
            ParameterSpec(name="query", description="Song name or URL", required=True),
            _source_param(),
        ),
        requires_voice=True,
    ),
    CommandSpec(name=CommandName.PAUSE, description="Pause the current song", requires_voice=True),
    CommandSpec(name=CommandName.RESUME, description="Resume the paused song", requires_voice=True),
    CommandSpec(name=CommandName.SKIP, description="Skip to the next song", requires_voice=True),
    CommandSpec(
        name=CommandName.STOP,
        description="Stop the music and clear the queue",
        requires_voice=True,
    ),
    CommandSpec(
        name=CommandName.VOLUME,
        description="Adjust the volume",
        parameters=(
            ParameterSpec(
                name="level",
                description="Volume (0-100)",
                kind=ParameterKind.INTEGER,
                required=True,
                min_value=0,
                max_value=100,
            ),
        ),
        requires_voice=True,
    ),
    CommandSpec(name=CommandName.QUEUE, description="Show the music queue"),
    CommandSpec(name=CommandName.NOWPLAYING, description="Show the current song"),
    CommandSpec(
        name=CommandName.LOOP,
        description="Set loop mode",
        parameters=(
            ParameterSpec(
                name="mode",
                description="Loop mode",
                kind=ParameterKind.INTEGER,
                required=True,
                choices=tuple(
                    ParameterChoice(name=mode.label, value=mode.value) for mode in LoopMode
                ),
            ),
        ),
        requires_voice=True,
    ),
    CommandSpec(name=CommandName.SHUFFLE, description="Shuffle the queue", requires_voice=True),
    CommandSpec(
        name=CommandName.SEARCH,
        description="Search for songs without queueing them",
        parameters=(
            ParameterSpec(name="query", description="What to search for", required=True),
            _source_param(),
        ),
    ),
    CommandSpec(
        name=CommandName.REMOVE,
        description="Remove a song from the queue",
        parameters=(_position_param("position", "Position in queue (1-based)"),),
        requires_voice=True,
    ),
    CommandSpec(
        name=CommandName.LYRICS,
        description="Show lyrics for the current or a given song",
        parameters=(
            ParameterSpec(name="query", description="Song name (defaults to the current song)"),
        ),
    ),
    CommandSpec(name=CommandName.JOIN, description="Join your voice channel", requires_voice=True),
    CommandSpec(
        name=CommandName.LEAVE,
        description="Leave the voice channel",
        requires_voice=True,
    ),
    CommandSpec(
        name=CommandName.RELATED,
        description="Queue songs related to the current one",
        parameters=(
            ParameterSpec(
                name="count",
                description="How many songs to add (1-5, default 3)",
                kind=ParameterKind.INTEGER,
                min_value=1,
                max_value=5,
            ),
        ),
        requires_voice=True,
    ),
    CommandSpec(
        name=CommandName.MOVE,
        description="Move a song to another position in the queue",
        parameters=(
            _position_param("from", "Current position (1-based)"),
            _position_param("to", "New position (1-based)"),
        ),
        requires_voice=True,
    ),
)


def _index(catalog: tuple[CommandSpec, ...]) -> dict[CommandName, CommandSpec]:
    index: dict[CommandName, CommandSpec] = {}
    for spec in catalog:
        if spec.name in index:
            raise ValueError(ErrorMessages.DUPLICATE_COMMAND.format(name=spec.name.value))
        index[spec.name] = spec
    return index


_BY_NAME = _index(CATALOG)


def get_command_spec(name: CommandName) -> CommandSpec:
    return _BY_NAME[name]


def lookup_command(name: str) -> CommandName | None:
    """Resolve a raw command name from Discord; None when it is not in the catalog."""
    try:
        return CommandName(name)
    except ValueError:
        return None


def build_payload(catalog: tuple[CommandSpec, ...] = CATALOG) -> list[dict[str, Any]]:
    return [spec.to_payload() for spec in catalog]
