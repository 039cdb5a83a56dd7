"""Slash-command catalog."""

from discord_music_bridge.domain.commands.catalog import (
    CATALOG,
    CommandName,
    CommandSpec,
    ParameterChoice,
    ParameterKind,
    ParameterSpec,
    build_payload,
    get_command_spec,
    lookup_command,
)

__all__ = [
    "CATALOG",
    "CommandName",
    "CommandSpec",
    "ParameterChoice",
    "ParameterKind",
    "ParameterSpec",
    "build_payload",
    "get_command_spec",
    "lookup_command",
]
