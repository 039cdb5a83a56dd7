"""Tests for the declarative slash-command catalog and its Discord payload."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from discord_music_bridge.domain.commands.catalog import (
    CATALOG,
    CHAT_INPUT_COMMAND,
    CommandName,
    CommandSpec,
    ParameterKind,
    ParameterSpec,
    _index,
    build_payload,
    get_command_spec,
    lookup_command,
)

VOICE_FREE = {CommandName.QUEUE, CommandName.NOWPLAYING, CommandName.SEARCH, CommandName.LYRICS}


class TestCatalogContents:
    def test_one_entry_per_command_name(self):
        names = [spec.name for spec in CATALOG]

        assert len(names) == len(set(names))
        assert set(names) == set(CommandName)

    def test_voice_requirement_flags(self):
        for spec in CATALOG:
            assert spec.requires_voice is (spec.name not in VOICE_FREE), spec.name

    def test_play_parameters(self):
        spec = get_command_spec(CommandName.PLAY)

        query, source = spec.parameters
        assert query.name == "query" and query.required is True
        assert source.name == "source" and source.required is False
        assert [c.value for c in source.choices] == ["spotify", "soundcloud"]

    def test_volume_is_bounded_integer(self):
        (level,) = get_command_spec(CommandName.VOLUME).parameters

        assert level.kind is ParameterKind.INTEGER
        assert (level.min_value, level.max_value) == (0, 100)

    def test_loop_choices_follow_loop_modes(self):
        (mode,) = get_command_spec(CommandName.LOOP).parameters

        assert [(c.name, c.value) for c in mode.choices] == [
            ("Off", 0),
            ("Current track", 1),
            ("Full queue", 2),
        ]

    def test_move_has_from_and_to(self):
        spec = get_command_spec(CommandName.MOVE)

        assert [p.name for p in spec.parameters] == ["from", "to"]
        assert all(p.required and p.min_value == 1 for p in spec.parameters)

    def test_related_count_is_optional(self):
        (count,) = get_command_spec(CommandName.RELATED).parameters

        assert count.required is False
        assert (count.min_value, count.max_value) == (1, 5)


class TestLookup:
    def test_known_name(self):
        assert lookup_command("nowplaying") is CommandName.NOWPLAYING

    def test_unknown_name(self):
        assert lookup_command("dance") is None

    def test_duplicate_names_rejected(self):
        spec = CommandSpec(name=CommandName.PAUSE, description="Pause")

        with pytest.raises(ValueError, match="pause"):
            _index((spec, spec))


class TestPayload:
    def test_payload_covers_catalog(self):
        payload = build_payload()

        assert [p["name"] for p in payload] == [s.name.value for s in CATALOG]
        assert all(p["type"] == CHAT_INPUT_COMMAND for p in payload)

    def test_option_payload_omits_unset_bounds(self):
        payload = ParameterSpec(name="query", description="Song", required=True).to_payload()

        assert payload == {"type": 3, "name": "query", "description": "Song", "required": True}

    def test_volume_payload_has_bounds(self):
        (option,) = get_command_spec(CommandName.VOLUME).to_payload()["options"]

        assert option["type"] == 4
        assert option["min_value"] == 0
        assert option["max_value"] == 100

    def test_parameter_names_must_be_lowercase(self):
        with pytest.raises(ValidationError):
            ParameterSpec(name="Query", description="Song")
