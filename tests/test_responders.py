# tests/test_responders.py
"""Tests for responder identities and the registry."""

import pytest

from chuk_ai_agent_orchestrator.exceptions import UnknownResponderTypeError
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.responders import (
    DEFAULT_RESPONDERS,
    ENTERTAINMENT_ROSTER,
    ResponderConfig,
    ResponderRegistry,
    parse_responder,
)


class TestParseResponder:
    def test_enum_passthrough(self):
        assert parse_responder(ResponderType.GIF) is ResponderType.GIF

    def test_string(self):
        assert parse_responder(" Hold_Agent ") == ResponderType.HOLD_AGENT

    @pytest.mark.parametrize("value", ["dad_joke", "", None, 42])
    def test_unknown_rejected(self, value):
        with pytest.raises(UnknownResponderTypeError):
            parse_responder(value)

    def test_unknown_is_value_error(self):
        with pytest.raises(ValueError):
            parse_responder("nope")


class TestResponderRegistry:
    def test_default_covers_every_responder(self):
        registry = ResponderRegistry()
        assert len(registry) == len(ResponderType)
        assert set(registry.types()) == set(ResponderType)

    def test_get_by_string(self):
        registry = ResponderRegistry()
        assert registry.get("technical").temperature == 0.3

    def test_get_unknown_fails(self):
        with pytest.raises(UnknownResponderTypeError):
            ResponderRegistry().get("astrologer")

    def test_get_unconfigured_fails(self):
        registry = ResponderRegistry({"general": DEFAULT_RESPONDERS[ResponderType.GENERAL]})
        with pytest.raises(UnknownResponderTypeError):
            registry.get(ResponderType.JOKE)
        assert ResponderType.JOKE not in registry
        assert "general" in registry

    def test_bad_key_rejected_at_construction(self):
        with pytest.raises(UnknownResponderTypeError):
            ResponderRegistry({"astrologer": DEFAULT_RESPONDERS[ResponderType.GENERAL]})

    def test_mismatched_config_rejected(self):
        with pytest.raises(ValueError):
            ResponderRegistry({ResponderType.JOKE: DEFAULT_RESPONDERS[ResponderType.TRIVIA]})

    def test_display_name(self):
        assert ResponderRegistry().display_name(ResponderType.HOLD_AGENT) == "Hold Agent"

    def test_contains_tolerates_garbage(self):
        assert object() not in ResponderRegistry()


class TestRoster:
    def test_roster_is_entertainment_only(self):
        assert ResponderType.HOLD_AGENT not in ENTERTAINMENT_ROSTER
        assert ResponderType.TECHNICAL not in ENTERTAINMENT_ROSTER
        assert len(ENTERTAINMENT_ROSTER) == 9

    def test_config_validation(self):
        with pytest.raises(ValueError):
            ResponderConfig(
                type=ResponderType.GENERAL,
                name="x",
                description="x",
                system_prompt="x",
                temperature=3.0,
            )
