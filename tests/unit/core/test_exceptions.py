"""Tests for the exception hierarchy."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_rules.core.exceptions import (
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    ResourceError,
    RulesEngineError,
    ValidationError,
)


class TestRulesEngineError:
    """Tests for the base RulesEngineError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = RulesEngineError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = RulesEngineError(
            "Test error",
            details={"key": "value", "count": 42},
        )
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        exc = RulesEngineError("Test", details={"x": 1})
        repr_str = repr(exc)
        assert "RulesEngineError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestGameEngineExceptions:
    """Tests for rules resolution exceptions."""

    def test_dice_roll_error_names_term(self) -> None:
        """Test DiceRollError with expression and offending term."""
        exc = DiceRollError("Invalid dice notation: 0d6", expression="0d6+2", term="0d6")
        assert exc.details["expression"] == "0d6+2"
        assert exc.details["term"] == "0d6"
        assert "term='0d6'" in str(exc)

    def test_invalid_game_state_error(self) -> None:
        """Test InvalidGameStateError with state context."""
        exc = InvalidGameStateError(
            "A roll is already pending",
            current_state="awaiting_roll",
            expected_states=["idle", "resolved"],
        )
        assert exc.details["current_state"] == "awaiting_roll"
        assert exc.details["expected_states"] == ["idle", "resolved"]

    def test_resource_error(self) -> None:
        """Test ResourceError with resource name."""
        exc = ResourceError("Malformed resource pool: ki", resource="ki")
        assert exc.details["resource"] == "ki"

    @pytest.mark.parametrize(
        "exc_class",
        [DiceRollError, InvalidGameStateError, ResourceError],
    )
    def test_inherits_from_game_engine_error(self, exc_class: type[Exception]) -> None:
        """Test rules exceptions share the game engine base."""
        assert issubclass(exc_class, GameEngineError)
        assert issubclass(exc_class, RulesEngineError)


class TestOtherExceptions:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Bad setting", config_key="json_logs")
        assert exc.details["config_key"] == "json_logs"

    def test_validation_error(self) -> None:
        """Test ValidationError with field context."""
        exc = ValidationError("Negative count", field_name="count", invalid_value=-1)
        assert exc.details["field_name"] == "count"
        assert exc.details["invalid_value"] == -1

    def test_validation_error_keeps_zero(self) -> None:
        """Test that a falsy invalid value is still recorded."""
        exc = ValidationError("Bad", field_name="level", invalid_value=0)
        assert exc.details["invalid_value"] == 0

    def test_catch_all(self) -> None:
        """Test catching every engine error through the base class."""
        with pytest.raises(RulesEngineError):
            raise DiceRollError("boom")

    @pytest.mark.parametrize(
        "factory",
        [
            lambda details: ConfigurationError("Bad", config_key="seed", details=details),
            lambda details: ValidationError("Bad", field_name="ac", details=details),
            lambda details: DiceRollError("Bad", term="0d6", details=details),
            lambda details: InvalidGameStateError("Bad", current_state="idle", details=details),
            lambda details: ResourceError("Bad", resource="ki", details=details),
        ],
    )
    def test_caller_details_not_mutated(self, factory: Any) -> None:
        """Test context keys are added to a copy of the caller's details."""
        details = {"item": "Longsword"}

        exc = factory(details)

        assert details == {"item": "Longsword"}
        assert exc.details["item"] == "Longsword"
        assert len(exc.details) == 2
