"""Tests for pending-roll models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from dnd_rules.models import (
    Ability,
    AwaitingRoll,
    IdleRoll,
    PendingRollState,
    ResolvedRoll,
    RollSpec,
)


@pytest.fixture
def spec_data() -> dict[str, Any]:
    """Provide a stored roll request.

    Returns:
        Dictionary in the orchestrator's shape.
    """
    return {
        "type": "saving_throw",
        "ability": "wisdom",
        "dc": 15,
        "reason": "Resist the charm",
        "characterId": "char-7",
        "actionContext": "The siren sings",
    }


class TestRollSpec:
    """Tests for RollSpec."""

    def test_aliases(self, spec_data: dict[str, Any]) -> None:
        """camelCase keys populate snake_case fields."""
        spec = RollSpec.model_validate(spec_data)

        assert spec.roll_type == "saving_throw"
        assert spec.ability == Ability.WIS
        assert spec.character_id == "char-7"
        assert spec.action_context == "The siren sings"
        assert spec.stakes is None

    def test_unknown_ability_rejected(self, spec_data: dict[str, Any]) -> None:
        """Ability must be one of the six."""
        spec_data["ability"] = "luck"

        with pytest.raises(ValidationError):
            RollSpec.model_validate(spec_data)


class TestPendingRollState:
    """Tests for the discriminated pending-roll union."""

    adapter = TypeAdapter(PendingRollState)

    def test_idle(self) -> None:
        """The idle state validates from its tag."""
        assert isinstance(self.adapter.validate_python({"state": "idle"}), IdleRoll)

    def test_awaiting(self, spec_data: dict[str, Any]) -> None:
        """Awaiting states carry the spec."""
        state = self.adapter.validate_python({"state": "awaiting_roll", "spec": spec_data})

        assert isinstance(state, AwaitingRoll)
        assert state.spec.dc == 15

    def test_resolved(self, spec_data: dict[str, Any]) -> None:
        """Resolved states carry the outcome."""
        state = self.adapter.validate_python(
            {"state": "resolved", "spec": spec_data, "total": 17, "natural_roll": 14, "success": True}
        )

        assert isinstance(state, ResolvedRoll)
        assert state.success is True

    def test_unknown_state_rejected(self) -> None:
        """Unknown tags are rejected."""
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"state": "rolling"})
