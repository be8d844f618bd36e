"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the rules engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import pytest

from dnd_rules.engine.dice import DiceRoller


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedRoller(DiceRoller):
    """Roller that returns predetermined die results.

    Values are returned in order regardless of die size. Once the script
    runs out, the last value repeats.
    """

    def __init__(self, values: Sequence[int]) -> None:
        super().__init__(seed=0)
        self._values = list(values)
        self._index = 0
        self.sides_rolled: list[int] = []

    def roll_die(self, sides: int) -> int:
        self.sides_rolled.append(sides)
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        return value


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_rules.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_RULES_DEBUG": "true",
        "DND_RULES_LOG_LEVEL": "DEBUG",
        "DND_RULES_DICE__SEED": "7",
        "DND_RULES_COMBAT__DR_RESET_TURNS": "5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    return DiceRoller(seed=42)


@pytest.fixture
def scripted_roller() -> Callable[..., ScriptedRoller]:
    """Factory for rollers that return forced values.

    Returns:
        Callable taking die values and returning a ScriptedRoller.
    """

    def factory(*values: int) -> ScriptedRoller:
        return ScriptedRoller(values)

    return factory


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_abilities() -> dict[str, int]:
    """Provide sample character ability scores.

    Returns:
        Dictionary of ability scores.
    """
    return {
        "strength": 16,
        "dexterity": 14,
        "constitution": 15,
        "intelligence": 10,
        "wisdom": 12,
        "charisma": 8,
    }


@pytest.fixture
def sample_character_data(sample_abilities: dict[str, int]) -> dict[str, Any]:
    """Provide a stored fighter record in the orchestrator's camelCase shape.

    Returns:
        Dictionary of character data.
    """
    return {
        "name": "Test Fighter",
        "abilities": sample_abilities,
        "class": "Fighter",
        "level": 5,
        "proficiencyBonus": 3,
        "ac": 16,
        "maxHp": 44,
        "speed": 30,
    }


@pytest.fixture
def sample_wizard_data() -> dict[str, Any]:
    """Provide a stored wizard record.

    Returns:
        Dictionary of character data.
    """
    return {
        "name": "Test Wizard",
        "abilities": {
            "strength": 8,
            "dexterity": 14,
            "constitution": 12,
            "intelligence": 17,
            "wisdom": 12,
            "charisma": 10,
        },
        "class": "wizard",
        "level": 5,
        "proficiencyBonus": 3,
        "ac": 12,
        "maxHp": 27,
        "speed": 30,
    }


@pytest.fixture
def sample_items() -> list[dict[str, Any]]:
    """Provide equipped items with stats and special attributes.

    Returns:
        List of item dictionaries.
    """
    return [
        {
            "name": "Longsword +1",
            "stats": {"damage": "1d8+1 slashing", "strength": 1},
            "specialAttributes": {"damageBonus": 1, "critChance": 5},
        },
        {
            "name": "Chain Mail",
            "stats": {"ac": 6, "speed": -5},
        },
        {
            "name": "Amulet of Health",
            "stats": {"hp": 10, "constitution": 2},
            "specialAttributes": {"xpBonus": 10, "luck": 2},
        },
    ]
