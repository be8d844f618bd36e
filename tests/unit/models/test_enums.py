"""Tests for enumeration parsing."""

from __future__ import annotations

import pytest

from dnd_rules.models import Ability, CharacterClass, ConditionName


class TestCharacterClassParse:
    """Tests for CharacterClass.parse."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Fighter", CharacterClass.FIGHTER),
            ("  WIZARD ", CharacterClass.WIZARD),
            ("warrior", CharacterClass.FIGHTER),
            ("Mage", CharacterClass.WIZARD),
            ("scholar", CharacterClass.WIZARD),
            (CharacterClass.MONK, CharacterClass.MONK),
        ],
    )
    def test_known(self, raw: str, expected: CharacterClass) -> None:
        """Names and aliases normalize case-insensitively."""
        assert CharacterClass.parse(raw) == expected

    @pytest.mark.parametrize("raw", ["artificer", "", None])
    def test_unknown(self, raw: str | None) -> None:
        """Unknown or missing names parse to None."""
        assert CharacterClass.parse(raw) is None


class TestConditionNameParse:
    """Tests for ConditionName.parse."""

    def test_case_insensitive(self) -> None:
        """Condition names ignore case."""
        assert ConditionName.parse("Paralyzed") == ConditionName.PARALYZED

    def test_unknown(self) -> None:
        """Unknown names parse to None."""
        assert ConditionName.parse("hexed") is None

    def test_standard(self) -> None:
        """Only the fourteen 5E conditions are standard."""
        assert ConditionName.PRONE.is_standard
        assert not ConditionName.BURNING.is_standard


class TestAbility:
    """Tests for Ability."""

    def test_names(self) -> None:
        """Abilities expose full names and abbreviations."""
        assert Ability.STR.full_name == "Strength"
        assert Ability.WIS.abbreviation == "WIS"
