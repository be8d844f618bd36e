"""Tests for ability checks, attacks, damage and saving throws."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from dnd_rules.engine.checks import (
    calculate_modifier,
    make_ability_check,
    make_attack_roll,
    make_saving_throw,
    resolve_roll_type,
    roll_damage,
)
from dnd_rules.engine.dice import DiceRoller
from dnd_rules.models.enums import RollType


Scripted = Callable[..., DiceRoller]


class TestCalculateModifier:
    """Tests for ability score modifiers."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (1, -5),
            (6, -2),
            (8, -1),
            (9, -1),
            (10, 0),
            (11, 0),
            (12, 1),
            (13, 1),
            (14, 2),
            (15, 2),
            (16, 3),
            (18, 4),
            (20, 5),
        ],
    )
    def test_modifier(self, score: int, expected: int) -> None:
        """Test modifier is floor((score - 10) / 2)."""
        assert calculate_modifier(score) == expected


class TestResolveRollType:
    """Tests for combining advantage and disadvantage."""

    @pytest.mark.parametrize(
        ("advantage", "disadvantage", "expected"),
        [
            (False, False, RollType.NORMAL),
            (True, False, RollType.ADVANTAGE),
            (False, True, RollType.DISADVANTAGE),
            (True, True, RollType.NORMAL),
        ],
    )
    def test_roll_type(self, advantage: bool, disadvantage: bool, expected: RollType) -> None:
        """Test that advantage and disadvantage cancel."""
        assert resolve_roll_type(advantage, disadvantage) == expected


class TestAbilityCheck:
    """Tests for ability checks."""

    def test_forced_roll(self, scripted_roller: Scripted) -> None:
        """Test a plain check with score 14 and a forced 15."""
        result = make_ability_check(14, 2, False, False, False, False, roller=scripted_roller(15))

        assert result.roll == 15
        assert result.modifier == 2
        assert result.total == 17
        assert result.natural_roll == 15

    def test_proficient(self, scripted_roller: Scripted) -> None:
        """Test proficiency adds the bonus once."""
        result = make_ability_check(10, 3, is_proficient=True, roller=scripted_roller(11))

        assert result.modifier == 3
        assert result.total == 14

    def test_expertise(self, scripted_roller: Scripted) -> None:
        """Test expertise doubles the proficiency bonus."""
        result = make_ability_check(10, 3, has_expertise=True, roller=scripted_roller(11))

        assert result.modifier == 6
        assert result.total == 17

    def test_advantage_takes_higher(self, scripted_roller: Scripted) -> None:
        """Test advantage keeps the higher of two d20s."""
        result = make_ability_check(10, 2, has_advantage=True, roller=scripted_roller(4, 16))

        assert result.roll == 16
        assert result.rolls == [4, 16]
        assert result.roll_type == RollType.ADVANTAGE

    def test_disadvantage_takes_lower(self, scripted_roller: Scripted) -> None:
        """Test disadvantage keeps the lower of two d20s."""
        result = make_ability_check(10, 2, has_disadvantage=True, roller=scripted_roller(4, 16))

        assert result.roll == 4
        assert result.roll_type == RollType.DISADVANTAGE

    def test_both_cancel(self, scripted_roller: Scripted) -> None:
        """Test advantage plus disadvantage rolls a single d20."""
        result = make_ability_check(
            10, 2, has_advantage=True, has_disadvantage=True, roller=scripted_roller(9, 20)
        )

        assert result.roll == 9
        assert result.rolls == [9]
        assert result.roll_type == RollType.NORMAL


class TestAttackRoll:
    """Tests for attack rolls."""

    def test_hit_when_meeting_ac(self, scripted_roller: Scripted) -> None:
        """Test a total equal to AC hits."""
        result = make_attack_roll(16, 2, 15, roller=scripted_roller(10))

        assert result.modifier == 5
        assert result.total == 15
        assert result.hits is True

    def test_miss_below_ac(self, scripted_roller: Scripted) -> None:
        """Test a total below AC misses."""
        result = make_attack_roll(16, 2, 16, roller=scripted_roller(10))

        assert result.hits is False

    def test_natural_20_always_hits(self, scripted_roller: Scripted) -> None:
        """Test a natural 20 hits regardless of AC."""
        result = make_attack_roll(3, 0, 25, roller=scripted_roller(20))

        assert result.is_critical is True
        assert result.hits is True
        assert result.total < 25

    def test_natural_1_always_misses(self, scripted_roller: Scripted) -> None:
        """Test a natural 1 misses even when the total beats AC."""
        result = make_attack_roll(30, 6, 5, roller=scripted_roller(1))

        assert result.total >= 5
        assert result.is_critical_miss is True
        assert result.hits is False

    def test_target_ac_recorded(self, scripted_roller: Scripted) -> None:
        """Test the result echoes the target AC."""
        assert make_attack_roll(10, 2, 13, roller=scripted_roller(12)).target_ac == 13

    def test_advantage(self, scripted_roller: Scripted) -> None:
        """Test attack advantage keeps the higher roll."""
        result = make_attack_roll(10, 2, 10, has_advantage=True, roller=scripted_roller(20, 3))

        assert result.roll == 20
        assert result.is_critical is True


class TestRollDamage:
    """Tests for damage rolls."""

    def test_normal_damage(self, scripted_roller: Scripted) -> None:
        """Test dice plus modifier."""
        result = roll_damage(2, 6, 3, False, roller=scripted_roller(4, 5))

        assert result.rolls == [4, 5]
        assert result.total == 12

    def test_critical_doubles_dice(self, dice_roller: DiceRoller) -> None:
        """Test a critical rolls twice the dice."""
        result = roll_damage(2, 6, 3, is_critical=True, roller=dice_roller)

        assert len(result.rolls) == 4
        assert result.is_critical is True
        assert result.total == sum(result.rolls) + 3

    def test_critical_does_not_double_modifier(self, scripted_roller: Scripted) -> None:
        """Test the modifier is added once on a critical."""
        result = roll_damage(1, 8, 4, is_critical=True, roller=scripted_roller(1, 1))

        assert result.total == 6

    def test_floored_at_zero(self, scripted_roller: Scripted) -> None:
        """Test negative damage is floored at zero."""
        result = roll_damage(1, 4, -10, False, roller=scripted_roller(1))

        assert result.total == 0


class TestSavingThrow:
    """Tests for saving throws."""

    def test_success_on_meeting_dc(self, scripted_roller: Scripted) -> None:
        """Test a total equal to the DC succeeds."""
        result = make_saving_throw(14, 2, False, 14, roller=scripted_roller(12))

        assert result.total == 14
        assert result.success is True

    def test_failure_below_dc(self, scripted_roller: Scripted) -> None:
        """Test a total below the DC fails."""
        result = make_saving_throw(14, 2, False, 15, roller=scripted_roller(12))

        assert result.success is False

    def test_proficient_save(self, scripted_roller: Scripted) -> None:
        """Test proficiency applies to saves."""
        result = make_saving_throw(10, 3, True, 13, roller=scripted_roller(10))

        assert result.modifier == 3
        assert result.success is True
        assert result.dc == 13
