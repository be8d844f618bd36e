"""Tests for equipment bonuses and derived stats."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_rules.core.exceptions import ValidationError
from dnd_rules.engine.dice import parse_dice_string, validate_dice_string
from dnd_rules.engine.stats import (
    clamp_hp,
    clamp_percentage,
    compute_derived_stats,
    compute_equipment_bonuses,
    get_npc_attack_bonus,
    get_npc_damage_dice,
    get_npc_effective_ac,
    primary_ability_for_class,
)
from dnd_rules.models.character import CharacterRecord, EquipmentBonusSet, EquippedItem
from dnd_rules.models.enums import Ability


class TestEquipmentBonuses:
    """Tests for bonus aggregation."""

    def test_empty_is_zero(self) -> None:
        """Test no equipment yields the all-zero bonus set."""
        assert compute_equipment_bonuses([]) == EquipmentBonusSet()

    def test_sums_items(self, sample_items: list[dict[str, Any]]) -> None:
        """Test stats and special attributes sum across items."""
        bonuses = compute_equipment_bonuses(sample_items)

        assert bonuses.ac == 6
        assert bonuses.hp == 10
        assert bonuses.speed == -5
        assert bonuses.strength == 1
        assert bonuses.constitution == 2
        assert bonuses.damage_bonus == 1
        assert bonuses.crit_chance == 5
        assert bonuses.xp_bonus == 10

    def test_unnamed_special_attributes(self, sample_items: list[dict[str, Any]]) -> None:
        """Test special attributes without a field land in special."""
        assert compute_equipment_bonuses(sample_items).special == {"luck": 2}

    def test_non_numeric_stats_ignored(self) -> None:
        """Test dice strings and flags in stats do not contribute."""
        item = EquippedItem(stats={"damage": "1d8", "ac": 1, "magical": True})

        bonuses = compute_equipment_bonuses([item])

        assert bonuses.ac == 1
        assert bonuses.strength == 0

    def test_model_and_mapping_mix(self) -> None:
        """Test items may be models or raw mappings."""
        items = [EquippedItem(stats={"ac": 2}), {"stats": {"ac": 1}}]

        assert compute_equipment_bonuses(items).ac == 3

    def test_fractional_whole_number_stat_rejected(self) -> None:
        """Test a fractional speed or AC stat is rejected rather than truncated."""
        with pytest.raises(ValidationError) as exc_info:
            compute_equipment_bonuses([{"name": "Boots", "stats": {"speed": 2.5}}])

        assert exc_info.value.details["field_name"] == "speed"
        assert exc_info.value.details["item"] == "Boots"

    def test_integral_float_stat_accepted(self) -> None:
        """Test whole-number floats count as integers."""
        assert compute_equipment_bonuses([{"stats": {"ac": 2.0}}]).ac == 2


class TestPrimaryAbility:
    """Tests for the attack ability of each class."""

    @pytest.mark.parametrize(
        ("class_name", "ability"),
        [
            ("fighter", Ability.STR),
            ("Warrior", Ability.STR),
            ("barbarian", Ability.STR),
            ("rogue", Ability.DEX),
            ("ranger", Ability.DEX),
            ("monk", Ability.DEX),
            ("wizard", Ability.INT),
            ("cleric", Ability.WIS),
            ("paladin", Ability.CHA),
            ("bard", Ability.CHA),
            ("pirate", Ability.STR),
            ("", Ability.STR),
        ],
    )
    def test_primary_ability(self, class_name: str, ability: Ability) -> None:
        """Test finesse, caster and martial classes."""
        assert primary_ability_for_class(class_name) == ability


class TestDerivedStats:
    """Tests for derived stat computation."""

    def test_no_equipment_reproduces_base(self, sample_character_data: dict[str, Any]) -> None:
        """Test zero bonuses leave base stats unchanged."""
        character = CharacterRecord.model_validate(sample_character_data)

        stats = compute_derived_stats(character, compute_equipment_bonuses([]))

        assert stats.effective_ac == character.ac
        assert stats.effective_max_hp == character.max_hp
        assert stats.effective_speed == character.speed
        assert stats.effective_abilities == character.abilities

    def test_fighter_with_equipment(
        self,
        sample_character_data: dict[str, Any],
        sample_items: list[dict[str, Any]],
    ) -> None:
        """Test a fighter's stats with equipment."""
        bonuses = compute_equipment_bonuses(sample_items)

        stats = compute_derived_stats(sample_character_data, bonuses)

        assert stats.effective_ac == 22
        assert stats.effective_max_hp == 54
        assert stats.effective_speed == 25
        assert stats.effective_abilities.strength == 17
        assert stats.ability_modifiers[Ability.STR] == 3
        assert stats.ability_modifiers[Ability.CON] == 3
        assert stats.attack_bonus == 6
        assert stats.spell_save_dc is None
        assert stats.equipment_bonuses == bonuses

    def test_wizard_spell_save_dc(self, sample_wizard_data: dict[str, Any]) -> None:
        """Test casters get a spell save DC from their casting ability."""
        stats = compute_derived_stats(sample_wizard_data)

        assert stats.ability_modifiers[Ability.INT] == 3
        assert stats.attack_bonus == 6
        assert stats.spell_save_dc == 14

    def test_unknown_class_defaults(self) -> None:
        """Test unknown classes use strength and have no spell DC."""
        character = CharacterRecord(class_name="tinkerer", proficiency_bonus=2)

        stats = compute_derived_stats(character)

        assert stats.attack_bonus == 2
        assert stats.spell_save_dc is None

    def test_modifiers_for_every_ability(self, sample_character_data: dict[str, Any]) -> None:
        """Test a modifier is computed for each ability."""
        stats = compute_derived_stats(sample_character_data)

        assert set(stats.ability_modifiers) == set(Ability)
        assert stats.ability_modifiers[Ability.CHA] == -1


class TestClamping:
    """Tests for clamped numeric outputs."""

    @pytest.mark.parametrize(("hp", "expected"), [(-5, 0), (0, 0), (12, 12), (40, 30)])
    def test_clamp_hp(self, hp: int, expected: int) -> None:
        """Test HP is clamped to [0, max]."""
        assert clamp_hp(hp, 30) == expected

    @pytest.mark.parametrize(("value", "expected"), [(-1, 0.0), (55.5, 55.5), (140, 100.0)])
    def test_clamp_percentage(self, value: float, expected: float) -> None:
        """Test percentages are clamped to [0, 100]."""
        assert clamp_percentage(value) == expected


class TestNpcCombat:
    """Tests for NPC attack and damage derivations."""

    @staticmethod
    def _npc(level: int, strength: int = 10, dexterity: int = 10) -> dict[str, Any]:
        return {
            "name": "Bandit",
            "level": level,
            "ac": 13,
            "abilities": {"strength": strength, "dexterity": dexterity},
        }

    @pytest.mark.parametrize(("level", "expected"), [(1, 5), (4, 5), (5, 6), (9, 7), (20, 9)])
    def test_attack_bonus_by_level(self, level: int, expected: int) -> None:
        """Test proficiency estimate ceil(level / 4) + 1 plus STR 16."""
        assert get_npc_attack_bonus(self._npc(level, strength=16)) == expected

    def test_attack_bonus_uses_better_ability(self) -> None:
        """Test DEX is used when it beats STR."""
        assert get_npc_attack_bonus(self._npc(1, strength=8, dexterity=18)) == 6

    @pytest.mark.parametrize(
        ("level", "expected"),
        [(1, "1d8+3"), (4, "1d8+3"), (5, "1d10+3"), (10, "1d10+3"), (11, "2d8+3"), (20, "2d8+3")],
    )
    def test_damage_dice_bands(self, level: int, expected: str) -> None:
        """Test the damage die grows at levels 5 and 11."""
        assert get_npc_damage_dice(self._npc(level, strength=16)) == expected

    def test_negative_modifier_dropped(self) -> None:
        """Test weak NPCs roll bare dice that still parse."""
        dice = get_npc_damage_dice(self._npc(2, strength=8, dexterity=9))

        assert dice == "1d8"
        assert validate_dice_string(dice)

    def test_damage_dice_parse(self, dice_roller: Any) -> None:
        """Test generated notation rolls within range."""
        result = parse_dice_string(get_npc_damage_dice(self._npc(11, dexterity=14)), roller=dice_roller)

        assert result.modifier == 2
        assert 4 <= result.total <= 18

    def test_effective_ac(self) -> None:
        """Test NPC armor class comes straight from the record."""
        assert get_npc_effective_ac(self._npc(3)) == 13
        assert get_npc_effective_ac(CharacterRecord(ac=17)) == 17
