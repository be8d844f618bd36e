"""Equipment bonus aggregation and derived combat statistics.

Derived stats are recomputed from the character record and its equipped
items on every query; nothing here is cached.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from numbers import Real
from typing import Any

from dnd_rules.core.constants import SPELL_SAVE_DC_BASE
from dnd_rules.core.exceptions import ValidationError
from dnd_rules.core.logging import get_logger
from dnd_rules.engine.checks import calculate_modifier
from dnd_rules.engine.spells import get_casting_ability
from dnd_rules.models.character import (
    AbilityScoreSet,
    CharacterRecord,
    DerivedStats,
    EquipmentBonusSet,
    EquippedItem,
)
from dnd_rules.models.enums import Ability, CharacterClass


logger = get_logger(__name__)

# Item ``stats`` keys that add to a bonus field
_STAT_FIELDS: dict[str, str] = {
    "ac": "ac",
    "hp": "hp",
    "speed": "speed",
    **{ability.value: ability.value for ability in Ability},
}

# Item ``specialAttributes`` keys that add to a named bonus field
_SPECIAL_FIELDS: dict[str, str] = {
    "damageBonus": "damage_bonus",
    "critChance": "crit_chance",
    "spellPower": "spell_power",
    "healingPower": "healing_power",
    "stealthBonus": "stealth_bonus",
    "perceptionBonus": "perception_bonus",
    "persuasionBonus": "persuasion_bonus",
    "xpBonus": "xp_bonus",
}

_INT_FIELDS = frozenset(_STAT_FIELDS.values())

_DEX_ATTACK_CLASSES = frozenset({CharacterClass.ROGUE, CharacterClass.RANGER, CharacterClass.MONK})


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def compute_equipment_bonuses(items: Iterable[EquippedItem | dict[str, Any]]) -> EquipmentBonusSet:
    """Sum stat and special-attribute bonuses across equipped items.

    Missing keys count as zero and non-numeric stat values (such as a
    weapon's damage dice) are ignored. Special attributes without a named
    field are summed into ``special``.

    Args:
        items: Equipped items, as models or raw mappings.

    Returns:
        The aggregated bonus set; all zeros for an empty list.

    Raises:
        ValidationError: If an armor class, hit point, speed or ability
            stat is not a whole number.
    """
    totals: dict[str, float] = {}
    special: dict[str, float] = {}

    for raw in items:
        item = raw if isinstance(raw, EquippedItem) else EquippedItem.model_validate(raw)

        for key, value in item.stats.items():
            field_name = _STAT_FIELDS.get(key)
            if field_name is None or not _is_number(value):
                continue
            if not float(value).is_integer():
                raise ValidationError(
                    f"Item stat {key!r} must be a whole number",
                    field_name=key,
                    invalid_value=value,
                    details={"item": item.name},
                )
            totals[field_name] = totals.get(field_name, 0) + value

        for key, value in item.special_attributes.items():
            field_name = _SPECIAL_FIELDS.get(key)
            if field_name is not None:
                totals[field_name] = totals.get(field_name, 0) + value
            else:
                special[key] = special.get(key, 0) + value

    values: dict[str, Any] = {
        name: int(total) if name in _INT_FIELDS else total for name, total in totals.items()
    }
    return EquipmentBonusSet(**values, special=special)


def primary_ability_for_class(class_name: str | CharacterClass | None) -> Ability:
    """Ability that drives a class's attack rolls.

    Finesse classes attack with dexterity, other casters with their
    casting ability, everyone else (and unknown classes) with strength.
    """
    cls = CharacterClass.parse(class_name)
    if cls in _DEX_ATTACK_CLASSES:
        return Ability.DEX
    casting = get_casting_ability(cls)
    if casting is not None:
        return casting
    return Ability.STR


def _as_record(record: CharacterRecord | Mapping[str, Any]) -> CharacterRecord:
    if isinstance(record, CharacterRecord):
        return record
    return CharacterRecord.model_validate(record)


def compute_derived_stats(
    character: CharacterRecord | dict[str, Any],
    bonuses: EquipmentBonusSet | None = None,
) -> DerivedStats:
    """Combine a character's base stats with equipment bonuses.

    Args:
        character: Character record, as a model or a raw camelCase mapping.
        bonuses: Aggregated equipment bonuses; None means no equipment.

    Returns:
        DerivedStats for this character right now.
    """
    character = _as_record(character)
    bonuses = bonuses or EquipmentBonusSet()

    effective = AbilityScoreSet(
        **{
            ability.value: character.abilities.get(ability) + bonuses.ability_bonus(ability)
            for ability in Ability
        }
    )
    modifiers = {ability: calculate_modifier(effective.get(ability)) for ability in Ability}

    attack_ability = primary_ability_for_class(character.class_name)
    attack_bonus = character.proficiency_bonus + modifiers[attack_ability]

    casting = get_casting_ability(character.class_name)
    spell_save_dc = (
        SPELL_SAVE_DC_BASE + character.proficiency_bonus + modifiers[casting]
        if casting is not None
        else None
    )

    stats = DerivedStats(
        effective_ac=character.ac + bonuses.ac,
        effective_max_hp=character.max_hp + bonuses.hp,
        effective_speed=character.speed + bonuses.speed,
        effective_abilities=effective,
        ability_modifiers=modifiers,
        attack_bonus=attack_bonus,
        spell_save_dc=spell_save_dc,
        equipment_bonuses=bonuses,
    )
    logger.debug(
        "derived_stats_computed",
        class_name=character.class_name,
        effective_ac=stats.effective_ac,
        attack_bonus=attack_bonus,
        spell_save_dc=spell_save_dc,
    )
    return stats


# =============================================================================
# NPC Combat
# =============================================================================


def _npc_modifier(npc: CharacterRecord) -> int:
    return max(
        calculate_modifier(npc.abilities.strength),
        calculate_modifier(npc.abilities.dexterity),
    )


def get_npc_attack_bonus(npc: CharacterRecord | Mapping[str, Any]) -> int:
    """Attack bonus for an NPC.

    NPCs have no class, so proficiency is estimated from level
    (``ceil(level / 4) + 1``) and added to the better of the STR and DEX
    modifiers.
    """
    npc = _as_record(npc)
    return math.ceil(npc.level / 4) + 1 + _npc_modifier(npc)


def get_npc_damage_dice(npc: CharacterRecord | Mapping[str, Any]) -> str:
    """Damage notation for an NPC's basic attack.

    1d8 below level 5, 1d10 from level 5 and 2d8 from level 11, plus the
    better of the STR and DEX modifiers. A modifier of zero or less is
    left off, so the result always parses with ``parse_dice_string``.

    Example:
        >>> get_npc_damage_dice({"level": 6, "abilities": {"strength": 16}})
        '1d10+3'
    """
    npc = _as_record(npc)
    if npc.level >= 11:
        dice = "2d8"
    elif npc.level >= 5:
        dice = "1d10"
    else:
        dice = "1d8"
    modifier = _npc_modifier(npc)
    return f"{dice}+{modifier}" if modifier > 0 else dice


def get_npc_effective_ac(npc: CharacterRecord | Mapping[str, Any]) -> int:
    """An NPC's armor class, taken directly from its record."""
    return _as_record(npc).ac


def clamp_hp(hp: int, max_hp: int) -> int:
    """Clamp hit points to [0, max_hp]."""
    return max(0, min(hp, max_hp))


def clamp_percentage(value: float) -> float:
    """Clamp a percentage to [0, 100]."""
    return max(0.0, min(float(value), 100.0))


__all__ = [
    "compute_equipment_bonuses",
    "primary_ability_for_class",
    "compute_derived_stats",
    "get_npc_attack_bonus",
    "get_npc_damage_dice",
    "get_npc_effective_ac",
    "clamp_hp",
    "clamp_percentage",
]
