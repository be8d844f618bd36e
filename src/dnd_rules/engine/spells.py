"""Spellcasting rules: caster categories, slots, DCs and cantrip scaling.

Class names are normalized once with ``CharacterClass.parse``; unknown
classes are treated as non-casters.
"""

from __future__ import annotations

from collections.abc import Mapping

from dnd_rules.core.constants import MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL, SPELL_SAVE_DC_BASE
from dnd_rules.core.logging import get_logger
from dnd_rules.engine.checks import calculate_modifier
from dnd_rules.models.enums import Ability, CasterCategory, CharacterClass
from dnd_rules.models.progression import SLOT_TABLES
from dnd_rules.models.resources import SpellSlot


logger = get_logger(__name__)

ClassRef = str | CharacterClass | None


def _parse_class(class_name: ClassRef) -> CharacterClass | None:
    cls = CharacterClass.parse(class_name)
    if cls is None and class_name:
        logger.warning("unknown_class", class_name=str(class_name))
    return cls


CASTER_CATEGORIES: dict[CharacterClass, CasterCategory] = {
    CharacterClass.BARD: CasterCategory.FULL,
    CharacterClass.CLERIC: CasterCategory.FULL,
    CharacterClass.DRUID: CasterCategory.FULL,
    CharacterClass.SORCERER: CasterCategory.FULL,
    CharacterClass.WARLOCK: CasterCategory.FULL,
    CharacterClass.WIZARD: CasterCategory.FULL,
    CharacterClass.PALADIN: CasterCategory.HALF,
    CharacterClass.RANGER: CasterCategory.HALF,
}

CASTING_ABILITIES: dict[CharacterClass, Ability] = {
    CharacterClass.WIZARD: Ability.INT,
    CharacterClass.CLERIC: Ability.WIS,
    CharacterClass.DRUID: Ability.WIS,
    CharacterClass.RANGER: Ability.WIS,
    CharacterClass.SORCERER: Ability.CHA,
    CharacterClass.WARLOCK: Ability.CHA,
    CharacterClass.BARD: Ability.CHA,
    CharacterClass.PALADIN: Ability.CHA,
}


def get_caster_category(class_name: ClassRef) -> CasterCategory:
    """Classify a class as full caster, half caster or non-caster."""
    cls = _parse_class(class_name)
    if cls is None:
        return CasterCategory.NONE
    return CASTER_CATEGORIES.get(cls, CasterCategory.NONE)


def is_caster(class_name: ClassRef) -> bool:
    """Check whether a class casts spells."""
    return get_caster_category(class_name) != CasterCategory.NONE


def get_casting_ability(class_name: ClassRef) -> Ability | None:
    """Spellcasting ability of a class, or None for non-casters."""
    cls = _parse_class(class_name)
    if cls is None:
        return None
    return CASTING_ABILITIES.get(cls)


def get_spell_slots(class_name: ClassRef, level: int) -> dict[int, int]:
    """Spell slots per spell level for a class at a character level.

    Example:
        >>> get_spell_slots("wizard", 5)
        {1: 4, 2: 3, 3: 2}
        >>> get_spell_slots("fighter", 5)
        {}
    """
    if level < MIN_CHARACTER_LEVEL:
        return {}
    table = SLOT_TABLES[get_caster_category(class_name)]
    return dict(table.get(min(level, MAX_CHARACTER_LEVEL), {}))


def get_spell_save_dc(proficiency_bonus: int, casting_ability_score: int) -> int:
    """Spell save DC: 8 + proficiency + casting modifier."""
    return SPELL_SAVE_DC_BASE + proficiency_bonus + calculate_modifier(casting_ability_score)


def get_spell_attack_bonus(proficiency_bonus: int, casting_ability_score: int) -> int:
    """Spell attack bonus: proficiency + casting modifier."""
    return proficiency_bonus + calculate_modifier(casting_ability_score)


def get_cantrip_dice_count(level: int) -> int:
    """Number of damage dice a cantrip rolls at a character level."""
    if level >= 17:
        return 4
    if level >= 11:
        return 3
    if level >= 5:
        return 2
    return 1


def has_spell_slot(slots: Mapping[int, SpellSlot], level: int) -> bool:
    """Check whether a slot of the given spell level is available."""
    slot = slots.get(level)
    return slot is not None and slot.is_available


def initialize_spell_slots(class_name: ClassRef, level: int) -> dict[int, SpellSlot]:
    """Build a full spell-slot table for a class at a character level."""
    slots = {
        spell_level: SpellSlot(max=count, used=0)
        for spell_level, count in get_spell_slots(class_name, level).items()
    }
    logger.debug(
        "spell_slots_initialized",
        class_name=str(class_name),
        level=level,
        slots={k: v.max for k, v in slots.items()},
    )
    return slots


__all__ = [
    "CASTER_CATEGORIES",
    "CASTING_ABILITIES",
    "get_caster_category",
    "is_caster",
    "get_casting_ability",
    "get_spell_slots",
    "get_spell_save_dc",
    "get_spell_attack_bonus",
    "get_cantrip_dice_count",
    "has_spell_slot",
    "initialize_spell_slots",
]
