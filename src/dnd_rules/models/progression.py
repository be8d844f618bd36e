"""D&D 5E level progression tables.

Static lookup data keyed by character level: proficiency bonus, hit dice,
and spell slots per caster category. These tables are the rules' source of
truth; nothing else in the engine hard-codes per-level numbers for them.
"""

from __future__ import annotations

from dnd_rules.core.constants import (
    DEFAULT_HIT_DIE,
    DEFAULT_PROFICIENCY_BONUS,
    MAX_CHARACTER_LEVEL,
)
from dnd_rules.models.enums import CasterCategory, CharacterClass


# =============================================================================
# Proficiency Bonus by Level (PHB p.15)
# =============================================================================


def get_proficiency_bonus(level: int) -> int:
    """Get proficiency bonus for a given level."""
    if level <= 4:
        return DEFAULT_PROFICIENCY_BONUS
    if level <= 8:
        return 3
    if level <= 12:
        return 4
    if level <= 16:
        return 5
    return 6


# =============================================================================
# Hit Dice by Class
# =============================================================================

CLASS_HIT_DIE: dict[CharacterClass, int] = {
    CharacterClass.BARBARIAN: 12,
    CharacterClass.FIGHTER: 10,
    CharacterClass.PALADIN: 10,
    CharacterClass.RANGER: 10,
    CharacterClass.BARD: 8,
    CharacterClass.CLERIC: 8,
    CharacterClass.DRUID: 8,
    CharacterClass.MONK: 8,
    CharacterClass.ROGUE: 8,
    CharacterClass.WARLOCK: 8,
    CharacterClass.SORCERER: 6,
    CharacterClass.WIZARD: 6,
}


def get_hit_die(class_name: str | CharacterClass | None) -> int:
    """Get hit die size for a class (d10 for unknown classes)."""
    cls = CharacterClass.parse(class_name)
    if cls is None:
        return DEFAULT_HIT_DIE
    return CLASS_HIT_DIE[cls]


# =============================================================================
# Spell Slots by Level
# =============================================================================

# Full casters: Bard, Cleric, Druid, Sorcerer, Warlock, Wizard
FULL_CASTER_SLOTS: dict[int, dict[int, int]] = {
    1:  {1: 2},
    2:  {1: 3},
    3:  {1: 4, 2: 2},
    4:  {1: 4, 2: 3},
    5:  {1: 4, 2: 3, 3: 2},
    6:  {1: 4, 2: 3, 3: 3},
    7:  {1: 4, 2: 3, 3: 3, 4: 1},
    8:  {1: 4, 2: 3, 3: 3, 4: 2},
    9:  {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    10: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    11: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    12: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    13: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    16: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1, 9: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 1, 7: 1, 8: 1, 9: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 1, 8: 1, 9: 1},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 2, 8: 1, 9: 1},
}


def _half_caster_equivalent(level: int) -> int:
    """Full-caster level whose slots a half-caster of ``level`` has."""
    if level < 2:
        return 0
    return (level + 1) // 2


# Half casters: Paladin, Ranger (start at level 2, progress at half rate)
HALF_CASTER_SLOTS: dict[int, dict[int, int]] = {
    level: dict(FULL_CASTER_SLOTS.get(_half_caster_equivalent(level), {}))
    for level in range(1, MAX_CHARACTER_LEVEL + 1)
}

SLOT_TABLES: dict[CasterCategory, dict[int, dict[int, int]]] = {
    CasterCategory.FULL: FULL_CASTER_SLOTS,
    CasterCategory.HALF: HALF_CASTER_SLOTS,
    CasterCategory.NONE: {},
}


__all__ = [
    "get_proficiency_bonus",
    "CLASS_HIT_DIE",
    "get_hit_die",
    "FULL_CASTER_SLOTS",
    "HALF_CASTER_SLOTS",
    "SLOT_TABLES",
]
