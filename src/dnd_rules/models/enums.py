"""Enumeration types for the D&D 5E rules engine.

Free-text names arriving from the orchestrator (class names, condition
names, ability names) are normalized to these enums once, at the boundary,
so the rules below never compare raw strings.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """D&D 5E ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability (e.g. 'Strength')."""
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g. 'STR')."""
        return self.name


class CharacterClass(StrEnum):
    """Character classes known to the rules tables."""

    BARBARIAN = "barbarian"
    BARD = "bard"
    CLERIC = "cleric"
    DRUID = "druid"
    FIGHTER = "fighter"
    MONK = "monk"
    PALADIN = "paladin"
    RANGER = "ranger"
    ROGUE = "rogue"
    SORCERER = "sorcerer"
    WARLOCK = "warlock"
    WIZARD = "wizard"

    @classmethod
    def parse(cls, name: str | CharacterClass | None) -> CharacterClass | None:
        """Normalize a free-text class name.

        Matching is case-insensitive and accepts the aliases used by
        generated content ('warrior', 'mage', 'scholar').

        Args:
            name: Raw class name from a character record.

        Returns:
            The matching class, or None for unknown or missing names.
        """
        if name is None:
            return None
        if isinstance(name, CharacterClass):
            return name
        key = name.strip().lower()
        if key in _CLASS_ALIASES:
            return _CLASS_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            return None


_CLASS_ALIASES: dict[str, CharacterClass] = {
    "warrior": CharacterClass.FIGHTER,
    "mage": CharacterClass.WIZARD,
    "scholar": CharacterClass.WIZARD,
}


class CasterCategory(StrEnum):
    """Spell-slot progression category."""

    FULL = "full"
    HALF = "half"
    NONE = "none"


class ConditionName(StrEnum):
    """Canonical condition keys.

    The first fourteen are the standard 5E conditions; the rest are combat
    states and extended conditions used by techniques and items.
    """

    # Standard conditions
    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"

    # Combat states
    DODGING = "dodging"
    RECKLESS = "reckless"
    DISENGAGED = "disengaged"
    DEAD = "dead"

    # Extended conditions
    SHAKEN = "shaken"
    WEAKENED = "weakened"
    BURNING = "burning"
    BURNING_INTENSE = "burning_intense"
    BLEEDING = "bleeding"
    CHILLED = "chilled"
    SLOWED = "slowed"
    DOOMED = "doomed"
    CONFUSED = "confused"
    SILENCED = "silenced"
    ARMOR_BROKEN = "armor_broken"
    PINNED = "pinned"
    DISTRACTED = "distracted"
    STAGGERED = "staggered"
    DOMINATED = "dominated"
    FREED = "freed"
    CC_IMMUNE = "cc_immune"

    @classmethod
    def parse(cls, name: str | ConditionName) -> ConditionName | None:
        """Normalize a free-text condition name (case-insensitive).

        Returns:
            The matching condition, or None if the name is unknown.
        """
        if isinstance(name, ConditionName):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @property
    def is_standard(self) -> bool:
        """Whether this is one of the fourteen standard 5E conditions."""
        return self in STANDARD_CONDITIONS


STANDARD_CONDITIONS: frozenset[ConditionName] = frozenset(
    [
        ConditionName.BLINDED,
        ConditionName.CHARMED,
        ConditionName.DEAFENED,
        ConditionName.FRIGHTENED,
        ConditionName.GRAPPLED,
        ConditionName.INCAPACITATED,
        ConditionName.INVISIBLE,
        ConditionName.PARALYZED,
        ConditionName.PETRIFIED,
        ConditionName.POISONED,
        ConditionName.PRONE,
        ConditionName.RESTRAINED,
        ConditionName.STUNNED,
        ConditionName.UNCONSCIOUS,
    ]
)


class ExpiryTiming(StrEnum):
    """Turn phase at which a condition's duration ticks."""

    START = "start"
    END = "end"


class CcCategory(StrEnum):
    """Crowd-control groupings used for diminishing returns."""

    STUN = "stun"
    INCAPACITATE = "incapacitate"
    FEAR = "fear"
    ROOT = "root"
    SLOW = "slow"
    SILENCE = "silence"
    DISORIENT = "disorient"


class RechargeType(StrEnum):
    """When a class resource is restored."""

    SHORT_REST = "short_rest"
    LONG_REST = "long_rest"


class ActionCost(StrEnum):
    """Action economy cost of using a feature."""

    REACTION = "reaction"
    BONUS_ACTION = "bonus_action"
    FREE = "free"
    PASSIVE = "passive"


class RollType(StrEnum):
    """How a d20 was rolled."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


__all__ = [
    "Ability",
    "CharacterClass",
    "CasterCategory",
    "ConditionName",
    "STANDARD_CONDITIONS",
    "ExpiryTiming",
    "CcCategory",
    "RechargeType",
    "ActionCost",
    "RollType",
]
