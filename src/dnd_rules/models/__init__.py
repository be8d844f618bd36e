"""Pydantic V2 schemas and rule tables for the D&D 5E rules engine.

Submodules:
    enums: Enumeration types (Ability, CharacterClass, ConditionName, etc.)
    character: Character records, equipment bonuses and derived stats
    conditions: Condition definitions and applied condition instances
    resources: Resource pools, spell slots, hit dice and class features
    results: Roll and check results
    progression: Proficiency, hit die and spell slot tables
    rolls: Pending-roll states

Example:
    >>> from dnd_rules.models import CharacterRecord, AbilityScoreSet
    >>> hero = CharacterRecord(abilities=AbilityScoreSet(strength=16), level=3)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_rules.models.enums import (
    STANDARD_CONDITIONS,
    Ability,
    ActionCost,
    CasterCategory,
    CcCategory,
    CharacterClass,
    ConditionName,
    ExpiryTiming,
    RechargeType,
    RollType,
)

# =============================================================================
# Characters
# =============================================================================
from dnd_rules.models.character import (
    AbilityScoreSet,
    CharacterRecord,
    DerivedStats,
    EquipmentBonusSet,
    EquippedItem,
)

# =============================================================================
# Conditions & Resources
# =============================================================================
from dnd_rules.models.conditions import (
    ConditionDefinition,
    ConditionEffects,
    ConditionInstance,
    DrEntry,
)
from dnd_rules.models.resources import (
    CcBreakEffect,
    ClassFeature,
    ClassResourcePool,
    CombatEffect,
    HitDicePool,
    ResourceDefinition,
    SpellSlot,
)

# =============================================================================
# Results & Rolls
# =============================================================================
from dnd_rules.models.results import (
    AbilityCheckResult,
    AdvantageRoll,
    AttackRollResult,
    DamageRollResult,
    DiceRollResult,
    DiceStringResult,
    SavingThrowResult,
)
from dnd_rules.models.rolls import (
    AwaitingRoll,
    IdleRoll,
    PendingRollState,
    ResolvedRoll,
    RollSpec,
    RollStakes,
)

# =============================================================================
# Progression Tables
# =============================================================================
from dnd_rules.models.progression import (
    CLASS_HIT_DIE,
    FULL_CASTER_SLOTS,
    HALF_CASTER_SLOTS,
    SLOT_TABLES,
    get_hit_die,
    get_proficiency_bonus,
)


__all__ = [
    # Enums
    "STANDARD_CONDITIONS",
    "Ability",
    "ActionCost",
    "CasterCategory",
    "CcCategory",
    "CharacterClass",
    "ConditionName",
    "ExpiryTiming",
    "RechargeType",
    "RollType",
    # Characters
    "AbilityScoreSet",
    "CharacterRecord",
    "DerivedStats",
    "EquipmentBonusSet",
    "EquippedItem",
    # Conditions & Resources
    "ConditionDefinition",
    "ConditionEffects",
    "ConditionInstance",
    "DrEntry",
    "CcBreakEffect",
    "ClassFeature",
    "ClassResourcePool",
    "CombatEffect",
    "HitDicePool",
    "ResourceDefinition",
    "SpellSlot",
    # Results & Rolls
    "AbilityCheckResult",
    "AdvantageRoll",
    "AttackRollResult",
    "DamageRollResult",
    "DiceRollResult",
    "DiceStringResult",
    "SavingThrowResult",
    "AwaitingRoll",
    "IdleRoll",
    "PendingRollState",
    "ResolvedRoll",
    "RollSpec",
    "RollStakes",
    # Progression
    "CLASS_HIT_DIE",
    "FULL_CASTER_SLOTS",
    "HALF_CASTER_SLOTS",
    "SLOT_TABLES",
    "get_hit_die",
    "get_proficiency_bonus",
]
