"""Class features keyed by class and level.

Only the martial classes carry feature tables. Spellcasting for the other
classes lives in ``dnd_rules.engine.spells``; asking for their features
returns an empty list.
"""

from __future__ import annotations

from dnd_rules.core.constants import UNLIMITED_USES
from dnd_rules.core.logging import get_logger
from dnd_rules.models.enums import ActionCost, CcCategory, CharacterClass, RechargeType
from dnd_rules.models.resources import (
    CcBreakEffect,
    ClassFeature,
    ClassResourcePool,
    CombatEffect,
    ResourceDefinition,
)


logger = get_logger(__name__)

ClassRef = str | CharacterClass | None


def _rage_uses(level: int) -> int:
    if level >= 20:
        return UNLIMITED_USES
    if level >= 17:
        return 6
    if level >= 12:
        return 5
    if level >= 6:
        return 4
    if level >= 3:
        return 3
    return 2


# =============================================================================
# Feature Tables
# =============================================================================

FIGHTER_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="fighting_style",
        name="Fighting Style",
        level=1,
        description="Choose a fighting style specialization.",
    ),
    ClassFeature(
        id="second_wind",
        name="Second Wind",
        level=1,
        description="Bonus action: regain 1d10 + fighter level HP. Once per short rest.",
        combat_effect=CombatEffect(second_wind=True),
        resource=ResourceDefinition("secondWind", lambda level: 1, RechargeType.SHORT_REST),
    ),
    ClassFeature(
        id="action_surge",
        name="Action Surge",
        level=2,
        description="Take one additional action on your turn. Once per short rest (twice at 17).",
        combat_effect=CombatEffect(action_surge=True),
        resource=ResourceDefinition(
            "actionSurge", lambda level: 2 if level >= 17 else 1, RechargeType.SHORT_REST
        ),
    ),
    ClassFeature(
        id="extra_attack",
        name="Extra Attack",
        level=5,
        description="Attack twice when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=1),
    ),
    ClassFeature(
        id="indomitable_will",
        name="Indomitable Will",
        level=9,
        description=(
            "Use reaction to break free from stun, fear, or incapacitate effects. "
            "Recharges after 3 rounds."
        ),
        combat_effect=CombatEffect(
            cc_break=CcBreakEffect(
                breaks_categories=frozenset(
                    {CcCategory.STUN, CcCategory.FEAR, CcCategory.INCAPACITATE}
                ),
                action_cost=ActionCost.REACTION,
                cooldown_rounds=3,
            )
        ),
    ),
    ClassFeature(
        id="extra_attack_2",
        name="Extra Attack (2)",
        level=11,
        description="Attack three times when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=2),
    ),
    ClassFeature(
        id="extra_attack_3",
        name="Extra Attack (3)",
        level=20,
        description="Attack four times when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=3),
    ),
)

ROGUE_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="sneak_attack",
        name="Sneak Attack",
        level=1,
        description=(
            "Once per turn, deal extra damage when you have advantage or an ally "
            "is within 5 ft of target."
        ),
        combat_effect=CombatEffect(sneak_attack_dice=1),
    ),
    ClassFeature(
        id="cunning_action",
        name="Cunning Action",
        level=2,
        description="Use bonus action to Dash, Disengage, or Hide.",
    ),
    ClassFeature(
        id="uncanny_dodge",
        name="Uncanny Dodge",
        level=5,
        description="Use reaction to halve damage from an attack you can see.",
    ),
    ClassFeature(
        id="slip_free",
        name="Slip Free",
        level=5,
        description=(
            "Use bonus action to escape root, slow, or stun effects and gain stealth. "
            "Recharges after 2 rounds."
        ),
        combat_effect=CombatEffect(
            cc_break=CcBreakEffect(
                breaks_categories=frozenset({CcCategory.ROOT, CcCategory.SLOW, CcCategory.STUN}),
                action_cost=ActionCost.BONUS_ACTION,
                cooldown_rounds=2,
                grants_stealth_on_use=True,
            )
        ),
    ),
    ClassFeature(
        id="evasion",
        name="Evasion",
        level=7,
        description="On a successful DEX save, take no damage instead of half.",
    ),
)

BARBARIAN_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="rage",
        name="Rage",
        level=1,
        description=(
            "Bonus action: gain advantage on STR checks/saves, bonus melee damage, "
            "resistance to physical damage."
        ),
        combat_effect=CombatEffect(rage_damage_bonus=2, rage_resistance=True),
        resource=ResourceDefinition("rage", _rage_uses, RechargeType.LONG_REST),
    ),
    ClassFeature(
        id="unarmored_defense_barbarian",
        name="Unarmored Defense",
        level=1,
        description="AC = 10 + DEX modifier + CON modifier when not wearing armor.",
        combat_effect=CombatEffect(unarmored_defense_ability="constitution"),
    ),
    ClassFeature(
        id="reckless_attack",
        name="Reckless Attack",
        level=2,
        description=(
            "Gain advantage on melee STR attacks, but attacks against you have "
            "advantage until next turn."
        ),
    ),
    ClassFeature(
        id="extra_attack_barbarian",
        name="Extra Attack",
        level=5,
        description="Attack twice when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=1),
    ),
    ClassFeature(
        id="rage_break",
        name="Rage Break",
        level=6,
        description=(
            "While raging, automatically break free from stun, fear, and "
            "incapacitate effects at the start of your turn."
        ),
        combat_effect=CombatEffect(
            cc_break=CcBreakEffect(
                breaks_categories=frozenset(
                    {CcCategory.STUN, CcCategory.FEAR, CcCategory.INCAPACITATE}
                ),
                action_cost=ActionCost.PASSIVE,
                cooldown_rounds=0,
                requires_raging=True,
            )
        ),
    ),
    ClassFeature(
        id="brutal_critical",
        name="Brutal Critical",
        level=9,
        description="Roll one additional weapon damage die on a critical hit.",
    ),
)

MONK_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="unarmored_defense_monk",
        name="Unarmored Defense",
        level=1,
        description="AC = 10 + DEX modifier + WIS modifier when not wearing armor.",
        combat_effect=CombatEffect(unarmored_defense_ability="wisdom"),
    ),
    ClassFeature(
        id="martial_arts",
        name="Martial Arts",
        level=1,
        description="Use DEX for unarmed strikes. Bonus action unarmed strike after Attack action.",
        combat_effect=CombatEffect(martial_arts_die="1d4"),
    ),
    ClassFeature(
        id="ki",
        name="Ki",
        level=2,
        description="Spend ki points for Flurry of Blows, Patient Defense, or Step of the Wind.",
        resource=ResourceDefinition("ki", lambda level: level, RechargeType.SHORT_REST),
    ),
    ClassFeature(
        id="extra_attack_monk",
        name="Extra Attack",
        level=5,
        description="Attack twice when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=1),
    ),
    ClassFeature(
        id="stunning_strike",
        name="Stunning Strike",
        level=5,
        description=(
            "Spend 1 ki: target must succeed on CON save or be stunned until end "
            "of your next turn."
        ),
    ),
)

PALADIN_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="divine_sense",
        name="Divine Sense",
        level=1,
        description="Detect celestials, fiends, and undead within 60 ft.",
    ),
    ClassFeature(
        id="lay_on_hands",
        name="Lay on Hands",
        level=1,
        description="Heal a pool of HP equal to paladin level x 5.",
        resource=ResourceDefinition("layOnHands", lambda level: level * 5, RechargeType.LONG_REST),
    ),
    ClassFeature(
        id="divine_smite",
        name="Divine Smite",
        level=2,
        description=(
            "Expend a spell slot to deal extra 2d8 radiant damage on a melee hit "
            "(+1d8 per slot above 1st)."
        ),
    ),
    ClassFeature(
        id="extra_attack_paladin",
        name="Extra Attack",
        level=5,
        description="Attack twice when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=1),
    ),
    ClassFeature(
        id="aura_of_protection",
        name="Aura of Protection",
        level=6,
        description="You and allies within 10 ft gain bonus to saving throws equal to CHA modifier.",
    ),
)

RANGER_FEATURES: tuple[ClassFeature, ...] = (
    ClassFeature(
        id="favored_enemy",
        name="Favored Enemy",
        level=1,
        description=(
            "Advantage on survival checks to track and INT checks to recall info "
            "about chosen enemy types."
        ),
    ),
    ClassFeature(
        id="fighting_style_ranger",
        name="Fighting Style",
        level=2,
        description="Choose a fighting style specialization.",
    ),
    ClassFeature(
        id="extra_attack_ranger",
        name="Extra Attack",
        level=5,
        description="Attack twice when you take the Attack action.",
        combat_effect=CombatEffect(extra_attacks=1),
    ),
)

CLASS_FEATURES: dict[CharacterClass, tuple[ClassFeature, ...]] = {
    CharacterClass.FIGHTER: FIGHTER_FEATURES,
    CharacterClass.ROGUE: ROGUE_FEATURES,
    CharacterClass.BARBARIAN: BARBARIAN_FEATURES,
    CharacterClass.MONK: MONK_FEATURES,
    CharacterClass.PALADIN: PALADIN_FEATURES,
    CharacterClass.RANGER: RANGER_FEATURES,
}


# =============================================================================
# Queries
# =============================================================================


def get_features_for_class_at_level(class_name: ClassRef, level: int) -> list[ClassFeature]:
    """Get every feature a class has gained by a level.

    Unknown classes, and classes without a feature table, have no features.
    """
    cls = CharacterClass.parse(class_name)
    if cls is None:
        if class_name:
            logger.warning("unknown_class", class_name=str(class_name))
        return []
    return [f for f in CLASS_FEATURES.get(cls, ()) if f.level <= level]


def get_extra_attacks(class_name: ClassRef, level: int) -> int:
    """Number of additional attacks per Attack action.

    Example:
        >>> get_extra_attacks("fighter", 11)
        2
    """
    return max(
        (
            f.combat_effect.extra_attacks
            for f in get_features_for_class_at_level(class_name, level)
            if f.combat_effect is not None
        ),
        default=0,
    )


def get_sneak_attack_dice(level: int) -> int:
    """Sneak attack d6 count: one at level 1, one more every odd level."""
    return (level + 1) // 2


def get_rage_damage_bonus(level: int) -> int:
    if level >= 16:
        return 4
    if level >= 9:
        return 3
    return 2


def get_martial_arts_die(level: int) -> str:
    if level >= 17:
        return "1d10"
    if level >= 11:
        return "1d8"
    if level >= 5:
        return "1d6"
    return "1d4"


def get_resource_definitions(class_name: ClassRef, level: int) -> dict[str, ResourceDefinition]:
    """Resource definitions granted by a class's features at a level."""
    return {
        f.resource.name: f.resource
        for f in get_features_for_class_at_level(class_name, level)
        if f.resource is not None
    }


def initialize_class_resources(class_name: ClassRef, level: int) -> dict[str, ClassResourcePool]:
    """Build full resource pools for a class at a level.

    Returns:
        Pool per resource name, each with current equal to max. Empty when
        the class has no resources at this level.
    """
    pools = {
        name: ClassResourcePool.full(definition.max_at_level(level))
        for name, definition in get_resource_definitions(class_name, level).items()
    }
    logger.debug(
        "class_resources_initialized",
        class_name=str(class_name),
        level=level,
        resources={name: pool.max for name, pool in pools.items()},
    )
    return pools


def get_cc_break_features(class_name: ClassRef, level: int) -> list[ClassFeature]:
    """Features that can break crowd-control effects."""
    return [
        f
        for f in get_features_for_class_at_level(class_name, level)
        if f.combat_effect is not None and f.combat_effect.cc_break is not None
    ]


def recharge_type_for(resource_name: str) -> RechargeType | None:
    """When a named resource recharges, or None if no class grants it."""
    for features in CLASS_FEATURES.values():
        for feature in features:
            if feature.resource is not None and feature.resource.name == resource_name:
                return feature.resource.recharges_on
    return None


__all__ = [
    "FIGHTER_FEATURES",
    "ROGUE_FEATURES",
    "BARBARIAN_FEATURES",
    "MONK_FEATURES",
    "PALADIN_FEATURES",
    "RANGER_FEATURES",
    "CLASS_FEATURES",
    "get_features_for_class_at_level",
    "get_extra_attacks",
    "get_sneak_attack_dice",
    "get_rage_damage_bonus",
    "get_martial_arts_die",
    "get_resource_definitions",
    "initialize_class_resources",
    "get_cc_break_features",
    "recharge_type_for",
]
