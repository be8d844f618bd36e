"""Status conditions and their combat effects.

The condition table covers the 14 standard conditions, a handful of
non-standard combat states (dodging, reckless, disengaged, dead) and the
extended conditions produced by skills and techniques.

Functions accept condition names, ConditionInstance records, or the raw
camelCase mappings the orchestrator stores. Names are matched
case-insensitively; unknown names are logged and contribute no effect.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dnd_rules.core.config import CombatSettings, get_settings
from dnd_rules.core.constants import CONCENTRATION_MIN_DC
from dnd_rules.core.logging import get_logger
from dnd_rules.models.conditions import (
    ConditionDefinition,
    ConditionEffects,
    ConditionInstance,
    DrEntry,
)
from dnd_rules.models.enums import CcCategory, ConditionName, ExpiryTiming


logger = get_logger(__name__)

StoredCondition = ConditionInstance | Mapping[str, Any]
ConditionRef = str | ConditionName | StoredCondition
DrTracker = Mapping[CcCategory | str, DrEntry | Mapping[str, Any]]


# =============================================================================
# Condition Table
# =============================================================================


def _define(
    key: ConditionName,
    name: str,
    description: str,
    cc_category: CcCategory | None = None,
    **effects: object,
) -> ConditionDefinition:
    return ConditionDefinition(
        key=key,
        name=name,
        description=description,
        effects=ConditionEffects(**effects),
        cc_category=cc_category,
    )


_INCAPACITATING = {"cannot_act": True, "auto_fail_str_dex_saves": True, "attacked_advantage": True}

CONDITIONS: dict[ConditionName, ConditionDefinition] = {
    d.key: d
    for d in (
        # Standard conditions
        _define(
            ConditionName.BLINDED,
            "Blinded",
            "Can't see. Auto-fails checks requiring sight. Attack rolls have "
            "disadvantage; attacks against have advantage.",
            CcCategory.DISORIENT,
            attack_disadvantage=True,
            attacked_advantage=True,
        ),
        _define(
            ConditionName.CHARMED,
            "Charmed",
            "Can't attack the charmer or target them with harmful abilities. "
            "Charmer has advantage on social checks.",
            CcCategory.INCAPACITATE,
            cannot_attack_charmer=True,
            break_on_damage=True,
        ),
        _define(
            ConditionName.DEAFENED,
            "Deafened",
            "Can't hear. Auto-fails checks requiring hearing.",
            auto_fail_hearing_checks=True,
        ),
        _define(
            ConditionName.FRIGHTENED,
            "Frightened",
            "Disadvantage on ability checks and attack rolls while source of fear "
            "is in line of sight. Can't willingly move closer to the source.",
            CcCategory.FEAR,
            attack_disadvantage=True,
            ability_check_disadvantage=True,
            cannot_approach_source=True,
        ),
        _define(
            ConditionName.GRAPPLED,
            "Grappled",
            "Speed becomes 0. Ends if grappler is incapacitated or moved out of reach.",
            CcCategory.ROOT,
            speed_zero=True,
        ),
        _define(
            ConditionName.INCAPACITATED,
            "Incapacitated",
            "Can't take actions or reactions.",
            cannot_act=True,
        ),
        _define(
            ConditionName.INVISIBLE,
            "Invisible",
            "Impossible to see without special sense. Attack rolls have advantage; "
            "attacks against have disadvantage.",
            attack_advantage=True,
            attacked_disadvantage=True,
        ),
        _define(
            ConditionName.PARALYZED,
            "Paralyzed",
            "Incapacitated, can't move or speak. Auto-fails STR/DEX saves. Attacks "
            "have advantage; hits within 5 ft are crits.",
            CcCategory.STUN,
            cannot_move=True,
            crit_within_5ft=True,
            **_INCAPACITATING,
        ),
        _define(
            ConditionName.PETRIFIED,
            "Petrified",
            "Transformed to stone. Incapacitated, can't move or speak. Resistance "
            "to all damage. Auto-fails STR/DEX saves.",
            cannot_move=True,
            crit_within_5ft=True,
            resistance_all=True,
            **_INCAPACITATING,
        ),
        _define(
            ConditionName.POISONED,
            "Poisoned",
            "Disadvantage on attack rolls and ability checks.",
            attack_disadvantage=True,
            ability_check_disadvantage=True,
        ),
        _define(
            ConditionName.PRONE,
            "Prone",
            "Disadvantage on attack rolls. Melee attacks within 5 ft have "
            "advantage; ranged attacks have disadvantage.",
            attack_disadvantage=True,
            melee_attacked_advantage=True,
            ranged_attacked_disadvantage=True,
        ),
        _define(
            ConditionName.RESTRAINED,
            "Restrained",
            "Speed 0. Attack rolls have disadvantage; attacks against have "
            "advantage. DEX saves have disadvantage.",
            CcCategory.ROOT,
            speed_zero=True,
            attack_disadvantage=True,
            attacked_advantage=True,
            dex_save_disadvantage=True,
        ),
        _define(
            ConditionName.STUNNED,
            "Stunned",
            "Incapacitated, can't move, speak only falteringly. Auto-fails STR/DEX "
            "saves. Attacks against have advantage.",
            CcCategory.STUN,
            **_INCAPACITATING,
        ),
        _define(
            ConditionName.UNCONSCIOUS,
            "Unconscious",
            "Incapacitated, can't move or speak, unaware. Falls prone. Auto-fails "
            "STR/DEX saves. Attacks have advantage; hits within 5 ft are crits.",
            CcCategory.INCAPACITATE,
            cannot_move=True,
            crit_within_5ft=True,
            break_on_damage=True,
            **_INCAPACITATING,
        ),
        # Combat states
        _define(
            ConditionName.DODGING,
            "Dodging",
            "Using the Dodge action. Attack rolls against have disadvantage. "
            "Advantage on DEX saving throws.",
            attacked_disadvantage=True,
        ),
        _define(
            ConditionName.RECKLESS,
            "Reckless",
            "Used Reckless Attack. Attacks against you have advantage until your next turn.",
            attacked_advantage=True,
        ),
        _define(
            ConditionName.DISENGAGED,
            "Disengaged",
            "Used the Disengage action. Movement doesn't provoke opportunity attacks this turn.",
        ),
        _define(
            ConditionName.DEAD,
            "Dead",
            "The creature has died. It cannot take any actions, move, or be "
            "revived without powerful magic.",
            cannot_act=True,
            cannot_move=True,
        ),
        # Extended conditions
        _define(
            ConditionName.SHAKEN,
            "Shaken",
            "Unnerved. Disadvantage on attack rolls from fear.",
            CcCategory.FEAR,
            attack_disadvantage=True,
            cannot_approach_source=True,
        ),
        _define(
            ConditionName.WEAKENED,
            "Weakened",
            "Sapped of strength. Outgoing damage reduced by 50%.",
            outgoing_damage_multiplier=0.5,
        ),
        _define(
            ConditionName.BURNING,
            "Burning",
            "On fire. Takes 3 damage at start of turn. Vulnerable to fire magic.",
            dot_damage=3,
            damage_vulnerability=frozenset({"fire_magic"}),
        ),
        _define(
            ConditionName.BURNING_INTENSE,
            "Burning (Intense)",
            "Engulfed in intense flames. Takes 5 damage at start of turn.",
            dot_damage=5,
            damage_vulnerability=frozenset({"fire_magic"}),
        ),
        _define(
            ConditionName.BLEEDING,
            "Bleeding",
            "Losing blood. Takes 2 damage at start of turn. Vulnerable to blades "
            "and dirty fighting.",
            dot_damage=2,
            damage_vulnerability=frozenset({"blade_mastery", "dirty_fighting"}),
        ),
        _define(
            ConditionName.CHILLED,
            "Chilled",
            "Slowed by cold. Half movement speed. Vulnerable to ice magic.",
            CcCategory.SLOW,
            speed_multiplier=0.5,
            damage_vulnerability=frozenset({"ice_magic"}),
        ),
        _define(
            ConditionName.SLOWED,
            "Slowed",
            "Movement is impaired. Half movement speed.",
            CcCategory.SLOW,
            speed_multiplier=0.5,
        ),
        _define(
            ConditionName.DOOMED,
            "Doomed",
            "Marked for death. Takes 5 damage at start of turn from internal vibrations.",
            dot_damage=5,
        ),
        _define(
            ConditionName.CONFUSED,
            "Confused",
            "Mind is scrambled. Cannot cast spells or use techniques.",
            CcCategory.SILENCE,
            cannot_cast=True,
            ability_check_disadvantage=True,
        ),
        _define(
            ConditionName.SILENCED,
            "Silenced",
            "Cannot speak or cast spells with verbal components.",
            CcCategory.SILENCE,
            cannot_cast=True,
        ),
        _define(
            ConditionName.ARMOR_BROKEN,
            "Armor Broken",
            "Armor is damaged. AC reduced by 3. Vulnerable to heavy weapons and archery.",
            ac_modifier=-3,
            damage_vulnerability=frozenset({"heavy_weapons", "archery"}),
        ),
        _define(
            ConditionName.PINNED,
            "Pinned",
            "Pinned in place. Speed 0. Vulnerable to archery.",
            CcCategory.ROOT,
            speed_zero=True,
            damage_vulnerability=frozenset({"archery"}),
        ),
        _define(
            ConditionName.DISTRACTED,
            "Distracted",
            "Attention diverted. Disadvantage on attacks and ability checks.",
            CcCategory.DISORIENT,
            attack_disadvantage=True,
            ability_check_disadvantage=True,
            attacked_advantage=True,
        ),
        _define(
            ConditionName.STAGGERED,
            "Staggered",
            "Off-balance. Disadvantage on next attack roll.",
            attack_disadvantage=True,
        ),
        _define(
            ConditionName.DOMINATED,
            "Dominated",
            "Under total mental control. Cannot act independently. Breaks on damage.",
            CcCategory.INCAPACITATE,
            cannot_act=True,
            break_on_damage=True,
        ),
        _define(ConditionName.FREED, "Freed", "Released from restraints."),
        _define(
            ConditionName.CC_IMMUNE,
            "CC Immune",
            "Temporarily immune to crowd control effects in a specific category.",
        ),
    )
}


# =============================================================================
# Lookup
# =============================================================================


def get_condition(name: str | ConditionName) -> ConditionDefinition | None:
    """Get a condition definition by name (case-insensitive).

    Returns:
        The definition, or None if the name is unknown.
    """
    key = name if isinstance(name, ConditionName) else ConditionName.parse(name)
    if key is None:
        return None
    return CONDITIONS[key]


def _as_instance(ref: StoredCondition) -> ConditionInstance:
    if isinstance(ref, ConditionInstance):
        return ref
    return ConditionInstance.model_validate(ref)


def _ref_name(ref: ConditionRef) -> str:
    if isinstance(ref, (ConditionInstance, Mapping)):
        return _as_instance(ref).name
    return str(ref)


def _load_tracker(tracker: DrTracker) -> dict[CcCategory, DrEntry]:
    """Validate a stored diminishing-returns tracker keyed by category."""
    return {
        CcCategory(key): entry if isinstance(entry, DrEntry) else DrEntry.model_validate(entry)
        for key, entry in tracker.items()
    }


def _definitions(conditions: Iterable[ConditionRef]) -> list[ConditionDefinition]:
    """Resolve condition references, skipping unknown names."""
    resolved = []
    for ref in conditions:
        definition = get_condition(_ref_name(ref))
        if definition is None:
            logger.warning("unknown_condition", condition=_ref_name(ref))
            continue
        resolved.append(definition)
    return resolved


def _effects(conditions: Iterable[ConditionRef]) -> list[ConditionEffects]:
    return [d.effects for d in _definitions(conditions)]


# =============================================================================
# Combat Queries
# =============================================================================


def resolve_attack_advantage(
    attacker_conditions: Iterable[ConditionRef],
    target_conditions: Iterable[ConditionRef],
    is_melee: bool,
    is_within_5ft: bool,
) -> int:
    """Determine whether an attack is made with advantage or disadvantage.

    Every source adds +1 (advantage) or -1 (disadvantage) and the net is
    clamped, so one source of each cancels while two disadvantages outweigh
    a single advantage.

    Args:
        attacker_conditions: Conditions on the attacker.
        target_conditions: Conditions on the target.
        is_melee: Whether the attack is a melee attack.
        is_within_5ft: Whether the attacker is within 5 feet of the target.

    Returns:
        1 for advantage, -1 for disadvantage, 0 for neither.
    """
    net = 0

    for effects in _effects(attacker_conditions):
        if effects.attack_advantage:
            net += 1
        if effects.attack_disadvantage:
            net -= 1

    for effects in _effects(target_conditions):
        if effects.attacked_advantage:
            net += 1
        if effects.attacked_disadvantage:
            net -= 1
        if effects.melee_attacked_advantage and is_melee and is_within_5ft:
            net += 1
        elif effects.ranged_attacked_disadvantage:
            # Ranged attacks and melee from beyond 5 ft
            net -= 1

    return max(-1, min(1, net))


def can_act(conditions: Iterable[ConditionRef]) -> bool:
    """Check whether a combatant can take actions or reactions."""
    return not any(e.cannot_act for e in _effects(conditions))


def can_move(conditions: Iterable[ConditionRef]) -> bool:
    """Check whether a combatant can move."""
    return not any(e.cannot_move or e.speed_zero for e in _effects(conditions))


def can_cast(conditions: Iterable[ConditionRef]) -> bool:
    """Check whether a combatant can cast spells or use techniques."""
    return not any(e.cannot_cast or e.cannot_act for e in _effects(conditions))


def get_effective_speed(base_speed: int, conditions: Iterable[ConditionRef]) -> int:
    """Get walking speed after conditions: zero if any condition stops movement."""
    if any(e.speed_zero for e in _effects(conditions)):
        return 0
    return base_speed


def get_speed_multiplier(conditions: Iterable[ConditionRef]) -> float:
    """The slowest movement multiplier from conditions, 1.0 if none applies.

    Speed-zero conditions are handled by get_effective_speed; this covers
    partial slows such as chilled and slowed.
    """
    multipliers = [
        e.speed_multiplier for e in _effects(conditions) if e.speed_multiplier is not None
    ]
    return min([1.0, *multipliers])


def is_auto_crit(target_conditions: Iterable[ConditionRef], is_within_5ft: bool) -> bool:
    """Check whether a hit against the target is automatically critical."""
    if not is_within_5ft:
        return False
    return any(e.crit_within_5ft for e in _effects(target_conditions))


def has_resistance_all(conditions: Iterable[ConditionRef]) -> bool:
    """Check whether the combatant resists all damage."""
    return any(e.resistance_all for e in _effects(conditions))


def get_dot_damage(conditions: Iterable[ConditionRef]) -> int:
    """Total damage-over-time taken at the start of a turn."""
    return sum(e.dot_damage for e in _effects(conditions))


def get_damage_vulnerability_multiplier(
    conditions: Iterable[ConditionRef],
    skill_id: str,
    *,
    settings: CombatSettings | None = None,
) -> float:
    """Damage multiplier for a skill against a combatant's conditions."""
    if any(skill_id in e.damage_vulnerability for e in _effects(conditions)):
        settings = settings or get_settings().combat
        return settings.vulnerability_multiplier
    return 1.0


def get_ac_modifier(conditions: Iterable[ConditionRef]) -> int:
    """Sum of armor class modifiers from conditions."""
    return sum(e.ac_modifier for e in _effects(conditions))


def get_outgoing_damage_multiplier(conditions: Iterable[ConditionRef]) -> float:
    """The most penalizing outgoing damage multiplier, 1.0 if none applies."""
    multipliers = [
        e.outgoing_damage_multiplier
        for e in _effects(conditions)
        if e.outgoing_damage_multiplier is not None
    ]
    return min([1.0, *multipliers])


def apply_damage_resistance(amount: int, conditions: Iterable[ConditionRef]) -> int:
    """Apply resistance to incoming damage; never negative."""
    amount = max(0, amount)
    if has_resistance_all(conditions):
        return amount // 2
    return amount


# =============================================================================
# Instance Lists
# =============================================================================


def process_condition_durations(
    conditions: Iterable[StoredCondition],
    timing: ExpiryTiming | str,
) -> list[ConditionInstance]:
    """Advance condition durations at the start or end of a turn.

    Instances without a duration are permanent. Instances whose
    ``expires_on`` names the other phase pass through; instances with no
    ``expires_on`` tick at either phase. A duration reaching zero removes
    the instance.

    Args:
        conditions: Active condition instances or stored mappings.
        timing: The turn phase being processed.

    Returns:
        New list of instances; the input is not modified.
    """
    timing = ExpiryTiming(timing)
    remaining: list[ConditionInstance] = []

    for instance in map(_as_instance, conditions):
        if instance.duration is None:
            remaining.append(instance)
            continue
        if instance.expires_on is not None and instance.expires_on != timing:
            remaining.append(instance)
            continue

        left = instance.duration - 1
        if left <= 0:
            logger.debug("condition_expired", condition=instance.name, timing=timing.value)
            continue
        remaining.append(instance.model_copy(update={"duration": left}))

    return remaining


def remove_conditions_on_damage(conditions: Iterable[StoredCondition]) -> list[ConditionInstance]:
    """Drop instances whose condition ends when the combatant takes damage."""
    kept = []
    for instance in map(_as_instance, conditions):
        definition = get_condition(instance.name)
        if definition is not None and definition.effects.break_on_damage:
            logger.debug("condition_broken_by_damage", condition=instance.name)
            continue
        kept.append(instance)
    return kept


def concentration_save_dc(damage_taken: int) -> int:
    """DC of the concentration save after taking damage."""
    return max(CONCENTRATION_MIN_DC, damage_taken // 2)


# =============================================================================
# Diminishing Returns
# =============================================================================


def get_cc_category(name: str | ConditionName) -> CcCategory | None:
    """Crowd-control category of a condition, or None if it is not CC."""
    definition = get_condition(name)
    return definition.cc_category if definition is not None else None


def apply_diminishing_returns(
    base_duration: int,
    condition: str | ConditionName,
    tracker: DrTracker,
    current_round: int,
    *,
    settings: CombatSettings | None = None,
) -> tuple[int, dict[CcCategory, DrEntry]]:
    """Shorten repeated crowd control within a category.

    Successive applications in one category last 100%, 50% and 25% of the
    base duration (never below 1), after which the target is immune. A
    category resets once ``dr_reset_turns`` rounds pass without an
    application. Non-CC conditions keep their base duration.

    Returns:
        Tuple of (effective duration, updated tracker). The input tracker
        is not modified.
    """
    updated = _load_tracker(tracker)
    category = get_cc_category(condition)
    if category is None:
        return base_duration, updated

    settings = settings or get_settings().combat
    entry = updated.get(category)
    if entry is not None and current_round - entry.last_applied_round >= settings.dr_reset_turns:
        entry = None

    count = entry.count if entry is not None else 0
    if count == 0:
        duration = base_duration
    elif count == 1:
        duration = max(1, base_duration // 2)
    elif count == 2:
        duration = max(1, base_duration // 4)
    else:
        duration = 0

    updated[category] = DrEntry(count=count + 1, last_applied_round=current_round)
    logger.debug(
        "diminishing_returns_applied",
        condition=str(condition),
        category=category.value,
        application=count + 1,
        duration=duration,
    )
    return duration, updated


__all__ = [
    "CONDITIONS",
    "ConditionRef",
    "DrTracker",
    "get_condition",
    "resolve_attack_advantage",
    "can_act",
    "can_move",
    "can_cast",
    "get_effective_speed",
    "get_speed_multiplier",
    "is_auto_crit",
    "has_resistance_all",
    "get_dot_damage",
    "get_damage_vulnerability_multiplier",
    "get_ac_modifier",
    "get_outgoing_damage_multiplier",
    "apply_damage_resistance",
    "process_condition_durations",
    "remove_conditions_on_damage",
    "concentration_save_dc",
    "get_cc_category",
    "apply_diminishing_returns",
]
