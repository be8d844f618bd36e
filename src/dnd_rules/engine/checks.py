"""Ability checks, attack rolls, damage rolls and saving throws.

Every function takes an optional ``roller`` keyword. When omitted the
module-level default roller is used; tests pass a roller that returns
scripted values.
"""

from __future__ import annotations

from dnd_rules.core.constants import (
    ABILITY_SCORE_BASELINE,
    CRITICAL_DICE_MULTIPLIER,
    NATURAL_CRITICAL,
    NATURAL_FUMBLE,
)
from dnd_rules.core.logging import get_logger
from dnd_rules.engine.dice import DiceRoller, get_default_roller
from dnd_rules.models.enums import RollType
from dnd_rules.models.results import (
    AbilityCheckResult,
    AttackRollResult,
    DamageRollResult,
    SavingThrowResult,
)


logger = get_logger(__name__)


def calculate_modifier(score: int) -> int:
    """Calculate the modifier for an ability score.

    Floors toward negative infinity, so a score of 9 gives -1.

    Example:
        >>> calculate_modifier(15)
        2
        >>> calculate_modifier(1)
        -5
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


def resolve_roll_type(has_advantage: bool, has_disadvantage: bool) -> RollType:
    """Reduce advantage and disadvantage flags to one roll type.

    Both flags together cancel to a normal roll.
    """
    if has_advantage and not has_disadvantage:
        return RollType.ADVANTAGE
    if has_disadvantage and not has_advantage:
        return RollType.DISADVANTAGE
    return RollType.NORMAL


def make_ability_check(
    ability_score: int,
    proficiency_bonus: int,
    is_proficient: bool = False,
    has_expertise: bool = False,
    has_advantage: bool = False,
    has_disadvantage: bool = False,
    *,
    roller: DiceRoller | None = None,
) -> AbilityCheckResult:
    """Make an ability check.

    Args:
        ability_score: The ability score used for the check.
        proficiency_bonus: The character's proficiency bonus.
        is_proficient: Add the proficiency bonus once.
        has_expertise: Add the proficiency bonus twice (implies proficient).
        has_advantage: Roll two d20s and keep the higher.
        has_disadvantage: Roll two d20s and keep the lower.
        roller: Dice roller to use.

    Returns:
        AbilityCheckResult with the d20 that counts, modifier and total.
    """
    roller = roller or get_default_roller()

    if has_expertise:
        proficiency = proficiency_bonus * 2
    elif is_proficient:
        proficiency = proficiency_bonus
    else:
        proficiency = 0

    modifier = calculate_modifier(ability_score) + proficiency
    roll_type = resolve_roll_type(has_advantage, has_disadvantage)
    natural, rolls = roller.roll_d20_with(roll_type)
    total = natural + modifier

    logger.debug(
        "ability_check",
        natural_roll=natural,
        modifier=modifier,
        total=total,
        roll_type=roll_type.value,
    )
    return AbilityCheckResult(
        roll=natural,
        modifier=modifier,
        total=total,
        natural_roll=natural,
        rolls=rolls,
        roll_type=roll_type,
    )


def make_attack_roll(
    ability_score: int,
    proficiency_bonus: int,
    target_ac: int,
    has_advantage: bool = False,
    has_disadvantage: bool = False,
    *,
    roller: DiceRoller | None = None,
) -> AttackRollResult:
    """Make an attack roll against a target's armor class.

    A natural 20 always hits and a natural 1 always misses, whatever the
    total.
    """
    roller = roller or get_default_roller()

    modifier = calculate_modifier(ability_score) + proficiency_bonus
    roll_type = resolve_roll_type(has_advantage, has_disadvantage)
    natural, rolls = roller.roll_d20_with(roll_type)
    total = natural + modifier

    is_critical = natural == NATURAL_CRITICAL
    is_critical_miss = natural == NATURAL_FUMBLE
    if is_critical:
        hits = True
    elif is_critical_miss:
        hits = False
    else:
        hits = total >= target_ac

    logger.debug(
        "attack_roll",
        natural_roll=natural,
        modifier=modifier,
        total=total,
        target_ac=target_ac,
        hits=hits,
        is_critical=is_critical,
    )
    return AttackRollResult(
        roll=natural,
        modifier=modifier,
        total=total,
        hits=hits,
        is_critical=is_critical,
        is_critical_miss=is_critical_miss,
        target_ac=target_ac,
        rolls=rolls,
        roll_type=roll_type,
    )


def roll_damage(
    dice_count: int,
    dice_sides: int,
    modifier: int = 0,
    is_critical: bool = False,
    *,
    roller: DiceRoller | None = None,
) -> DamageRollResult:
    """Roll damage dice.

    On a critical hit the number of dice doubles; the modifier does not.
    The total is floored at zero.
    """
    roller = roller or get_default_roller()

    count = dice_count * CRITICAL_DICE_MULTIPLIER if is_critical else dice_count
    rolls = roller.roll_dice(count, dice_sides)
    total = max(0, sum(rolls) + modifier)

    logger.debug(
        "damage_roll",
        dice=f"{count}d{dice_sides}",
        rolls=rolls,
        modifier=modifier,
        total=total,
        is_critical=is_critical,
    )
    return DamageRollResult(rolls=rolls, modifier=modifier, total=total, is_critical=is_critical)


def make_saving_throw(
    ability_score: int,
    proficiency_bonus: int,
    is_proficient: bool,
    dc: int,
    has_advantage: bool = False,
    has_disadvantage: bool = False,
    *,
    roller: DiceRoller | None = None,
) -> SavingThrowResult:
    """Make a saving throw against a DC.

    Resolved as an ability check without expertise; succeeds when the
    total meets or beats the DC.
    """
    check = make_ability_check(
        ability_score,
        proficiency_bonus,
        is_proficient=is_proficient,
        has_expertise=False,
        has_advantage=has_advantage,
        has_disadvantage=has_disadvantage,
        roller=roller,
    )
    success = check.total >= dc
    logger.debug("saving_throw", total=check.total, dc=dc, success=success)
    return SavingThrowResult(
        roll=check.roll,
        modifier=check.modifier,
        total=check.total,
        natural_roll=check.natural_roll,
        dc=dc,
        success=success,
        rolls=check.rolls,
        roll_type=check.roll_type,
    )


__all__ = [
    "calculate_modifier",
    "resolve_roll_type",
    "make_ability_check",
    "make_attack_roll",
    "roll_damage",
    "make_saving_throw",
]
