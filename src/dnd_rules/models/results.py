"""Value objects returned by the dice engine and check resolver.

Results are ephemeral: the rules engine never persists them, and the
orchestrator decides what to log or store.
"""

from __future__ import annotations

from dataclasses import dataclass

from dnd_rules.models.enums import RollType


@dataclass(frozen=True)
class AdvantageRoll:
    """Two d20s and the one that counts.

    Attributes:
        rolls: Both natural rolls, in roll order.
        result: The higher roll for advantage, the lower for disadvantage.
    """

    rolls: tuple[int, int]
    result: int


@dataclass(frozen=True)
class DiceStringResult:
    """A rolled dice-notation string.

    Attributes:
        expression: The notation as given.
        rolls: Individual die results in term order.
        modifier: Sum of flat terms.
        total: Sum of rolls plus modifier.
    """

    expression: str
    rolls: list[int]
    modifier: int
    total: int


@dataclass(frozen=True)
class DiceRollResult:
    """A free-form expression evaluated by the d20 library.

    Attributes:
        expression: The expression as given.
        total: The total result of the roll.
        dice: Kept dice values.
        modifier: Total minus the sum of kept dice.
        natural_roll: The kept d20 value, if the expression rolled a d20.
        is_critical: Whether the kept d20 was a natural 20.
        is_fumble: Whether the kept d20 was a natural 1.
        details: The library's rendering of the roll.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int
    natural_roll: int | None = None
    is_critical: bool = False
    is_fumble: bool = False
    details: str = ""


@dataclass(frozen=True)
class AbilityCheckResult:
    """Outcome of an ability check.

    Attributes:
        roll: The d20 that counts.
        modifier: Ability modifier plus proficiency contribution.
        total: roll + modifier.
        natural_roll: Same as roll; kept for callers that log both.
        rolls: Every d20 rolled (two under advantage or disadvantage).
        roll_type: How the d20 was rolled.
    """

    roll: int
    modifier: int
    total: int
    natural_roll: int
    rolls: list[int]
    roll_type: RollType = RollType.NORMAL


@dataclass(frozen=True)
class AttackRollResult:
    """Outcome of an attack roll.

    Attributes:
        roll: The natural d20 that counts.
        modifier: Ability modifier plus proficiency bonus.
        total: roll + modifier.
        hits: Whether the attack hits.
        is_critical: Natural 20.
        is_critical_miss: Natural 1.
        target_ac: Armor class the attack was compared against.
        rolls: Every d20 rolled.
        roll_type: How the d20 was rolled.
    """

    roll: int
    modifier: int
    total: int
    hits: bool
    is_critical: bool
    is_critical_miss: bool
    target_ac: int
    rolls: list[int]
    roll_type: RollType = RollType.NORMAL


@dataclass(frozen=True)
class DamageRollResult:
    """Outcome of a damage roll.

    Attributes:
        rolls: Individual damage dice.
        modifier: Flat modifier applied.
        total: Damage dealt, never below zero.
        is_critical: Whether dice were doubled for a critical hit.
    """

    rolls: list[int]
    modifier: int
    total: int
    is_critical: bool = False


@dataclass(frozen=True)
class SavingThrowResult:
    """Outcome of a saving throw.

    Attributes:
        roll: The d20 that counts.
        modifier: Ability modifier plus proficiency contribution.
        total: roll + modifier.
        natural_roll: Same as roll.
        dc: Difficulty class to meet or beat.
        success: total >= dc.
        rolls: Every d20 rolled.
        roll_type: How the d20 was rolled.
    """

    roll: int
    modifier: int
    total: int
    natural_roll: int
    dc: int
    success: bool
    rolls: list[int]
    roll_type: RollType = RollType.NORMAL


__all__ = [
    "AdvantageRoll",
    "DiceStringResult",
    "DiceRollResult",
    "AbilityCheckResult",
    "AttackRollResult",
    "DamageRollResult",
    "SavingThrowResult",
]
