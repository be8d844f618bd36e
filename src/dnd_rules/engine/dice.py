"""Dice rolling mechanics for D&D 5E.

This module owns every random number the rules engine produces. A
DiceRoller wraps its own ``random.Random`` so that rolls are reproducible
from a seed and so tests can inject a scripted roller; module-level
functions delegate to a lazily-built default roller.

Damage strings from weapons, spells, and loot follow a strict notation:
one or more ``NdM`` terms joined by ``+``, an optional flat ``+K``, and an
optional trailing damage-type word (``"2d6+1d4+3 fire"``). Free-form
expressions (``"2d20kh1+5"``) are evaluated with the d20 library instead.
"""

from __future__ import annotations

import random
import re
from typing import Any

import d20

from dnd_rules.core.config import DiceSettings, get_settings
from dnd_rules.core.constants import D20_SIDES, NATURAL_CRITICAL, NATURAL_FUMBLE
from dnd_rules.core.exceptions import DiceRollError
from dnd_rules.core.logging import get_logger
from dnd_rules.models.enums import RollType
from dnd_rules.models.results import AdvantageRoll, DiceRollResult, DiceStringResult


logger = get_logger(__name__)


DICE_PATTERN = re.compile(r"^(\d+d\d+(\s*\+\s*\d+d\d+)*(\s*\+\s*\d+)?(\s+\w+)?)$")
_TERM_SPLIT = re.compile(r"\s*\+\s*")


class DiceRoller:
    """Dice rolling with D&D 5E mechanics.

    Every die the roller produces goes through :meth:`roll_die`, so a
    subclass overriding that one method controls all outcomes.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> result = roller.parse_dice_string("2d6+3 slashing")
        >>> 5 <= result.total <= 15
        True
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        settings: DiceSettings | None = None,
    ) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls. Overrides the
                seed in ``settings``.
            settings: Dice limits and default seed.
        """
        self._settings = settings or DiceSettings()
        self._seed = seed if seed is not None else self._settings.seed
        self._rng = random.Random(self._seed)
        logger.debug("dice_roller_initialized", seed=self._seed)

    @classmethod
    def from_settings(cls, settings: DiceSettings) -> DiceRoller:
        """Build a roller from dice settings."""
        return cls(settings=settings)

    @property
    def settings(self) -> DiceSettings:
        return self._settings

    # -------------------------------------------------------------------------
    # Primitive rolls
    # -------------------------------------------------------------------------

    def roll_die(self, sides: int) -> int:
        """Roll one die with the given number of sides."""
        return self._rng.randint(1, sides)

    def roll_d20(self) -> int:
        """Roll a single d20."""
        return self.roll_die(D20_SIDES)

    def roll_dice(self, count: int, sides: int) -> list[int]:
        """Roll ``count`` independent dice of ``sides`` sides.

        Raises:
            DiceRollError: If count is negative or sides is below 1.
        """
        if count < 0 or sides < 1:
            raise DiceRollError(
                f"Cannot roll {count}d{sides}",
                term=f"{count}d{sides}",
            )
        return [self.roll_die(sides) for _ in range(count)]

    def roll_with_advantage(self) -> AdvantageRoll:
        """Roll two d20s and keep the higher."""
        first, second = self.roll_d20(), self.roll_d20()
        return AdvantageRoll(rolls=(first, second), result=max(first, second))

    def roll_with_disadvantage(self) -> AdvantageRoll:
        """Roll two d20s and keep the lower."""
        first, second = self.roll_d20(), self.roll_d20()
        return AdvantageRoll(rolls=(first, second), result=min(first, second))

    def roll_d20_with(self, roll_type: RollType) -> tuple[int, list[int]]:
        """Roll a d20 the way ``roll_type`` dictates.

        Returns:
            Tuple of (the roll that counts, every d20 rolled).
        """
        if roll_type == RollType.ADVANTAGE:
            adv = self.roll_with_advantage()
            return adv.result, list(adv.rolls)
        if roll_type == RollType.DISADVANTAGE:
            dis = self.roll_with_disadvantage()
            return dis.result, list(dis.rolls)
        natural = self.roll_d20()
        return natural, [natural]

    # -------------------------------------------------------------------------
    # Dice notation
    # -------------------------------------------------------------------------

    def parse_dice_string(self, dice: str) -> DiceStringResult:
        """Parse and roll a damage-notation string.

        The trailing damage-type word, if any, is discarded.

        Args:
            dice: Notation such as ``"2d6"``, ``"1d8+3"``, ``"2d6+1d4 fire"``.

        Returns:
            DiceStringResult with rolls in term order, the flat modifier,
            and the total.

        Raises:
            DiceRollError: If the string does not match the notation, or a
                term has a dice count or side count below 1 or above the
                configured limits.
        """
        if len(dice) > self._settings.max_dice_string_length:
            raise DiceRollError(
                "Dice notation too long",
                expression=dice[:32],
                details={"max_length": self._settings.max_dice_string_length},
            )

        trimmed = dice.strip()
        match = DICE_PATTERN.match(trimmed)
        if match is None:
            raise DiceRollError(f"Invalid dice notation: {dice!r}", expression=dice)

        body = trimmed[: match.start(4)] if match.group(4) else trimmed
        rolls: list[int] = []
        modifier = 0

        for part in _TERM_SPLIT.split(body):
            if "d" in part:
                count_str, sides_str = part.split("d", 1)
                count, sides = int(count_str), int(sides_str)
                if count < 1 or sides < 1:
                    raise DiceRollError(
                        f"Invalid dice notation: {part}",
                        expression=dice,
                        term=part,
                    )
                if count > self._settings.max_dice_per_term or sides > self._settings.max_sides:
                    raise DiceRollError(
                        f"Dice term exceeds limits: {part}",
                        expression=dice,
                        term=part,
                    )
                rolls.extend(self.roll_dice(count, sides))
            else:
                modifier += int(part)

        total = sum(rolls) + modifier
        logger.debug("dice_string_rolled", expression=dice, rolls=rolls, total=total)
        return DiceStringResult(expression=dice, rolls=rolls, modifier=modifier, total=total)

    def roll_expression(self, expression: str) -> DiceRollResult:
        """Roll a free-form dice expression with the d20 library.

        Supports everything the library does, including keep-highest and
        keep-lowest (``"2d20kh1+5"``). The library draws from its own random
        source, so these rolls ignore this roller's seed.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = _extract_dice_values(result.expr)
        natural = _find_natural_d20(result.expr)
        roll = DiceRollResult(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
            natural_roll=natural,
            is_critical=natural == NATURAL_CRITICAL,
            is_fumble=natural == NATURAL_FUMBLE,
            details=str(result),
        )
        logger.debug("expression_rolled", expression=expression, total=roll.total)
        return roll


def _extract_dice_values(expr: Any) -> list[int]:
    """Collect kept die values from a d20 expression tree."""
    values: list[int] = []

    def traverse(node: Any) -> None:
        if isinstance(node, d20.Dice):
            for die in node.values:
                if die.kept:
                    values.append(die.number)
            return
        for child in getattr(node, "children", []):
            traverse(child)

    traverse(expr)
    return values


def _find_natural_d20(expr: Any) -> int | None:
    """Return the first kept d20 value in an expression tree."""
    if isinstance(expr, d20.Dice):
        if expr.size == D20_SIDES:
            for die in expr.values:
                if die.kept:
                    return die.number
        return None
    for child in getattr(expr, "children", []):
        found = _find_natural_d20(child)
        if found is not None:
            return found
    return None


def validate_dice_string(dice: str) -> bool:
    """Check a damage-notation string against the grammar without rolling."""
    return bool(DICE_PATTERN.match(dice.strip()))


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Get the roller used when no roller is passed explicitly."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller.from_settings(get_settings().dice)
    return _default_roller


def roll_d20(*, roller: DiceRoller | None = None) -> int:
    """Roll a d20 in [1, 20]."""
    return (roller or get_default_roller()).roll_d20()


def roll_dice(count: int, sides: int, *, roller: DiceRoller | None = None) -> list[int]:
    """Roll ``count`` dice each in [1, sides]."""
    return (roller or get_default_roller()).roll_dice(count, sides)


def roll_with_advantage(*, roller: DiceRoller | None = None) -> AdvantageRoll:
    """Roll two d20s and keep the higher."""
    return (roller or get_default_roller()).roll_with_advantage()


def roll_with_disadvantage(*, roller: DiceRoller | None = None) -> AdvantageRoll:
    """Roll two d20s and keep the lower."""
    return (roller or get_default_roller()).roll_with_disadvantage()


def parse_dice_string(dice: str, *, roller: DiceRoller | None = None) -> DiceStringResult:
    """Parse and roll a damage-notation string.

    Example:
        >>> result = parse_dice_string("1d8+3 piercing")
        >>> result.modifier
        3
    """
    return (roller or get_default_roller()).parse_dice_string(dice)


def roll_expression(expression: str, *, roller: DiceRoller | None = None) -> DiceRollResult:
    """Roll a free-form d20-library expression."""
    return (roller or get_default_roller()).roll_expression(expression)


__all__ = [
    "DICE_PATTERN",
    "DiceRoller",
    "get_default_roller",
    "roll_d20",
    "roll_dice",
    "roll_with_advantage",
    "roll_with_disadvantage",
    "parse_dice_string",
    "validate_dice_string",
    "roll_expression",
]
