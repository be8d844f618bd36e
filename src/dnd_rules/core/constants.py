"""Rules constants for the D&D 5E rules engine.

This module defines the fixed numbers the rules reference: die sizes,
critical thresholds, level bounds, and sentinel values for resources.
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================

D20_SIDES = 20
"""Sides on the die used for checks, attacks, and saves."""

NATURAL_CRITICAL = 20
"""Natural roll that always hits and counts as a critical."""

NATURAL_FUMBLE = 1
"""Natural roll that always misses."""

CRITICAL_DICE_MULTIPLIER = 2
"""Damage dice are multiplied by this on a critical hit (modifier is not)."""

# =============================================================================
# Ability Scores
# =============================================================================

ABILITY_SCORE_BASELINE = 10
"""Score whose modifier is exactly zero."""

SPELL_SAVE_DC_BASE = 8
"""Base of the spell save DC formula (8 + proficiency + casting modifier)."""

# =============================================================================
# Levels
# =============================================================================

MIN_CHARACTER_LEVEL = 1
"""Minimum character level."""

MAX_CHARACTER_LEVEL = 20
"""Maximum character level in D&D 5E."""

DEFAULT_PROFICIENCY_BONUS = 2
"""Proficiency bonus for level 1 characters."""

# =============================================================================
# Combat
# =============================================================================

DEFAULT_SPEED = 30
"""Default walking speed in feet (most medium creatures)."""

CONCENTRATION_MIN_DC = 10
"""Concentration saves never have a DC below this."""

UNLIMITED_USES = -1
"""Resource pool maximum meaning the resource never runs out."""

DEFAULT_HIT_DIE = 10
"""Hit die rolled during a short rest when the class provides none."""


__all__ = [
    "D20_SIDES",
    "NATURAL_CRITICAL",
    "NATURAL_FUMBLE",
    "CRITICAL_DICE_MULTIPLIER",
    "ABILITY_SCORE_BASELINE",
    "SPELL_SAVE_DC_BASE",
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "DEFAULT_PROFICIENCY_BONUS",
    "DEFAULT_SPEED",
    "CONCENTRATION_MIN_DC",
    "UNLIMITED_USES",
    "DEFAULT_HIT_DIE",
]
