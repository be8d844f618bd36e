"""Resource pools, spell slots, and class feature definitions.

Pools and slots are frozen records; every change produces a new record
through consumed()/restored(), which move exactly one unit. Feature
definitions are static rules data built as frozen dataclasses because
they carry per-level callables.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dnd_rules.core.constants import UNLIMITED_USES
from dnd_rules.models.enums import ActionCost, CcCategory, RechargeType


class ClassResourcePool(BaseModel):
    """A per-class consumable counter such as rage or ki.

    A ``max`` of -1 marks an unlimited pool.

    Example:
        >>> pool = ClassResourcePool(max=2, current=2)
        >>> pool.consumed().current
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max: int = Field(ge=UNLIMITED_USES)
    current: int = Field(ge=UNLIMITED_USES)

    @model_validator(mode="after")
    def validate_current_within_max(self) -> "ClassResourcePool":
        """Keep current within [0, max] for limited pools."""
        if not self.is_unlimited and not 0 <= self.current <= self.max:
            msg = f"current ({self.current}) must be between 0 and max ({self.max})"
            raise ValueError(msg)
        return self

    @classmethod
    def full(cls, maximum: int) -> ClassResourcePool:
        """Create a pool whose current equals its max."""
        return cls(max=maximum, current=maximum)

    @property
    def is_unlimited(self) -> bool:
        return self.max == UNLIMITED_USES

    @property
    def is_available(self) -> bool:
        """Whether at least one use remains."""
        return self.is_unlimited or self.current > 0

    def consumed(self) -> ClassResourcePool:
        """Return the pool after spending one use (unchanged if empty or unlimited)."""
        if self.is_unlimited or self.current <= 0:
            return self
        return self.model_copy(update={"current": self.current - 1})

    def restored(self) -> ClassResourcePool:
        """Return the pool after regaining one use (capped at max)."""
        if self.is_unlimited or self.current >= self.max:
            return self
        return self.model_copy(update={"current": self.current + 1})

    def refilled(self) -> ClassResourcePool:
        """Return the pool with every use regained."""
        return self.model_copy(update={"current": self.max})


class SpellSlot(BaseModel):
    """Spell slots of one spell level.

    Attributes:
        max: Slots available per long rest.
        used: Slots already expended.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max: int = Field(ge=0)
    used: int = Field(default=0, ge=0)

    @property
    def remaining(self) -> int:
        return max(0, self.max - self.used)

    @property
    def is_available(self) -> bool:
        return self.used < self.max

    def consumed(self) -> SpellSlot:
        """Return the slot record after expending one slot."""
        if not self.is_available:
            return self
        return self.model_copy(update={"used": self.used + 1})

    def restored(self) -> SpellSlot:
        """Return the slot record after regaining one slot."""
        if self.used <= 0:
            return self
        return self.model_copy(update={"used": self.used - 1})

    def refilled(self) -> SpellSlot:
        return self.model_copy(update={"used": 0})


class HitDicePool(BaseModel):
    """Hit dice available for healing during a short rest.

    Attributes:
        max: Total hit dice (one per character level).
        used: Hit dice already spent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max: int = Field(ge=0)
    used: int = Field(default=0, ge=0)

    @property
    def remaining(self) -> int:
        return max(0, self.max - self.used)


# =============================================================================
# Class Feature Definitions
# =============================================================================


@dataclass(frozen=True)
class ResourceDefinition:
    """A resource granted by a class feature.

    Attributes:
        name: Pool name (e.g. 'rage', 'ki').
        max_at_level: Pool size for a given class level.
        recharges_on: Rest type that refills the pool.
    """

    name: str
    max_at_level: Callable[[int], int]
    recharges_on: RechargeType


@dataclass(frozen=True)
class CcBreakEffect:
    """Ability to break out of crowd-control effects.

    Attributes:
        breaks_categories: Crowd-control categories this can end.
        action_cost: Action economy cost of using it.
        cooldown_rounds: Rounds before it can be used again.
        grants_stealth_on_use: Whether using it also hides the user.
        requires_raging: Whether it only works while raging.
    """

    breaks_categories: frozenset[CcCategory]
    action_cost: ActionCost
    cooldown_rounds: int
    grants_stealth_on_use: bool = False
    requires_raging: bool = False


@dataclass(frozen=True)
class CombatEffect:
    """Combat modifications granted by a feature."""

    extra_attacks: int = 0
    sneak_attack_dice: int = 0
    rage_damage_bonus: int = 0
    rage_resistance: bool = False
    unarmored_defense_ability: str | None = None
    martial_arts_die: str | None = None
    action_surge: bool = False
    second_wind: bool = False
    cc_break: CcBreakEffect | None = None


@dataclass(frozen=True)
class ClassFeature:
    """A class feature gained at a given level.

    Attributes:
        id: Stable feature identifier.
        name: Display name.
        level: Class level at which the feature is gained.
        description: Rules summary.
        combat_effect: Mechanical effect, if any.
        resource: Resource pool granted, if any.
    """

    id: str
    name: str
    level: int
    description: str
    combat_effect: CombatEffect | None = None
    resource: ResourceDefinition | None = field(default=None)


__all__ = [
    "ClassResourcePool",
    "SpellSlot",
    "HitDicePool",
    "ResourceDefinition",
    "CcBreakEffect",
    "CombatEffect",
    "ClassFeature",
]
