"""Pydantic V2 schemas for status conditions.

A ConditionDefinition is immutable rules data keyed by ConditionName. A
ConditionInstance is the small mutable-by-replacement record the
orchestrator stores per combatant: its only legal change is advancing or
expiring its duration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dnd_rules.models.enums import CcCategory, ConditionName, ExpiryTiming


class ConditionEffects(BaseModel):
    """Combat effect bundle of a condition.

    Boolean flags default to False, so a definition only lists what it
    changes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    attack_disadvantage: bool = False
    attack_advantage: bool = False
    attacked_advantage: bool = False
    attacked_disadvantage: bool = False
    cannot_act: bool = False
    cannot_move: bool = False
    speed_zero: bool = False
    auto_fail_str_dex_saves: bool = False
    auto_fail_hearing_checks: bool = False
    ability_check_disadvantage: bool = False
    dex_save_disadvantage: bool = False
    crit_within_5ft: bool = False
    resistance_all: bool = False
    cannot_approach_source: bool = False
    cannot_attack_charmer: bool = False
    melee_attacked_advantage: bool = False
    ranged_attacked_disadvantage: bool = False

    # Extended effects
    dot_damage: int = 0
    ac_modifier: int = 0
    cannot_cast: bool = False
    damage_vulnerability: frozenset[str] = frozenset()
    break_on_damage: bool = False
    outgoing_damage_multiplier: float | None = None
    speed_multiplier: float | None = None


class ConditionDefinition(BaseModel):
    """Immutable definition of a condition.

    Attributes:
        key: Canonical condition key.
        name: Display name.
        description: Rules text summary.
        effects: Mechanical effects.
        cc_category: Crowd-control grouping for diminishing returns.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: ConditionName
    name: str
    description: str
    effects: ConditionEffects = Field(default_factory=ConditionEffects)
    cc_category: CcCategory | None = None


class ConditionInstance(BaseModel):
    """A condition applied to a combatant.

    Attributes:
        name: Condition name as stored by the orchestrator.
        duration: Turns remaining, or None for permanent (removed only by
            game logic outside the rules engine).
        expires_on: Turn phase at which the duration ticks. None ticks at
            either phase.
        source: Who or what applied the condition.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    duration: int | None = None
    expires_on: ExpiryTiming | None = Field(default=None, alias="expiresOn")
    source: str | None = None

    @property
    def condition(self) -> ConditionName | None:
        """The canonical condition key, or None if the name is unknown."""
        return ConditionName.parse(self.name)

    @property
    def is_permanent(self) -> bool:
        """Whether this instance has no duration."""
        return self.duration is None


class DrEntry(BaseModel):
    """Diminishing-returns history of one crowd-control category.

    Attributes:
        count: Applications since the category last reset.
        last_applied_round: Combat round of the most recent application.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    count: int = Field(ge=0)
    last_applied_round: int = Field(alias="lastAppliedRound")


__all__ = [
    "ConditionEffects",
    "ConditionDefinition",
    "ConditionInstance",
    "DrEntry",
]
