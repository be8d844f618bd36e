"""Pydantic V2 schemas for a session's pending roll.

A session holds at most one outstanding roll. The slot is modelled as a
closed set of states so that code holding an AwaitingRoll cannot request
another roll without first resolving or resetting it.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from dnd_rules.models.enums import Ability


class RollStakes(BaseModel):
    """Narrative consequences attached to a roll."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    on_success: str = Field(alias="onSuccess")
    on_failure: str = Field(alias="onFailure")


class RollSpec(BaseModel):
    """What the orchestrator asked a player to roll.

    Attributes:
        roll_type: Kind of roll ('ability_check', 'saving_throw', ...).
        ability: Ability the roll uses.
        skill: Skill the check uses, if any.
        dc: Difficulty class to meet or beat.
        reason: Why the roll was requested.
        character_id: Character expected to roll.
        action_context: The action that triggered the roll.
        stakes: Optional consequences of success and failure.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    roll_type: str = Field(alias="type")
    ability: Ability
    skill: str | None = None
    dc: int
    reason: str = ""
    character_id: str = Field(alias="characterId")
    action_context: str = Field(default="", alias="actionContext")
    stakes: RollStakes | None = None


class IdleRoll(BaseModel):
    """No roll is outstanding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    state: Literal["idle"] = "idle"


class AwaitingRoll(BaseModel):
    """A roll has been requested and not yet resolved."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    state: Literal["awaiting_roll"] = "awaiting_roll"
    spec: RollSpec


class ResolvedRoll(BaseModel):
    """The last requested roll and its outcome."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    state: Literal["resolved"] = "resolved"
    spec: RollSpec
    total: int
    natural_roll: int | None = None
    success: bool


PendingRollState = Annotated[
    IdleRoll | AwaitingRoll | ResolvedRoll,
    Field(discriminator="state"),
]


__all__ = [
    "RollStakes",
    "RollSpec",
    "IdleRoll",
    "AwaitingRoll",
    "ResolvedRoll",
    "PendingRollState",
]
