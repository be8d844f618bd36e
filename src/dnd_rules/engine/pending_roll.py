"""Transitions of a session's pending-roll slot.

Idle -> AwaitingRoll on request, AwaitingRoll -> Resolved on resolve,
Resolved -> AwaitingRoll on the next request, and any state -> Idle on
reset. A roll cannot be requested while another is awaiting resolution. States
are immutable; each transition returns the next state.
"""

from __future__ import annotations

from typing import Protocol

from dnd_rules.core.exceptions import InvalidGameStateError
from dnd_rules.core.logging import get_logger
from dnd_rules.models.rolls import (
    AwaitingRoll,
    IdleRoll,
    PendingRollState,
    ResolvedRoll,
    RollSpec,
)


logger = get_logger(__name__)


class RollOutcome(Protocol):
    """Anything with a total and a natural d20, such as a check result."""

    @property
    def total(self) -> int: ...

    @property
    def natural_roll(self) -> int: ...


def request_roll(state: PendingRollState, spec: RollSpec) -> AwaitingRoll:
    """Ask for a roll.

    Raises:
        InvalidGameStateError: If a roll is already awaiting resolution.
    """
    if isinstance(state, AwaitingRoll):
        raise InvalidGameStateError(
            "A roll is already pending",
            current_state=state.state,
            expected_states=["idle", "resolved"],
            details={"pending_character": state.spec.character_id},
        )
    logger.info(
        "roll_requested",
        roll_type=spec.roll_type,
        ability=spec.ability.value,
        dc=spec.dc,
        character_id=spec.character_id,
    )
    return AwaitingRoll(spec=spec)


def resolve_roll(state: PendingRollState, outcome: RollOutcome) -> ResolvedRoll:
    """Record the outcome of the pending roll.

    Succeeds when the outcome's total meets or beats the requested DC.

    Raises:
        InvalidGameStateError: If no roll is awaiting resolution.
    """
    if not isinstance(state, AwaitingRoll):
        raise InvalidGameStateError(
            "No roll is pending",
            current_state=state.state,
            expected_states=["awaiting_roll"],
        )
    success = outcome.total >= state.spec.dc
    logger.info(
        "roll_resolved",
        total=outcome.total,
        dc=state.spec.dc,
        success=success,
        character_id=state.spec.character_id,
    )
    return ResolvedRoll(
        spec=state.spec,
        total=outcome.total,
        natural_roll=outcome.natural_roll,
        success=success,
    )


def reset_roll(state: PendingRollState) -> IdleRoll:
    """Clear the slot from any state."""
    if not isinstance(state, IdleRoll):
        logger.info("roll_reset", previous_state=state.state)
    return IdleRoll()


__all__ = [
    "RollOutcome",
    "request_roll",
    "resolve_roll",
    "reset_roll",
]
