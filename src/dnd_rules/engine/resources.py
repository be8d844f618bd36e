"""Resource pool and spell slot bookkeeping, rests and hit dice.

Every function returns a new snapshot and leaves its input untouched. The
orchestrator writes the snapshot back in a single transactional step.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dnd_rules.core.constants import DEFAULT_HIT_DIE
from dnd_rules.core.exceptions import ResourceError, ValidationError
from dnd_rules.core.logging import get_logger
from dnd_rules.engine.checks import calculate_modifier
from dnd_rules.engine.class_features import recharge_type_for
from dnd_rules.engine.dice import DiceRoller, get_default_roller
from dnd_rules.models.enums import RechargeType
from dnd_rules.models.resources import ClassResourcePool, HitDicePool, SpellSlot


logger = get_logger(__name__)

ResourcePools = Mapping[str, ClassResourcePool]
SpellSlots = Mapping[int, SpellSlot]


# =============================================================================
# Loading stored snapshots
# =============================================================================


def load_resource_pools(raw: Mapping[str, Mapping[str, Any]]) -> dict[str, ClassResourcePool]:
    """Validate stored ``{name: {max, current}}`` resource pools.

    Raises:
        ResourceError: If any pool is malformed.
    """
    pools: dict[str, ClassResourcePool] = {}
    for name, data in raw.items():
        try:
            pools[name] = ClassResourcePool.model_validate(data)
        except PydanticValidationError as e:
            raise ResourceError(
                f"Malformed resource pool: {name}",
                resource=name,
                details={"errors": e.error_count()},
            ) from e
    return pools


def load_spell_slots(raw: Mapping[str | int, Mapping[str, Any]]) -> dict[int, SpellSlot]:
    """Validate stored ``{level: {max, used}}`` spell slots.

    Stored documents may key levels as strings.

    Raises:
        ResourceError: If a level is not an integer or a slot is malformed.
    """
    slots: dict[int, SpellSlot] = {}
    for key, data in raw.items():
        try:
            slots[int(key)] = SpellSlot.model_validate(data)
        except (ValueError, PydanticValidationError) as e:
            raise ResourceError(
                f"Malformed spell slot: {key}",
                resource=f"spell_slot_{key}",
            ) from e
    return slots


# =============================================================================
# One-unit changes
# =============================================================================


def consume_resource(pools: ResourcePools, name: str) -> tuple[dict[str, ClassResourcePool], bool]:
    """Spend one use of a named resource.

    Returns:
        Tuple of (updated pools, success). Unknown or exhausted resources
        leave the pools unchanged and report failure.
    """
    updated = dict(pools)
    pool = updated.get(name)
    if pool is None or not pool.is_available:
        logger.debug("resource_unavailable", resource=name)
        return updated, False

    updated[name] = pool.consumed()
    logger.debug("resource_consumed", resource=name, current=updated[name].current)
    return updated, True


def restore_resource(pools: ResourcePools, name: str) -> tuple[dict[str, ClassResourcePool], bool]:
    """Regain one use of a named resource.

    Returns:
        Tuple of (updated pools, success). Unknown or full resources report
        failure.
    """
    updated = dict(pools)
    pool = updated.get(name)
    if pool is None:
        return updated, False
    if pool.is_unlimited:
        return updated, True
    if pool.current >= pool.max:
        return updated, False

    updated[name] = pool.restored()
    return updated, True


def use_spell_slot(slots: SpellSlots, level: int) -> tuple[dict[int, SpellSlot], bool]:
    """Expend one spell slot of a level.

    Returns:
        Tuple of (updated slots, success).
    """
    updated = dict(slots)
    slot = updated.get(level)
    if slot is None or not slot.is_available:
        logger.debug("spell_slot_unavailable", spell_level=level)
        return updated, False

    updated[level] = slot.consumed()
    logger.debug("spell_slot_used", spell_level=level, remaining=updated[level].remaining)
    return updated, True


def restore_spell_slot(slots: SpellSlots, level: int) -> tuple[dict[int, SpellSlot], bool]:
    """Regain one expended spell slot of a level."""
    updated = dict(slots)
    slot = updated.get(level)
    if slot is None or slot.used <= 0:
        return updated, False

    updated[level] = slot.restored()
    return updated, True


# =============================================================================
# Rests
# =============================================================================


def short_rest(pools: ResourcePools) -> dict[str, ClassResourcePool]:
    """Refill every pool that recharges on a short rest."""
    restored = {
        name: pool.refilled() if recharge_type_for(name) == RechargeType.SHORT_REST else pool
        for name, pool in pools.items()
    }
    logger.info(
        "short_rest",
        restored=[name for name in pools if restored[name] != pools[name]],
    )
    return restored


def long_rest(
    pools: ResourcePools,
    slots: SpellSlots,
) -> tuple[dict[str, ClassResourcePool], dict[int, SpellSlot]]:
    """Refill every resource pool and every spell slot."""
    restored_pools = {name: pool.refilled() for name, pool in pools.items()}
    restored_slots = {level: slot.refilled() for level, slot in slots.items()}
    logger.info("long_rest", pools=len(restored_pools), spell_levels=len(restored_slots))
    return restored_pools, restored_slots


# =============================================================================
# Hit Dice
# =============================================================================


def roll_hit_dice_healing(
    count: int,
    con_score: int,
    hit_die: int = DEFAULT_HIT_DIE,
    *,
    roller: DiceRoller | None = None,
) -> int:
    """Roll hit dice for healing.

    Each die heals its roll plus the constitution modifier, at least 1.

    Raises:
        ValidationError: If count is negative.
    """
    if count < 0:
        raise ValidationError(
            "Hit dice count cannot be negative",
            field_name="count",
            invalid_value=count,
        )
    roller = roller or get_default_roller()
    con_mod = calculate_modifier(con_score)
    return sum(max(1, roll + con_mod) for roll in roller.roll_dice(count, hit_die))


def spend_hit_dice(
    pool: HitDicePool,
    requested: int,
    con_score: int,
    hit_die: int = DEFAULT_HIT_DIE,
    *,
    roller: DiceRoller | None = None,
) -> tuple[int, HitDicePool]:
    """Spend up to ``requested`` hit dice from a pool.

    Returns:
        Tuple of (hit points healed, updated pool).
    """
    to_spend = min(requested, pool.remaining)
    if to_spend <= 0:
        return 0, pool

    healed = roll_hit_dice_healing(to_spend, con_score, hit_die, roller=roller)
    logger.info("hit_dice_spent", spent=to_spend, healed=healed)
    return healed, pool.model_copy(update={"used": pool.used + to_spend})


def recover_hit_dice(pool: HitDicePool) -> HitDicePool:
    """Regain half the pool's hit dice (at least one) after a long rest."""
    recovered = max(1, pool.max // 2)
    return pool.model_copy(update={"used": max(0, pool.used - recovered)})


__all__ = [
    "load_resource_pools",
    "load_spell_slots",
    "consume_resource",
    "restore_resource",
    "use_spell_slot",
    "restore_spell_slot",
    "short_rest",
    "long_rest",
    "roll_hit_dice_healing",
    "spend_hit_dice",
    "recover_hit_dice",
]
