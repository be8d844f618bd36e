"""Rules engine for D&D 5E combat and skill resolution.

Every operation is a synchronous function over immutable inputs. Functions
that change a resource pool, slot table or condition list return a new
snapshot for the orchestrator to write back.

Submodules:
    dice: Dice rolling and damage notation (d20 library for expressions)
    checks: Ability checks, attack rolls, damage rolls, saving throws
    conditions: Condition table and combat effects, diminishing returns
    stats: Equipment bonuses and derived stats
    class_features: Per-class features and resource pools
    spells: Caster categories, spell slots, spell DCs
    resources: Consuming and restoring resources, rests, hit dice
    pending_roll: Pending-roll state transitions

Example:
    >>> from dnd_rules.engine import make_attack_roll, resolve_attack_advantage
    >>> adv = resolve_attack_advantage(["invisible"], [], True, True)
    >>> result = make_attack_roll(16, 2, 13, has_advantage=adv > 0)
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_rules.engine.dice import (
    DICE_PATTERN,
    DiceRoller,
    get_default_roller,
    parse_dice_string,
    roll_d20,
    roll_dice,
    roll_expression,
    roll_with_advantage,
    roll_with_disadvantage,
    validate_dice_string,
)

# =============================================================================
# Checks
# =============================================================================
from dnd_rules.engine.checks import (
    calculate_modifier,
    make_ability_check,
    make_attack_roll,
    make_saving_throw,
    resolve_roll_type,
    roll_damage,
)

# =============================================================================
# Conditions
# =============================================================================
from dnd_rules.engine.conditions import (
    CONDITIONS,
    apply_damage_resistance,
    apply_diminishing_returns,
    can_act,
    can_cast,
    can_move,
    concentration_save_dc,
    get_ac_modifier,
    get_cc_category,
    get_condition,
    get_damage_vulnerability_multiplier,
    get_dot_damage,
    get_effective_speed,
    get_speed_multiplier,
    get_outgoing_damage_multiplier,
    has_resistance_all,
    is_auto_crit,
    process_condition_durations,
    remove_conditions_on_damage,
    resolve_attack_advantage,
)

# =============================================================================
# Stats
# =============================================================================
from dnd_rules.engine.stats import (
    clamp_hp,
    clamp_percentage,
    compute_derived_stats,
    compute_equipment_bonuses,
    get_npc_attack_bonus,
    get_npc_damage_dice,
    get_npc_effective_ac,
    primary_ability_for_class,
)

# =============================================================================
# Class Features & Spells
# =============================================================================
from dnd_rules.engine.class_features import (
    CLASS_FEATURES,
    get_cc_break_features,
    get_extra_attacks,
    get_features_for_class_at_level,
    get_martial_arts_die,
    get_rage_damage_bonus,
    get_sneak_attack_dice,
    initialize_class_resources,
)
from dnd_rules.engine.spells import (
    get_cantrip_dice_count,
    get_caster_category,
    get_casting_ability,
    get_spell_attack_bonus,
    get_spell_save_dc,
    get_spell_slots,
    has_spell_slot,
    initialize_spell_slots,
    is_caster,
)

# =============================================================================
# Resources & Pending Rolls
# =============================================================================
from dnd_rules.engine.resources import (
    consume_resource,
    load_resource_pools,
    load_spell_slots,
    long_rest,
    recover_hit_dice,
    restore_resource,
    restore_spell_slot,
    roll_hit_dice_healing,
    short_rest,
    spend_hit_dice,
    use_spell_slot,
)
from dnd_rules.engine.pending_roll import (
    request_roll,
    reset_roll,
    resolve_roll,
)


__all__ = [
    # Dice
    "DICE_PATTERN",
    "DiceRoller",
    "get_default_roller",
    "parse_dice_string",
    "roll_d20",
    "roll_dice",
    "roll_expression",
    "roll_with_advantage",
    "roll_with_disadvantage",
    "validate_dice_string",
    # Checks
    "calculate_modifier",
    "make_ability_check",
    "make_attack_roll",
    "make_saving_throw",
    "resolve_roll_type",
    "roll_damage",
    # Conditions
    "CONDITIONS",
    "apply_damage_resistance",
    "apply_diminishing_returns",
    "can_act",
    "can_cast",
    "can_move",
    "concentration_save_dc",
    "get_ac_modifier",
    "get_cc_category",
    "get_condition",
    "get_damage_vulnerability_multiplier",
    "get_dot_damage",
    "get_effective_speed",
    "get_speed_multiplier",
    "get_outgoing_damage_multiplier",
    "has_resistance_all",
    "is_auto_crit",
    "process_condition_durations",
    "remove_conditions_on_damage",
    "resolve_attack_advantage",
    # Stats
    "clamp_hp",
    "clamp_percentage",
    "compute_derived_stats",
    "get_npc_attack_bonus",
    "get_npc_damage_dice",
    "get_npc_effective_ac",
    "compute_equipment_bonuses",
    "primary_ability_for_class",
    # Class features & spells
    "CLASS_FEATURES",
    "get_cc_break_features",
    "get_extra_attacks",
    "get_features_for_class_at_level",
    "get_martial_arts_die",
    "get_rage_damage_bonus",
    "get_sneak_attack_dice",
    "initialize_class_resources",
    "get_cantrip_dice_count",
    "get_caster_category",
    "get_casting_ability",
    "get_spell_attack_bonus",
    "get_spell_save_dc",
    "get_spell_slots",
    "has_spell_slot",
    "initialize_spell_slots",
    "is_caster",
    # Resources & pending rolls
    "consume_resource",
    "load_resource_pools",
    "load_spell_slots",
    "long_rest",
    "recover_hit_dice",
    "restore_resource",
    "restore_spell_slot",
    "roll_hit_dice_healing",
    "short_rest",
    "spend_hit_dice",
    "use_spell_slot",
    "request_roll",
    "reset_roll",
    "resolve_roll",
]
