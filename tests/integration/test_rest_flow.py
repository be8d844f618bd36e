"""Integration tests for resource spending and rests."""

from __future__ import annotations

from collections.abc import Callable

from dnd_rules.engine import (
    consume_resource,
    initialize_class_resources,
    initialize_spell_slots,
    long_rest,
    recover_hit_dice,
    short_rest,
    spend_hit_dice,
    use_spell_slot,
)
from dnd_rules.engine.dice import DiceRoller
from dnd_rules.models import HitDicePool, get_hit_die


class TestRestFlow:
    """Test resources across a day of adventuring."""

    def test_fighter_short_rest(self, scripted_roller: Callable[..., DiceRoller]) -> None:
        """Action Surge and Second Wind come back after a short rest."""
        pools = initialize_class_resources("Fighter", 5)
        assert set(pools) == {"secondWind", "actionSurge"}

        pools, surged = consume_resource(pools, "actionSurge")
        pools, again = consume_resource(pools, "actionSurge")
        assert (surged, again) == (True, False)

        healed, hit_dice = spend_hit_dice(
            HitDicePool(max=5),
            2,
            con_score=15,
            hit_die=get_hit_die("Fighter"),
            roller=scripted_roller(3, 8),
        )
        assert healed == 15
        assert hit_dice.remaining == 3

        pools = short_rest(pools)
        assert pools["actionSurge"].current == 1

    def test_barbarian_and_paladin_long_rest(self) -> None:
        """Rage and spell slots only return on a long rest."""
        pools = initialize_class_resources("barbarian", 3)
        pools, _ = consume_resource(pools, "rage")
        pools, _ = consume_resource(pools, "rage")

        slots = initialize_spell_slots("paladin", 5)
        slots, _ = use_spell_slot(slots, 2)

        pools = short_rest(pools)
        assert pools["rage"].current == 1

        pools, slots = long_rest(pools, slots)
        assert pools["rage"].current == pools["rage"].max == 3
        assert slots[2].used == 0

        assert recover_hit_dice(HitDicePool(max=5, used=5)).remaining == 2
