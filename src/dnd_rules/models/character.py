"""Pydantic V2 schemas for character data consumed by the rules engine.

Character records and equipped items are supplied by the orchestrator's
persistence layer and are read-only here. Bonus sets and derived stats are
ephemeral: they are recomputed on every query and never stored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dnd_rules.core.constants import DEFAULT_PROFICIENCY_BONUS, DEFAULT_SPEED
from dnd_rules.models.enums import Ability


class AbilityScoreSet(BaseModel):
    """The six ability scores.

    Scores are not range-checked: the rules accept any integer, although
    1-30 is conventional.

    Example:
        >>> scores = AbilityScoreSet(strength=16, dexterity=14)
        >>> scores.get(Ability.STR)
        16
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def get(self, ability: Ability) -> int:
        """Get the score for an ability."""
        return getattr(self, ability.value)


class CharacterRecord(BaseModel):
    """The subset of a stored character the rules need.

    Field aliases match the orchestrator's camelCase documents, so a raw
    record can be validated directly with ``CharacterRecord.model_validate``.

    Attributes:
        abilities: Base ability scores before equipment.
        class_name: Free-text class name (normalized where it is used).
        level: Character level.
        proficiency_bonus: Flat proficiency bonus for this level.
        ac: Base armor class.
        max_hp: Base maximum hit points.
        speed: Base walking speed in feet.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    abilities: AbilityScoreSet = Field(default_factory=AbilityScoreSet)
    class_name: str = Field(default="", alias="class")
    level: int = Field(default=1, ge=0)
    proficiency_bonus: int = Field(default=DEFAULT_PROFICIENCY_BONUS, alias="proficiencyBonus")
    ac: int = 10
    max_hp: int = Field(default=1, alias="maxHp")
    speed: int = DEFAULT_SPEED


class EquippedItem(BaseModel):
    """An equipped item's stat contributions.

    ``stats`` may carry non-numeric entries such as a weapon's damage dice
    string; only numeric entries contribute bonuses.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = ""
    stats: dict[str, Any] = Field(default_factory=dict)
    special_attributes: dict[str, float] = Field(
        default_factory=dict, alias="specialAttributes"
    )


class EquipmentBonusSet(BaseModel):
    """Aggregated numeric deltas from all equipped items.

    Attributes:
        ac: Armor class bonus.
        hp: Maximum hit point bonus.
        speed: Walking speed bonus in feet.
        strength: Strength bonus (and likewise for the other abilities).
        damage_bonus: Flat bonus to damage rolls.
        crit_chance: Critical chance bonus.
        spell_power: Spell power bonus.
        healing_power: Healing power bonus.
        stealth_bonus: Stealth check bonus.
        perception_bonus: Perception check bonus.
        persuasion_bonus: Persuasion check bonus.
        xp_bonus: Experience gain bonus.
        special: Sums of special attributes without a named field.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ac: int = 0
    hp: int = 0
    speed: int = 0
    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0
    damage_bonus: float = 0
    crit_chance: float = 0
    spell_power: float = 0
    healing_power: float = 0
    stealth_bonus: float = 0
    perception_bonus: float = 0
    persuasion_bonus: float = 0
    xp_bonus: float = 0
    special: dict[str, float] = Field(default_factory=dict)

    def ability_bonus(self, ability: Ability) -> int:
        """Get the bonus applied to one ability score."""
        return getattr(self, ability.value)


class DerivedStats(BaseModel):
    """Effective combat statistics after equipment.

    Attributes:
        effective_ac: Base AC plus equipment AC.
        effective_max_hp: Base max HP plus equipment HP.
        effective_speed: Base speed plus equipment speed.
        effective_abilities: Ability scores after equipment.
        ability_modifiers: Modifier for each effective ability score.
        attack_bonus: Proficiency plus the class's attack ability modifier.
        spell_save_dc: 8 + proficiency + casting modifier, or None for
            non-casters.
        equipment_bonuses: The bonus set these stats were derived from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    effective_ac: int
    effective_max_hp: int
    effective_speed: int
    effective_abilities: AbilityScoreSet
    ability_modifiers: dict[Ability, int]
    attack_bonus: int
    spell_save_dc: int | None = None
    equipment_bonuses: EquipmentBonusSet = Field(default_factory=EquipmentBonusSet)


__all__ = [
    "AbilityScoreSet",
    "CharacterRecord",
    "EquippedItem",
    "EquipmentBonusSet",
    "DerivedStats",
]
