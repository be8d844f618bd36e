"""Configuration management for the D&D 5E rules engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime overrides. Configuration is never read as ambient mutable state
by the rules themselves: callers build a DiceRoller (or pass explicit
values) from these settings and thread them through the call chain.

Example:
    >>> from dnd_rules.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.dice.max_dice_per_term
    100

Environment Variables:
    DND_RULES_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_RULES_JSON_LOGS: Emit JSON log lines instead of console output
    DND_RULES_DICE_SEED: Seed for reproducible dice rolls
    DND_RULES_DICE_MAX_DICE_PER_TERM: Largest N accepted in an NdM term
    DND_RULES_COMBAT_DR_RESET_TURNS: Rounds before diminishing returns reset
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_rules.core.exceptions import ConfigurationError


class DiceSettings(BaseSettings):
    """Configuration for the dice engine.

    Attributes:
        seed: Optional random seed for reproducible rolls.
        max_dice_per_term: Upper bound on N in an NdM term.
        max_sides: Upper bound on M in an NdM term.
        max_dice_string_length: Longest dice string accepted for parsing.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_RULES_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible rolls",
    )
    max_dice_per_term: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum dice in a single NdM term",
    )
    max_sides: int = Field(
        default=1000,
        ge=2,
        le=10000,
        description="Maximum sides on a single die",
    )
    max_dice_string_length: int = Field(
        default=200,
        ge=8,
        le=2000,
        description="Maximum length of a dice notation string",
    )


class CombatSettings(BaseSettings):
    """Configuration for condition and combat rule tuning.

    Attributes:
        dr_reset_turns: Rounds without crowd control before diminishing
            returns for a category reset.
        vulnerability_multiplier: Damage multiplier applied when a condition
            makes the target vulnerable to the attacking skill.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_RULES_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dr_reset_turns: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Rounds before diminishing returns reset",
    )
    vulnerability_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        le=4.0,
        description="Multiplier for condition-granted vulnerability",
    )


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration domains.

    Attributes:
        app_name: Engine name.
        app_version: Engine version string.
        debug: Enable debug mode.
        log_level: Logging level.
        json_logs: Render logs as JSON lines.
        dice: Dice engine settings.
        combat: Combat tuning settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D 5E Rules Engine",
        description="Engine name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Engine version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    dice: DiceSettings = Field(default_factory=DiceSettings)
    combat: CombatSettings = Field(default_factory=CombatSettings)

    @model_validator(mode="after")
    def validate_debug_logging(self) -> "Settings":
        """Reject JSON logging combined with debug mode.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If debug mode is combined with JSON logs.
        """
        if self.debug and self.json_logs:
            raise ConfigurationError(
                "Debug mode uses console logging; disable json_logs or debug",
                config_key="json_logs",
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The engine Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "DiceSettings",
    "CombatSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
