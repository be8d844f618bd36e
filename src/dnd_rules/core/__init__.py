"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        RulesEngineError: Base exception for all engine errors.
        DiceRollError: Invalid dice notation (hard failure).
        InvalidGameStateError: Illegal pending-roll transition.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dnd_rules.core.config import (
    CombatSettings,
    DiceSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dnd_rules.core.exceptions import (
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    ResourceError,
    RulesEngineError,
    ValidationError,
)
from dnd_rules.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "RulesEngineError",
    "GameEngineError",
    "DiceRollError",
    "InvalidGameStateError",
    "ResourceError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "DiceSettings",
    "CombatSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
