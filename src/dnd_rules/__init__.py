"""D&D 5E rules engine.

Pure, synchronous rules for dice, checks, conditions, derived stats,
class resources and spellcasting. Persistence, narration and transport
belong to the calling orchestrator.
"""

from __future__ import annotations

__version__ = "0.1.0"

from dnd_rules.core import (
    DiceRollError,
    InvalidGameStateError,
    RulesEngineError,
    Settings,
    configure_logging,
    get_logger,
    get_settings,
)


__all__ = [
    "__version__",
    "DiceRollError",
    "InvalidGameStateError",
    "RulesEngineError",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
