"""Custom exception hierarchy for the D&D 5E rules engine.

The engine distinguishes hard failures (malformed input that cannot be
defaulted, such as invalid dice notation) from soft failures, which never
raise and instead degrade to neutral results. Every exception raised by
this package inherits from RulesEngineError so callers can handle them
uniformly at the orchestrator boundary.

Example:
    >>> from dnd_rules.core.exceptions import DiceRollError
    >>> raise DiceRollError("Invalid dice notation: 0d6", expression="0d6+2", term="0d6")
"""

from __future__ import annotations

from typing import Any


class RulesEngineError(Exception):
    """Base exception for all rules engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(RulesEngineError):
    """Base exception for all rules resolution errors."""


class DiceRollError(GameEngineError):
    """Raised when dice notation cannot be parsed or rolled.

    This is a hard failure: the caller's action must stop, since guessing
    a result would corrupt game fairness.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        term: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The full dice expression that caused the error.
            term: The offending term within the expression.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if expression:
            combined_details["expression"] = expression
        if term:
            combined_details["term"] = term
        super().__init__(message, details=combined_details)


class InvalidGameStateError(GameEngineError):
    """Raised when a state transition violates the turn structure.

    The pending-roll state machine raises this when a new roll is
    requested while another one is still awaiting resolution.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class ResourceError(GameEngineError):
    """Raised when a resource pool or spell slot snapshot is malformed."""

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize resource error with the resource name.

        Args:
            message: Human-readable error description.
            resource: Name of the resource pool or slot level involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if resource:
            combined_details["resource"] = resource
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(RulesEngineError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(RulesEngineError):
    """Raised when a value falls outside what the rules can accept."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "RulesEngineError",
    "GameEngineError",
    "DiceRollError",
    "InvalidGameStateError",
    "ResourceError",
    "ConfigurationError",
    "ValidationError",
]
