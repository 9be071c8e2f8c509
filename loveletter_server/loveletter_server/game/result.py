"""Structured results returned by engine entry points."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a rule violation."""

    PHASE = "phase"  # Wrong game phase for the action
    TURN = "turn"  # Not the active player, or wrong hand size
    SELECTION = "selection"  # Card not held, or Countess rule broken
    TARGET = "target"  # Missing, invalid, shielded or self target
    GUESS = "guess"  # Missing or disallowed Guard guess
    PLAYER_COUNT = "player_count"  # Join/start cardinality


@dataclass
class ValidationResult:
    """Result of validating a requested action."""

    is_valid: bool
    error_message: str = ""
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=message, error_kind=kind)


@dataclass
class ActionResult:
    """Outcome of a join/start/draw/play request.

    Rule violations are reported here instead of being raised, and the
    message is meant to be shown to the requesting player verbatim.
    """

    ok: bool
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def success(cls) -> "ActionResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, validation: ValidationResult) -> "ActionResult":
        """Create a failed result from a failed validation."""
        return cls(
            ok=False,
            error=validation.error_message,
            error_kind=validation.error_kind,
        )

    def __bool__(self) -> bool:
        return self.ok
