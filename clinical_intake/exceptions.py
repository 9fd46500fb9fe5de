"""Typed errors raised by the intake engine."""

from typing import List


class IntakeError(Exception):
    """Base class for intake engine errors."""


class BaselineValidationError(IntakeError):
    """Required baseline history fields are missing."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Baseline incomplete: Please complete {', '.join(self.missing_fields)} "
            "before continuing."
        )


class NavigationBack(IntakeError):
    """Raised by an answer provider when the patient asks to go back a step."""


class IntakeCancelled(IntakeError):
    """Raised by an answer provider when the patient exits the intake."""


class SessionNotFoundError(IntakeError):
    """An operation needs a persisted session and none exists."""
