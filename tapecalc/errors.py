"""Recoverable calculator errors.

Both kinds are surfaced to the user as transient notices; neither touches
the calculator state.
"""

from __future__ import annotations


class CalculatorError(Exception):
    """Base class for errors reported back through an Outcome."""

    kind = "error"
    default_message = "Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DivideByZeroError(CalculatorError):
    kind = "divide-by-zero"
    default_message = "Cannot divide by zero"


class InvalidInputError(CalculatorError):
    kind = "invalid-input"
    default_message = "Invalid input"
