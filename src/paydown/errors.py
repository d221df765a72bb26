"""Exceptions raised by the payoff calculators."""

from __future__ import annotations

from typing import Mapping


class PaydownError(Exception):
    """Base class for calculator failures."""


class InputValidationError(PaydownError, ValueError):
    """Raised when inputs fail validation before any simulation runs.

    ``errors`` maps field names to human-readable messages so a form can show
    them next to the offending input.
    """

    def __init__(self, errors: Mapping[str, list[str]], message: str | None = None) -> None:
        self.errors: dict[str, list[str]] = {key: list(value) for key, value in errors.items()}
        if message is None:
            flat = [f"{key}: {msg}" for key, msgs in self.errors.items() for msg in msgs]
            message = "; ".join(flat) or "Invalid input."
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "InputValidationError":
        return cls({field: [message]})


class PaymentTooLowError(PaydownError, ValueError):
    """Raised when payments cannot keep up with accruing interest."""

    def __init__(self, message: str = "payment too low to cover interest") -> None:
        super().__init__(message)


class NonConvergentError(PaymentTooLowError):
    """Raised when balances remain after the safety cap on months."""


class ComputationError(PaydownError, ArithmeticError):
    """Raised when a calculation produces a non-finite value."""

    def __init__(self, message: str = "Calculation failed; check the inputs and try again.") -> None:
        super().__init__(message)


__all__ = [
    "ComputationError",
    "InputValidationError",
    "NonConvergentError",
    "PaydownError",
    "PaymentTooLowError",
]
