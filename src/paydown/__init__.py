"""Debt payoff, loan, and runway simulators."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import (
    ComputationError,
    InputValidationError,
    NonConvergentError,
    PaydownError,
    PaymentTooLowError,
)
from .models import Balance, ScheduleEntry, SimulationResult
from .services.engine import simulate

__version__ = "0.1.0"

__all__ = [
    "Balance",
    "BaseConfig",
    "ComputationError",
    "DevConfig",
    "InputValidationError",
    "NonConvergentError",
    "PaydownError",
    "PaymentTooLowError",
    "ScheduleEntry",
    "SimulationResult",
    "simulate",
]
