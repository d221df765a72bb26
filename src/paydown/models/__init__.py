"""Domain models for payoff simulations."""

from .balance import Balance, monthly_rate
from .schedule import BalanceLine, ScheduleEntry, SimulationResult, SimulationState

__all__ = [
    "Balance",
    "BalanceLine",
    "ScheduleEntry",
    "SimulationResult",
    "SimulationState",
    "monthly_rate",
]
