"""Debt payoff calculators (snowball and avalanche)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import Balance, SimulationResult
from .engine import simulate
from .strategies import AVALANCHE, SNOWBALL, get_policy


def snowball_schedule(
    *,
    balances: Iterable[Balance],
    extra_payment: float = 0.0,
    monthly_budget: float | None = None,
    max_months: int | None = None,
) -> SimulationResult:
    """Return payoff schedule prioritizing smallest balances first."""
    return simulate(
        balances=balances,
        policy=SNOWBALL,
        extra_payment=extra_payment,
        monthly_budget=monthly_budget,
        max_months=max_months,
    )


def avalanche_schedule(
    *,
    balances: Iterable[Balance],
    extra_payment: float = 0.0,
    monthly_budget: float | None = None,
    max_months: int | None = None,
) -> SimulationResult:
    """Return payoff schedule prioritizing highest APR first."""
    return simulate(
        balances=balances,
        policy=AVALANCHE,
        extra_payment=extra_payment,
        monthly_budget=monthly_budget,
        max_months=max_months,
    )


def credit_card_payoff(
    *, cards: Iterable[Balance], monthly_budget: float, max_months: int | None = None
) -> SimulationResult:
    """Avalanche plan for credit cards funded by one fixed monthly budget."""
    return avalanche_schedule(balances=cards, monthly_budget=monthly_budget, max_months=max_months)


def run_strategy(
    *,
    strategy: str,
    balances: Iterable[Balance],
    extra_payment: float = 0.0,
    monthly_budget: float | None = None,
    max_months: int | None = None,
) -> SimulationResult:
    """Compute the schedule for the named strategy."""
    return simulate(
        balances=balances,
        policy=get_policy(strategy),
        extra_payment=extra_payment,
        monthly_budget=monthly_budget,
        max_months=max_months,
    )


@dataclass(slots=True, frozen=True)
class StrategyComparison:
    """Side-by-side snowball and avalanche results for the same inputs."""

    snowball: SimulationResult
    avalanche: SimulationResult

    @property
    def interest_saved(self) -> float:
        """Interest avoided by choosing avalanche over snowball."""
        return self.snowball.total_interest_paid - self.avalanche.total_interest_paid

    @property
    def months_saved(self) -> int:
        return self.snowball.total_months - self.avalanche.total_months


def compare_strategies(
    *,
    balances: Iterable[Balance],
    extra_payment: float = 0.0,
    monthly_budget: float | None = None,
    max_months: int | None = None,
) -> StrategyComparison:
    items = list(balances)
    return StrategyComparison(
        snowball=snowball_schedule(
            balances=items,
            extra_payment=extra_payment,
            monthly_budget=monthly_budget,
            max_months=max_months,
        ),
        avalanche=avalanche_schedule(
            balances=items,
            extra_payment=extra_payment,
            monthly_budget=monthly_budget,
            max_months=max_months,
        ),
    )


__all__ = [
    "StrategyComparison",
    "avalanche_schedule",
    "compare_strategies",
    "credit_card_payoff",
    "run_strategy",
    "snowball_schedule",
]
