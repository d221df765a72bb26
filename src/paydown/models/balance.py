"""Debt balances fed into payoff simulations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Balance:
    """A named debt with an APR and a minimum monthly payment.

    ``principal`` is mutated in place by the simulator on its own working
    copies; callers' instances are never touched.
    """

    id: int
    name: str
    principal: float
    annual_rate: float  # APR as a percentage, e.g. 18.0
    minimum_payment: float = 0.0

    @property
    def monthly_rate(self) -> float:
        return monthly_rate(self.annual_rate)

    @property
    def is_paid_off(self) -> bool:
        return self.principal <= 0

    @property
    def key(self) -> str:
        """Stable identifier used for exported columns and lookups."""
        return f"debt_{self.id}"


def monthly_rate(annual_rate: float) -> float:
    """Convert an APR percentage into the per-month rate."""

    return annual_rate / 100.0 / 12.0
