"""Schedule and result containers produced by the simulators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .balance import Balance


@dataclass(slots=True, frozen=True)
class BalanceLine:
    """One balance's activity within a simulated month."""

    balance_id: int
    name: str
    interest: float
    payment: float
    remaining: float

    @property
    def principal_paid(self) -> float:
        return self.payment - self.interest


@dataclass(slots=True, frozen=True)
class ScheduleEntry:
    """A single month of an amortization schedule."""

    month: int
    lines: tuple[BalanceLine, ...]

    @property
    def total_payment(self) -> float:
        return sum(line.payment for line in self.lines)

    @property
    def total_interest(self) -> float:
        return sum(line.interest for line in self.lines)

    @property
    def total_remaining(self) -> float:
        return sum(line.remaining for line in self.lines)

    def line_for(self, balance_id: int) -> BalanceLine:
        for line in self.lines:
            if line.balance_id == balance_id:
                return line
        raise KeyError(balance_id)


@dataclass(slots=True, frozen=True)
class SimulationResult:
    """Completed payoff simulation.

    ``balances`` are the starting inputs in the order the policy ranked them.
    """

    strategy: str
    balances: tuple[Balance, ...]
    schedule: tuple[ScheduleEntry, ...]
    total_interest_paid: float

    @property
    def total_months(self) -> int:
        return len(self.schedule)

    @property
    def starting_principal(self) -> float:
        return sum(balance.principal for balance in self.balances)

    @property
    def total_paid(self) -> float:
        return sum(entry.total_payment for entry in self.schedule)

    def payoff_month(self, balance_id: int) -> int | None:
        """Return the month a balance first reached zero, if it did."""
        for entry in self.schedule:
            if entry.line_for(balance_id).remaining <= 0:
                return entry.month
        return None

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.schedule)


@dataclass(slots=True)
class SimulationState:
    """Mutable state for the month currently being simulated."""

    balances: list[Balance]
    month: int = 0
    total_interest_paid: float = 0.0
    extra_budget: float = 0.0
    interest: dict[int, float] = field(default_factory=dict)
    payments: dict[int, float] = field(default_factory=dict)

    @property
    def active(self) -> list[Balance]:
        return [balance for balance in self.balances if balance.principal > 0]

    @property
    def has_outstanding(self) -> bool:
        return any(balance.principal > 0 for balance in self.balances)

    def record_payment(self, balance_id: int, amount: float) -> None:
        self.payments[balance_id] = self.payments.get(balance_id, 0.0) + amount
