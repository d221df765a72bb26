"""Allocation policies deciding where extra payment money goes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Protocol

from ..models import Balance, SimulationState


class AllocationPolicy(Protocol):
    """Ranks balances once and assigns each month's extra money."""

    name: str

    def order(self, balances: Iterable[Balance]) -> list[Balance]:  # pragma: no cover - interface
        ...

    def allocate(
        self, state: SimulationState, available: float
    ) -> list[tuple[int, float]]:  # pragma: no cover - interface
        ...


@dataclass(frozen=True, slots=True)
class GreedyPolicy:
    """Pour all extra money into the first unpaid balance in ranked order.

    The ranking is computed once, before the first month, and kept for the
    whole simulation even though principals shrink at different rates.
    """

    name: str
    sort_key: Callable[[Balance], float]
    descending: bool = False
    description: str = ""

    def order(self, balances: Iterable[Balance]) -> list[Balance]:
        return sorted(balances, key=self.sort_key, reverse=self.descending)

    def allocate(self, state: SimulationState, available: float) -> list[tuple[int, float]]:
        assignments: list[tuple[int, float]] = []
        remaining = available
        for balance in state.balances:
            if remaining <= 0:
                break
            if balance.principal <= 0:
                continue
            amount = min(balance.principal, remaining)
            assignments.append((balance.id, amount))
            remaining -= amount
        return assignments


AVALANCHE = GreedyPolicy(
    name="avalanche",
    sort_key=lambda balance: balance.annual_rate,
    descending=True,
    description="Avalanche · prioritize highest APR first",
)

SNOWBALL = GreedyPolicy(
    name="snowball",
    sort_key=lambda balance: balance.principal,
    description="Snowball · knock out the smallest balance",
)

POLICIES: dict[str, GreedyPolicy] = {policy.name: policy for policy in (AVALANCHE, SNOWBALL)}


def get_policy(name: str) -> GreedyPolicy:
    """Return the policy registered under ``name``."""

    try:
        return POLICIES[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError("Invalid debt payoff strategy.") from None


__all__ = ["AVALANCHE", "SNOWBALL", "POLICIES", "AllocationPolicy", "GreedyPolicy", "get_policy"]
