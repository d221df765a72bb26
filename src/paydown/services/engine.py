"""Month-by-month payoff simulation shared by every debt calculator.

Each simulated month runs three steps against the active balances:

1. interest accrues and capitalizes (``principal += principal * monthly_rate``),
2. each balance receives ``min(principal, minimum_payment)``,
3. the remaining extra money is handed to the allocation policy.

Extra money comes either from a fixed monthly budget (whatever the minimums
did not use) or from a flat extra payment that grows by the minimum of every
balance already paid off.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable

from ..config import BaseConfig
from ..errors import ComputationError, InputValidationError, NonConvergentError, PaymentTooLowError
from ..logging_config import get_logger
from ..models import Balance, BalanceLine, ScheduleEntry, SimulationResult, SimulationState
from .strategies import AllocationPolicy

logger = get_logger("engine")

DEFAULT_MAX_MONTHS = BaseConfig.DEFAULT_MAX_MONTHS

# Float drift smaller than this is settled in the same payment instead of
# spilling into an extra near-zero month.
SETTLE_EPSILON = 1e-6


def _settle(balance: Balance, amount: float) -> float:
    """Apply up to ``amount`` to ``balance`` and return what was actually paid."""

    if amount <= 0 or balance.principal <= 0:
        return 0.0
    payment = min(balance.principal, amount)
    if balance.principal - payment <= SETTLE_EPSILON:
        payment = balance.principal
        balance.principal = 0.0
    else:
        balance.principal -= payment
    return payment


def _validate_inputs(
    balances: list[Balance],
    *,
    extra_payment: float,
    monthly_budget: float | None,
    max_months: int,
) -> None:
    errors: dict[str, list[str]] = {}

    def _check(field: str, value: float) -> None:
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            errors.setdefault(field, []).append("Enter a valid number.")
        elif value < 0:
            errors.setdefault(field, []).append("Amount must be at least zero.")

    seen: set[int] = set()
    for balance in balances:
        if balance.id in seen:
            errors.setdefault("balances", []).append(f"Duplicate balance id {balance.id}.")
        seen.add(balance.id)
        _check(f"{balance.key}.principal", balance.principal)
        _check(f"{balance.key}.annual_rate", balance.annual_rate)
        _check(f"{balance.key}.minimum_payment", balance.minimum_payment)

    _check("extra_payment", extra_payment)
    if monthly_budget is not None:
        _check("monthly_budget", monthly_budget)
        if extra_payment:
            errors.setdefault("extra_payment", []).append(
                "Provide either an extra payment or a monthly budget, not both."
            )
        total_minimums = sum(balance.minimum_payment for balance in balances)
        if "monthly_budget" not in errors and monthly_budget < total_minimums:
            errors.setdefault("monthly_budget", []).append(
                "Monthly budget must be at least the sum of all minimum payments."
            )
    if max_months <= 0:
        errors.setdefault("max_months", []).append("Safety cap must be at least one month.")

    if errors:
        raise InputValidationError(errors)


def _ensure_covers_interest(
    balances: list[Balance], *, extra_payment: float, monthly_budget: float | None
) -> None:
    """Reject plans whose monthly outlay cannot outpace the first month's interest."""

    active = [balance for balance in balances if balance.principal > 0]
    first_interest = sum(balance.principal * balance.monthly_rate for balance in active)
    if monthly_budget is not None:
        outlay = monthly_budget
    else:
        outlay = sum(balance.minimum_payment for balance in active) + extra_payment
    if outlay <= first_interest:
        logger.warning(
            "Rejected payoff plan: outlay does not cover interest",
            extra={"outlay": outlay, "first_interest": first_interest},
        )
        raise PaymentTooLowError()


def _simulate_month(
    state: SimulationState,
    policy: AllocationPolicy,
    *,
    monthly_budget: float | None,
) -> ScheduleEntry:
    state.month += 1
    state.interest = {}
    state.payments = {}
    by_id = {balance.id: balance for balance in state.balances}

    for balance in state.balances:
        if balance.principal <= 0:
            continue
        interest = balance.principal * balance.monthly_rate
        balance.principal += interest
        state.interest[balance.id] = interest
        state.total_interest_paid += interest

    minimums_paid = 0.0
    for balance in state.balances:
        if balance.principal <= 0:
            continue
        paid = _settle(balance, balance.minimum_payment)
        state.record_payment(balance.id, paid)
        minimums_paid += paid

    if monthly_budget is None:
        available = state.extra_budget
    else:
        available = monthly_budget - minimums_paid

    if available > 0:
        for balance_id, amount in policy.allocate(state, available):
            paid = _settle(by_id[balance_id], amount)
            state.record_payment(balance_id, paid)

    if not math.isfinite(state.total_interest_paid) or any(
        not math.isfinite(balance.principal) for balance in state.balances
    ):
        raise ComputationError()

    return ScheduleEntry(
        month=state.month,
        lines=tuple(
            BalanceLine(
                balance_id=balance.id,
                name=balance.name,
                interest=state.interest.get(balance.id, 0.0),
                payment=state.payments.get(balance.id, 0.0),
                remaining=max(balance.principal, 0.0),
            )
            for balance in state.balances
        ),
    )


def simulate(
    *,
    balances: Iterable[Balance],
    policy: AllocationPolicy,
    extra_payment: float = 0.0,
    monthly_budget: float | None = None,
    max_months: int | None = None,
) -> SimulationResult:
    """Run a payoff simulation until every balance is cleared.

    Pass ``monthly_budget`` for a fixed total outlay per month, otherwise
    ``extra_payment`` is added on top of the minimums and freed minimums roll
    into it. Raises ``PaymentTooLowError`` before simulating when the outlay
    cannot cover the first month's interest and ``NonConvergentError`` when
    balances remain after ``max_months``.
    """

    inputs = list(balances)
    cap = DEFAULT_MAX_MONTHS if max_months is None else max_months
    _validate_inputs(inputs, extra_payment=extra_payment, monthly_budget=monthly_budget, max_months=cap)

    ordered = policy.order(inputs)
    working = [replace(balance) for balance in ordered]
    snapshot = tuple(replace(balance) for balance in ordered)

    if not any(balance.principal > 0 for balance in working):
        return SimulationResult(
            strategy=policy.name, balances=snapshot, schedule=(), total_interest_paid=0.0
        )

    _ensure_covers_interest(working, extra_payment=extra_payment, monthly_budget=monthly_budget)

    logger.debug(
        "Simulating %s payoff for %d balances",
        policy.name,
        len(working),
        extra={"extra_payment": extra_payment, "monthly_budget": monthly_budget, "max_months": cap},
    )

    state = SimulationState(balances=working, extra_budget=extra_payment)
    schedule: list[ScheduleEntry] = []
    while state.has_outstanding:
        if state.month >= cap:
            logger.warning(
                "Payoff did not converge within safety cap",
                extra={"strategy": policy.name, "max_months": cap},
            )
            raise NonConvergentError(
                f"Balances were not paid off within {cap} months; payments too low."
            )
        schedule.append(_simulate_month(state, policy, monthly_budget=monthly_budget))
        if monthly_budget is None:
            state.extra_budget = extra_payment + sum(
                balance.minimum_payment for balance in state.balances if balance.principal <= 0
            )

    logger.info(
        "Finished %s payoff in %d months",
        policy.name,
        state.month,
        extra={
            "strategy": policy.name,
            "months": state.month,
            "balances": len(working),
            "total_interest": round(state.total_interest_paid, 2),
        },
    )
    return SimulationResult(
        strategy=policy.name,
        balances=snapshot,
        schedule=tuple(schedule),
        total_interest_paid=state.total_interest_paid,
    )


__all__ = ["DEFAULT_MAX_MONTHS", "SETTLE_EPSILON", "simulate"]
