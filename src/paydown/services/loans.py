"""Single-balance loan solvers.

Months-to-payoff and the required payment are solved in closed form; the
month-by-month breakdown is then produced by the shared simulator using the
resulting constant payment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import (
    ComputationError,
    InputValidationError,
    NonConvergentError,
    PaymentTooLowError,
)
from ..logging_config import get_logger
from ..models import Balance, SimulationResult, monthly_rate
from .engine import DEFAULT_MAX_MONTHS, simulate
from .strategies import AVALANCHE

logger = get_logger("loans")

FIXED_PAYMENT = "fixed_payment"
TARGET_DATE = "target_date"
MAX_SCHOOL_YEARS = 20


def _require_finite(value: float) -> float:
    if not math.isfinite(value):
        raise ComputationError()
    return value


def _validate_loan(*, balance: float, annual_rate: float) -> None:
    errors: dict[str, list[str]] = {}
    if not math.isfinite(balance) or balance <= 0:
        errors.setdefault("balance", []).append("Balance must be greater than 0.")
    if not math.isfinite(annual_rate) or annual_rate < 0:
        errors.setdefault("annual_rate", []).append("Interest rate must be non-negative.")
    if errors:
        raise InputValidationError(errors)


def months_to_payoff(*, balance: float, annual_rate: float, payment: float) -> float:
    """Return the (fractional) number of months a constant payment needs.

    Uses ``n = -ln(1 - B*r/P) / ln(1 + r)``; a zero rate reduces to ``B / P``.
    """

    _validate_loan(balance=balance, annual_rate=annual_rate)
    if not math.isfinite(payment) or payment <= 0:
        raise InputValidationError.single("monthly_payment", "Monthly payment must be greater than 0.")

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return _require_finite(balance / payment)
    if payment <= balance * rate:
        logger.warning(
            "Rejected fixed payment below first month's interest",
            extra={"payment": payment, "first_interest": balance * rate},
        )
        raise PaymentTooLowError()
    try:
        months = -math.log(1 - (balance * rate) / payment) / math.log(1 + rate)
    except (ValueError, ZeroDivisionError) as exc:
        raise ComputationError() from exc
    return _require_finite(months)


def required_payment(*, balance: float, annual_rate: float, months: int) -> float:
    """Return the constant payment that clears ``balance`` in ``months``."""

    _validate_loan(balance=balance, annual_rate=annual_rate)
    if months <= 0:
        raise InputValidationError.single("months", "Please enter a valid payoff period.")

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return _require_finite(balance / months)
    try:
        growth = (1 + rate) ** months
        payment = balance * rate * growth / (growth - 1)
    except (OverflowError, ZeroDivisionError) as exc:
        raise ComputationError() from exc
    return _require_finite(payment)


@dataclass(slots=True, frozen=True)
class LoanPlan:
    """A solved single-balance repayment plan and its schedule."""

    strategy: str
    monthly_payment: float
    months_exact: float
    result: SimulationResult

    @property
    def total_months(self) -> int:
        return self.result.total_months

    @property
    def total_paid(self) -> float:
        return self.result.total_paid

    @property
    def total_interest(self) -> float:
        return self.result.total_interest_paid

    @property
    def payoff_years(self) -> int:
        return self.total_months // 12

    @property
    def payoff_months(self) -> int:
        """Months left over after whole years."""
        return self.total_months % 12


def amortize(
    *, balance: float, annual_rate: float, payment: float, max_months: int | None = None
) -> SimulationResult:
    """Iterate a constant payment forward to build the monthly breakdown."""

    loan = Balance(id=1, name="Loan", principal=balance, annual_rate=annual_rate, minimum_payment=payment)
    return simulate(balances=[loan], policy=AVALANCHE, max_months=max_months)


def _ensure_within_cap(months: float, cap: int) -> None:
    """Reject a plan whose solved length exceeds the safety cap before simulating it."""

    if math.ceil(months) > cap:
        logger.warning(
            "Rejected loan plan longer than safety cap",
            extra={"months": months, "max_months": cap},
        )
        raise NonConvergentError(
            f"Loan would not be paid off within {cap} months; payments too low."
        )


def fixed_payment_plan(
    *, balance: float, annual_rate: float, monthly_payment: float, max_months: int | None = None
) -> LoanPlan:
    """Solve payoff time for a constant monthly payment."""

    cap = DEFAULT_MAX_MONTHS if max_months is None else max_months
    months = months_to_payoff(balance=balance, annual_rate=annual_rate, payment=monthly_payment)
    _ensure_within_cap(months, cap)
    result = amortize(balance=balance, annual_rate=annual_rate, payment=monthly_payment, max_months=cap)
    return LoanPlan(
        strategy=FIXED_PAYMENT, monthly_payment=monthly_payment, months_exact=months, result=result
    )


def target_date_plan(
    *, balance: float, annual_rate: float, months: int, max_months: int | None = None
) -> LoanPlan:
    """Solve the payment needed to clear the balance in ``months``."""

    cap = DEFAULT_MAX_MONTHS if max_months is None else max_months
    payment = required_payment(balance=balance, annual_rate=annual_rate, months=months)
    _ensure_within_cap(months, cap)
    result = amortize(balance=balance, annual_rate=annual_rate, payment=payment, max_months=cap)
    return LoanPlan(
        strategy=TARGET_DATE, monthly_payment=payment, months_exact=float(months), result=result
    )


@dataclass(slots=True, frozen=True)
class SchoolProjection:
    """Projected student loan balance once repayment starts."""

    total_borrowed: float
    balance_at_graduation: float
    balance_after_grace: float

    @property
    def capitalized_interest(self) -> float:
        return self.balance_after_grace - self.total_borrowed


def project_school_balance(
    *,
    years_in_school: int,
    annual_loan_amount: float,
    current_balance: float,
    annual_rate: float,
    grace_months: int = 6,
    pay_interest_in_school: bool = False,
) -> SchoolProjection:
    """Project the balance owed when repayment begins after school and grace.

    Loans are disbursed at the start of each school year. Unpaid interest
    compounds monthly through school and the grace period.
    """

    errors: dict[str, list[str]] = {}
    for field, value in (
        ("years_in_school", years_in_school),
        ("annual_loan_amount", annual_loan_amount),
        ("current_balance", current_balance),
        ("annual_rate", annual_rate),
        ("grace_months", grace_months),
    ):
        if not math.isfinite(value) or value < 0:
            errors.setdefault(field, []).append("Amount must be at least zero.")
    if not errors and years_in_school > MAX_SCHOOL_YEARS:
        errors["years_in_school"] = [f"Years in school cannot exceed {MAX_SCHOOL_YEARS}."]
    if errors:
        raise InputValidationError(errors)

    rate = monthly_rate(annual_rate)
    balance = current_balance
    borrowed = current_balance

    if pay_interest_in_school:
        balance += annual_loan_amount * years_in_school
        borrowed += annual_loan_amount * years_in_school
    else:
        for month in range(years_in_school * 12):
            if month % 12 == 0:
                balance += annual_loan_amount
                borrowed += annual_loan_amount
            balance *= 1 + rate

    at_graduation = balance
    if not pay_interest_in_school:
        balance *= (1 + rate) ** grace_months

    return SchoolProjection(
        total_borrowed=borrowed,
        balance_at_graduation=_require_finite(at_graduation),
        balance_after_grace=_require_finite(balance),
    )


__all__ = [
    "FIXED_PAYMENT",
    "MAX_SCHOOL_YEARS",
    "TARGET_DATE",
    "LoanPlan",
    "SchoolProjection",
    "amortize",
    "fixed_payment_plan",
    "months_to_payoff",
    "project_school_balance",
    "required_payment",
    "target_date_plan",
]
