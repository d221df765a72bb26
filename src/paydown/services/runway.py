"""Startup runway projection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from ..config import BaseConfig
from ..errors import ComputationError, InputValidationError
from ..logging_config import get_logger

logger = get_logger("runway")

DEFAULT_HORIZON_MONTHS = BaseConfig.DEFAULT_RUNWAY_HORIZON


@dataclass(slots=True, frozen=True)
class RunwayEntry:
    """Cash position at the end of one projected month."""

    month: int
    revenue: float
    expenses: float
    net_burn: float
    cash_balance: float


@dataclass(slots=True, frozen=True)
class RunwayResult:
    """Outcome of a runway projection.

    ``runway_months`` is ``None`` when the company reaches profitability
    before running out of cash, i.e. the runway is unbounded.
    """

    runway_months: int | None
    is_profitable: bool
    initial_net_burn: float
    reached_horizon: bool
    end_date: date | None
    projections: tuple[RunwayEntry, ...]

    @property
    def months_projected(self) -> int:
        return len(self.projections)


def _add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    return value.replace(year=value.year + month_index // 12, month=month_index % 12 + 1, day=1)


def _validate(
    *,
    cash_balance: float,
    monthly_revenue: float,
    monthly_expenses: float,
    revenue_growth: float,
    expense_growth: float,
    horizon: int,
) -> None:
    errors: dict[str, list[str]] = {}
    for field, value in (
        ("cash_balance", cash_balance),
        ("monthly_revenue", monthly_revenue),
        ("revenue_growth", revenue_growth),
        ("expense_growth", expense_growth),
    ):
        if not math.isfinite(value) or value < 0:
            errors.setdefault(field, []).append("Amount must be at least zero.")
    if not math.isfinite(monthly_expenses) or monthly_expenses <= 0:
        errors.setdefault("monthly_expenses", []).append("Monthly expenses must be positive.")
    if horizon <= 0:
        errors.setdefault("horizon_months", []).append("Projection horizon must be at least one month.")
    if not errors and not (
        monthly_expenses > monthly_revenue or revenue_growth > expense_growth
    ):
        errors.setdefault("monthly_revenue", []).append(
            "Revenue already covers expenses and outgrows them; the runway is unbounded."
        )
    if errors:
        raise InputValidationError(errors)


def project_runway(
    *,
    cash_balance: float,
    monthly_revenue: float,
    monthly_expenses: float,
    revenue_growth: float = 0.0,
    expense_growth: float = 0.0,
    horizon_months: int | None = None,
    start: date | None = None,
) -> RunwayResult:
    """Project cash month by month until it runs out or burn turns positive.

    Growth rates are monthly percentages applied after each month is recorded.
    """

    horizon = DEFAULT_HORIZON_MONTHS if horizon_months is None else horizon_months
    _validate(
        cash_balance=cash_balance,
        monthly_revenue=monthly_revenue,
        monthly_expenses=monthly_expenses,
        revenue_growth=revenue_growth,
        expense_growth=expense_growth,
        horizon=horizon,
    )

    cash = cash_balance
    revenue = monthly_revenue
    expenses = monthly_expenses
    projections: list[RunwayEntry] = []
    profitable = False
    months = 0

    while cash > 0 and months < horizon:
        months += 1
        net_burn = expenses - revenue
        cash -= net_burn
        projections.append(
            RunwayEntry(
                month=months,
                revenue=revenue,
                expenses=expenses,
                net_burn=net_burn,
                cash_balance=max(0.0, cash),
            )
        )
        revenue *= 1 + revenue_growth / 100
        expenses *= 1 + expense_growth / 100
        if not (math.isfinite(cash) and math.isfinite(revenue) and math.isfinite(expenses)):
            raise ComputationError()
        if net_burn <= 0 and cash > 0:
            profitable = True
            break

    reached_horizon = not profitable and cash > 0 and months >= horizon
    runway_months = None if profitable else months
    end_date = None
    if runway_months is not None:
        end_date = _add_months(start or date.today(), runway_months)

    logger.debug(
        "Projected runway",
        extra={"runway_months": runway_months, "profitable": profitable, "horizon": horizon},
    )
    return RunwayResult(
        runway_months=runway_months,
        is_profitable=profitable,
        initial_net_burn=monthly_expenses - monthly_revenue,
        reached_horizon=reached_horizon,
        end_date=end_date,
        projections=tuple(projections),
    )


__all__ = ["DEFAULT_HORIZON_MONTHS", "RunwayEntry", "RunwayResult", "project_runway"]
