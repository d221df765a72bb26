"""Aggregations over completed schedules."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import SimulationResult


@dataclass(slots=True, frozen=True)
class YearTotal:
    """Interest and principal paid during one year of a schedule."""

    year: int
    interest: float
    principal: float
    end_balance: float


def schedule_summary(result: SimulationResult) -> tuple[int, float, float]:
    """Return (months, total_interest, total_paid)."""

    return result.total_months, result.total_interest_paid, result.total_paid


def yearly_totals(result: SimulationResult) -> list[YearTotal]:
    """Roll monthly rows up into calendar-free schedule years (months 1-12 = year 1)."""

    totals: dict[int, list[float]] = {}
    for entry in result.schedule:
        year = (entry.month - 1) // 12 + 1
        bucket = totals.setdefault(year, [0.0, 0.0, 0.0])
        bucket[0] += entry.total_interest
        bucket[1] += entry.total_payment - entry.total_interest
        bucket[2] = entry.total_remaining
    return [
        YearTotal(year=year, interest=interest, principal=principal, end_balance=end_balance)
        for year, (interest, principal, end_balance) in sorted(totals.items())
    ]


def balance_series(result: SimulationResult) -> dict[int, list[float]]:
    """Remaining balance per balance id, one value per month, for charting."""

    series: dict[int, list[float]] = {balance.id: [] for balance in result.balances}
    for entry in result.schedule:
        for line in entry.lines:
            series[line.balance_id].append(line.remaining)
    return series


def format_duration(months: int) -> str:
    """Render a month count as ``"2 years, 3 months"``."""

    years, remainder = divmod(max(months, 0), 12)
    year_label = "year" if years == 1 else "years"
    month_label = "month" if remainder == 1 else "months"
    return f"{years} {year_label}, {remainder} {month_label}"


__all__ = ["YearTotal", "balance_series", "format_duration", "schedule_summary", "yearly_totals"]
