"""CSV and plain-text export helpers for payoff results."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..models import SimulationResult
from .runway import RunwayResult
from .strategies import POLICIES
from .summary import format_duration


def _money(value: float) -> str:
    return f"{value:.2f}"


def _currency(value: float) -> str:
    return f"${value:,.2f}"


def schedule_headers(result: SimulationResult) -> list[str]:
    """Column names for a schedule export, keyed by stable balance id."""

    headers = ["month"]
    for balance in result.balances:
        headers.extend(
            [f"{balance.key}_payment", f"{balance.key}_interest", f"{balance.key}_remaining"]
        )
    headers.append("total_payment")
    return headers


def export_schedule_csv(*, result: SimulationResult, output_path: Path) -> Path:
    """Write one row per simulated month to ``output_path``.

    Returns the path written.
    """

    headers = schedule_headers(result)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in result.schedule:
            row = {"month": entry.month, "total_payment": _money(entry.total_payment)}
            for line in entry.lines:
                key = f"debt_{line.balance_id}"
                row[f"{key}_payment"] = _money(line.payment)
                row[f"{key}_interest"] = _money(line.interest)
                row[f"{key}_remaining"] = _money(line.remaining)
            writer.writerow(row)

    return output_path


def export_runway_csv(*, result: RunwayResult, output_path: Path) -> Path:
    """Write the monthly runway projection to ``output_path``."""

    headers = ["month", "revenue", "expenses", "net_burn", "cash_balance"]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(headers)
        for entry in result.projections:
            writer.writerow(
                [
                    entry.month,
                    _money(entry.revenue),
                    _money(entry.expenses),
                    _money(entry.net_burn),
                    _money(entry.cash_balance),
                ]
            )
    return output_path


def render_summary_text(*, result: SimulationResult, title: str, funding: Iterable[str] = ()) -> str:
    """Human-readable plan summary listing inputs and results."""

    lines = [title, "", "Inputs:"]
    policy = POLICIES.get(result.strategy)
    if policy is not None:
        lines.append(f"Strategy: {policy.description}")
    lines.extend(funding)
    for balance in result.balances:
        lines.append(
            f"- {balance.name}: {_currency(balance.principal)} @ {balance.annual_rate:g}% "
            f"(Min: {_currency(balance.minimum_payment)})"
        )
    lines.extend(
        [
            "",
            "Results:",
            f"- Debt-Free In: {format_duration(result.total_months)}",
            f"- Total Interest Paid: {_currency(result.total_interest_paid)}",
            f"- Total Amount Paid: {_currency(result.total_paid)}",
        ]
    )
    for balance in result.balances:
        month = result.payoff_month(balance.id)
        if month is not None:
            lines.append(f"- {balance.name} paid off in month {month}")
    return "\n".join(lines) + "\n"


def export_summary_txt(
    *, result: SimulationResult, output_path: Path, title: str, funding: Iterable[str] = ()
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        render_summary_text(result=result, title=title, funding=funding), encoding="utf-8"
    )
    return output_path


__all__ = [
    "export_runway_csv",
    "export_schedule_csv",
    "export_summary_txt",
    "render_summary_text",
    "schedule_headers",
]
