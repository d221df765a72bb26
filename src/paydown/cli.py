"""Command line interface for the payoff calculators."""

from __future__ import annotations

from pathlib import Path

import click

from .config import DevConfig
from .errors import PaydownError
from .forms import LoanForm, PayoffPlanForm, RunwayForm, SchoolProjectionForm, parse_form
from .logging_config import setup_logging
from .services.export_csv import (
    export_runway_csv,
    export_schedule_csv,
    export_summary_txt,
    render_summary_text,
)
from .services.summary import format_duration


def _parse_debt(ctx, param, values: tuple[str, ...]) -> list[dict]:
    """Turn ``NAME:BALANCE:APR:MIN`` strings into form rows."""

    rows = []
    for raw in values:
        parts = raw.rsplit(":", 3)
        if len(parts) != 4:
            raise click.BadParameter(f"expected NAME:BALANCE:APR:MIN, got {raw!r}", param=param)
        name, balance, apr, minimum = parts
        rows.append({"name": name, "balance": balance, "apr": apr, "minimum_payment": minimum})
    return rows


def _money(value: float) -> str:
    return f"${value:,.2f}"


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Debt payoff, loan, and runway calculators."""

    config = DevConfig()
    setup_logging(config)
    ctx.obj = config


def _run_plan(
    config: DevConfig,
    *,
    strategy: str,
    debts: list[dict],
    extra: float | None,
    budget: float | None,
    csv_path: Path | None,
    txt_path: Path | None,
) -> None:
    payload = {
        "debts": debts,
        "strategy": strategy,
        "extra_payment": extra or 0.0,
        "monthly_budget": budget,
    }
    try:
        form = parse_form(PayoffPlanForm, payload)
        result = form.run(max_months=config.MAX_MONTHS)
    except PaydownError as exc:
        raise click.ClickException(str(exc)) from exc

    title = f"Debt Payoff Plan ({strategy.title()} Method)"
    if budget is not None:
        funding = [f"Monthly Budget: {_money(budget)}"]
    else:
        funding = [f"Extra Payment: {_money(extra or 0.0)}"]
    click.echo(render_summary_text(result=result, title=title, funding=funding), nl=False)

    if csv_path is not None:
        export_schedule_csv(result=result, output_path=csv_path)
        click.echo(f"Schedule written: {csv_path}")
    if txt_path is not None:
        export_summary_txt(result=result, output_path=txt_path, title=title, funding=funding)
        click.echo(f"Summary written: {txt_path}")


def _plan_options(func):
    options = [
        click.option(
            "--debt",
            "debts",
            multiple=True,
            required=True,
            callback=_parse_debt,
            help="Debt as NAME:BALANCE:APR:MIN (repeatable).",
        ),
        click.option("--extra", type=float, default=None, help="Extra paid on top of minimums."),
        click.option("--budget", type=float, default=None, help="Total monthly budget for all debts."),
        click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None),
        click.option("--txt", "txt_path", type=click.Path(path_type=Path), default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@main.command()
@_plan_options
@click.pass_obj
def avalanche(config, debts, extra, budget, csv_path, txt_path) -> None:
    """Pay the highest-APR debt first."""

    _run_plan(
        config,
        strategy="avalanche",
        debts=debts,
        extra=extra,
        budget=budget,
        csv_path=csv_path,
        txt_path=txt_path,
    )


@main.command()
@_plan_options
@click.pass_obj
def snowball(config, debts, extra, budget, csv_path, txt_path) -> None:
    """Pay the smallest debt first and roll freed minimums forward."""

    _run_plan(
        config,
        strategy="snowball",
        debts=debts,
        extra=extra,
        budget=budget,
        csv_path=csv_path,
        txt_path=txt_path,
    )


@main.command()
@click.option("--balance", type=float, required=True)
@click.option("--rate", type=float, required=True, help="Annual interest rate in percent.")
@click.option("--payment", type=float, default=None, help="Fixed monthly payment.")
@click.option("--months", type=int, default=None, help="Target number of months.")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None)
@click.pass_obj
def loan(config, balance, rate, payment, months, csv_path) -> None:
    """Solve payoff time for a payment, or the payment for a payoff time."""

    if (payment is None) == (months is None):
        raise click.UsageError("Pass exactly one of --payment or --months.")
    payload = {"balance": balance, "interest_rate": rate}
    if payment is not None:
        payload.update(payoff_strategy="fixed_payment", monthly_payment=payment)
    else:
        payload.update(payoff_strategy="target_date", payoff_months=months)

    try:
        plan = parse_form(LoanForm, payload).solve(max_months=config.MAX_MONTHS)
    except PaydownError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Monthly Payment: {_money(plan.monthly_payment)}")
    click.echo(f"Payoff Time: {format_duration(plan.total_months)}")
    click.echo(f"Total Payments: {_money(plan.total_paid)}")
    click.echo(f"Total Interest: {_money(plan.total_interest)}")
    if csv_path is not None:
        export_schedule_csv(result=plan.result, output_path=csv_path)
        click.echo(f"Schedule written: {csv_path}")


@main.command()
@click.option("--cash", type=float, required=True, help="Cash on hand.")
@click.option("--revenue", type=float, default=0.0, show_default=True)
@click.option("--expenses", type=float, required=True)
@click.option("--revenue-growth", type=float, default=0.0, show_default=True, help="Monthly %.")
@click.option("--expense-growth", type=float, default=0.0, show_default=True, help="Monthly %.")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None)
@click.pass_obj
def runway(config, cash, revenue, expenses, revenue_growth, expense_growth, csv_path) -> None:
    """Project how many months the cash lasts."""

    payload = {
        "cash_balance": cash,
        "monthly_revenue": revenue,
        "monthly_expenses": expenses,
        "monthly_revenue_growth": revenue_growth,
        "monthly_expense_growth": expense_growth,
    }
    try:
        result = parse_form(RunwayForm, payload).solve(horizon_months=config.RUNWAY_HORIZON)
    except PaydownError as exc:
        raise click.ClickException(str(exc)) from exc

    if result.is_profitable:
        click.echo("Runway: Infinite (Profitable)")
    else:
        prefix = "at least " if result.reached_horizon else ""
        click.echo(f"Runway: {prefix}{result.runway_months} months")
        click.echo(f"Estimated End Date: {result.end_date:%B %Y}")
    click.echo(f"Current Net Burn: {_money(result.initial_net_burn)}")
    if csv_path is not None:
        export_runway_csv(result=result, output_path=csv_path)
        click.echo(f"Projection written: {csv_path}")


@main.command()
@click.option("--years", type=int, required=True, help="Years until graduation.")
@click.option("--annual-loan", type=float, required=True, help="Borrowed each school year.")
@click.option("--current-balance", type=float, default=0.0, show_default=True)
@click.option("--rate", type=float, required=True)
@click.option("--grace", type=int, default=6, show_default=True, help="Grace period in months.")
@click.option("--pay-interest/--defer-interest", default=False, show_default=True)
def school(years, annual_loan, current_balance, rate, grace, pay_interest) -> None:
    """Project a student loan balance at the start of repayment."""

    payload = {
        "years_to_graduate": years,
        "estimated_loan_amount": annual_loan,
        "current_loan_balance": current_balance,
        "grace_period": grace,
        "interest_rate": rate,
        "pay_interest_in_school": pay_interest,
    }
    try:
        projection = parse_form(SchoolProjectionForm, payload).solve()
    except PaydownError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Total Borrowed: {_money(projection.total_borrowed)}")
    click.echo(f"Balance at Graduation: {_money(projection.balance_at_graduation)}")
    click.echo(f"Balance When Repayment Starts: {_money(projection.balance_after_grace)}")
    click.echo(f"Capitalized Interest: {_money(projection.capitalized_interest)}")


if __name__ == "__main__":  # pragma: no cover
    main()
