"""Tests for schedule aggregation helpers."""

from __future__ import annotations

import pytest

from paydown.models import Balance
from paydown.services.debts import snowball_schedule
from paydown.services.loans import fixed_payment_plan
from paydown.services.summary import balance_series, format_duration, schedule_summary, yearly_totals
from tests.conftest import assert_float_equal


@pytest.mark.parametrize(
    "months, expected",
    [
        (0, "0 years, 0 months"),
        (1, "0 years, 1 month"),
        (12, "1 year, 0 months"),
        (13, "1 year, 1 month"),
        (94, "7 years, 10 months"),
    ],
)
def test_format_duration(months, expected):
    assert format_duration(months) == expected


def test_yearly_totals_roll_up_schedule():
    plan = fixed_payment_plan(balance=5000.0, annual_rate=18.0, monthly_payment=100.0)

    years = yearly_totals(plan.result)

    assert [year.year for year in years] == list(range(1, 9))
    assert_float_equal(sum(year.interest for year in years), plan.total_interest)
    assert_float_equal(sum(year.principal for year in years), 5000.0)
    assert years[-1].end_balance == 0.0
    assert years[0].end_balance == plan.result.schedule[11].total_remaining


def test_balance_series_tracks_each_debt():
    debts = [
        Balance(id=1, name="A", principal=300.0, annual_rate=10.0, minimum_payment=30.0),
        Balance(id=2, name="B", principal=900.0, annual_rate=15.0, minimum_payment=40.0),
    ]
    result = snowball_schedule(balances=debts, extra_payment=50.0)

    series = balance_series(result)

    assert set(series) == {1, 2}
    assert len(series[1]) == len(series[2]) == result.total_months
    assert series[2][-1] == 0.0


def test_schedule_summary_tuple():
    plan = fixed_payment_plan(balance=1200.0, annual_rate=0.0, monthly_payment=100.0)
    assert schedule_summary(plan.result) == (12, 0.0, 1200.0)
