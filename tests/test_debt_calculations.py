"""Tests for debt payoff calculations (snowball/avalanche).

These tests verify the core financial logic for debt payoff scheduling,
including:
- Snowball method (smallest balance first)
- Avalanche method (highest APR first)
- Budget-funded credit card payoff
- Freed-up minimum payment rollover
- Static ranking fixed before the first month
"""

from __future__ import annotations

import pytest

from paydown.errors import InputValidationError
from paydown.models import Balance
from paydown.services.debts import (
    avalanche_schedule,
    compare_strategies,
    credit_card_payoff,
    run_strategy,
    snowball_schedule,
)
from tests.conftest import assert_float_equal


class TestSnowballSchedule:
    """Tests for snowball debt payoff method (smallest balance first)."""

    def test_empty_debts_returns_empty_schedule(self):
        result = snowball_schedule(balances=[], extra_payment=0)
        assert result.schedule == ()
        assert result.total_months == 0
        assert result.total_interest_paid == 0.0

    def test_single_debt_payoff_schedule(self, balance_factory):
        """Single debt should be paid off correctly with interest."""
        debt = balance_factory(principal=1000.00, annual_rate=12.0, minimum_payment=50.00)

        result = snowball_schedule(balances=[debt], extra_payment=100.00)

        first = result.schedule[0].line_for(debt.id)
        assert_float_equal(first.interest, 10.00)  # 1% monthly
        assert_float_equal(first.payment, 150.00)
        assert_float_equal(first.remaining, 860.00)

        last = result.schedule[-1].line_for(debt.id)
        assert last.remaining == 0.0

    def test_multiple_debts_smallest_first(self, balance_factory):
        """Extra money goes to the smallest balance even with a lower APR elsewhere."""
        debt_large = balance_factory(principal=5000.00, annual_rate=15.0, minimum_payment=100.00)
        debt_small = balance_factory(principal=500.00, annual_rate=20.0, minimum_payment=25.00)

        result = snowball_schedule(balances=[debt_large, debt_small], extra_payment=200.00)

        assert [b.id for b in result.balances] == [debt_small.id, debt_large.id]
        first_period = result.schedule[0]
        assert_float_equal(first_period.line_for(debt_small.id).payment, 225.00)
        assert_float_equal(first_period.line_for(debt_large.id).payment, 100.00)

    def test_freed_minimum_payment_rollover(self, balance_factory):
        """Once a debt is cleared its minimum joins the extra payment."""
        debt1 = balance_factory(principal=100.00, annual_rate=10.0, minimum_payment=30.00)
        debt2 = balance_factory(principal=2000.00, annual_rate=15.0, minimum_payment=50.00)

        result = snowball_schedule(balances=[debt1, debt2], extra_payment=100.00)

        assert result.payoff_month(debt1.id) == 1
        # Month 1: leftover extra spills onto debt2 after debt1 clears
        month1 = result.schedule[0].line_for(debt2.id)
        debt1_after_minimum = 100.00 + 100.00 * 0.10 / 12 - 30.00
        assert_float_equal(month1.payment, 50.00 + 100.00 - debt1_after_minimum)
        # Month 2: minimum + extra + freed minimum
        month2 = result.schedule[1].line_for(debt2.id)
        assert_float_equal(month2.payment, 180.00)

    def test_zero_extra_only_minimums(self, balance_factory):
        debt = balance_factory(principal=1000.00, annual_rate=12.0, minimum_payment=50.00)

        result = snowball_schedule(balances=[debt], extra_payment=0.00)

        assert_float_equal(result.schedule[0].line_for(debt.id).payment, 50.00)

    def test_order_is_fixed_before_first_month(self):
        """Ranking is not recomputed when a later balance shrinks below the target."""
        slow = Balance(id=1, name="Slow", principal=1000.0, annual_rate=0.0, minimum_payment=10.0)
        fast = Balance(id=2, name="Fast", principal=1100.0, annual_rate=30.0, minimum_payment=300.0)

        result = snowball_schedule(balances=[fast, slow], extra_payment=100.0)

        month1, month2 = result.schedule[0], result.schedule[1]
        # After month 1 the fast-paying debt is the smaller one...
        assert month1.line_for(2).remaining < month1.line_for(1).remaining
        # ...but the extra still goes to the debt that was smallest at the start.
        assert_float_equal(month2.line_for(1).payment, 110.0)
        assert_float_equal(month2.line_for(2).payment, 300.0)

    def test_inputs_are_not_mutated(self, balance_factory):
        debt = balance_factory(principal=1000.00)
        snowball_schedule(balances=[debt], extra_payment=100.00)
        assert debt.principal == 1000.00


class TestAvalancheSchedule:
    """Tests for avalanche debt payoff method (highest APR first)."""

    def test_empty_debts_returns_empty_schedule(self):
        result = avalanche_schedule(balances=[], extra_payment=0)
        assert result.schedule == ()

    def test_multiple_debts_highest_apr_first(self, balance_factory):
        debt_low_apr = balance_factory(principal=5000.00, annual_rate=10.0, minimum_payment=100.00)
        debt_high_apr = balance_factory(principal=2000.00, annual_rate=22.0, minimum_payment=50.00)

        result = avalanche_schedule(balances=[debt_low_apr, debt_high_apr], extra_payment=200.00)

        first_period = result.schedule[0]
        assert_float_equal(first_period.line_for(debt_high_apr.id).payment, 250.00)
        assert_float_equal(first_period.line_for(debt_low_apr.id).payment, 100.00)

    def test_avalanche_saves_more_on_interest(self, balance_factory):
        """Avalanche should pay less interest than snowball when targets differ."""
        debt_small_low_apr = balance_factory(principal=500.00, annual_rate=10.0, minimum_payment=25.00)
        debt_large_high_apr = balance_factory(
            principal=5000.00, annual_rate=20.0, minimum_payment=100.00
        )
        debts = [debt_small_low_apr, debt_large_high_apr]

        snowball = snowball_schedule(balances=debts, extra_payment=200.00)
        avalanche = avalanche_schedule(balances=debts, extra_payment=200.00)

        assert avalanche.total_interest_paid < snowball.total_interest_paid

    def test_same_target_produces_identical_results(self):
        """When the smallest debt is also the highest-rate one both plans coincide."""
        debts = [
            Balance(id=1, name="Card A", principal=5000.0, annual_rate=18.0, minimum_payment=100.0),
            Balance(id=2, name="Card B", principal=2000.0, annual_rate=24.0, minimum_payment=50.0),
        ]

        snowball = snowball_schedule(balances=debts, extra_payment=200.0)
        avalanche = avalanche_schedule(balances=debts, extra_payment=200.0)

        assert_float_equal(avalanche.schedule[0].line_for(2).payment, 250.0)
        assert snowball.total_months == avalanche.total_months
        assert_float_equal(snowball.total_interest_paid, avalanche.total_interest_paid)

    def test_divergent_targets(self):
        debts = [
            Balance(id=1, name="Small", principal=1000.0, annual_rate=10.0, minimum_payment=50.0),
            Balance(id=2, name="Costly", principal=4000.0, annual_rate=25.0, minimum_payment=100.0),
        ]

        comparison = compare_strategies(balances=debts, extra_payment=200.0)

        assert_float_equal(comparison.snowball.schedule[0].line_for(1).payment, 250.0)
        assert_float_equal(comparison.avalanche.schedule[0].line_for(2).payment, 300.0)
        assert comparison.interest_saved > 0
        assert comparison.snowball.total_interest_paid >= comparison.avalanche.total_interest_paid

    def test_single_balance_matches_plain_amortization(self):
        from paydown.services.loans import fixed_payment_plan

        loan = Balance(id=1, name="Loan", principal=5000.0, annual_rate=18.0, minimum_payment=100.0)
        avalanche = avalanche_schedule(balances=[loan])
        plan = fixed_payment_plan(balance=5000.0, annual_rate=18.0, monthly_payment=100.0)

        assert avalanche.total_months == plan.total_months == 94
        assert_float_equal(avalanche.total_interest_paid, plan.total_interest)
        for ours, theirs in zip(avalanche.schedule, plan.result.schedule):
            assert_float_equal(ours.total_payment, theirs.total_payment)
            assert_float_equal(ours.total_remaining, theirs.total_remaining)


class TestCreditCardPayoff:
    """Budget-funded avalanche: freed minimums roll over implicitly."""

    def test_budget_applied_to_highest_apr(self):
        cards = [
            Balance(id=1, name="Rewards", principal=1500.0, annual_rate=15.0, minimum_payment=30.0),
            Balance(id=2, name="Store", principal=3000.0, annual_rate=22.0, minimum_payment=60.0),
        ]

        result = credit_card_payoff(cards=cards, monthly_budget=400.0)

        first = result.schedule[0]
        assert_float_equal(first.total_payment, 400.0)
        assert_float_equal(first.line_for(2).payment, 370.0)
        assert_float_equal(first.line_for(2).remaining, 2685.0)
        assert_float_equal(first.line_for(1).payment, 30.0)

    def test_budget_fully_used_until_final_month(self):
        cards = [
            Balance(id=1, name="A", principal=1500.0, annual_rate=15.0, minimum_payment=30.0),
            Balance(id=2, name="B", principal=3000.0, annual_rate=22.0, minimum_payment=60.0),
        ]

        result = credit_card_payoff(cards=cards, monthly_budget=400.0)

        for entry in result.schedule[:-1]:
            assert_float_equal(entry.total_payment, 400.0)
        assert result.schedule[-1].total_payment <= 400.0 + 1e-6

    def test_budget_below_minimums_rejected(self):
        cards = [Balance(id=1, name="A", principal=1500.0, annual_rate=15.0, minimum_payment=300.0)]
        with pytest.raises(InputValidationError) as excinfo:
            credit_card_payoff(cards=cards, monthly_budget=100.0)
        assert "monthly_budget" in excinfo.value.errors


class TestRunStrategy:
    def test_dispatches_by_name(self, balance_factory):
        debt = balance_factory(principal=1000.0, annual_rate=18.0)
        assert run_strategy(strategy="snowball", balances=[debt]).strategy == "snowball"
        assert run_strategy(strategy="Avalanche", balances=[debt]).strategy == "avalanche"

    def test_invalid_strategy_raises_error(self, balance_factory):
        debt = balance_factory()
        with pytest.raises(ValueError, match="Invalid debt payoff strategy"):
            run_strategy(strategy="hybrid", balances=[debt])
