"""Calculator input forms and validation helpers."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InputValidationError
from .models import Balance, SimulationResult
from .services.debts import run_strategy
from .services.loans import (
    MAX_SCHOOL_YEARS,
    LoanPlan,
    SchoolProjection,
    fixed_payment_plan,
    project_school_balance,
    target_date_plan,
)
from .services.runway import RunwayResult, project_runway

FormT = TypeVar("FormT", bound=BaseModel)


class PayoffStrategy(str, Enum):
    """Supported multi-debt payoff strategies."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"


class LoanStrategy(str, Enum):
    """How a single loan's repayment is specified."""

    FIXED_PAYMENT = "fixed_payment"
    TARGET_DATE = "target_date"


class DebtForm(BaseModel):
    """One debt row of a payoff form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(description="Creditor or account name", max_length=80)
    balance: float = Field(ge=0, description="Amount currently owed")
    apr: float = Field(ge=0, description="Annual percentage rate")
    minimum_payment: float = Field(gt=0, description="Required monthly minimum")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("Debt name is required.")
        return value


class PayoffPlanForm(BaseModel):
    """Multi-debt payoff inputs: debts plus either an extra payment or a budget."""

    debts: list[DebtForm] = Field(min_length=1, description="Debts to pay off")
    strategy: PayoffStrategy = Field(default=PayoffStrategy.AVALANCHE)
    extra_payment: float = Field(default=0.0, ge=0, description="Paid on top of minimums")
    monthly_budget: float | None = Field(
        default=None, gt=0, description="Total paid toward all debts each month"
    )

    @model_validator(mode="after")
    def check_funding(self) -> "PayoffPlanForm":
        if self.monthly_budget is not None:
            if self.extra_payment:
                raise ValueError("Provide either an extra payment or a monthly budget, not both.")
            total_minimums = sum(debt.minimum_payment for debt in self.debts)
            if self.monthly_budget < total_minimums:
                raise ValueError("Monthly budget must be at least the sum of all minimum payments.")
        return self

    def to_balances(self) -> list[Balance]:
        """Assign stable ids by row position; names are not guaranteed unique."""
        return [
            Balance(
                id=index,
                name=debt.name,
                principal=debt.balance,
                annual_rate=debt.apr,
                minimum_payment=debt.minimum_payment,
            )
            for index, debt in enumerate(self.debts, start=1)
        ]

    def run(self, *, max_months: int | None = None) -> SimulationResult:
        return run_strategy(
            strategy=self.strategy.value,
            balances=self.to_balances(),
            extra_payment=self.extra_payment,
            monthly_budget=self.monthly_budget,
            max_months=max_months,
        )


class LoanForm(BaseModel):
    """Single loan repaid by a fixed payment or by a target date."""

    balance: float = Field(gt=0, description="Loan balance")
    interest_rate: float = Field(ge=0, description="Annual interest rate")
    payoff_strategy: LoanStrategy = Field(default=LoanStrategy.FIXED_PAYMENT)
    monthly_payment: float | None = Field(default=None, gt=0)
    payoff_years: int | None = Field(default=None, ge=0)
    payoff_months: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_strategy_inputs(self) -> "LoanForm":
        if self.payoff_strategy is LoanStrategy.FIXED_PAYMENT and not self.monthly_payment:
            raise ValueError("Please provide a valid input for your chosen strategy.")
        if self.payoff_strategy is LoanStrategy.TARGET_DATE and self.target_months <= 0:
            raise ValueError("Please provide a valid input for your chosen strategy.")
        return self

    @property
    def target_months(self) -> int:
        return (self.payoff_years or 0) * 12 + (self.payoff_months or 0)

    def solve(self, *, max_months: int | None = None) -> LoanPlan:
        if self.payoff_strategy is LoanStrategy.FIXED_PAYMENT:
            return fixed_payment_plan(
                balance=self.balance,
                annual_rate=self.interest_rate,
                monthly_payment=float(self.monthly_payment or 0.0),
                max_months=max_months,
            )
        return target_date_plan(
            balance=self.balance,
            annual_rate=self.interest_rate,
            months=self.target_months,
            max_months=max_months,
        )


class RunwayForm(BaseModel):
    """Startup cash runway inputs; growth rates are monthly percentages."""

    cash_balance: float = Field(ge=0)
    monthly_revenue: float = Field(ge=0)
    monthly_expenses: float = Field(gt=0)
    monthly_revenue_growth: float = Field(default=0.0, ge=0)
    monthly_expense_growth: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def check_burn(self) -> "RunwayForm":
        if not (
            self.monthly_expenses > self.monthly_revenue
            or self.monthly_revenue_growth > self.monthly_expense_growth
        ):
            raise ValueError(
                "Revenue already covers expenses and outgrows them; the runway is unbounded."
            )
        return self

    def solve(self, *, horizon_months: int | None = None) -> RunwayResult:
        return project_runway(
            cash_balance=self.cash_balance,
            monthly_revenue=self.monthly_revenue,
            monthly_expenses=self.monthly_expenses,
            revenue_growth=self.monthly_revenue_growth,
            expense_growth=self.monthly_expense_growth,
            horizon_months=horizon_months,
        )


class SchoolProjectionForm(BaseModel):
    """Student loan balance projected through school and the grace period."""

    years_to_graduate: int = Field(ge=0, le=MAX_SCHOOL_YEARS)
    estimated_loan_amount: float = Field(ge=0, description="Borrowed per school year")
    current_loan_balance: float = Field(ge=0)
    grace_period: int = Field(default=6, ge=0, description="Months before repayment starts")
    interest_rate: float = Field(ge=0)
    pay_interest_in_school: bool = False

    def solve(self) -> SchoolProjection:
        return project_school_balance(
            years_in_school=self.years_to_graduate,
            annual_loan_amount=self.estimated_loan_amount,
            current_balance=self.current_loan_balance,
            annual_rate=self.interest_rate,
            grace_months=self.grace_period,
            pay_interest_in_school=self.pay_interest_in_school,
        )


def structured_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic error into ``{"debts.0.balance": [messages]}``."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = ".".join(str(part) for part in loc) if loc else "__root__"
        message = error.get("msg", "Invalid value")
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        structured.setdefault(key, []).append(message)
    return structured


def parse_form(model: type[FormT], payload: Mapping[str, Any]) -> FormT:
    """Validate ``payload`` or raise ``InputValidationError`` with field messages."""

    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise InputValidationError(structured_errors(exc)) from exc


__all__ = [
    "DebtForm",
    "LoanForm",
    "LoanStrategy",
    "PayoffPlanForm",
    "PayoffStrategy",
    "RunwayForm",
    "SchoolProjectionForm",
    "parse_form",
    "structured_errors",
]
