"""Pytest configuration and shared fixtures for paydown tests."""

from __future__ import annotations

import logging

import pytest

from paydown.models import Balance


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep logs and exports out of the working tree."""
    monkeypatch.setenv("PAYDOWN_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("PAYDOWN_MAX_MONTHS", raising=False)
    monkeypatch.delenv("PAYDOWN_RUNWAY_HORIZON", raising=False)
    yield
    # Handlers installed by setup_logging point at this test's tmp dir and streams.
    logger = logging.getLogger("paydown")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def balance_factory():
    """Factory for creating balances with sequential ids."""

    counter = {"next": 1}

    def _create_balance(
        *,
        principal: float = 1000.0,
        annual_rate: float = 12.0,
        minimum_payment: float = 50.0,
        name: str | None = None,
        id: int | None = None,
    ) -> Balance:
        balance_id = id if id is not None else counter["next"]
        counter["next"] = max(counter["next"], balance_id) + 1
        return Balance(
            id=balance_id,
            name=name or f"Debt {balance_id}",
            principal=principal,
            annual_rate=annual_rate,
            minimum_payment=minimum_payment,
        )

    return _create_balance


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
