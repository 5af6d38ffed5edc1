"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from typing import Any, Callable

import pytest

from paydone.models.debt import DebtItem
from paydone.models.enums import InterestStrategy, LoanType


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference day."""
    return date(2025, 6, 15)


@pytest.fixture
def sample_user_id() -> str:
    """Sample user ID."""
    return "user-test-001"


@pytest.fixture
def make_debt(sample_user_id: str) -> Callable[..., DebtItem]:
    """Factory for debts: 12,000,000 at 12% over 12 months by default."""

    def _make(**overrides: Any) -> DebtItem:
        values: dict[str, Any] = {
            "debt_id": "debt-test-001",
            "user_id": sample_user_id,
            "name": "KTA BCA",
            "loan_type": LoanType.KTA,
            "original_principal": Decimal("12000000"),
            "remaining_principal": Decimal("12000000"),
            "interest_rate": 12.0,
            "start_date": date(2025, 1, 10),
            "end_date": date(2026, 1, 10),
            "due_day": 10,
            "monthly_payment": Decimal("1120000"),
            "interest_strategy": InterestStrategy.FIXED,
        }
        values.update(overrides)
        return DebtItem(**values)

    return _make
