"""Cash-flow models: living-cost expenses and the income crossing analysis."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from paydone.models.debt import to_decimal
from paydone.models.enums import ExpenseCategory


@dataclass
class ExpenseItem:
    """A recurring monthly allocation."""

    expense_id: str
    user_id: str
    name: str
    amount: Decimal
    category: ExpenseCategory
    debt_id: str | None = None  # Set when the allocation services a debt

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        self.category = ExpenseCategory(self.category)


@dataclass
class CrossingPoint:
    """Income against total outgoings for one month."""

    month: date
    income: Decimal
    debt_payment: Decimal
    total_expense: Decimal
    is_danger: bool  # Outgoings exceed income


@dataclass
class CrossingAnalysis:
    points: list[CrossingPoint] = field(default_factory=list)
    danger_month: CrossingPoint | None = None
