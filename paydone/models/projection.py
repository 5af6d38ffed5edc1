"""Multi-debt projection models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass
class ProjectionPoint:
    """Aggregate balances at one month of the projection."""

    index: int  # Months from today
    month: date  # First day of that month
    standard_balance: Decimal
    accelerated_balance: Decimal
    savings_balance: Decimal | None = None  # Cutoff mode only


@dataclass
class ProjectionResult:
    """Standard vs accelerated payoff comparison."""

    series: list[ProjectionPoint] = field(default_factory=list)
    months_saved: int = 0
    money_saved: Decimal = Decimal(0)
    finish_date_standard: date | None = None
    finish_date_accelerated: date | None = None

    @property
    def finish_dates(self) -> tuple[date | None, date | None]:
        """(standard, accelerated) payoff months."""
        return self.finish_date_standard, self.finish_date_accelerated
