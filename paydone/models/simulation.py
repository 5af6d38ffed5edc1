"""New-loan simulation models."""

from dataclasses import dataclass, field
from decimal import Decimal

from paydone.models.enums import LoanType


@dataclass
class SimulationInput:
    """A hypothetical loan to explore."""

    asset_price: float
    down_payment_percent: float
    interest_rate: float  # Annual percentage
    tenor_years: int
    loan_type: LoanType = LoanType.KPR

    def __post_init__(self) -> None:
        self.loan_type = LoanType.coerce(self.loan_type)


@dataclass
class UpfrontCosts:
    """Cash needed at signing."""

    down_payment: Decimal
    provision: Decimal
    admin_fee: Decimal
    insurance: Decimal
    notary: Decimal
    total_upfront: Decimal


@dataclass
class AmortizationRow:
    month: int
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass
class SimulationResult:
    loan_amount: Decimal
    monthly_payment: Decimal
    upfront_costs: UpfrontCosts
    schedule: list[AmortizationRow] = field(default_factory=list)
