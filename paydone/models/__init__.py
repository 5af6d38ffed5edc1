"""Domain models for debt planning."""

from paydone.models.cashflow import CrossingAnalysis, CrossingPoint, ExpenseItem
from paydone.models.debt import (
    DebtInstallment,
    DebtItem,
    EncodedStepUp,
    StepUpRange,
    StepUpSchedule,
    StructuredStepUp,
    coerce_step_up_schedule,
    parse_step_up_ranges,
)
from paydone.models.enums import (
    DsrStatus,
    ExpenseCategory,
    InstallmentStatus,
    InterestStrategy,
    LoanType,
    PayoffStrategy,
    ProjectionMode,
)
from paydone.models.projection import ProjectionPoint, ProjectionResult
from paydone.models.simulation import (
    AmortizationRow,
    SimulationInput,
    SimulationResult,
    UpfrontCosts,
)

__all__ = [
    "AmortizationRow",
    "CrossingAnalysis",
    "CrossingPoint",
    "DebtInstallment",
    "DebtItem",
    "DsrStatus",
    "EncodedStepUp",
    "ExpenseCategory",
    "ExpenseItem",
    "InstallmentStatus",
    "InterestStrategy",
    "LoanType",
    "PayoffStrategy",
    "ProjectionMode",
    "ProjectionPoint",
    "ProjectionResult",
    "SimulationInput",
    "SimulationResult",
    "StepUpRange",
    "StepUpSchedule",
    "StructuredStepUp",
    "UpfrontCosts",
    "coerce_step_up_schedule",
    "parse_step_up_ranges",
]
