"""Debt planning engine: schedules, projections and loan simulations."""

from paydone.engine.amortization import (
    PeriodSplit,
    calculate_pmt,
    compute_period,
    monthly_rate,
    to_money,
)
from paydone.engine.cashflow import (
    calculate_dsr,
    classify_dsr,
    crossing_analysis,
    current_installment,
    monthly_obligations,
)
from paydone.engine.projection import GlobalProjector, project_payoff
from paydone.engine.schedule import ScheduleGenerator, generate_installments
from paydone.engine.simulator import LoanSimulator, run_simulation

__all__ = [
    "GlobalProjector",
    "LoanSimulator",
    "PeriodSplit",
    "ScheduleGenerator",
    "calculate_dsr",
    "calculate_pmt",
    "classify_dsr",
    "compute_period",
    "crossing_analysis",
    "current_installment",
    "generate_installments",
    "monthly_obligations",
    "monthly_rate",
    "project_payoff",
    "run_simulation",
    "to_money",
]
