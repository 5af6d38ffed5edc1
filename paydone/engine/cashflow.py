"""Cash-flow helpers: current installments, debt service ratio and income crossing."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from paydone.config import DsrLimits
from paydone.dates import first_of_month, month_diff, month_index_diff
from paydone.engine.amortization import to_money
from paydone.models.cashflow import CrossingAnalysis, CrossingPoint, ExpenseItem
from paydone.models.debt import DebtItem
from paydone.models.enums import DsrStatus, ExpenseCategory, InterestStrategy

logger = logging.getLogger(__name__)


def current_installment(debt: DebtItem, today: date | None = None) -> Decimal:
    """Installment owed for the month containing ``today``.

    Step-up debts look up the range covering the current period (months since
    the start date, 1-indexed); every other debt owes its monthly payment.
    """
    if debt.interest_strategy is not InterestStrategy.STEP_UP or not debt.step_up_schedule:
        return debt.monthly_payment
    if debt.start is None:
        return debt.monthly_payment

    period = month_index_diff(debt.start, today or date.today()) + 1
    amount = debt.step_up_schedule.amount_for(period)
    return amount if amount is not None else debt.monthly_payment


def monthly_obligations(debts: Iterable[DebtItem], today: date | None = None) -> Decimal:
    """Sum of the current installments of all non-deleted debts."""
    return sum(
        (current_installment(d, today) for d in debts if not d.deleted),
        Decimal(0),
    )


def calculate_dsr(monthly_obligations: float | Decimal, monthly_income: float | Decimal) -> float:
    """Debt service ratio in percent; 0 when there is no income."""
    income = float(monthly_income or 0)
    if income <= 0:
        return 0.0
    return float(monthly_obligations or 0) / income * 100


def classify_dsr(dsr: float, limits: DsrLimits | None = None) -> DsrStatus:
    """Bucket a DSR percentage against the configured limits."""
    limits = limits or DsrLimits()
    if dsr <= limits.safe_limit:
        return DsrStatus.SAFE
    if dsr <= limits.warning_limit:
        return DsrStatus.WARNING
    return DsrStatus.DANGER


def crossing_analysis(
    income: float | Decimal,
    debts: Iterable[DebtItem],
    expenses: Iterable[ExpenseItem],
    today: date | None = None,
    horizon_months: int = 24,
) -> CrossingAnalysis:
    """Find the first month in which outgoings exceed income.

    Parameters
    ----------
    income : float | Decimal
        Monthly income, assumed constant over the horizon.
    debts : Iterable[DebtItem]
        Debts whose installments are counted while the month lies between
        their start and end dates.
    expenses : Iterable[ExpenseItem]
        Monthly allocations. ``debt`` allocations are excluded from the living
        cost because the installments are counted from the debts themselves.
    today : date | None
        First projected month. Defaults to the local day of the call.
    horizon_months : int
        Months to project after the current one.

    Returns
    -------
    CrossingAnalysis
        One point per month and the first danger month, if any.
    """
    today = today or date.today()
    debts = [d for d in debts if not d.deleted]
    living_cost = sum(
        (e.amount for e in expenses if e.category is not ExpenseCategory.DEBT),
        Decimal(0),
    )
    monthly_income = to_money(income)

    points: list[CrossingPoint] = []
    for offset in range(max(0, horizon_months) + 1):
        month = first_of_month(today, offset)
        debt_payment = sum((_installment_in(d, month) for d in debts), Decimal(0))
        total_expense = living_cost + debt_payment
        points.append(
            CrossingPoint(
                month=month,
                income=monthly_income,
                debt_payment=to_money(debt_payment),
                total_expense=to_money(total_expense),
                is_danger=total_expense > monthly_income,
            )
        )

    danger_month = next((p for p in points if p.is_danger), None)
    if danger_month is not None:
        logger.info(
            "Outgoings exceed income from %s",
            danger_month.month.isoformat(),
            extra={"extra": {"danger_month": danger_month.month, "income": monthly_income}},
        )
    return CrossingAnalysis(points=points, danger_month=danger_month)


def _installment_in(debt: DebtItem, month: date) -> Decimal:
    start, end = debt.start, debt.end
    if start is None or end is None or not start <= month <= end:
        return Decimal(0)

    if debt.interest_strategy is InterestStrategy.STEP_UP and debt.step_up_schedule:
        amount = debt.step_up_schedule.amount_for(month_diff(start, month) + 1)
        if amount is not None:
            return amount
    return debt.monthly_payment
