"""Installment schedule generator.

Builds the full per-period schedule of a single debt. The schedule is
regenerated on every read: periods that already have a persisted record are
emitted verbatim (user edits and payment status are authoritative), every
other period is projected fresh. The outstanding balance is threaded through
the periods as a fold accumulator and always moves by the theoretical
principal, so an edited record never skews later periods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from paydone.dates import add_months
from paydone.engine.amortization import calculate_pmt, compute_period, monthly_rate, to_money
from paydone.models.debt import DebtInstallment, DebtItem
from paydone.models.enums import InstallmentStatus, InterestStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ScheduleContext:
    """Per-debt constants shared by every period of one generation pass."""

    debt: DebtItem
    start: date
    total_months: int
    rate: float
    original_principal: float
    annuity_payment: float
    existing: dict[int, DebtInstallment]
    auto_pay_history: bool
    today: date


def installment_id(debt_id: str, period: int) -> str:
    """Deterministic id of a projected installment."""
    return f"inst-{debt_id}-p{period}"


class ScheduleGenerator:
    """Generate installment schedules for debts.

    Parameters
    ----------
    today : date | None
        Reference day used to classify past installments. Defaults to the
        local calendar day at the time of each call.
    """

    def __init__(self, today: date | None = None) -> None:
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def generate(
        self,
        debt: DebtItem,
        existing_installments: Iterable[DebtInstallment] = (),
        auto_pay_history: bool = False,
    ) -> list[DebtInstallment]:
        """Generate the full installment schedule of a debt.

        Parameters
        ----------
        debt : DebtItem
            The debt to schedule.
        existing_installments : Iterable[DebtInstallment]
            Previously persisted installments of this debt, keyed by period.
        auto_pay_history : bool
            Seed past periods without a persisted record as ``paid`` instead
            of ``overdue``.

        Returns
        -------
        list[DebtInstallment]
            Installments ordered by period. Empty when the debt has missing
            or unreadable dates or a non-positive original principal.
        """
        context = self._build_context(debt, existing_installments, auto_pay_history)
        if context is None:
            return []

        balance = context.original_principal
        installments: list[DebtInstallment] = []
        for period in range(1, context.total_months + 1):
            balance, installment = _step(context, balance, period)
            installments.append(installment)

        logger.debug(
            "Generated %d installments for debt %s (%s), %d from history",
            len(installments),
            debt.debt_id,
            debt.interest_strategy.value,
            sum(1 for p in range(1, context.total_months + 1) if p in context.existing),
            extra={"extra": {"debt_id": debt.debt_id, "periods": len(installments)}},
        )
        return installments

    def _build_context(
        self,
        debt: DebtItem,
        existing_installments: Iterable[DebtInstallment],
        auto_pay_history: bool,
    ) -> _ScheduleContext | None:
        start, end = debt.start, debt.end
        original_principal = float(debt.original_principal)
        if start is None or end is None or original_principal <= 0:
            logger.warning("Debt %s cannot be scheduled: missing dates or principal", debt.debt_id)
            return None

        total_months = debt.total_months
        rate = monthly_rate(debt.interest_rate)

        existing: dict[int, DebtInstallment] = {}
        for record in existing_installments:
            if record.debt_id != debt.debt_id:
                logger.warning(
                    "Skipping installment %s of debt %s while scheduling debt %s",
                    record.installment_id,
                    record.debt_id,
                    debt.debt_id,
                )
                continue
            existing.setdefault(record.period, record)

        return _ScheduleContext(
            debt=debt,
            start=start,
            total_months=total_months,
            rate=rate,
            original_principal=original_principal,
            annuity_payment=calculate_pmt(rate, total_months, original_principal),
            existing=existing,
            auto_pay_history=auto_pay_history,
            today=self.today,
        )


def _nominal_payment(context: _ScheduleContext, period: int) -> float:
    """Installment scheduled for ``period`` before any payoff clamping."""
    strategy = context.debt.interest_strategy
    if strategy is InterestStrategy.FIXED:
        principal = context.original_principal / context.total_months
        return principal + context.original_principal * context.rate
    if strategy is InterestStrategy.ANNUITY:
        return context.annuity_payment

    amount = context.debt.step_up_schedule.amount_for(period)
    if amount is None:
        amount = context.debt.monthly_payment
    return float(amount)


def _status_for(context: _ScheduleContext, due_date: date) -> InstallmentStatus:
    if due_date < context.today:
        return InstallmentStatus.PAID if context.auto_pay_history else InstallmentStatus.OVERDUE
    return InstallmentStatus.PENDING


def _step(
    context: _ScheduleContext, balance: float, period: int
) -> tuple[float, DebtInstallment]:
    """Advance the schedule by one period.

    Returns the balance entering the next period and the installment to emit.
    """
    debt = context.debt
    split = compute_period(
        debt.interest_strategy,
        balance,
        context.original_principal,
        context.rate,
        _nominal_payment(context, period),
    )
    if split.under_interest:
        logger.debug(
            "Debt %s period %d: installment below interest due, principal held at 0",
            debt.debt_id,
            period,
        )

    remaining = balance - split.principal

    installment = context.existing.get(period)
    if installment is None:
        due_date = add_months(context.start, period, day=debt.due_day)
        installment = DebtInstallment(
            installment_id=installment_id(debt.debt_id, period),
            debt_id=debt.debt_id,
            user_id=debt.user_id,
            period=period,
            due_date=due_date,
            amount=to_money(split.amount),
            principal_part=to_money(split.principal),
            interest_part=to_money(split.interest),
            remaining_balance=to_money(max(0.0, remaining)),
            status=_status_for(context, due_date),
        )

    return max(0.0, remaining), installment


def generate_installments(
    debt: DebtItem,
    existing_installments: Iterable[DebtInstallment] = (),
    auto_pay_history: bool = False,
    today: date | None = None,
) -> list[DebtInstallment]:
    """Generate a debt's schedule with a one-off ScheduleGenerator."""
    return ScheduleGenerator(today=today).generate(
        debt, existing_installments, auto_pay_history=auto_pay_history
    )
