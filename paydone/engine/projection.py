"""Global multi-debt payoff projector.

Simulates the aggregate outstanding balance month by month along two paths:

* **standard**: every debt is paid at its own minimum installment only.
* **accelerated**: a user-chosen extra monthly amount is either poured into
  principal in snowball/avalanche order (``lump_sum``), or invested on the
  side until the savings can extinguish the remaining debt (``cutoff``).

The per-debt math is the same ``compute_period`` the schedule generator uses,
run on lightweight working copies without any history merging.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, TypeVar

from paydone.config import ProjectionConfig
from paydone.dates import first_of_month, month_diff
from paydone.engine.amortization import compute_period, monthly_rate, to_money
from paydone.models.debt import DebtItem, StepUpSchedule
from paydone.models.enums import InterestStrategy, PayoffStrategy, ProjectionMode
from paydone.models.projection import ProjectionPoint, ProjectionResult

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)


@dataclass
class _DebtState:
    """Mutable simulation copy of one debt; never shares state with the DebtItem."""

    debt_id: str
    strategy: InterestStrategy
    balance: float
    original_principal: float
    annual_rate: float
    rate: float
    monthly_payment: float
    months_passed: int
    step_up: StepUpSchedule
    paid: bool = False

    @classmethod
    def from_debt(cls, debt: DebtItem, today: date) -> _DebtState:
        remaining = float(debt.remaining_principal)
        original = float(debt.original_principal) or remaining
        return cls(
            debt_id=debt.debt_id,
            strategy=debt.interest_strategy,
            balance=remaining,
            original_principal=original,
            annual_rate=debt.interest_rate,
            rate=monthly_rate(debt.interest_rate),
            monthly_payment=float(debt.monthly_payment),
            months_passed=month_diff(debt.start, today) if debt.start else 0,
            step_up=debt.step_up_schedule,
        )

    def nominal_payment(self, month: int) -> float:
        """Minimum installment due ``month`` months from today."""
        if self.strategy is InterestStrategy.STEP_UP and self.step_up:
            amount = self.step_up.amount_for(self.months_passed + month + 1)
            if amount is not None:
                return float(amount)
        return self.monthly_payment

    def pay_minimum(self, month: int, paid_threshold: float) -> float:
        """Apply this month's minimum payment.

        Returns the part of the payment that exceeded the balance.
        """
        split = compute_period(
            self.strategy,
            self.balance,
            self.original_principal,
            self.rate,
            self.nominal_payment(month),
        )
        self.balance -= split.principal
        self._settle(paid_threshold)
        return split.overpayment

    def pay_extra(self, amount: float, paid_threshold: float) -> float:
        """Pay down principal from the extra pool; returns the amount used."""
        used = min(amount, self.balance)
        self.balance -= used
        self._settle(paid_threshold)
        return used

    def _settle(self, paid_threshold: float) -> None:
        if self.balance <= paid_threshold:
            self.balance = 0.0
            self.paid = True


class GlobalProjector:
    """Compare standard and accelerated payoff of a set of debts.

    Parameters
    ----------
    config : ProjectionConfig | None
        Month cap, paid threshold and summary proxies.
    today : date | None
        Month the projection starts from. Defaults to the local day of each
        call.
    """

    def __init__(self, config: ProjectionConfig | None = None, today: date | None = None) -> None:
        self.config = config or ProjectionConfig()
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def project(
        self,
        debts: Iterable[DebtItem],
        extra_monthly_payment: float = 0.0,
        strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
        mode: ProjectionMode | str = ProjectionMode.LUMP_SUM,
        investment_return_rate: float | None = None,
    ) -> ProjectionResult:
        """Project aggregate balances along the standard and accelerated paths.

        Parameters
        ----------
        debts : Iterable[DebtItem]
            All of a user's debts; soft-deleted and (nearly) settled debts are
            skipped.
        extra_monthly_payment : float
            Amount available on top of the minimum installments.
        strategy : PayoffStrategy | str
            Order in which the extra pool is applied in ``lump_sum`` mode.
        mode : ProjectionMode | str
            ``lump_sum`` or ``cutoff``.
        investment_return_rate : float | None
            Annual percent earned by the side savings in ``cutoff`` mode.

        Returns
        -------
        ProjectionResult
            Chart series plus summary metrics.
        """
        cfg = self.config
        today = self.today
        strategy = _coerce(PayoffStrategy, strategy, PayoffStrategy.AVALANCHE)
        mode = _coerce(ProjectionMode, mode, ProjectionMode.LUMP_SUM)
        extra = _non_negative(extra_monthly_payment)
        if investment_return_rate is None:
            investment_return_rate = cfg.default_investment_return

        active = [d for d in debts if d.is_active(cfg.paid_threshold)]
        total_principal = sum(float(d.remaining_principal) for d in active)

        standard = self._standard_path([_DebtState.from_debt(d, today) for d in active])

        if extra <= 0:
            accelerated = list(standard)
            savings = [0.0] * len(standard)
        elif mode is ProjectionMode.LUMP_SUM:
            accelerated = self._lump_sum_path(
                [_DebtState.from_debt(d, today) for d in active], extra, strategy
            )
            savings = [0.0] * len(accelerated)
        else:
            accelerated, savings = self._cutoff_path(
                [_DebtState.from_debt(d, today) for d in active],
                extra,
                _non_negative(investment_return_rate),
            )

        result = ProjectionResult(
            series=self._build_series(standard, accelerated, savings, mode, today),
            months_saved=max(0, len(standard) - len(accelerated)),
            money_saved=to_money(
                self._money_saved(standard, accelerated, savings, mode, extra, total_principal)
            ),
            finish_date_standard=first_of_month(today, len(standard)),
            finish_date_accelerated=first_of_month(today, len(accelerated)),
        )

        logger.info(
            "Projected %d debts (%s, %s): %d standard months, %d accelerated months",
            len(active),
            strategy.value,
            mode.value,
            len(standard),
            len(accelerated),
        )
        return result

    def _standard_path(self, states: list[_DebtState]) -> list[float]:
        cfg = self.config
        series: list[float] = []
        for month in range(cfg.month_limit + 1):
            total = sum(s.balance for s in states)
            series.append(total)
            if total <= 0:
                break
            for state in states:
                if not state.paid:
                    state.pay_minimum(month, cfg.paid_threshold)
        return series

    def _lump_sum_path(
        self, states: list[_DebtState], extra: float, strategy: PayoffStrategy
    ) -> list[float]:
        cfg = self.config
        series: list[float] = []
        for month in range(cfg.month_limit + 1):
            total = sum(s.balance for s in states)
            series.append(total)
            if total <= 0:
                break

            pool = extra
            for state in _prioritize(states, strategy):
                pool += state.pay_minimum(month, cfg.paid_threshold)

            for state in _prioritize(states, strategy):
                if pool <= 0:
                    break
                pool -= state.pay_extra(pool, cfg.paid_threshold)
        return series

    def _cutoff_path(
        self, states: list[_DebtState], extra: float, annual_return: float
    ) -> tuple[list[float], list[float]]:
        cfg = self.config
        monthly_return = annual_return / 100 / 12
        series: list[float] = []
        savings_series: list[float] = []
        savings = 0.0

        for month in range(cfg.month_limit + 1):
            total = sum(s.balance for s in states)
            if total > 0 and savings >= total:
                logger.debug("Savings cover remaining debt after %d months", month)
                total = 0.0

            series.append(total)
            savings_series.append(savings)
            if total <= 0:
                break

            savings += extra
            savings += savings * monthly_return
            for state in states:
                if not state.paid:
                    state.pay_minimum(month, cfg.paid_threshold)
        return series, savings_series

    def _build_series(
        self,
        standard: list[float],
        accelerated: list[float],
        savings: list[float],
        mode: ProjectionMode,
        today: date,
    ) -> list[ProjectionPoint]:
        length = max(len(standard), len(accelerated))
        downsample = length > self.config.downsample_after
        points: list[ProjectionPoint] = []

        for index in range(length):
            if downsample and index % 2 != 0 and index != length - 1:
                continue
            points.append(
                ProjectionPoint(
                    index=index,
                    month=first_of_month(today, index),
                    standard_balance=to_money(_at(standard, index)),
                    accelerated_balance=to_money(_at(accelerated, index)),
                    savings_balance=(
                        to_money(_at(savings, index)) if mode is ProjectionMode.CUTOFF else None
                    ),
                )
            )
        return points

    def _money_saved(
        self,
        standard: list[float],
        accelerated: list[float],
        savings: list[float],
        mode: ProjectionMode,
        extra: float,
        total_principal: float,
    ) -> float:
        """Interest differential estimated with a flat proxy rate."""
        proxy = self.config.estimated_interest_rate
        interest_standard = total_principal * proxy * (len(standard) / 12)

        if mode is ProjectionMode.LUMP_SUM:
            interest_accelerated = total_principal * proxy * (len(accelerated) / 12)
            return max(0.0, interest_standard - interest_accelerated)

        cutoff_index = next(
            (i for i, balance in enumerate(accelerated) if balance <= 0), len(accelerated)
        )
        interest_cutoff = total_principal * proxy * (cutoff_index / 12)
        investment_gains = _at(savings, cutoff_index) - extra * cutoff_index
        return (interest_standard - interest_cutoff) + investment_gains


def _prioritize(states: list[_DebtState], strategy: PayoffStrategy) -> list[_DebtState]:
    """Unpaid debts in extra-payment order."""
    unpaid = [s for s in states if not s.paid]
    if strategy is PayoffStrategy.SNOWBALL:
        return sorted(unpaid, key=lambda s: s.balance)
    return sorted(unpaid, key=lambda s: s.annual_rate, reverse=True)


def _at(values: list[float], index: int) -> float:
    return values[index] if index < len(values) else 0.0


def _non_negative(value: float | None) -> float:
    try:
        number = float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) and number > 0 else 0.0


def _coerce(enum_cls: type[_E], value: _E | str, default: _E) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        logger.warning("Unknown %s %r, using %s", enum_cls.__name__, value, default.value)
        return default


def project_payoff(
    debts: Iterable[DebtItem],
    extra_monthly_payment: float = 0.0,
    strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
    mode: ProjectionMode | str = ProjectionMode.LUMP_SUM,
    investment_return_rate: float | None = None,
    today: date | None = None,
) -> ProjectionResult:
    """Run a projection with the default ProjectionConfig."""
    return GlobalProjector(today=today).project(
        debts,
        extra_monthly_payment=extra_monthly_payment,
        strategy=strategy,
        mode=mode,
        investment_return_rate=investment_return_rate,
    )
