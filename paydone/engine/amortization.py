"""Amortization primitives shared by the schedule generator, projector and simulator."""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from paydone.models.enums import InterestStrategy

_WHOLE_UNIT = Decimal(1)


def calculate_pmt(rate: float, nper: int, pv: float) -> float:
    """Constant payment that amortizes ``pv`` over ``nper`` periods at ``rate``.

    Parameters
    ----------
    rate : float
        Periodic (monthly) interest rate, e.g. 0.007 for 0.7%.
    nper : int
        Number of periods.
    pv : float
        Principal.

    Returns
    -------
    float
        The payment, or 0 for non-positive ``nper``/``pv`` and for any
        non-finite result.
    """
    if nper <= 0 or pv <= 0:
        return 0.0
    if rate == 0:
        return pv / nper

    try:
        pvif = (1 + rate) ** nper
        pmt = (rate * pv * pvif) / (pvif - 1)
    except (OverflowError, ZeroDivisionError):
        return 0.0
    return pmt if math.isfinite(pmt) else 0.0


def monthly_rate(annual_percent: float) -> float:
    """Convert a nominal annual percentage into a monthly rate."""
    return (annual_percent or 0.0) / 100 / 12


def to_money(value: Any) -> Decimal:
    """Round to whole currency units, half away from zero.

    Non-finite or unreadable values become ``Decimal(0)``.
    """
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            return Decimal(0)
        if not math.isfinite(as_float):
            return Decimal(0)
        number = Decimal(repr(as_float))
    if not number.is_finite():
        return Decimal(0)
    rounded = number.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP)
    # Normalize -0 so serialized output never shows a signed zero
    return rounded if rounded != 0 else Decimal(0)


@dataclass(frozen=True)
class PeriodSplit:
    """Interest/principal split of a single period's payment."""

    interest: float
    principal: float
    amount: float
    overpayment: float = 0.0  # Principal clamped away on the payoff period
    under_interest: bool = False  # Step-up payment smaller than the interest due


def compute_period(
    strategy: InterestStrategy,
    balance: float,
    original_principal: float,
    rate: float,
    nominal_payment: float,
) -> PeriodSplit:
    """Split one period's payment into interest and principal.

    Parameters
    ----------
    strategy : InterestStrategy
        ``FIXED`` charges interest on ``original_principal``; ``ANNUITY`` and
        ``STEP_UP`` charge interest on the outstanding ``balance``.
    balance : float
        Outstanding balance entering the period.
    original_principal : float
        Amount borrowed at origination.
    rate : float
        Monthly interest rate.
    nominal_payment : float
        Installment the borrower is scheduled to pay this period.

    Returns
    -------
    PeriodSplit
        Principal never exceeds ``balance``. For ``ANNUITY`` and ``STEP_UP``
        the amount is reduced to exactly the payoff on the final period.
        ``STEP_UP`` principal is floored at zero.
    """
    under_interest = False

    if strategy is InterestStrategy.FIXED:
        interest = original_principal * rate
        principal = nominal_payment - interest
    else:
        interest = max(0.0, balance) * rate
        principal = nominal_payment - interest
        if strategy is InterestStrategy.STEP_UP and principal < 0:
            under_interest = True
            principal = 0.0

    amount = nominal_payment
    overpayment = 0.0
    if principal > balance:
        overpayment = principal - balance
        principal = balance
        if strategy is not InterestStrategy.FIXED:
            amount = principal + interest

    return PeriodSplit(
        interest=interest,
        principal=principal,
        amount=amount,
        overpayment=overpayment,
        under_interest=under_interest,
    )
