"""Debt and installment models."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from paydone.dates import month_index_diff, parse_date
from paydone.exceptions import InvalidDebtError, StepUpParseError
from paydone.models.enums import InstallmentStatus, InterestStrategy, LoanType

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric-ish value to a finite Decimal (0 when unusable)."""
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if isinstance(value, float) and not math.isfinite(value):
        return Decimal(0)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return result if result.is_finite() else Decimal(0)


@dataclass(frozen=True)
class StepUpRange:
    """Installment amount for an inclusive range of 1-indexed periods."""

    start_month: int
    end_month: int
    amount: Decimal

    def contains(self, period: int) -> bool:
        return self.start_month <= period <= self.end_month

    @classmethod
    def from_value(cls, value: Any) -> StepUpRange:
        """Build a range from a mapping (camelCase or snake_case keys).

        Raises
        ------
        StepUpParseError
            If a key is missing or a value is not numeric.
        """
        if isinstance(value, StepUpRange):
            return value
        if not isinstance(value, dict):
            raise StepUpParseError(f"Step-up range must be an object, got {value!r}")

        try:
            start = value["startMonth"] if "startMonth" in value else value["start_month"]
            end = value["endMonth"] if "endMonth" in value else value["end_month"]
            amount = float(value["amount"])
            if not math.isfinite(amount):
                raise ValueError("amount is not finite")
            return cls(
                start_month=int(float(start)),
                end_month=int(float(end)),
                amount=Decimal(str(amount)),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise StepUpParseError(f"Invalid step-up range {value!r}") from exc


def parse_step_up_ranges(value: str | list | tuple | None) -> tuple[StepUpRange, ...]:
    """Strictly decode step-up ranges from a list or a JSON string.

    Raises
    ------
    StepUpParseError
        If the JSON is malformed or any range is invalid.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise StepUpParseError(f"Step-up schedule is not valid JSON: {exc}") from exc
        if value is None:
            return ()
    if not isinstance(value, (list, tuple)):
        raise StepUpParseError(f"Step-up schedule must be a list, got {type(value).__name__}")
    return tuple(StepUpRange.from_value(item) for item in value)


def _parse_leniently(value: str | list | tuple | None) -> tuple[StepUpRange, ...]:
    try:
        return parse_step_up_ranges(value)
    except StepUpParseError as exc:
        logger.warning("Ignoring step-up schedule: %s", exc)
        return ()


class _RangeLookup:
    ranges: tuple[StepUpRange, ...]

    def amount_for(self, period: int) -> Decimal | None:
        """Amount of the first range containing ``period``, if any."""
        for step in self.ranges:
            if step.contains(period):
                return step.amount
        return None

    def __bool__(self) -> bool:
        return bool(self.ranges)


@dataclass(frozen=True)
class StructuredStepUp(_RangeLookup):
    """Step-up schedule supplied as a list of ranges."""

    ranges: tuple[StepUpRange, ...] = ()

    @classmethod
    def from_list(cls, values: list | tuple) -> StructuredStepUp:
        return cls(ranges=_parse_leniently(values))


@dataclass(frozen=True)
class EncodedStepUp(_RangeLookup):
    """Step-up schedule supplied as a JSON string, decoded once on creation."""

    raw: str
    ranges: tuple[StepUpRange, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranges", _parse_leniently(self.raw))


StepUpSchedule = Union[StructuredStepUp, EncodedStepUp]


def coerce_step_up_schedule(value: Any) -> StepUpSchedule:
    """Wrap whatever the persistence layer stored into a StepUpSchedule."""
    if isinstance(value, (StructuredStepUp, EncodedStepUp)):
        return value
    if value is None:
        return StructuredStepUp()
    if isinstance(value, str):
        return EncodedStepUp(value)
    if isinstance(value, (list, tuple)):
        return StructuredStepUp.from_list(value)
    logger.warning("Ignoring step-up schedule of type %s", type(value).__name__)
    return StructuredStepUp()


@dataclass
class DebtItem:
    """A loan or credit obligation."""

    debt_id: str
    user_id: str
    name: str
    loan_type: LoanType
    original_principal: Decimal  # Amount borrowed, immutable
    remaining_principal: Decimal  # Current snapshot
    interest_rate: float  # Nominal annual percentage
    start_date: date | str | None
    end_date: date | str | None
    due_day: int = 1  # Day of month, clamped to shorter months
    monthly_payment: Decimal = Decimal(0)
    interest_strategy: InterestStrategy = InterestStrategy.FIXED
    step_up_schedule: StepUpSchedule | list | str | None = None
    deleted: bool = False
    updated_at: datetime | None = None

    _start: date | None = field(init=False, repr=False, compare=False, default=None)
    _end: date | None = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        self.original_principal = to_decimal(self.original_principal)
        self.remaining_principal = to_decimal(self.remaining_principal)
        self.monthly_payment = to_decimal(self.monthly_payment)
        try:
            self.interest_rate = float(self.interest_rate or 0)
        except (TypeError, ValueError):
            logger.warning("Debt %s has unreadable interest rate %r", self.debt_id, self.interest_rate)
            self.interest_rate = 0.0
        if not math.isfinite(self.interest_rate):
            self.interest_rate = 0.0

        self.loan_type = LoanType.coerce(self.loan_type)

        try:
            day = int(self.due_day or 1)
        except (TypeError, ValueError, OverflowError):
            day = 1
        self.due_day = max(1, min(day, 31))

        self.interest_strategy = InterestStrategy.normalize(self.interest_strategy)
        self.step_up_schedule = coerce_step_up_schedule(self.step_up_schedule)
        self._start = parse_date(self.start_date)
        self._end = parse_date(self.end_date)

    @property
    def start(self) -> date | None:
        """Parsed start date, or None when missing or unreadable."""
        return self._start

    @property
    def end(self) -> date | None:
        """Parsed end date, or None when missing or unreadable."""
        return self._end

    @property
    def total_months(self) -> int:
        """Scheduled periods: calendar month difference, at least 1.

        Zero when either date is unusable.
        """
        if self._start is None or self._end is None:
            return 0
        return max(1, month_index_diff(self._start, self._end))

    def is_active(self, paid_threshold: float = 0.0) -> bool:
        """Not soft-deleted and still owing more than ``paid_threshold``."""
        return not self.deleted and float(self.remaining_principal) > paid_threshold

    def validate(self) -> None:
        """Raise InvalidDebtError if the debt cannot be scheduled."""
        if self._start is None or self._end is None:
            raise InvalidDebtError(f"Debt {self.debt_id} has missing or invalid dates")
        if self._start >= self._end:
            raise InvalidDebtError(f"Debt {self.debt_id} starts on or after its end date")
        if self.original_principal <= 0:
            raise InvalidDebtError(f"Debt {self.debt_id} has non-positive principal")


@dataclass
class DebtInstallment:
    """One scheduled or historical period of a debt."""

    installment_id: str
    debt_id: str
    user_id: str
    period: int  # 1, 2, 3, ...
    due_date: date
    amount: Decimal  # principal_part + interest_part
    principal_part: Decimal
    interest_part: Decimal
    remaining_balance: Decimal  # Projected balance after this installment
    status: InstallmentStatus
    notes: str = ""
