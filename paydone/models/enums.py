"""Enumeration types for debt planning entities."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class LoanType(str, Enum):
    KPR = "KPR"  # Mortgage
    KKB = "KKB"  # Vehicle
    KTA = "KTA"  # Unsecured
    CC = "Kartu Kredit"  # Credit card

    @property
    def is_mortgage(self) -> bool:
        return self is LoanType.KPR

    @classmethod
    def coerce(cls, value: "LoanType | str") -> "LoanType":
        """Accept a member, its value ('Kartu Kredit') or its name ('CC').

        Unknown values are treated as unsecured (KTA).
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            logger.warning("Unknown loan type %r, treating as KTA", value)
            return cls.KTA


class InterestStrategy(str, Enum):
    """How interest accrues on a debt.

    ``FIXED`` (flat) charges interest on the original principal every period.
    ``ANNUITY`` (effective) charges interest on the outstanding balance with
    a constant payment. ``STEP_UP`` charges interest on the outstanding
    balance with payment amounts set per period range.
    """

    FIXED = "FIXED"
    ANNUITY = "ANNUITY"
    STEP_UP = "STEPUP"

    @classmethod
    def normalize(cls, value: "InterestStrategy | str | None") -> "InterestStrategy":
        """Map a loosely-typed strategy name onto a member.

        Case-insensitive. ``FLAT`` is accepted for ``FIXED``, ``EFEKTIF`` for
        ``ANNUITY`` and ``STEP_UP`` for ``STEPUP``. Missing values mean
        ``FIXED``; unknown names also fall back to ``FIXED``.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.FIXED

        key = str(value).strip().upper().replace("-", "_")
        member = _STRATEGY_ALIASES.get(key)
        if member is None:
            logger.warning("Unknown interest strategy %r, treating as FIXED", value)
            return cls.FIXED
        return member


_STRATEGY_ALIASES = {
    "FIXED": InterestStrategy.FIXED,
    "FLAT": InterestStrategy.FIXED,
    "ANNUITY": InterestStrategy.ANNUITY,
    "EFEKTIF": InterestStrategy.ANNUITY,
    "EFFECTIVE": InterestStrategy.ANNUITY,
    "STEPUP": InterestStrategy.STEP_UP,
    "STEP_UP": InterestStrategy.STEP_UP,
}


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PayoffStrategy(str, Enum):
    SNOWBALL = "snowball"  # Smallest balance first
    AVALANCHE = "avalanche"  # Highest interest rate first


class ProjectionMode(str, Enum):
    LUMP_SUM = "lump_sum"
    CUTOFF = "cutoff"


class ExpenseCategory(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"
    DEBT = "debt"


class DsrStatus(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
