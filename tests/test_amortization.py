"""Tests for amortization primitives."""

import math
from decimal import Decimal

import pytest

from paydone.engine.amortization import calculate_pmt, compute_period, monthly_rate, to_money
from paydone.models.enums import InterestStrategy


class TestCalculatePmt:
    """Tests for the annuity payment formula."""

    def test_known_value(self) -> None:
        """120M at 0.7% monthly over 12 months."""
        pmt = calculate_pmt(0.007, 12, 120_000_000)
        assert pmt == pytest.approx(10_460_856, rel=1e-4)

    def test_zero_rate(self) -> None:
        """Zero interest splits the principal evenly."""
        assert calculate_pmt(0, 12, 120_000_000) == 10_000_000

    @pytest.mark.parametrize("nper,pv", [(0, 1_000_000), (-3, 1_000_000), (12, 0), (12, -5)])
    def test_degenerate_inputs(self, nper, pv) -> None:
        """Non-positive periods or principal give no payment."""
        assert calculate_pmt(0.01, nper, pv) == 0

    def test_overflow_returns_zero(self) -> None:
        """A result that cannot be represented is 0."""
        assert calculate_pmt(10.0, 10_000, 1_000_000) == 0

    def test_result_is_finite(self) -> None:
        """Very small rates still produce a finite payment."""
        pmt = calculate_pmt(1e-12, 360, 1_000_000)
        assert math.isfinite(pmt)
        assert pmt > 0


class TestMonthlyRate:
    """Tests for annual to monthly conversion."""

    def test_conversion(self) -> None:
        assert monthly_rate(12.0) == pytest.approx(0.01)

    def test_missing_rate(self) -> None:
        assert monthly_rate(None) == 0.0


class TestToMoney:
    """Tests for currency rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.5, Decimal(1)),
            (1.5, Decimal(2)),
            (2.5, Decimal(3)),
            (-2.5, Decimal(-3)),
            (1234.4999, Decimal(1234)),
            (Decimal("99.5"), Decimal(100)),
            ("42.6", Decimal(43)),
        ],
    )
    def test_half_up(self, value, expected) -> None:
        """Halves round away from zero, never to even."""
        assert to_money(value) == expected

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), None, "abc"])
    def test_non_finite(self, value) -> None:
        """Unusable values become 0."""
        assert to_money(value) == Decimal(0)

    def test_negative_zero_is_normalized(self) -> None:
        """-0.2 rounds to an unsigned zero."""
        assert str(to_money(-0.2)) == "0"


class TestComputePeriod:
    """Tests for the shared per-period split."""

    def test_fixed_uses_original_principal(self) -> None:
        """Flat interest ignores the outstanding balance."""
        split = compute_period(InterestStrategy.FIXED, 6_000_000, 12_000_000, 0.01, 1_120_000)
        assert split.interest == pytest.approx(120_000)
        assert split.principal == pytest.approx(1_000_000)
        assert split.amount == 1_120_000

    def test_annuity_uses_balance(self) -> None:
        """Effective interest is charged on the outstanding balance."""
        split = compute_period(InterestStrategy.ANNUITY, 6_000_000, 12_000_000, 0.01, 1_000_000)
        assert split.interest == pytest.approx(60_000)
        assert split.principal == pytest.approx(940_000)

    def test_payoff_clamps_principal_and_amount(self) -> None:
        """The final period pays exactly what is owed."""
        split = compute_period(InterestStrategy.ANNUITY, 500_000, 12_000_000, 0.01, 1_000_000)
        assert split.principal == 500_000
        assert split.interest == pytest.approx(5_000)
        assert split.amount == pytest.approx(505_000)
        assert split.overpayment == pytest.approx(495_000)

    def test_fixed_payoff_keeps_nominal_amount(self) -> None:
        """Flat installments keep their nominal amount on payoff."""
        split = compute_period(InterestStrategy.FIXED, 500_000, 12_000_000, 0.01, 1_120_000)
        assert split.principal == 500_000
        assert split.amount == 1_120_000

    def test_step_up_below_interest(self) -> None:
        """A step-up payment below interest holds principal at zero."""
        split = compute_period(InterestStrategy.STEP_UP, 12_000_000, 12_000_000, 0.01, 100_000)
        assert split.principal == 0
        assert split.under_interest is True
        assert split.amount == 100_000

    def test_annuity_negative_principal_not_floored(self) -> None:
        """Only step-up floors principal; annuity passes it through."""
        split = compute_period(InterestStrategy.ANNUITY, 12_000_000, 12_000_000, 0.01, 100_000)
        assert split.principal < 0
        assert split.under_interest is False

    def test_zero_balance(self) -> None:
        """A settled balance takes no principal."""
        split = compute_period(InterestStrategy.STEP_UP, 0, 12_000_000, 0.01, 500_000)
        assert split.principal == 0
        assert split.interest == 0
        assert split.amount == 0
