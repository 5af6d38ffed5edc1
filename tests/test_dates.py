"""Tests for calendar helpers."""

from datetime import date, datetime, timezone

import pytest

from paydone.dates import (
    add_months,
    days_in_month,
    first_of_month,
    month_diff,
    month_index_diff,
    parse_date,
    safe_date_iso,
    to_local_date,
    to_local_iso,
)


class TestAddMonths:
    """Tests for add_months."""

    def test_simple(self) -> None:
        assert add_months(date(2025, 1, 10), 1) == date(2025, 2, 10)

    def test_year_rollover(self) -> None:
        assert add_months(date(2025, 11, 10), 3) == date(2026, 2, 10)

    def test_negative(self) -> None:
        assert add_months(date(2025, 3, 15), -4) == date(2024, 11, 15)

    @pytest.mark.parametrize(
        "start,months,expected",
        [
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2025, 1, 31), 1, date(2025, 2, 28)),
            (date(2025, 1, 31), 3, date(2025, 4, 30)),
            (date(2025, 1, 31), 2, date(2025, 3, 31)),
        ],
    )
    def test_day_clamped(self, start, months, expected) -> None:
        """Day 31 never overflows into the following month."""
        assert add_months(start, months) == expected

    def test_explicit_day(self) -> None:
        assert add_months(date(2025, 1, 5), 1, day=30) == date(2025, 2, 28)
        assert add_months(date(2025, 1, 5), 2, day=30) == date(2025, 3, 30)

    def test_days_in_month(self) -> None:
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2100, 2) == 28
        assert days_in_month(2025, 12) == 31


class TestMonthDiff:
    """Tests for month differences."""

    def test_ignores_day(self) -> None:
        assert month_index_diff(date(2025, 1, 31), date(2025, 2, 1)) == 1

    def test_across_years(self) -> None:
        assert month_index_diff(date(2024, 11, 10), date(2026, 1, 10)) == 14

    def test_negative_and_floored(self) -> None:
        assert month_index_diff(date(2025, 6, 1), date(2025, 3, 1)) == -3
        assert month_diff(date(2025, 6, 1), date(2025, 3, 1)) == 0

    def test_first_of_month(self) -> None:
        assert first_of_month(date(2025, 6, 15)) == date(2025, 6, 1)
        assert first_of_month(date(2025, 6, 15), 7) == date(2026, 1, 1)


class TestParseDate:
    """Tests for parse_date and ISO rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2025-03-20", date(2025, 3, 20)),
            ("2025-03-20T10:30:00", date(2025, 3, 20)),
            (date(2025, 3, 20), date(2025, 3, 20)),
            (datetime(2025, 3, 20, 23, 59), date(2025, 3, 20)),
        ],
    )
    def test_valid(self, value, expected) -> None:
        assert parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not-a-date", "2025-13-01", 20250320])
    def test_invalid(self, value) -> None:
        assert parse_date(value) is None

    def test_utc_timestamp_uses_local_day(self) -> None:
        """Aware timestamps are converted to the local zone first."""
        moment = datetime(2025, 3, 20, 23, 30, tzinfo=timezone.utc)

        assert parse_date("2025-03-20T23:30:00Z") == moment.astimezone().date()
        assert to_local_date(moment) == moment.astimezone().date()

    def test_to_local_iso(self) -> None:
        assert to_local_iso(date(2025, 3, 5)) == "2025-03-05"
        assert to_local_iso(datetime(2025, 3, 5, 23, 59)) == "2025-03-05"

    def test_safe_date_iso_fallback(self) -> None:
        """Unreadable values render as the reference day."""
        assert safe_date_iso("garbage", today=date(2025, 6, 15)) == "2025-06-15"
        assert safe_date_iso("2025-01-02", today=date(2025, 6, 15)) == "2025-01-02"
