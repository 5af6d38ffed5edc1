"""Calendar helpers.

Dates leaving the engine are always rendered from local calendar components.
An aware ``datetime`` is converted to the local zone before its date is
taken, so a payment due late in the evening never shifts a day the way a
UTC conversion would.
"""

import calendar
import logging
from datetime import date, datetime

logger = logging.getLogger(__name__)


def to_local_date(value: date | datetime) -> date:
    """Return the local calendar day of a date or datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def to_local_iso(value: date | datetime) -> str:
    """Format as ``YYYY-MM-DD`` using local year, month and day."""
    local = to_local_date(value)
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def parse_date(value: date | datetime | str | None) -> date | None:
    """Parse a date-like value, returning None when it cannot be read.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full
    ISO-8601 timestamps.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return to_local_date(value)
    if not isinstance(value, str):
        logger.warning("Unsupported date value %r", value)
        return None

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return to_local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        logger.warning("Unparseable date %r", value)
        return None


def safe_date_iso(value: date | datetime | str | None, today: date | None = None) -> str:
    """Local ISO date for ``value``, falling back to today when unreadable."""
    parsed = parse_date(value)
    if parsed is None:
        parsed = today or date.today()
    return to_local_iso(parsed)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def add_months(start: date, months: int, day: int | None = None) -> date:
    """Shift ``start`` by whole calendar months.

    The day of month is ``day`` (default: the start's day), clamped to the
    length of the target month, so day 31 lands on Feb 28/29.
    """
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    target_day = start.day if day is None else day
    target_day = max(1, min(target_day, days_in_month(year, month)))
    return date(year, month, target_day)


def month_index_diff(start: date, end: date) -> int:
    """Whole-month difference ignoring the day of month (may be negative)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_diff(start: date, end: date) -> int:
    """Whole-month difference floored at zero."""
    return max(0, month_index_diff(start, end))


def first_of_month(today: date, offset: int = 0) -> date:
    """First day of the month ``offset`` months after ``today``."""
    return add_months(today.replace(day=1), offset, day=1)
