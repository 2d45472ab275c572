"""Period key helpers.

A period is a calendar month identified by a ``YYYY-MM`` key. Keys sort
lexicographically in chronological order, so plain string comparison is
enough to order them.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from bizops_pipeline.errors import InvalidPeriodError, InvalidRecordError, InvalidReportRequestError

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")

MIN_YEAR = 1
MAX_YEAR = 9999


def _format(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_period(key: str) -> tuple[int, int]:
    """Split a period key into ``(year, month)``.

    Raises:
        InvalidPeriodError: if the key is not ``YYYY-MM`` with a month in
            1..12 and a year in 1..9999.
    """
    m = _PERIOD_RE.match(key) if isinstance(key, str) else None
    if m is None:
        raise InvalidPeriodError(f"Not a YYYY-MM period key: {key!r}")
    year, month = int(m.group(1)), int(m.group(2))
    if not (MIN_YEAR <= year <= MAX_YEAR) or not (1 <= month <= 12):
        raise InvalidPeriodError(f"Period out of range: {key!r}")
    return year, month


def period_key_of(value: date | datetime | str) -> str:
    """Return the ``YYYY-MM`` key of a calendar date.

    Datetimes use their own calendar fields as given; no timezone conversion
    is applied. ISO date strings (``YYYY-MM-DD``) are accepted for callers
    holding undecoded records.

    Raises:
        InvalidRecordError: if the value cannot be read as a calendar date.
    """
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidRecordError(f"Unparseable date: {value!r}") from exc
    if not isinstance(value, date):
        raise InvalidRecordError(f"Expected a date, got {type(value).__name__}")
    return _format(value.year, value.month)


def previous_period(key: str) -> str:
    """Return the month before `key`; January rolls back to December."""
    year, month = parse_period(key)
    if month == 1:
        if year == MIN_YEAR:
            raise InvalidPeriodError(f"No period before {key!r}")
        return _format(year - 1, 12)
    return _format(year, month - 1)


def next_period(key: str) -> str:
    """Return the month after `key`; December rolls over to January."""
    year, month = parse_period(key)
    if month == 12:
        if year == MAX_YEAR:
            raise InvalidPeriodError(f"No period after {key!r}")
        return _format(year + 1, 1)
    return _format(year, month + 1)


def same_period_last_year(key: str) -> str:
    """Return the same month one year earlier."""
    year, month = parse_period(key)
    if year == MIN_YEAR:
        raise InvalidPeriodError(f"No period a year before {key!r}")
    return _format(year - 1, month)


def periods_of_year(year: int) -> list[str]:
    """Return the twelve period keys of `year`, January first."""
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise InvalidPeriodError(f"Year out of range: {year}")
    return [_format(year, m) for m in range(1, 13)]


def trailing_periods(n: int, today: date | None = None) -> list[str]:
    """Return the `n` periods ending with the month of `today`, oldest first.

    Args:
        n: Number of months in the window (must be positive).
        today: Reference date; defaults to the local current date.
    """
    if n <= 0:
        raise InvalidReportRequestError(f"window must be at least one month, got {n}")
    key = period_key_of(today or date.today())
    out = [key]
    for _ in range(n - 1):
        key = previous_period(key)
        out.append(key)
    out.reverse()
    return out


def period_bounds(key: str) -> tuple[date, date]:
    """Return the first and last calendar day of a period."""
    year, month = parse_period(key)
    first = date(year, month, 1)
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date.fromordinal(date(year, month + 1, 1).toordinal() - 1)
    return first, last
