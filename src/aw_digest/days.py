"""Parse day selectors and compute local day ranges."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from .errors import InputFormatError

_OFFSET_PATTERN = re.compile(r"^[+-]?\d+$")
_DATE_PATTERN = re.compile(r"^(?:(?P<year>\d{4})-)?(?P<month>\d{2})-(?P<day>\d{2})$")


def parse_day_selector(value: str, *, today: Optional[date] = None) -> date:
    """Resolve ``value`` to a calendar date.

    An optionally signed integer is an offset in days from today
    (``-1`` is yesterday). ``YYYY-MM-DD`` is an explicit date and ``MM-DD``
    is a date in the current year.
    """
    today = today or date.today()
    text = value.strip()
    if _OFFSET_PATTERN.match(text):
        try:
            return today + timedelta(days=int(text))
        except (OverflowError, ValueError) as exc:
            raise InputFormatError(f"Invalid day {value!r}: {exc}") from exc

    match = _DATE_PATTERN.match(text)
    if not match:
        raise InputFormatError(
            f"Invalid day {value!r}: expected a day offset, YYYY-MM-DD or MM-DD."
        )
    year = int(match["year"]) if match["year"] else today.year
    try:
        return date(year, int(match["month"]), int(match["day"]))
    except ValueError as exc:
        raise InputFormatError(f"Invalid day {value!r}: {exc}") from exc


def day_range(day: date) -> tuple[datetime, datetime]:
    """Return local midnight of ``day`` and of the following day, timezone-aware."""
    try:
        start = datetime.combine(day, time.min).astimezone()
        end = datetime.combine(day + timedelta(days=1), time.min).astimezone()
    except (OverflowError, ValueError) as exc:
        raise InputFormatError(f"Day {day.isoformat()} is out of range: {exc}") from exc
    return start, end
