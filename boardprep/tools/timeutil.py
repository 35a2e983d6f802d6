"""
Wall-clock and calendar helpers.

Times are "HH:MM" strings or minutes since midnight. Dates are ISO calendar
days; all date math is done on naive datetime.date values so no timezone or
DST shift can move a day.
"""

import datetime
import re

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class FormatError(ValueError):
    """Raised for a malformed time or date string."""


def time_to_min(hhmm: str) -> int:
    #"24:00" is allowed: capped sleep blocks end there
    match = _TIME_RE.match(hhmm.strip()) if isinstance(hhmm, str) else None
    if not match:
        raise FormatError(f"Invalid time string: {hhmm!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise FormatError(f"Time out of range: {hhmm!r}")
    return hours * 60 + minutes


def min_to_time(minutes: int) -> str:
    #no wrap past midnight, callers cap before display
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str) -> datetime.date:
    """Parse an ISO date, ignoring any time-of-day suffix."""
    try:
        return datetime.date.fromisoformat(value[:10])
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid date string: {value!r}") from e


def days_between(date_a: str, date_b: str) -> int:
    return (parse_date(date_b) - parse_date(date_a)).days


def add_days(date_str: str, days: int) -> str:
    return (parse_date(date_str) + datetime.timedelta(days=days)).isoformat()


def today() -> str:
    return datetime.date.today().isoformat()
