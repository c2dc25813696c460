# calendar_date.py
"""
Plain calendar dates (no time, no timezone) and the arithmetic on them.

Conventions:
  - month is 0 based (0 = January), day is 1 based.
  - day of week is 0 based from Sunday (0 = Sunday, 6 = Saturday).

Public API:
  - CalendarDate, as_calendar_date(value), is_valid_date(value)
  - normalize(d), normalize_with_change(d)
  - add_days(d, n), add_months(d, n), add_years(d, n)
  - last_day_of_month(year, month), is_leap_year(year), with_day_of_month(d, day)
  - day_of_week(d), nth_weekday_of_month(d, n, dow), nth_weekday_of_year(d, n, dow)
  - compare(a, b), delta_days(a, b), are_equivalent(a, b)
  - closest_sunday_on_or_before(d)
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

_DATE_RE = re.compile(r"^\s*(-?\d{1,4})-(\d{1,2})-(\d{1,2})\s*$")

# Indexed by our day of week (0 = Sunday).
DOW_TO_DU = [SU, MO, TU, WE, TH, FR, SA]

_QUICK_MAX_DAYS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A year/month/day triple, month 0-11.

    Out of range months and days may be constructed, normalize() carries them
    into the neighbouring months/years.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, d: date) -> "CalendarDate":
        return cls(d.year, d.month - 1, d.day)

    @classmethod
    def from_string(cls, text: str) -> "CalendarDate":
        """Parses 'YYYY-MM-DD' (1 based month), the result is normalized."""
        m = _DATE_RE.match(text)
        if not m:
            raise ValueError(f"Invalid date: {text!r} (expected YYYY-MM-DD)")
        return normalize(cls(int(m.group(1)), int(m.group(2)) - 1, int(m.group(3))))

    def to_date(self) -> date:
        n = normalize(self)
        return date(n.year, n.month + 1, n.day)

    def __str__(self) -> str:
        n = normalize(self)
        return f"{n.year:04d}-{n.month + 1:02d}-{n.day:02d}"


DateLike = Union[CalendarDate, date, str]


def as_calendar_date(value: DateLike) -> CalendarDate:
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if isinstance(value, str):
        return CalendarDate.from_string(value)
    raise TypeError(f"Not a calendar date: {value!r}")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_date(value: object) -> bool:
    """True if value can be used as a date: a CalendarDate with integer
    fields, a datetime.date, or a parseable 'YYYY-MM-DD' string."""
    if isinstance(value, CalendarDate):
        return _is_int(value.year) and _is_int(value.month) and _is_int(value.day)
    if isinstance(value, date):
        return True
    if isinstance(value, str):
        return _DATE_RE.match(value) is not None
    return False


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def last_day_of_month(year: int, month: int) -> int:
    year += month // 12
    month %= 12
    return calendar.monthrange(year, month + 1)[1]


def normalize_with_change(d: CalendarDate) -> Tuple[CalendarDate, bool]:
    """Returns (normalized date, changed). When nothing needed fixing the
    original object is returned with changed False."""
    if 0 <= d.month <= 11 and 1 <= d.day <= _QUICK_MAX_DAYS[d.month]:
        return d, False

    # Month overflow first, then the day as an offset from the 1st.
    fixed = date(d.year, 1, 1) + relativedelta(months=d.month, days=d.day - 1)
    result = CalendarDate.from_date(fixed)
    if result == d:
        return d, False
    return result, True


def normalize(d: CalendarDate) -> CalendarDate:
    return normalize_with_change(d)[0]


def add_days(d: CalendarDate, n: int) -> CalendarDate:
    d = normalize(d)
    if not n:
        return d
    return CalendarDate.from_date(d.to_date() + timedelta(days=n))


def add_months(d: CalendarDate, n: int) -> CalendarDate:
    """Shifts by n months, pinning the day to the last day of the destination
    month when it does not exist there (Jan 31 + 1 month = Feb 28/29)."""
    d = normalize(d)
    if not n:
        return d
    return CalendarDate.from_date(d.to_date() + relativedelta(months=n))


def add_years(d: CalendarDate, n: int) -> CalendarDate:
    """Shifts by n years; Feb 29 becomes Feb 28 unless the new year is a leap year."""
    d = normalize(d)
    if not n:
        return d
    return CalendarDate.from_date(d.to_date() + relativedelta(years=n))


def with_day_of_month(d: CalendarDate, day: int) -> CalendarDate:
    """Same month as d with the day clamped to [1, last day of the month]."""
    d = normalize(d)
    day = max(1, min(day, last_day_of_month(d.year, d.month)))
    if day == d.day:
        return d
    return CalendarDate(d.year, d.month, day)


def day_of_week(d: CalendarDate) -> int:
    return (d.to_date().weekday() + 1) % 7


def _nth_weekday(d: CalendarDate, n: int, dow: int, anchor: relativedelta) -> CalendarDate:
    if not n:
        raise ValueError("n must be non-zero")
    weekday = DOW_TO_DU[dow % 7](n)
    return CalendarDate.from_date(d.to_date() + anchor + relativedelta(weekday=weekday))


def nth_weekday_of_month(d: CalendarDate, n: int, dow: int) -> CalendarDate:
    """The n'th dow of d's month, counting from the 1st when n > 0 and back
    from the last day when n < 0. The result may fall outside the month."""
    if n > 0:
        return _nth_weekday(d, n, dow, relativedelta(day=1))
    return _nth_weekday(d, n, dow, relativedelta(day=31))


def nth_weekday_of_year(d: CalendarDate, n: int, dow: int) -> CalendarDate:
    """Like nth_weekday_of_month() but counting from Jan 1 (n > 0) or back from
    Dec 31 (n < 0). Jan 1/Dec 31 is occurrence 1 of its own weekday."""
    if n > 0:
        return _nth_weekday(d, n, dow, relativedelta(month=1, day=1))
    return _nth_weekday(d, n, dow, relativedelta(month=12, day=31))


def compare(a: CalendarDate, b: CalendarDate) -> int:
    a = normalize(a)
    b = normalize(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def delta_days(a: CalendarDate, b: CalendarDate) -> int:
    """Number of days b is after a: add_days(a, delta_days(a, b)) == normalize(b)."""
    return (b.to_date() - a.to_date()).days


def are_equivalent(a: CalendarDate, b: CalendarDate) -> bool:
    return a == b or normalize(a) == normalize(b)


def closest_sunday_on_or_before(d: CalendarDate) -> CalendarDate:
    return add_days(d, -day_of_week(d))
