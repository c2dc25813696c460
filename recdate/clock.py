# clock.py
"""
Source of "today" for evaluations with no previous occurrence.

Depends on:
  - calendar_date.py (CalendarDate, as_calendar_date)

Public API:
  - Clock (abstract today() -> CalendarDate)
  - SystemClock()
  - FixedClock(today)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from .calendar_date import CalendarDate, DateLike, as_calendar_date


class Clock(ABC):
    """Source of 'today' for evaluations that have no prior occurrence."""

    @abstractmethod
    def today(self) -> CalendarDate:
        ...


class SystemClock(Clock):
    def today(self) -> CalendarDate:
        return CalendarDate.from_date(date.today())


class FixedClock(Clock):
    def __init__(self, today: DateLike) -> None:
        self._today = as_calendar_date(today)

    def today(self) -> CalendarDate:
        return self._today

    def __repr__(self) -> str:
        return f"FixedClock({str(self._today)!r})"
