# repeat.py
"""
Repeat policy: how often an occurrence comes back and when it stops.

Public API:
  - RepeatFrequency, RepeatSpecification
  - is_repeating(spec) -> bool
  - advance(frequency, period, reference) -> CalendarDate
  - next_repeat_date(spec, reference, occurrence_count) -> CalendarDate | None
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .calendar_date import (
    CalendarDate, DateLike,
    add_days, add_months, add_years, as_calendar_date, compare,
)
from .errors import ErrorKind, OccurrenceDefinitionError


class RepeatFrequency(Enum):
    NO_REPEAT = "NO_REPEAT"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    @property
    def requires_period(self) -> bool:
        return self is not RepeatFrequency.NO_REPEAT


@dataclass(frozen=True)
class RepeatSpecification:
    frequency: RepeatFrequency
    period: Optional[int] = None
    # Inclusive; no repeat lands after this date.
    final_date: Optional[DateLike] = None
    # 0 means the occurrence happens once and is never repeated.
    max_repeats: Optional[int] = None


def is_repeating(spec: Optional[RepeatSpecification]) -> bool:
    return spec is not None and RepeatFrequency(spec.frequency) is not RepeatFrequency.NO_REPEAT


def advance(frequency: RepeatFrequency, period: int, reference: CalendarDate) -> CalendarDate:
    frequency = RepeatFrequency(frequency)
    if frequency is RepeatFrequency.DAILY:
        return add_days(reference, period)
    if frequency is RepeatFrequency.WEEKLY:
        return add_days(reference, period * 7)
    if frequency is RepeatFrequency.MONTHLY:
        return add_months(reference, period)
    if frequency is RepeatFrequency.YEARLY:
        return add_years(reference, period)
    if frequency is RepeatFrequency.NO_REPEAT:
        raise ValueError("NO_REPEAT has no next date")
    raise NotImplementedError(frequency)


def next_repeat_date(
    spec: Optional[RepeatSpecification],
    reference: DateLike,
    occurrence_count: int,
) -> Optional[CalendarDate]:
    """The reference date for the next occurrence, None once exhausted.

    occurrence_count == 0 returns the reference itself, nothing has happened
    yet so there is nothing to repeat. Otherwise the reference is advanced by
    the spec's period unless max_repeats has been reached or the advanced
    date would be after final_date.
    """
    reference = as_calendar_date(reference)
    if not occurrence_count:
        return reference

    if spec is None or not is_repeating(spec):
        return None

    if spec.max_repeats is not None and occurrence_count >= spec.max_repeats:
        return None

    if spec.period is None:
        raise OccurrenceDefinitionError(ErrorKind.PERIOD_REQUIRED)

    candidate = advance(spec.frequency, spec.period, reference)
    if spec.final_date is not None:
        if compare(candidate, as_calendar_date(spec.final_date)) > 0:
            return None

    return candidate
