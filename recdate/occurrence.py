# occurrence.py
"""
Occurrence definitions -> next date.

Depends on:
  - calendar_date.py (date arithmetic)
  - repeat.py (repeat advance + termination)

Public API:
  - OccurrenceType, OccurrenceDefinition
  - allowed_repeat_frequencies(occurrence_type) -> frozenset
  - next_date(definition, reference, occurrence_count) -> CalendarDate | None
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Optional

from .calendar_date import (
    CalendarDate, DateLike,
    add_days, add_months, as_calendar_date, compare, day_of_week,
    last_day_of_month, nth_weekday_of_month, nth_weekday_of_year, with_day_of_month,
)
from .errors import ErrorKind, OccurrenceDefinitionError
from .repeat import RepeatFrequency, RepeatSpecification, is_repeating, next_repeat_date


class OccurrenceType(Enum):
    DAY_OF_WEEK = "DAY_OF_WEEK"
    DAY_OF_MONTH = "DAY_OF_MONTH"
    DAY_END_OF_MONTH = "DAY_END_OF_MONTH"
    DOW_OF_MONTH = "DOW_OF_MONTH"
    DOW_END_OF_MONTH = "DOW_END_OF_MONTH"
    DAY_OF_SPECIFIC_MONTH = "DAY_OF_SPECIFIC_MONTH"
    DAY_END_OF_SPECIFIC_MONTH = "DAY_END_OF_SPECIFIC_MONTH"
    DOW_OF_SPECIFIC_MONTH = "DOW_OF_SPECIFIC_MONTH"
    DOW_END_OF_SPECIFIC_MONTH = "DOW_END_OF_SPECIFIC_MONTH"
    DAY_OF_YEAR = "DAY_OF_YEAR"
    DAY_END_OF_YEAR = "DAY_END_OF_YEAR"
    DOW_OF_YEAR = "DOW_OF_YEAR"
    DOW_END_OF_YEAR = "DOW_END_OF_YEAR"


@dataclass(frozen=True)
class OccurrenceTraits:
    has_offset: bool
    offset_min: int
    has_day_of_week: bool
    has_specific_month: bool
    allowed_repeats: FrozenSet[RepeatFrequency]


_WEEK_REPEATS = frozenset({RepeatFrequency.NO_REPEAT, RepeatFrequency.WEEKLY})
_MONTH_REPEATS = frozenset({RepeatFrequency.NO_REPEAT, RepeatFrequency.MONTHLY, RepeatFrequency.YEARLY})
_YEAR_REPEATS = frozenset({RepeatFrequency.NO_REPEAT, RepeatFrequency.YEARLY})

T = OccurrenceType
TRAITS = {
    T.DAY_OF_WEEK: OccurrenceTraits(False, 0, True, False, _WEEK_REPEATS),
    T.DAY_OF_MONTH: OccurrenceTraits(True, 0, False, False, _MONTH_REPEATS),
    T.DAY_END_OF_MONTH: OccurrenceTraits(True, 0, False, False, _MONTH_REPEATS),
    T.DOW_OF_MONTH: OccurrenceTraits(True, 1, True, False, _MONTH_REPEATS),
    T.DOW_END_OF_MONTH: OccurrenceTraits(True, 1, True, False, _MONTH_REPEATS),
    T.DAY_OF_SPECIFIC_MONTH: OccurrenceTraits(True, 0, False, True, _YEAR_REPEATS),
    T.DAY_END_OF_SPECIFIC_MONTH: OccurrenceTraits(True, 0, False, True, _YEAR_REPEATS),
    T.DOW_OF_SPECIFIC_MONTH: OccurrenceTraits(True, 1, True, True, _YEAR_REPEATS),
    T.DOW_END_OF_SPECIFIC_MONTH: OccurrenceTraits(True, 1, True, True, _YEAR_REPEATS),
    T.DAY_OF_YEAR: OccurrenceTraits(True, 0, False, False, _YEAR_REPEATS),
    T.DAY_END_OF_YEAR: OccurrenceTraits(True, 0, False, False, _YEAR_REPEATS),
    T.DOW_OF_YEAR: OccurrenceTraits(True, 1, True, False, _YEAR_REPEATS),
    T.DOW_END_OF_YEAR: OccurrenceTraits(True, 1, True, False, _YEAR_REPEATS),
}
del T


def allowed_repeat_frequencies(occurrence_type: OccurrenceType) -> FrozenSet[RepeatFrequency]:
    return TRAITS[OccurrenceType(occurrence_type)].allowed_repeats


@dataclass(frozen=True)
class OccurrenceDefinition:
    occurrence_type: OccurrenceType
    offset: Optional[int] = None
    day_of_week: Optional[int] = None  # 0 = Sunday
    month: Optional[int] = None  # 0 = January
    repeat: Optional[RepeatSpecification] = None


Placement = Callable[[CalendarDate], CalendarDate]


def _require(definition: OccurrenceDefinition, name: str) -> int:
    value = getattr(definition, name)
    if value is None:
        raise OccurrenceDefinitionError(ErrorKind.FIELD_INVALID, name)
    return value


def _forward_only(definition: OccurrenceDefinition, occurrence_count: int) -> bool:
    # Repeats after the first already moved forward by the period.
    return not is_repeating(definition.repeat) or not occurrence_count


def _next_month_start(d: CalendarDate) -> CalendarDate:
    return add_months(CalendarDate(d.year, d.month, 1), 1)


def _next_year_start(d: CalendarDate) -> CalendarDate:
    return CalendarDate(d.year + 1, 0, 1)


def _resolve(
    definition: OccurrenceDefinition,
    reference: CalendarDate,
    occurrence_count: int,
    place: Placement,
    next_cycle: Placement,
) -> Optional[CalendarDate]:
    anchor = next_repeat_date(definition.repeat, reference, occurrence_count)
    if anchor is None:
        return None

    result = place(anchor)
    if not _forward_only(definition, occurrence_count):
        return result

    # Large offsets can spill back over more than one cycle boundary.
    cycle = anchor
    while compare(result, anchor) < 0:
        cycle = next_cycle(cycle)
        result = place(cycle)
    return result


def _resolve_day_of_week(
    definition: OccurrenceDefinition,
    reference: CalendarDate,
    occurrence_count: int,
) -> Optional[CalendarDate]:
    # The weekday is found before repeating: repeats are whole weeks so it is
    # preserved, and final_date is checked against the actual day.
    dow = _require(definition, "day_of_week")
    delta = dow - day_of_week(reference)
    if delta < 0 and _forward_only(definition, occurrence_count):
        delta += 7
    return next_repeat_date(definition.repeat, add_days(reference, delta), occurrence_count)


def _specific_month(definition: OccurrenceDefinition, year: int) -> CalendarDate:
    return CalendarDate(year, _require(definition, "month"), 1)


def next_date(
    definition: OccurrenceDefinition,
    reference: DateLike,
    occurrence_count: int = 0,
) -> Optional[CalendarDate]:
    """Next date of definition given the reference (last occurrence or today)
    and how many times it has already occurred. None if no more occurrences.

    The definition is expected to be valid, see validate_occurrence_definition().
    """
    reference = as_calendar_date(reference)
    occurrence_type = OccurrenceType(definition.occurrence_type)

    if occurrence_type is OccurrenceType.DAY_OF_WEEK:
        return _resolve_day_of_week(definition, reference, occurrence_count)

    offset = _require(definition, "offset")

    if occurrence_type is OccurrenceType.DAY_OF_MONTH:
        def place(d: CalendarDate) -> CalendarDate:
            return with_day_of_month(d, offset + 1)
        return _resolve(definition, reference, occurrence_count, place, _next_month_start)

    if occurrence_type is OccurrenceType.DAY_END_OF_MONTH:
        def place(d: CalendarDate) -> CalendarDate:
            return with_day_of_month(d, last_day_of_month(d.year, d.month) - offset)
        return _resolve(definition, reference, occurrence_count, place, _next_month_start)

    if occurrence_type is OccurrenceType.DOW_OF_MONTH:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_month(d, offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_month_start)

    if occurrence_type is OccurrenceType.DOW_END_OF_MONTH:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_month(d, -offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_month_start)

    if occurrence_type is OccurrenceType.DAY_OF_SPECIFIC_MONTH:
        def place(d: CalendarDate) -> CalendarDate:
            return with_day_of_month(_specific_month(definition, d.year), offset + 1)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DAY_END_OF_SPECIFIC_MONTH:
        def place(d: CalendarDate) -> CalendarDate:
            start = _specific_month(definition, d.year)
            return with_day_of_month(start, last_day_of_month(start.year, start.month) - offset)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DOW_OF_SPECIFIC_MONTH:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_month(_specific_month(definition, d.year), offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DOW_END_OF_SPECIFIC_MONTH:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_month(_specific_month(definition, d.year), -offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DAY_OF_YEAR:
        def place(d: CalendarDate) -> CalendarDate:
            return add_days(CalendarDate(d.year, 0, 1), offset)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DAY_END_OF_YEAR:
        def place(d: CalendarDate) -> CalendarDate:
            return add_days(CalendarDate(d.year, 11, 31), -offset)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DOW_OF_YEAR:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_year(d, offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    if occurrence_type is OccurrenceType.DOW_END_OF_YEAR:
        dow = _require(definition, "day_of_week")
        def place(d: CalendarDate) -> CalendarDate:
            return nth_weekday_of_year(d, -offset, dow)
        return _resolve(definition, reference, occurrence_count, place, _next_year_start)

    raise NotImplementedError(occurrence_type)
