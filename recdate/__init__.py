from .calendar_date import (
    CalendarDate,
    add_days,
    add_months,
    add_years,
    are_equivalent,
    as_calendar_date,
    closest_sunday_on_or_before,
    compare,
    day_of_week,
    delta_days,
    is_leap_year,
    is_valid_date,
    last_day_of_month,
    normalize,
    normalize_with_change,
    nth_weekday_of_month,
    nth_weekday_of_year,
    with_day_of_month,
)
from .clock import Clock, FixedClock, SystemClock
from .errors import ErrorKind, InvalidOccurrenceError, OccurrenceDefinitionError
from .occurrence import OccurrenceDefinition, OccurrenceType, allowed_repeat_frequencies, next_date
from .repeat import RepeatFrequency, RepeatSpecification, is_repeating, next_repeat_date
from .state import OccurrenceState, iter_occurrence_dates, iter_occurrence_states, next_occurrence_state
from .validation import (
    ensure_valid_occurrence_definition,
    validate_occurrence_definition,
    validate_repeat_specification,
)

__all__ = [
    "CalendarDate",
    "Clock",
    "ErrorKind",
    "FixedClock",
    "InvalidOccurrenceError",
    "OccurrenceDefinition",
    "OccurrenceDefinitionError",
    "OccurrenceState",
    "OccurrenceType",
    "RepeatFrequency",
    "RepeatSpecification",
    "SystemClock",
    "add_days",
    "add_months",
    "add_years",
    "allowed_repeat_frequencies",
    "are_equivalent",
    "as_calendar_date",
    "closest_sunday_on_or_before",
    "compare",
    "day_of_week",
    "delta_days",
    "ensure_valid_occurrence_definition",
    "is_leap_year",
    "is_repeating",
    "is_valid_date",
    "iter_occurrence_dates",
    "iter_occurrence_states",
    "last_day_of_month",
    "next_date",
    "next_occurrence_state",
    "next_repeat_date",
    "normalize",
    "normalize_with_change",
    "nth_weekday_of_month",
    "nth_weekday_of_year",
    "validate_occurrence_definition",
    "validate_repeat_specification",
    "with_day_of_month",
]
