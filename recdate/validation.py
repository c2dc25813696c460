# validation.py
"""
Checks occurrence and repeat definitions before they are evaluated.

Validation never raises and never fixes anything, the first failed constraint
is returned as an OccurrenceDefinitionError value so a UI can report it.

Public API:
  - validate_repeat_specification(spec) -> OccurrenceDefinitionError | None
  - validate_occurrence_definition(definition) -> OccurrenceDefinitionError | None
  - ensure_valid_occurrence_definition(definition) -> None | raises OccurrenceDefinitionError
"""

from __future__ import annotations

import logging
from typing import Optional

from .calendar_date import is_valid_date
from .errors import ErrorKind, OccurrenceDefinitionError
from .occurrence import TRAITS, OccurrenceDefinition, OccurrenceType
from .repeat import RepeatFrequency, RepeatSpecification

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _fail(kind: ErrorKind, field: Optional[str] = None) -> OccurrenceDefinitionError:
    error = OccurrenceDefinitionError(kind, field)
    logger.debug("Invalid definition: %r", error)
    return error


def validate_repeat_specification(spec: RepeatSpecification) -> Optional[OccurrenceDefinitionError]:
    frequency = _coerce_enum(RepeatFrequency, spec.frequency)
    if frequency is None:
        return _fail(ErrorKind.REPEAT_TYPE_INVALID)

    if not frequency.requires_period:
        return None

    if not _is_int(spec.period) or spec.period < 0:
        return _fail(ErrorKind.PERIOD_REQUIRED)

    if spec.final_date is not None and not is_valid_date(spec.final_date):
        return _fail(ErrorKind.FINAL_DATE_INVALID)

    if spec.max_repeats is not None:
        if not _is_int(spec.max_repeats) or spec.max_repeats < 0:
            return _fail(ErrorKind.MAX_REPEATS_INVALID)

    return None


def validate_occurrence_definition(definition: OccurrenceDefinition) -> Optional[OccurrenceDefinitionError]:
    occurrence_type = _coerce_enum(OccurrenceType, definition.occurrence_type)
    if occurrence_type is None:
        return _fail(ErrorKind.OCCURRENCE_TYPE_INVALID)

    traits = TRAITS[occurrence_type]
    if traits.has_offset:
        offset = definition.offset
        if not _is_int(offset) or offset < traits.offset_min:
            return _fail(ErrorKind.FIELD_INVALID, "offset")

    if traits.has_day_of_week:
        dow = definition.day_of_week
        if not _is_int(dow) or not (0 <= dow < 7):
            return _fail(ErrorKind.FIELD_INVALID, "day_of_week")

    if traits.has_specific_month:
        month = definition.month
        if not _is_int(month) or not (0 <= month < 12):
            return _fail(ErrorKind.FIELD_INVALID, "month")

    spec = definition.repeat
    if spec is None:
        return None

    frequency = _coerce_enum(RepeatFrequency, spec.frequency)
    if frequency is not None and frequency not in traits.allowed_repeats:
        return _fail(ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE)

    return validate_repeat_specification(spec)


def ensure_valid_occurrence_definition(definition: OccurrenceDefinition) -> None:
    error = validate_occurrence_definition(definition)
    if error is not None:
        raise error
