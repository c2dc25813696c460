# errors.py
"""
Errors raised for occurrence definitions that cannot be evaluated.

Public API:
  - ErrorKind
  - InvalidOccurrenceError (a ValueError)
  - OccurrenceDefinitionError(kind, field=None)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    FIELD_INVALID = "field_invalid"
    REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE = "repeat_type_not_allowed_for_occurrence_type"
    PERIOD_REQUIRED = "period_required"
    FINAL_DATE_INVALID = "final_date_invalid"
    MAX_REPEATS_INVALID = "max_repeats_invalid"
    OCCURRENCE_TYPE_INVALID = "occurrence_type_invalid"
    REPEAT_TYPE_INVALID = "repeat_type_invalid"


_MESSAGES = {
    ErrorKind.FIELD_INVALID: "The '{field}' property is missing or out of range.",
    ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE:
        "The repeat type is not supported by the occurrence type.",
    ErrorKind.PERIOD_REQUIRED: "A non-negative repeat period is required.",
    ErrorKind.FINAL_DATE_INVALID: "The final date of the repeat is not a valid date.",
    ErrorKind.MAX_REPEATS_INVALID: "The maximum number of repeats must be a non-negative integer.",
    ErrorKind.OCCURRENCE_TYPE_INVALID: "The occurrence type is not recognized.",
    ErrorKind.REPEAT_TYPE_INVALID: "The repeat type is not recognized.",
}


class InvalidOccurrenceError(ValueError):
    pass


class OccurrenceDefinitionError(InvalidOccurrenceError):
    """A specific constraint an occurrence or repeat definition failed.

    Validation returns these rather than raising them so a caller can map
    `kind` (and `field` for FIELD_INVALID) to a targeted message.
    """

    def __init__(self, kind: ErrorKind, field: Optional[str] = None) -> None:
        self.kind = kind
        self.field = field
        super().__init__(_MESSAGES[kind].format(field=field))

    def __repr__(self) -> str:
        if self.field:
            return f"OccurrenceDefinitionError({self.kind.name}, field={self.field!r})"
        return f"OccurrenceDefinitionError({self.kind.name})"
