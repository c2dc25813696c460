import logging
from typing import Optional

import pytest

from recdate import (
    ErrorKind,
    InvalidOccurrenceError,
    OccurrenceDefinition as D,
    OccurrenceDefinitionError,
    OccurrenceType as T,
    RepeatFrequency as F,
    RepeatSpecification as R,
    allowed_repeat_frequencies,
    ensure_valid_occurrence_definition,
    validate_occurrence_definition,
    validate_repeat_specification,
)

VALID_DEFINITIONS = [
    D(T.DAY_OF_WEEK, day_of_week=0),
    D(T.DAY_OF_WEEK, day_of_week=6),
    D(T.DAY_OF_WEEK, day_of_week=0, repeat=R(F.NO_REPEAT)),
    D(T.DAY_OF_WEEK, day_of_week=0, repeat=R(F.WEEKLY, 1)),
    D(T.DAY_OF_MONTH, offset=1),
    D(T.DAY_OF_MONTH, offset=0),
    D("DAY_OF_MONTH", offset=1, repeat=R(F.MONTHLY, 123)),  # type: ignore[arg-type]
    D(T.DAY_OF_MONTH, offset=1, repeat=R(F.YEARLY, 123)),
    D(T.DAY_OF_MONTH, offset=1, repeat=R("MONTHLY", 123, final_date="2020-12-24", max_repeats=5)),  # type: ignore[arg-type]
    D(T.DAY_END_OF_MONTH, offset=1, repeat=R(F.NO_REPEAT, 123)),
    D(T.DOW_OF_MONTH, offset=1, day_of_week=0),
    D(T.DOW_END_OF_MONTH, offset=1, day_of_week=6, repeat=R(F.MONTHLY, 123)),
    D(T.DAY_OF_SPECIFIC_MONTH, offset=0, month=0),
    D(T.DAY_OF_SPECIFIC_MONTH, offset=1, month=11, repeat=R(F.YEARLY, 123)),
    D(T.DAY_END_OF_SPECIFIC_MONTH, offset=0, month=0),
    D(T.DOW_OF_SPECIFIC_MONTH, offset=1, day_of_week=6, month=11),
    D(T.DOW_END_OF_SPECIFIC_MONTH, offset=1, day_of_week=0, month=0),
    D(T.DAY_OF_YEAR, offset=1, repeat=R(F.YEARLY, 123)),
    D(T.DAY_END_OF_YEAR, offset=1),
    D(T.DOW_OF_YEAR, offset=1, day_of_week=0),
    D(T.DOW_END_OF_YEAR, offset=1, day_of_week=6, repeat=R(F.NO_REPEAT)),
]

INVALID_DEFINITIONS = [
    # (id, definition, expected kind, expected field)
    ("dow-negative", D(T.DAY_OF_WEEK, day_of_week=-1), ErrorKind.FIELD_INVALID, "day_of_week"),
    ("dow-7", D(T.DAY_OF_WEEK, day_of_week=7), ErrorKind.FIELD_INVALID, "day_of_week"),
    ("dow-missing", D(T.DAY_OF_WEEK), ErrorKind.FIELD_INVALID, "day_of_week"),
    ("dow-monthly", D(T.DAY_OF_WEEK, day_of_week=0, repeat=R(F.MONTHLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("dow-yearly", D(T.DAY_OF_WEEK, day_of_week=0, repeat=R(F.YEARLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("day-of-month-negative", D(T.DAY_OF_MONTH, offset=-1), ErrorKind.FIELD_INVALID, "offset"),
    ("day-of-month-missing", D(T.DAY_OF_MONTH), ErrorKind.FIELD_INVALID, "offset"),
    ("day-of-month-bool", D(T.DAY_OF_MONTH, offset=True), ErrorKind.FIELD_INVALID, "offset"),
    ("day-of-month-weekly", D(T.DAY_OF_MONTH, offset=1, repeat=R(F.WEEKLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("period-string", D(T.DAY_OF_MONTH, offset=1, repeat=R(F.MONTHLY, "123")),  # type: ignore[arg-type]
     ErrorKind.PERIOD_REQUIRED, None),
    ("period-missing", D(T.DAY_OF_MONTH, offset=1, repeat=R(F.MONTHLY)), ErrorKind.PERIOD_REQUIRED, None),
    ("final-date-invalid", D(T.DAY_OF_MONTH, offset=1, repeat=R(F.MONTHLY, 123, final_date="a2020-12-24")),
     ErrorKind.FINAL_DATE_INVALID, None),
    ("max-repeats-negative", D(T.DAY_OF_MONTH, offset=1, repeat=R(F.MONTHLY, 123, max_repeats=-5)),
     ErrorKind.MAX_REPEATS_INVALID, None),
    ("repeat-type-unknown", D(T.DAY_OF_MONTH, offset=1, repeat=R("1234", 123)),  # type: ignore[arg-type]
     ErrorKind.REPEAT_TYPE_INVALID, None),
    ("dow-of-month-offset-0", D(T.DOW_OF_MONTH, offset=0, day_of_week=0), ErrorKind.FIELD_INVALID, "offset"),
    ("dow-of-month-no-dow", D(T.DOW_OF_MONTH, offset=1), ErrorKind.FIELD_INVALID, "day_of_week"),
    ("dow-of-month-nothing", D(T.DOW_OF_MONTH), ErrorKind.FIELD_INVALID, "offset"),
    ("dow-end-of-month-dow-7", D(T.DOW_END_OF_MONTH, offset=1, day_of_week=7), ErrorKind.FIELD_INVALID, "day_of_week"),
    ("specific-month-negative", D(T.DAY_OF_SPECIFIC_MONTH, offset=1, month=-1), ErrorKind.FIELD_INVALID, "month"),
    ("specific-month-12", D(T.DAY_END_OF_SPECIFIC_MONTH, offset=1, month=12), ErrorKind.FIELD_INVALID, "month"),
    ("specific-month-monthly", D(T.DAY_OF_SPECIFIC_MONTH, offset=1, month=11, repeat=R(F.MONTHLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("dow-specific-month-12", D(T.DOW_OF_SPECIFIC_MONTH, offset=1, day_of_week=6, month=12),
     ErrorKind.FIELD_INVALID, "month"),
    ("day-of-year-weekly", D(T.DAY_OF_YEAR, offset=1, repeat=R(F.WEEKLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("dow-of-year-monthly", D(T.DOW_OF_YEAR, offset=1, day_of_week=0, repeat=R(F.MONTHLY, 1)),
     ErrorKind.REPEAT_TYPE_NOT_ALLOWED_FOR_OCCURRENCE_TYPE, None),
    ("dow-end-of-year-offset-negative", D(T.DOW_END_OF_YEAR, offset=-1, day_of_week=0),
     ErrorKind.FIELD_INVALID, "offset"),
    ("occurrence-type-unknown", D("BOGUS", offset=1), ErrorKind.OCCURRENCE_TYPE_INVALID, None),  # type: ignore[arg-type]
]


@pytest.mark.parametrize(
    "definition",
    VALID_DEFINITIONS,
    ids=[f"{i}-{d.occurrence_type}" for i, d in enumerate(VALID_DEFINITIONS)],
)
def test_valid_definition(definition: D) -> None:
    assert validate_occurrence_definition(definition) is None
    ensure_valid_occurrence_definition(definition)


@pytest.mark.parametrize(
    "case_id, definition, kind, field",
    INVALID_DEFINITIONS,
    ids=[case[0] for case in INVALID_DEFINITIONS],
)
def test_invalid_definition(case_id: str, definition: D, kind: ErrorKind, field: Optional[str]) -> None:
    error = validate_occurrence_definition(definition)
    assert isinstance(error, OccurrenceDefinitionError)
    assert error.kind is kind
    assert error.field == field


def test_ensure_valid_raises() -> None:
    with pytest.raises(InvalidOccurrenceError) as excinfo:
        ensure_valid_occurrence_definition(D(T.DAY_OF_MONTH, offset=-1))
    assert excinfo.value.kind is ErrorKind.FIELD_INVALID
    assert "offset" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    "spec, kind",
    [
        (R(F.NO_REPEAT), None),
        (R(F.NO_REPEAT, -1, final_date="garbage", max_repeats=-1), None),
        (R(F.DAILY, 0), None),
        (R(F.WEEKLY, 2, final_date="2020-12-24", max_repeats=0), None),
        (R(F.WEEKLY, -1), ErrorKind.PERIOD_REQUIRED),
        (R(F.WEEKLY, 1.5), ErrorKind.PERIOD_REQUIRED),  # type: ignore[arg-type]
        (R(F.WEEKLY, 1, max_repeats="3"), ErrorKind.MAX_REPEATS_INVALID),  # type: ignore[arg-type]
        (R(F.YEARLY, 1, final_date=20201224), ErrorKind.FINAL_DATE_INVALID),  # type: ignore[arg-type]
        (R(None, 1), ErrorKind.REPEAT_TYPE_INVALID),  # type: ignore[arg-type]
    ],
)
def test_validate_repeat_specification(spec: R, kind: Optional[ErrorKind]) -> None:
    error = validate_repeat_specification(spec)
    if kind is None:
        assert error is None
    else:
        assert error is not None and error.kind is kind


def test_allowed_repeat_frequencies() -> None:
    assert allowed_repeat_frequencies(T.DAY_OF_WEEK) == {F.NO_REPEAT, F.WEEKLY}
    assert allowed_repeat_frequencies(T.DOW_END_OF_MONTH) == {F.NO_REPEAT, F.MONTHLY, F.YEARLY}
    assert allowed_repeat_frequencies("DAY_OF_YEAR") == {F.NO_REPEAT, F.YEARLY}  # type: ignore[arg-type]
    assert all(F.DAILY not in allowed_repeat_frequencies(t) for t in T)


def test_error_repr() -> None:
    error = OccurrenceDefinitionError(ErrorKind.FIELD_INVALID, "month")
    assert repr(error) == "OccurrenceDefinitionError(FIELD_INVALID, field='month')"
    assert repr(OccurrenceDefinitionError(ErrorKind.PERIOD_REQUIRED)) == "OccurrenceDefinitionError(PERIOD_REQUIRED)"


def test_failures_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="recdate.validation"):
        validate_occurrence_definition(D(T.DOW_OF_MONTH, offset=1, day_of_week=9))
    assert "FIELD_INVALID" in caplog.text
    assert "day_of_week" in caplog.text
