# state.py
"""
Occurrence state machine: steps an occurrence definition one occurrence at a time.

Depends on:
  - occurrence.py (next_date)
  - clock.py (today, when there is no previous occurrence)

Public API:
  - OccurrenceState
  - next_occurrence_state(definition, previous_state=None, clock=None) -> OccurrenceState
  - iter_occurrence_states(definition, state=None, clock=None, limit=None) -> Iterator[OccurrenceState]
  - iter_occurrence_dates(definition, state=None, clock=None, limit=None) -> Iterator[CalendarDate]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from .calendar_date import CalendarDate, DateLike, as_calendar_date
from .clock import Clock, SystemClock
from .occurrence import OccurrenceDefinition, next_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OccurrenceState:
    """What a caller persists between evaluations of a definition.

    The default state means the definition has never been evaluated.
    all_done is terminal: once set the state no longer changes.
    """

    last_occurrence_date: Optional[DateLike] = None
    occurrence_count: int = 0
    all_done: bool = False


def next_occurrence_state(
    definition: OccurrenceDefinition,
    previous_state: Optional[OccurrenceState] = None,
    clock: Optional[Clock] = None,
) -> OccurrenceState:
    """Evaluates the next occurrence of definition after previous_state.

    The reference date is previous_state.last_occurrence_date, or today from
    clock (the system clock by default) when there is none. If there are no
    more occurrences the previous date and count are kept and all_done is set.
    """
    previous_state = previous_state or OccurrenceState()
    if previous_state.all_done:
        logger.debug("Occurrence %s already done, state unchanged", definition.occurrence_type)
        return previous_state

    last_date = previous_state.last_occurrence_date
    if last_date is not None:
        last_date = as_calendar_date(last_date)
        reference = last_date
    else:
        reference = (clock or SystemClock()).today()
    count = previous_state.occurrence_count or 0

    result = next_date(definition, reference, count)
    if result is None:
        logger.debug(
            "Occurrence %s exhausted after %d occurrence(s) from %s",
            definition.occurrence_type, count, reference,
        )
        return replace(previous_state, last_occurrence_date=last_date, occurrence_count=count, all_done=True)

    logger.debug("Occurrence %s #%d on %s (reference %s)", definition.occurrence_type, count + 1, result, reference)
    return OccurrenceState(
        last_occurrence_date=result,
        occurrence_count=count + 1,
        all_done=False,
    )


def iter_occurrence_states(
    definition: OccurrenceDefinition,
    state: Optional[OccurrenceState] = None,
    clock: Optional[Clock] = None,
    limit: Optional[int] = None,
) -> Iterator[OccurrenceState]:
    """Yields successive states until the definition is exhausted, or until
    limit states have been yielded. The terminal all_done state is not yielded."""
    produced = 0
    while limit is None or produced < limit:
        state = next_occurrence_state(definition, state, clock)
        if state.all_done:
            return
        produced += 1
        yield state


def iter_occurrence_dates(
    definition: OccurrenceDefinition,
    state: Optional[OccurrenceState] = None,
    clock: Optional[Clock] = None,
    limit: Optional[int] = None,
) -> Iterator[CalendarDate]:
    for s in iter_occurrence_states(definition, state, clock, limit):
        yield as_calendar_date(s.last_occurrence_date)
