from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from .models import Event
from .timeutil import add_days_iso, hhmm_to_min

END_OF_DAY = "24:00"
SPILL_SUFFIX = ":spill"


def split_if_overnight(event: Event) -> List[Event]:
    if hhmm_to_min(event.end) >= hhmm_to_min(event.start):
        return [event]

    first = replace(event, end=END_OF_DAY)
    spill = replace(
        event,
        id=event.id + SPILL_SUFFIX,
        date=add_days_iso(event.date, 1),
        start="00:00",
    )
    return [first, spill]


def expand_overnight(events: Iterable[Event]) -> List[Event]:
    out: List[Event] = []
    for e in events:
        out.extend(split_if_overnight(e))
    return out


def _start_key(e: Event):
    return (hhmm_to_min(e.start), hhmm_to_min(e.end), e.id)


def events_for_day(events: Iterable[Event], day: str) -> List[Event]:
    """Visible fragments for one day, including spill-over from the previous evening."""
    return sorted((e for e in expand_overnight(events) if e.date == day), key=_start_key)
