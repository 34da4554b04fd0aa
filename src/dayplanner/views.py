from __future__ import annotations

from typing import Dict, Iterable, List, Set

from .models import DaySection, Event
from .overnight import events_for_day
from .timeutil import hhmm_to_min, is_same_month, week_dates


def month_sections(events: Iterable[Event], month_ref: str) -> List[DaySection]:
    by_date: Dict[str, List[Event]] = {}
    for e in events:
        if is_same_month(e.date, month_ref):
            by_date.setdefault(e.date, []).append(e)
    return [
        DaySection(date=day, events=tuple(sorted(by_date[day], key=lambda e: (hhmm_to_min(e.start), e.id))))
        for day in sorted(by_date)
    ]


def week_overview(events: Iterable[Event], day: str) -> Dict[str, List[Event]]:
    snapshot = list(events)
    return {d: events_for_day(snapshot, d) for d in week_dates(day)}


def day_colors(events: Iterable[Event], default_color: str) -> Dict[str, Set[str]]:
    """Dot colors per date for a month calendar."""
    marks: Dict[str, Set[str]] = {}
    for e in events:
        marks.setdefault(e.date, set()).add(e.color or default_color)
    return marks
