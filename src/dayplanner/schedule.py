"""Copy-on-write edits over an event snapshot.

Every helper takes the current tuple of events and returns a new tuple; the
input is never modified, so a caller can keep the previous snapshot around to
diff conflicts against it before committing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .conflicts import POLICY_PAIRS, new_conflicts, summarize_conflicts
from .models import Conflict, Event, RecurrenceTemplate
from .routines import materialize_weekly_routine

Snapshot = Tuple[Event, ...]


@dataclass(frozen=True)
class SavePlan:
    events: Snapshot
    conflicts: Tuple[Conflict, ...]
    message: str

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


def add_event(events: Iterable[Event], event: Event) -> Snapshot:
    return (*events, event)


def replace_event(events: Iterable[Event], event: Event) -> Snapshot:
    return tuple(event if e.id == event.id else e for e in events)


def remove_event(events: Iterable[Event], event_id: str) -> Snapshot:
    return tuple(e for e in events if e.id != event_id)


def delete_series(events: Iterable[Event], series_id: str) -> Snapshot:
    return tuple(e for e in events if e.series_id != series_id)


def update_series(
    events: Iterable[Event],
    series_id: str,
    from_date: str,
    title: Optional[str] = None,
    color: Optional[str] = None,
    symbol: Optional[str] = None,
) -> Snapshot:
    changes = {k: v for k, v in (("title", title), ("color", color), ("symbol", symbol)) if v is not None}
    if not changes:
        return tuple(events)
    return tuple(
        replace(e, **changes) if e.series_id == series_id and e.date >= from_date else e
        for e in events
    )


def rematerialize_series(
    events: Iterable[Event],
    template: RecurrenceTemplate,
    from_date: str,
) -> Snapshot:
    """Replace a series' occurrences from ``from_date`` on with a fresh run.

    Occurrences before ``from_date`` are history and stay as they are. The
    fresh run starts at the later of ``from_date`` and the template start,
    keeps the series origin so unchanged dates keep their ids, and only
    fills what is left of the occurrence cap.
    """
    if not template.series_id:
        raise ValueError("Re-materializing needs the template's series_id")
    kept = tuple(e for e in events if not (e.series_id == template.series_id and e.date >= from_date))
    history = sum(1 for e in kept if e.series_id == template.series_id)
    fresh = materialize_weekly_routine(
        replace(
            template,
            start_date=max(from_date, template.start_date),
            origin_date=template.origin_date or template.start_date,
            cap=max(0, template.cap - history),
        )
    )
    return (*kept, *fresh)


def save_plan(
    current: Iterable[Event],
    proposed: Iterable[Event],
    policy: str = POLICY_PAIRS,
    sample: int = 4,
) -> SavePlan:
    """Bundle a proposed snapshot with the conflicts it would introduce.

    The conflicts are advisory; the caller decides whether to commit
    ``plan.events`` anyway.
    """
    before = tuple(current)
    after = tuple(proposed)
    fresh = tuple(new_conflicts(after, before, policy=policy))
    return SavePlan(events=after, conflicts=fresh, message=summarize_conflicts(fresh, sample=sample))
