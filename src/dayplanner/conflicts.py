"""Time-overlap detection for a day's events and pre-save conflict checks."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .models import Conflict, Event
from .overnight import SPILL_SUFFIX, expand_overnight
from .timeutil import hhmm_to_min

logger = logging.getLogger(__name__)

POLICY_PAIRS = "pairs"
POLICY_IDS = "ids"
CONFLICT_POLICIES = (POLICY_PAIRS, POLICY_IDS)


def _sort_key(e: Event):
    return (hhmm_to_min(e.start), hhmm_to_min(e.end), e.id)


def day_conflicts(day_events: Iterable[Event]) -> List[Conflict]:
    """All overlapping pairs among one day's (already split) events.

    Intervals are half-open, so an event ending at 10:00 does not collide
    with one starting at 10:00.
    """
    ordered = sorted(day_events, key=_sort_key)
    spans = [(hhmm_to_min(e.start), hhmm_to_min(e.end)) for e in ordered]
    out: List[Conflict] = []
    for i, a in enumerate(ordered):
        a_start, a_end = spans[i]
        for j in range(i + 1, len(ordered)):
            b_start, b_end = spans[j]
            # later entries start no earlier, so none of them can reach back into a
            if b_start >= a_end:
                break
            if max(a_start, b_start) < min(a_end, b_end):
                out.append(Conflict(a=a, b=ordered[j]))
    return out


def conflicts_by_date(events: Iterable[Event]) -> List[Conflict]:
    by_date: Dict[str, List[Event]] = {}
    for e in expand_overnight(events):
        by_date.setdefault(e.date, []).append(e)

    out: List[Conflict] = []
    for day in sorted(by_date):
        out.extend(day_conflicts(by_date[day]))
    return out


def _base_id(event_id: str) -> str:
    if event_id.endswith(SPILL_SUFFIX):
        return event_id[: -len(SPILL_SUFFIX)]
    return event_id


def new_conflicts(
    candidate: Sequence[Event],
    original: Sequence[Event],
    policy: str = POLICY_PAIRS,
) -> List[Conflict]:
    """Conflicts in ``candidate`` that were not already accepted in ``original``.

    ``pairs`` suppresses a conflict only if the same two events already
    overlapped in ``original``. ``ids`` suppresses any conflict whose two
    participants both existed in ``original``, even if one of them moved.
    """
    if policy not in CONFLICT_POLICIES:
        raise ValueError(f"Unknown conflict policy: {policy!r}")

    conflicts = conflicts_by_date(candidate)
    if policy == POLICY_IDS:
        known_ids = {e.id for e in original}
        fresh = [
            c for c in conflicts
            if _base_id(c.a.id) not in known_ids or _base_id(c.b.id) not in known_ids
        ]
    else:
        accepted = {c.key() for c in conflicts_by_date(original)}
        fresh = [c for c in conflicts if c.key() not in accepted]

    logger.debug("Found %d conflicts, %d new (policy=%s)", len(conflicts), len(fresh), policy)
    return fresh


def _describe(e: Event) -> str:
    return f"{e.title} ({e.date} {e.start}–{e.end})"


def summarize_conflicts(conflicts: Sequence[Conflict], sample: int = 4) -> str:
    if not conflicts:
        return ""
    lines = [f"{len(conflicts)} overlap(s):", ""]
    lines.extend(f"• {_describe(c.a)} ↔ {_describe(c.b)}" for c in conflicts[:sample])
    if len(conflicts) > sample:
        lines.append("…")
    return "\n".join(lines)
