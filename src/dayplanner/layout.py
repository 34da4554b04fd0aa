"""Side-by-side lane assignment for a day timeline."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import Event, FreeSlot, LaidOutEvent
from .timeutil import MINUTES_PER_DAY, hhmm_to_min, min_to_hhmm

_Span = Tuple[int, int, Event]


def _assign_lanes(cluster: List[_Span]) -> List[LaidOutEvent]:
    lane_ends: List[int] = []
    lanes: List[int] = []
    for start, end, _ in cluster:
        for idx, lane_end in enumerate(lane_ends):
            if lane_end <= start:
                lane_ends[idx] = end
                lanes.append(idx)
                break
        else:
            lanes.append(len(lane_ends))
            lane_ends.append(end)

    lane_count = len(lane_ends)
    return [
        LaidOutEvent(event=e, lane=lane, lane_count=lane_count)
        for (_, _, e), lane in zip(cluster, lanes)
    ]


def layout_lanes(events: Iterable[Event]) -> List[LaidOutEvent]:
    """Assign each event a lane and the lane count of its overlap cluster.

    Events that never overlap each other get lane 0 of 1. Within a cluster
    the greedy first-free-lane pass uses as many lanes as the peak number
    of simultaneous events. A zero-length event still needs a column to be
    drawn, so one sitting inside a longer event opens a lane of its own and
    lane_count can exceed the peak of events active at one instant. Output
    follows (start, end, id) order whatever the input order.
    """
    spans = sorted(
        ((hhmm_to_min(e.start), hhmm_to_min(e.end), e) for e in events),
        key=lambda s: (s[0], s[1], s[2].id),
    )

    result: List[LaidOutEvent] = []
    cluster: List[_Span] = []
    cluster_end = -1
    for span in spans:
        start, end, _ = span
        if cluster and start >= cluster_end:
            result.extend(_assign_lanes(cluster))
            cluster = []
        if not cluster:
            cluster_end = end
        cluster.append(span)
        cluster_end = max(cluster_end, end)
    if cluster:
        result.extend(_assign_lanes(cluster))
    return result


def _fmt_bound(minutes: int) -> str:
    return "24:00" if minutes >= MINUTES_PER_DAY else min_to_hhmm(minutes)


def free_slots(events: Iterable[Event], day_start: str = "00:00", day_end: str = "24:00") -> List[FreeSlot]:
    lo = hhmm_to_min(day_start)
    hi = hhmm_to_min(day_end)
    cursor = lo
    gaps: List[FreeSlot] = []
    for start, end in sorted((hhmm_to_min(e.start), hhmm_to_min(e.end)) for e in events):
        start = max(start, lo)
        if start >= hi:
            break
        if start > cursor:
            gaps.append(FreeSlot(start=_fmt_bound(cursor), end=_fmt_bound(start)))
        cursor = max(cursor, end)
    if cursor < hi:
        gaps.append(FreeSlot(start=_fmt_bound(cursor), end=_fmt_bound(hi)))
    return gaps
