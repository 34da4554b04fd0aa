from dayplanner.layout import free_slots, layout_lanes
from dayplanner.models import Event
from dayplanner.timeutil import hhmm_to_min


def _event(event_id: str, start: str, end: str) -> Event:
    return Event(id=event_id, title=event_id, date="2026-02-05", start=start, end=end)


def _lanes(laid):
    return {l.event.id: (l.lane, l.lane_count) for l in laid}


def test_three_identical_events_get_three_lanes():
    events = [_event(i, "09:00", "10:00") for i in ("a", "b", "c")]

    laid = layout_lanes(events)

    assert sorted(l.lane for l in laid) == [0, 1, 2]
    assert all(l.lane_count == 3 for l in laid)


def test_sequential_events_share_first_lane():
    laid = layout_lanes([_event("a", "09:00", "10:00"), _event("b", "10:00", "11:00")])

    assert _lanes(laid) == {"a": (0, 1), "b": (0, 1)}


def test_chained_cluster_reuses_freed_lane():
    events = [
        _event("a", "09:00", "11:00"),
        _event("b", "10:00", "12:00"),
        _event("c", "11:30", "13:00"),
        _event("d", "14:00", "15:00"),
    ]

    assert _lanes(layout_lanes(events)) == {
        "a": (0, 2),
        "b": (1, 2),
        "c": (0, 2),
        "d": (0, 1),
    }


def test_lane_count_matches_peak_concurrency():
    events = [
        _event("a", "08:00", "12:00"),
        _event("b", "08:30", "09:00"),
        _event("c", "09:00", "09:30"),
        _event("d", "09:15", "10:00"),
    ]

    laid = layout_lanes(events)

    assert {l.lane_count for l in laid} == {3}
    by_lane = {}
    for l in laid:
        by_lane.setdefault(l.lane, []).append(l.event)
    for members in by_lane.values():
        spans = sorted((hhmm_to_min(e.start), hhmm_to_min(e.end)) for e in members)
        for (_, prev_end), (next_start, _) in zip(spans, spans[1:]):
            assert prev_end <= next_start


def test_layout_is_independent_of_input_order():
    events = [
        _event("a", "09:00", "10:00"),
        _event("b", "09:00", "10:00"),
        _event("c", "09:30", "11:00"),
        _event("d", "10:30", "12:00"),
    ]

    forward = layout_lanes(events)
    backward = layout_lanes(list(reversed(events)))

    assert forward == backward
    assert layout_lanes(events) == forward


def test_layout_of_nothing_is_empty():
    assert layout_lanes([]) == []


def test_free_slots_fill_gaps_between_merged_events():
    events = [
        _event("a", "09:00", "10:00"),
        _event("b", "09:30", "11:00"),
        _event("c", "13:00", "14:00"),
    ]

    slots = [(s.start, s.end) for s in free_slots(events)]

    assert slots == [("00:00", "09:00"), ("11:00", "13:00"), ("14:00", "24:00")]


def test_free_slots_respect_day_bounds():
    events = [
        _event("early", "06:00", "08:30"),
        _event("a", "09:00", "10:00"),
        _event("late", "19:00", "20:00"),
    ]

    slots = [(s.start, s.end) for s in free_slots(events, "08:00", "18:00")]

    assert slots == [("08:30", "09:00"), ("10:00", "18:00")]


def test_free_slots_after_split_fragment_ending_at_midnight():
    events = [_event("night", "22:00", "24:00")]

    assert [(s.start, s.end) for s in free_slots(events)] == [("00:00", "22:00")]


def test_zero_length_event_inside_longer_one_gets_its_own_lane():
    laid = layout_lanes([_event("block", "09:00", "11:00"), _event("marker", "10:00", "10:00")])

    assert _lanes(laid) == {"block": (0, 2), "marker": (1, 2)}
