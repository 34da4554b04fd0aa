from dayplanner.models import Event
from dayplanner.overnight import events_for_day, expand_overnight, split_if_overnight
from dayplanner.timeutil import hhmm_to_min


def _event(event_id: str, start: str, end: str, date: str = "2026-02-05") -> Event:
    return Event(id=event_id, title=event_id, date=date, start=start, end=end)


def test_same_day_event_is_returned_unchanged():
    ev = _event("a", "09:00", "10:00")

    result = split_if_overnight(ev)

    assert result == [ev]
    assert result[0] is ev


def test_zero_length_event_is_not_split():
    ev = _event("a", "09:00", "09:00")

    assert split_if_overnight(ev) == [ev]


def test_overnight_event_is_split_into_two_fragments():
    ev = _event("night", "22:30", "01:00")

    first, spill = split_if_overnight(ev)

    assert (first.id, first.date, first.start, first.end) == ("night", "2026-02-05", "22:30", "24:00")
    assert (spill.id, spill.date, spill.start, spill.end) == ("night:spill", "2026-02-06", "00:00", "01:00")
    for fragment in (first, spill):
        assert hhmm_to_min(fragment.end) >= hhmm_to_min(fragment.start)
        assert fragment.title == "night"


def test_spill_crosses_year_boundary():
    _, spill = split_if_overnight(_event("nye", "23:00", "02:00", date="2026-12-31"))

    assert spill.date == "2027-01-01"


def test_expand_overnight_flattens_fragments():
    events = [_event("a", "09:00", "10:00"), _event("b", "23:00", "00:30")]

    assert [e.id for e in expand_overnight(events)] == ["a", "b", "b:spill"]


def test_events_for_day_includes_spill_from_previous_evening_sorted_by_start():
    events = [
        _event("late", "22:00", "02:00", date="2026-02-04"),
        _event("lunch", "12:00", "13:00"),
        _event("breakfast", "08:00", "08:30"),
        _event("other-day", "08:00", "09:00", date="2026-02-06"),
    ]

    day = events_for_day(events, "2026-02-05")

    assert [e.id for e in day] == ["late:spill", "breakfast", "lunch"]
