from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

EVENT_TYPES = ("Termin", "Event", "Routine")
ROUTINE = "Routine"

@dataclass(frozen=True)
class Event:
    id: str
    title: str
    date: str                   # YYYY-MM-DD, the day the start time belongs to
    start: str                  # HH:MM
    end: str                    # HH:MM, earlier than start means overnight
    type: str = "Termin"        # "Termin" / "Event" / "Routine"
    color: Optional[str] = None
    symbol: Optional[str] = None
    series_id: Optional[str] = None
    location_name: Optional[str] = None
    note: Optional[str] = None

@dataclass(frozen=True)
class Conflict:
    a: Event
    b: Event

    def key(self) -> FrozenSet[str]:
        return frozenset((self.a.id, self.b.id))

@dataclass(frozen=True)
class LaidOutEvent:
    event: Event
    lane: int
    lane_count: int

@dataclass(frozen=True)
class FreeSlot:
    start: str
    end: str

@dataclass(frozen=True)
class DaySection:
    date: str
    events: Tuple[Event, ...]

@dataclass(frozen=True)
class RecurrenceTemplate:
    base: Event                 # id and date are ignored
    weekdays: FrozenSet[int]    # 1=Mon .. 7=Sun
    start_date: str
    end_date: Optional[str] = None
    exclude_dates: FrozenSet[str] = field(default_factory=frozenset)
    series_id: Optional[str] = None
    cap: int = 120
    origin_date: Optional[str] = None   # first date of the series, defaults to start_date


def _opt(data: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def event_from_dict(data: Mapping[str, Any]) -> Event:
    event_type = str(data.get("type") or "Termin")
    if event_type not in EVENT_TYPES:
        event_type = "Termin"
    return Event(
        id=str(data.get("id", "")),
        title=str(data.get("title", "")),
        date=str(data.get("date", "")),
        start=str(data.get("start", "00:00")),
        end=str(data.get("end", "00:00")),
        type=event_type,
        color=_opt(data, "color"),
        symbol=_opt(data, "symbol"),
        series_id=_opt(data, "seriesId", "series_id"),
        location_name=_opt(data, "locationName", "location_name"),
        note=_opt(data, "note"),
    )


def event_to_dict(event: Event) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": event.id,
        "title": event.title,
        "date": event.date,
        "start": event.start,
        "end": event.end,
        "type": event.type,
    }
    optional = {
        "color": event.color,
        "symbol": event.symbol,
        "seriesId": event.series_id,
        "locationName": event.location_name,
        "note": event.note,
    }
    out.update({k: v for k, v in optional.items() if v is not None})
    return out
