"""Minute-of-day and ISO calendar date arithmetic."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List

MINUTES_PER_DAY = 24 * 60


def _to_int(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def hhmm_to_min(hhmm: str) -> int:
    # Lenient: "9" -> 540, "" -> 0, "ab:10" -> 10
    parts = (hhmm or "").split(":")
    hours = _to_int(parts[0]) if parts else 0
    minutes = _to_int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def min_to_hhmm(minutes: int) -> str:
    m = minutes % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def minutes_diff(start: str, end: str) -> int:
    """Minutes from start to end, clamped at zero; overnight spans must be split first."""
    return max(0, hhmm_to_min(end) - hhmm_to_min(start))


def add_minutes_hhmm(hhmm: str, minutes: int) -> str:
    return min_to_hhmm(hhmm_to_min(hhmm) + minutes)


def parse_iso(iso: str) -> date:
    return date.fromisoformat(iso)


def add_days_iso(iso: str, days: int) -> str:
    return (parse_iso(iso) + timedelta(days=days)).isoformat()


def weekday_from_iso(iso: str) -> int:
    """Monday=1 .. Sunday=7."""
    return parse_iso(iso).isoweekday()


def start_of_week_iso(iso: str) -> str:
    d = parse_iso(iso)
    return (d - timedelta(days=d.isoweekday() - 1)).isoformat()


def week_dates(iso: str) -> List[str]:
    monday = start_of_week_iso(iso)
    return [add_days_iso(monday, i) for i in range(7)]


def is_same_month(a: str, b: str) -> bool:
    return a[:7] == b[:7]


def days_between(start: str, end: str) -> int:
    return (parse_iso(end) - parse_iso(start)).days
