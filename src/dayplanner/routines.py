from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import replace
from typing import FrozenSet, List, Optional

from .models import Event, RecurrenceTemplate
from .timeutil import add_days_iso, days_between, weekday_from_iso

logger = logging.getLogger(__name__)

DEFAULT_OCCURRENCE_CAP = 120


def derive_series_id(base: Event, start_date: str) -> str:
    # Only fields that define the routine's shape.
    payload = {
        "title": base.title,
        "start": base.start,
        "end": base.end,
        "type": base.type,
        "start_date": start_date,
    }
    digest = hashlib.sha256(json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")).hexdigest()
    return f"series_{digest[:12]}"


def occurrence_id(series_id: str, day: str, index: int) -> str:
    return f"{series_id}-{day}-{index}"


def default_weekdays(start_date: str) -> FrozenSet[int]:
    return frozenset({weekday_from_iso(start_date)})


def parse_exclusions(text: Optional[str]) -> FrozenSet[str]:
    return frozenset(part.strip() for part in (text or "").split(",") if part.strip())


def parse_weekdays(text: Optional[str]) -> FrozenSet[int]:
    days = set()
    for part in (text or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            day = int(part)
        except ValueError:
            logger.warning("Ignoring weekday %r; expected 1 (Mon) .. 7 (Sun)", part)
            continue
        if 1 <= day <= 7:
            days.add(day)
        else:
            logger.warning("Ignoring weekday %r; expected 1 (Mon) .. 7 (Sun)", part)
    return frozenset(days)


def materialize_weekly_routine(template: RecurrenceTemplate) -> List[Event]:
    """Expand a weekly routine into dated occurrences.

    Walks forward one day at a time from ``start_date``. A date yields an
    occurrence when its weekday is active and it is not excluded; excluded
    dates are skipped, never moved. Generation stops after ``cap``
    occurrences, once the cursor passes ``end_date`` (inclusive), or after
    ``cap`` weeks (plus a week per exclusion) have been walked.

    The occurrence index is the day offset from ``origin_date``, so a run
    restarted later in the same series reproduces the same ids.
    """
    weekdays = template.weekdays & frozenset(range(1, 8))
    if not weekdays or template.cap <= 0:
        return []

    origin = template.origin_date or template.start_date
    series_id = template.series_id or derive_series_id(template.base, origin)
    max_days = (template.cap + len(template.exclude_dates)) * 7
    out: List[Event] = []
    cursor = template.start_date
    for _ in range(max_days):
        if len(out) >= template.cap:
            break
        if template.end_date and cursor > template.end_date:
            break
        if weekday_from_iso(cursor) in weekdays and cursor not in template.exclude_dates:
            out.append(
                replace(
                    template.base,
                    id=occurrence_id(series_id, cursor, days_between(origin, cursor)),
                    date=cursor,
                    series_id=series_id,
                )
            )
        cursor = add_days_iso(cursor, 1)

    if len(out) >= template.cap:
        logger.debug("Routine %s stopped at occurrence cap %d (last date %s)", series_id, template.cap, out[-1].date)
    return out
