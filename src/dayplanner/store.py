from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable, List
import json
import logging

from .models import Event, event_from_dict, event_to_dict

logger = logging.getLogger(__name__)

def load_events(path: str) -> List[Event]:
    p = Path(path)
    if not p.exists():
        return []
    data: Any = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of events")
    events: List[Event] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping event #%d in %s: not an object", idx, path)
            continue
        events.append(event_from_dict(item))
    return events

def save_events(path: str, events: Iterable[Event]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = [event_to_dict(e) for e in events]
    p.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
