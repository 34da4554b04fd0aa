from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .conflicts import CONFLICT_POLICIES, POLICY_PAIRS
from .routines import DEFAULT_OCCURRENCE_CAP

@dataclass
class RoutineConfig:
    occurrence_cap: int
    default_duration_minutes: int

@dataclass
class ConflictConfig:
    policy: str
    sample_size: int

@dataclass
class DayConfig:
    start: str
    end: str
    default_color: str

@dataclass
class LoggingConfig:
    level: str

@dataclass
class AppConfig:
    routines: RoutineConfig
    conflicts: ConflictConfig
    day: DayConfig
    logging: LoggingConfig

def load_config(path: Optional[str] = None) -> AppConfig:
    data: Dict[str, Any] = {}
    if path:
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    routines = data.get("routines", {}) or {}
    conflicts = data.get("conflicts", {}) or {}
    day = data.get("day", {}) or {}
    log = data.get("logging", {}) or {}

    policy = str(conflicts.get("policy", POLICY_PAIRS))
    if policy not in CONFLICT_POLICIES:
        raise ValueError(f"conflicts.policy must be one of {', '.join(CONFLICT_POLICIES)}, got {policy!r}")

    return AppConfig(
        routines=RoutineConfig(
            occurrence_cap=int(routines.get("occurrence_cap", DEFAULT_OCCURRENCE_CAP)),
            default_duration_minutes=int(routines.get("default_duration_minutes", 30)),
        ),
        conflicts=ConflictConfig(
            policy=policy,
            sample_size=int(conflicts.get("sample_size", 4)),
        ),
        day=DayConfig(
            start=str(day.get("start", "00:00")),
            end=str(day.get("end", "24:00")),
            default_color=str(day.get("default_color", "#89b27f")),
        ),
        logging=LoggingConfig(
            level=str(log.get("level", "INFO")).upper(),
        ),
    )
