from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

from .config import AppConfig, load_config
from .conflicts import conflicts_by_date, day_conflicts, summarize_conflicts
from .layout import free_slots, layout_lanes
from .models import ROUTINE, Event, RecurrenceTemplate
from .overnight import events_for_day
from .routines import default_weekdays, materialize_weekly_routine, parse_exclusions, parse_weekdays
from .schedule import save_plan
from .store import load_events, save_events
from .timeutil import add_minutes_hhmm, week_dates
from .views import week_overview

EVENTS_PATH_DEFAULT = "events.json"


def _fmt_span(e: Event) -> str:
    return f"{e.start}–{e.end}"


def format_day(events: List[Event], day: str, cfg: AppConfig) -> List[str]:
    visible = events_for_day(events, day)
    lines = [f"{day}: {len(visible)} event(s)"]
    for laid in layout_lanes(visible):
        e = laid.event
        lane = f"[{laid.lane + 1}/{laid.lane_count}]"
        symbol = f"{e.symbol} " if e.symbol else ""
        series = " (series)" if e.series_id else ""
        lines.append(f"  {_fmt_span(e)}  {lane}  {symbol}{e.title}{series}")

    message = summarize_conflicts(day_conflicts(visible), sample=cfg.conflicts.sample_size)
    if message:
        lines.append("")
        lines.extend(message.splitlines())

    slots = free_slots(visible, cfg.day.start, cfg.day.end)
    if slots:
        lines.append("")
        lines.append("Free: " + ", ".join(f"{s.start}–{s.end}" for s in slots))
    return lines


def run_day(cfg: AppConfig, events_path: str, day: str) -> None:
    events = load_events(events_path)
    print("\n".join(format_day(events, day, cfg)))


def run_week(cfg: AppConfig, events_path: str, day: str) -> None:
    events = load_events(events_path)
    overview = week_overview(events, day)
    for d in week_dates(day):
        visible = overview[d]
        clashes = len(day_conflicts(visible))
        suffix = f", {clashes} overlap(s)" if clashes else ""
        print(f"{d}: {len(visible)} event(s){suffix}")


def run_routine(
    cfg: AppConfig,
    events_path: str,
    title: str,
    start: str,
    from_date: str,
    duration: Optional[int] = None,
    weekdays: Optional[str] = None,
    until: Optional[str] = None,
    exclude: Optional[str] = None,
    color: Optional[str] = None,
    symbol: Optional[str] = None,
    write: bool = False,
    force: bool = False,
) -> bool:
    current = load_events(events_path)
    minutes = max(1, duration or cfg.routines.default_duration_minutes)
    base = Event(
        id="",
        title=title.strip(),
        date=from_date,
        start=start,
        end=add_minutes_hhmm(start, minutes),
        type=ROUTINE,
        color=color or cfg.day.default_color,
        symbol=symbol,
    )
    template = RecurrenceTemplate(
        base=base,
        weekdays=parse_weekdays(weekdays) or default_weekdays(from_date),
        start_date=from_date,
        end_date=until or None,
        exclude_dates=parse_exclusions(exclude),
        cap=cfg.routines.occurrence_cap,
    )
    occurrences = materialize_weekly_routine(template)
    if not occurrences:
        print("No occurrences generated; check weekdays and date range")
        return False

    plan = save_plan(
        current,
        [*current, *occurrences],
        policy=cfg.conflicts.policy,
        sample=cfg.conflicts.sample_size,
    )
    print(
        f"Generated {len(occurrences)} occurrence(s) for series {occurrences[0].series_id}: "
        f"{occurrences[0].date} .. {occurrences[-1].date}"
    )
    if plan.has_conflicts:
        print(plan.message)

    if not write:
        return True
    if plan.has_conflicts and not force:
        print("Not saving; re-run with --force to keep the overlaps")
        return False
    save_events(events_path, plan.events)
    print(f"Saved {len(plan.events)} events to {events_path}")
    return True


def run_check(cfg: AppConfig, events_path: str) -> int:
    conflicts = conflicts_by_date(load_events(events_path))
    if not conflicts:
        print("No overlaps")
        return 0
    print(summarize_conflicts(conflicts, sample=cfg.conflicts.sample_size))
    return len(conflicts)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Day planner scheduling engine")
    ap.add_argument("--config", default=None, help="YAML config (default: $PLANNER_CONFIG)")
    files = argparse.ArgumentParser(add_help=False)
    files.add_argument("--events", default=EVENTS_PATH_DEFAULT, help="JSON list of events")
    sub = ap.add_subparsers(dest="command", required=True)

    day = sub.add_parser("day", parents=[files])
    day.add_argument("--date", required=True)

    week = sub.add_parser("week", parents=[files])
    week.add_argument("--date", required=True)

    sub.add_parser("check", parents=[files])

    routine = sub.add_parser("routine", parents=[files])
    routine.add_argument("--title", required=True)
    routine.add_argument("--start", required=True, help="HH:MM")
    routine.add_argument("--duration", type=int, help="minutes")
    routine.add_argument("--from", dest="from_date", required=True)
    routine.add_argument("--weekdays", help="comma separated, 1=Mon .. 7=Sun")
    routine.add_argument("--until")
    routine.add_argument("--exclude", help="comma separated YYYY-MM-DD")
    routine.add_argument("--color")
    routine.add_argument("--symbol")
    routine.add_argument("--write", action="store_true")
    routine.add_argument("--force", action="store_true")

    args = ap.parse_args(argv)

    load_dotenv()
    cfg = load_config(args.config or os.environ.get("PLANNER_CONFIG") or None)
    logging.basicConfig(level=cfg.logging.level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "day":
        run_day(cfg, args.events, args.date)
        return

    if args.command == "week":
        run_week(cfg, args.events, args.date)
        return

    if args.command == "check":
        if run_check(cfg, args.events):
            raise SystemExit(1)
        return

    if args.command == "routine":
        ok = run_routine(
            cfg,
            args.events,
            title=args.title,
            start=args.start,
            from_date=args.from_date,
            duration=args.duration,
            weekdays=args.weekdays,
            until=args.until,
            exclude=args.exclude,
            color=args.color,
            symbol=args.symbol,
            write=args.write,
            force=args.force,
        )
        if not ok:
            raise SystemExit(1)
        return


if __name__ == "__main__":
    main()
