# src/custodycompass/main.py

import argparse
import logging
import sys
from datetime import date, datetime
from typing import List, Optional

from dateutil import tz

from .config import ConfigError, ConfigStore
from .engine import ScheduleEngine
from .export_utils import format_day, format_time, format_week_summary, format_when, party_name
from .models import EARLY_RELEASE, MILESTONE, NO_SCHOOL, REGULAR, USER, DisplaySettings


def today_in(timezone: Optional[str]) -> date:
    zone = tz.gettz(timezone) if timezone else tz.tzlocal()
    return datetime.now(zone).date()


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="custodycompass", description="Custody schedule status check")
    p.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD, default: today")
    p.add_argument("--config-dir", default=None, help="directory with schedule.json / school-calendar.json")
    p.add_argument("--days", type=int, default=60, help="holiday look-ahead in days")
    p.add_argument("--user-name", default="You")
    p.add_argument("--coparent-name", default="Co-parent")
    p.add_argument("--timezone", default=None, help="e.g. America/Denver")
    p.add_argument("--context", action="store_true", help="print the prompt context block instead")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    if args.timezone and tz.gettz(args.timezone) is None:
        p.error(f"unknown timezone: {args.timezone}")
    return args


def print_status(engine: ScheduleEngine, day: date, days_ahead: int):
    display = engine.display
    print(f"  Today: {format_day(day)}")
    print(f"  Children are with: {party_name(engine.custody_status(day), display)}")
    print(f"  Next transition: {engine.next_transition(day).description}")

    print("\n  This week:")
    for line in format_week_summary(engine.week_summary(day), display).splitlines():
        print(f"  {line}")

    holidays = engine.upcoming_holidays(day, days_ahead)
    if holidays:
        print(f"\n  Upcoming holidays ({days_ahead} days):")
        for h in holidays:
            whose = "yours" if h.party == USER else f"{display.coparent_name}'s"
            print(f"  {h.name}: {format_day(h.date)} ({(h.date - day).days} days), {whose}")

    info = engine.school_session_info(day)
    if info is None:
        return
    child = info.child or "Child"
    school = info.school_name or "school"
    print("\n  School (today):")
    if info.kind == REGULAR:
        print(f"  {child} has school at {school} ({format_time(info.start_time)}-{format_time(info.end_time)})")
    elif info.kind == EARLY_RELEASE:
        print(f"  {child} has early release at {school} "
              f"({format_time(info.start_time)}-{format_time(info.end_time)}) - {info.event_name}")
    elif info.kind == NO_SCHOOL:
        print(f"  No school for {child} - {info.event_name}")
    else:
        print("  School not in session")
    if info.term:
        print(f"  {info.term}")

    events = [e for e in engine.upcoming_school_events(day, 30) if e.days_until > 0 and e.kind != MILESTONE]
    if events:
        print("\n  Upcoming school events (30 days):")
        for e in events:
            label = "no school" if e.kind == NO_SCHOOL else "early release"
            print(f"  {e.name}: {format_day(e.date)} ({format_when(e.days_until)}), {label}")


def run_status(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    display = DisplaySettings(args.user_name, args.coparent_name, args.timezone)
    engine = ScheduleEngine(ConfigStore(args.config_dir), display)
    day = args.date or today_in(display.timezone)

    print("\n  Custody Schedule Engine - Status Check\n")
    try:
        if args.context:
            print(engine.schedule_context_text(day))
        else:
            print_status(engine, day, args.days)
    except ConfigError as e:
        print(f"  {e}")
        print("  Copy schedule.example.json to the config directory as schedule.json and customize it.\n")
        return 1
    print("")
    return 0


def main():
    sys.exit(run_status())


if __name__ == "__main__":
    main()
