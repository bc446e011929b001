from datetime import date
from typing import List, Optional

from .models import (
    EARLY_RELEASE, MILESTONE, NO_SCHOOL, REGULAR, USER, CustodyTransition,
    DaySummary, DisplaySettings, HolidayAssignment, SchoolDayInfo,
    UpcomingSchoolEvent,
)


def format_time(time24: str) -> str:
    """'15:30' -> '3:30 PM'"""
    h, m = (int(x) for x in time24.split(':'))
    period = 'PM' if h >= 12 else 'AM'
    h12 = 12 if h % 12 == 0 else h % 12
    return f"{h12}:{m:02d} {period}"


def format_day(d: date) -> str:
    """'Fri, Jan 12'"""
    return f"{d.strftime('%a, %b')} {d.day}"


def format_when(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


def party_name(party: str, display: DisplaySettings) -> str:
    return display.user_name if party == USER else display.coparent_name


def format_week_summary(rows: List[DaySummary], display: DisplaySettings) -> str:
    lines = []
    for r in rows:
        notes = []
        if r.pickup:
            notes.append("pickup")
        if r.dropoff:
            notes.append("drop-off")
        note = f" ({', '.join(notes)})" if notes else ""
        lines.append(f"{r.day.strftime('%a')}: {party_name(r.party, display)}{note}")
    return "\n".join(lines)


def format_holiday_lines(holidays: List[HolidayAssignment], today: date, display: DisplaySettings) -> List[str]:
    lines = []
    for h in holidays:
        whose = "your" if h.party == USER else f"{display.coparent_name}'s"
        lines.append(f"- {h.name} {format_when((h.date - today).days)} ({format_day(h.date)}), {whose} year")
    return lines


def _future_events(events: List[UpcomingSchoolEvent]) -> List[UpcomingSchoolEvent]:
    # today's event is already part of the session line; milestones are not schedule changes
    return [e for e in events if e.days_until > 0 and e.kind != MILESTONE]


def format_school_context(info: Optional[SchoolDayInfo], events: List[UpcomingSchoolEvent]) -> str:
    """SCHOOL TODAY line plus UPCOMING SCHOOL EVENTS; empty when there is nothing to say."""
    if info is None:
        return ""
    parts = []
    child = info.child or "Child"
    school = info.school_name or "school"
    suffix = f" - {info.event_name}" if info.event_name else ""

    if info.kind == REGULAR:
        parts.append(f"SCHOOL TODAY: {child} has school at {school} "
                     f"({format_time(info.start_time)}-{format_time(info.end_time)}).")
    elif info.kind == EARLY_RELEASE:
        parts.append(f"SCHOOL TODAY: {child} has early release at {school} "
                     f"({format_time(info.start_time)}-{format_time(info.end_time)}){suffix}.")
    elif info.kind == NO_SCHOOL:
        parts.append(f"SCHOOL TODAY: No school for {child}{suffix}.")

    future = _future_events(events)
    if future:
        lines = [f"- {e.name} {format_when(e.days_until)} ({format_day(e.date)})" for e in future]
        parts.append("UPCOMING SCHOOL EVENTS:\n" + "\n".join(lines))
    return "\n".join(parts)


def format_schedule_context(
    today: date,
    status: str,
    transition: CustodyTransition,
    holidays: List[HolidayAssignment],
    display: DisplaySettings,
    school_text: str = "",
) -> str:
    """Text block for embedding into a prompt: custody, holidays, school."""
    sections = [
        f"CUSTODY STATUS: Children are with {party_name(status, display)}. "
        f"Next transition: {transition.description}."
    ]
    if holidays:
        sections.append("UPCOMING HOLIDAYS:\n" + "\n".join(format_holiday_lines(holidays, today, display)))
    if school_text:
        sections.append(school_text)
    return "\n\n".join(sections)


def format_briefing(
    today: date,
    status: str,
    transition: CustodyTransition,
    week: List[DaySummary],
    holidays: List[HolidayAssignment],
    display: DisplaySettings,
    school_info: Optional[SchoolDayInfo] = None,
    school_events: Optional[List[UpcomingSchoolEvent]] = None,
) -> str:
    """Schedule part of the daily morning briefing."""
    sections = [
        f"*Good Morning, {display.user_name}!*\n{today.strftime('%A, %B')} {today.day}\n",
        f"*Today:* Children are with {party_name(status, display)}\n{transition.description}\n",
    ]

    if school_info is not None and school_info.kind in (REGULAR, EARLY_RELEASE, NO_SCHOOL):
        child = school_info.child or "Child"
        suffix = f" - {school_info.event_name}" if school_info.event_name else ""
        if school_info.kind == REGULAR:
            line = (f"{child}: regular day "
                    f"({format_time(school_info.start_time)}-{format_time(school_info.end_time)})")
        elif school_info.kind == EARLY_RELEASE:
            line = (f"{child}: early release "
                    f"({format_time(school_info.start_time)}-{format_time(school_info.end_time)}){suffix}")
        else:
            line = f"No school for {child}{suffix}"
        sections.append(f"*School:* {line}\n")

        future = _future_events(school_events or [])
        if future:
            lines = [f"- {e.name} {format_when(e.days_until)}" for e in future]
            sections.append("*School This Week:*\n" + "\n".join(lines) + "\n")

    sections.append("*This Week:*\n" + format_week_summary(week, display) + "\n")

    if holidays:
        sections.append("*Upcoming Holidays:*\n" + "\n".join(format_holiday_lines(holidays, today, display)) + "\n")

    return "\n".join(sections).rstrip("\n")
