from datetime import date
from typing import List, Optional

from .models import (
    EARLY_RELEASE, NO_SCHOOL, NOT_IN_SESSION, REGULAR, SchoolCalendarConfig,
    SchoolDayInfo, SchoolEvent, UpcomingSchoolEvent,
)

WEEKLY_EARLY_RELEASE = "Weekly early release"


class SchoolCalendar:
    """School session type and upcoming events. Knows nothing about custody."""

    def __init__(self, cal: SchoolCalendarConfig):
        self.cal = cal

    def in_school_year(self, d: date) -> bool:
        terms = self.cal.terms
        if not terms:
            return False
        return terms[0].start <= d <= terms[-1].end

    def term_on(self, d: date) -> Optional[str]:
        for term in self.cal.terms:
            if term.start <= d <= term.end:
                return term.name
        return None

    def events_on(self, d: date) -> List[SchoolEvent]:
        return [e for e in self.cal.events if e.covers(d)]

    def session_on(self, d: date) -> SchoolDayInfo:
        """
        Priority: outside the school year, weekend, no-school event,
        early-release event, weekly early-out day, regular day.
        """
        base = {
            'child': self.cal.school.child or None,
            'school_name': self.cal.school.short_name or None,
        }
        if not self.in_school_year(d):
            return SchoolDayInfo(NOT_IN_SESSION, **base)

        term = self.term_on(d)
        if d.weekday() >= 5:
            return SchoolDayInfo(NOT_IN_SESSION, term=term, **base)

        events = self.events_on(d)
        daily = self.cal.daily_schedule
        no_school = next((e for e in events if e.kind == NO_SCHOOL), None)
        if no_school is not None:
            return SchoolDayInfo(NO_SCHOOL, event_name=no_school.name, term=term, **base)

        early = next((e for e in events if e.kind == EARLY_RELEASE), None)
        if early is not None:
            return SchoolDayInfo(EARLY_RELEASE, daily.early_out_start, daily.early_out_end,
                                 event_name=early.name, term=term, **base)

        if d.weekday() in daily.early_out_weekdays:
            return SchoolDayInfo(EARLY_RELEASE, daily.early_out_start, daily.early_out_end,
                                 event_name=WEEKLY_EARLY_RELEASE, term=term, **base)

        return SchoolDayInfo(REGULAR, daily.regular_start, daily.regular_end, term=term, **base)

    def is_school_day(self, d: date) -> bool:
        return self.session_on(d).kind in (REGULAR, EARLY_RELEASE)

    def upcoming_events(self, d: date, days_ahead: int = 14) -> List[UpcomingSchoolEvent]:
        """Events starting within days_ahead of `d`, plus ranged events still running on `d`."""
        out = []
        seen = set()
        for ev in self.cal.events:
            days_until = (ev.date - d).days
            starts_in_window = 0 <= days_until <= days_ahead
            ongoing = ev.end_date is not None and ev.date <= d <= ev.end_date
            if not (starts_in_window or ongoing):
                continue
            key = (ev.name, ev.date)
            if key in seen:
                continue
            seen.add(key)
            out.append(UpcomingSchoolEvent(
                name=ev.name,
                date=ev.date,
                kind=ev.kind,
                days_until=max(0, days_until),
                end_date=ev.end_date,
            ))
        out.sort(key=lambda e: e.date)
        return out
