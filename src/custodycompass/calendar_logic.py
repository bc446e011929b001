from datetime import date, timedelta
import logging
from typing import List, Optional, Tuple

from .export_utils import format_day
from .holidays import holiday_assignments, holidays_on
from .models import (
    COPARENT, USER, CustodyTransition, DaySummary, DisplaySettings, HolidayAssignment,
    ScheduleConfig, other_party,
)

LOOKAHEAD_DAYS = 14


def weekday_in_range(wd: int, start: int, end: int) -> bool:
    """Is `wd` in the weekday interval start..end? The interval may wrap past Sunday (e.g. Fri..Mon)."""
    if start <= end:
        return start <= wd <= end
    return wd >= start or wd <= end


def days_until_weekday(cursor: date, wd: int) -> int:
    """Days from `cursor` to the next `wd` strictly after it (1..7)."""
    return (wd - cursor.weekday() + 7) % 7 or 7


def shift_date(d: date, days: int) -> Optional[date]:
    """`d` moved by `days`, or None past date.min / date.max."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return None


class CustodyCalculator:
    """Who has the children on which day, from a ScheduleConfig."""

    def __init__(self, schedule: ScheduleConfig, display: Optional[DisplaySettings] = None):
        self.schedule = schedule
        self.display = display or DisplaySettings()

    def is_alternating_weekend_party(self, d: date) -> bool:
        """True on the user's weekends: an even number of whole weeks from the reference Friday."""
        days = (d - self.schedule.alternating_weekends.reference_date).days
        # floor division, so dates before the reference keep the 2-week rhythm
        weeks = days // 7
        return weeks % 2 == 0

    def is_weekend_day(self, d: date) -> bool:
        we = self.schedule.alternating_weekends
        return weekday_in_range(d.weekday(), we.pickup_weekday, we.dropoff_weekday)

    def holiday_on(self, d: date) -> Optional[HolidayAssignment]:
        found = holidays_on(self.schedule.holiday_rules, d)
        if not found:
            return None
        return min(found, key=lambda h: h.name)

    def status_on(self, d: date) -> str:
        """
        Custody party for the calendar day `d`:
          1. holiday assignment
          2. alternating weekend (pickup..dropoff weekday)
          3. weekday overnight (pickup or dropoff weekday)
          4. otherwise the party without the overnight
        """
        holiday = self.holiday_on(d)
        if holiday is not None:
            return holiday.party

        if self.is_weekend_day(d):
            return USER if self.is_alternating_weekend_party(d) else COPARENT

        overnight = self.schedule.weekday_overnight
        if d.weekday() in (overnight.pickup_weekday, overnight.dropoff_weekday):
            return overnight.party

        return other_party(overnight.party)

    def custody_days(self, start: date, end: date) -> List[Tuple[date, str]]:
        out = []
        cur = start
        while cur <= end:
            out.append((cur, self.status_on(cur)))
            cur += timedelta(days=1)
        return out

    def describe_handover(self, party: str, d: date) -> str:
        if party == USER:
            return f"Children come to you ({format_day(d)})"
        return f"Children go to {self.display.coparent_name} ({format_day(d)})"

    def next_transition(self, d: date) -> CustodyTransition:
        current = self.status_on(d)
        for i in range(1, LOOKAHEAD_DAYS + 1):
            nxt = d + timedelta(days=i)
            party = self.status_on(nxt)
            if party != current:
                return CustodyTransition(nxt, self.describe_handover(party, nxt), party)

        # nothing changes within two weeks; report the next weekend pickup day instead
        pickup = self.schedule.alternating_weekends.pickup_weekday
        nxt = d + timedelta(days=days_until_weekday(d, pickup))
        logging.debug(f"[CustodyCompass] No handover within {LOOKAHEAD_DAYS} days of {d}, falling back to {nxt}")
        return CustodyTransition(nxt, f"Next weekend: {format_day(nxt)}", None, is_fallback=True)

    def week_summary(self, d: date) -> List[DaySummary]:
        """
        Seven days starting at `d`. `pickup` marks a change from the previous
        day, `dropoff` a change on the following day; a single day between
        two days of the other party carries both.

        Neighbours outside date.min..date.max count as the same party, and the
        week stops early at date.max.
        """
        days = [shift_date(d, i) for i in range(-1, 8)]
        parties = [self.status_on(day) if day is not None else None for day in days]
        rows = []
        for i in range(7):
            day, party = days[i + 1], parties[i + 1]
            if day is None:
                break
            prev_p = parties[i] or party
            next_p = parties[i + 2] or party
            rows.append(DaySummary(
                day=day,
                party=party,
                pickup=party != prev_p,
                dropoff=party != next_p,
            ))
        return rows

    def upcoming_holidays(self, d: date, days_ahead: int = 30) -> List[HolidayAssignment]:
        """Holidays 0..days_ahead days from `d`, looking into next year as well."""
        rules = self.schedule.holiday_rules
        found = []
        for year in (d.year, d.year + 1):
            if year > date.max.year:
                continue
            for h in holiday_assignments(rules, year):
                if 0 <= (h.date - d).days <= days_ahead:
                    found.append(h)
        found.sort(key=lambda h: (h.date, h.name))
        return found
