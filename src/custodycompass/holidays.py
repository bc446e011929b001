# src/custodycompass/holidays.py
"""Utah holiday dates and the even/odd year rotation (Utah Code 81-9-302)."""
from datetime import date
from typing import Dict, List

from dateutil.relativedelta import relativedelta, weekday

from .models import COPARENT, USER, HolidayAssignment, HolidayRules

NEW_YEARS_DAY = "New Year's Day"
MLK_DAY = "MLK Day"
PRESIDENTS_DAY = "Presidents Day"
SPRING_BREAK = "Spring Break"
MOTHERS_DAY = "Mother's Day"
MEMORIAL_DAY = "Memorial Day"
FATHERS_DAY = "Father's Day"
JULY_4TH = "July 4th"
PIONEER_DAY = "Pioneer Day"
LABOR_DAY = "Labor Day"
FALL_BREAK = "Fall Break"
THANKSGIVING = "Thanksgiving"
CHRISTMAS_FIRST_HALF = "Christmas 1st half"
CHRISTMAS_SECOND_HALF = "Christmas 2nd half"

HOLIDAY_NAMES = frozenset({
    NEW_YEARS_DAY, MLK_DAY, PRESIDENTS_DAY, SPRING_BREAK, MOTHERS_DAY,
    MEMORIAL_DAY, FATHERS_DAY, JULY_4TH, PIONEER_DAY, LABOR_DAY, FALL_BREAK,
    THANKSGIVING, CHRISTMAS_FIRST_HALF, CHRISTMAS_SECOND_HALF,
})

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


def nth_weekday(year: int, month: int, wd: int, n: int) -> date:
    """n-th occurrence of weekday `wd` (0=Monday) in the month, n >= 1."""
    return date(year, month, 1) + relativedelta(weekday=weekday(wd, +n))


def last_weekday(year: int, month: int, wd: int) -> date:
    """Last occurrence of weekday `wd` in the month."""
    return date(year, month, 1) + relativedelta(day=31, weekday=weekday(wd, -1))


def holiday_dates(year: int) -> Dict[str, date]:
    """
    Calendar date of every holiday in the rotation for `year`.

    Spring Break and Fall Break are approximations (3rd Monday of March and
    3rd Thursday of October). District calendars differ from year to year;
    exact dates belong in the school calendar, not here.
    """
    return {
        NEW_YEARS_DAY: date(year, 1, 1),
        MLK_DAY: nth_weekday(year, 1, MONDAY, 3),
        PRESIDENTS_DAY: nth_weekday(year, 2, MONDAY, 3),
        SPRING_BREAK: nth_weekday(year, 3, MONDAY, 3),
        MOTHERS_DAY: nth_weekday(year, 5, SUNDAY, 2),
        MEMORIAL_DAY: last_weekday(year, 5, MONDAY),
        FATHERS_DAY: nth_weekday(year, 6, SUNDAY, 3),
        JULY_4TH: date(year, 7, 4),
        PIONEER_DAY: date(year, 7, 24),
        LABOR_DAY: nth_weekday(year, 9, MONDAY, 1),
        FALL_BREAK: nth_weekday(year, 10, THURSDAY, 3),
        THANKSGIVING: nth_weekday(year, 11, THURSDAY, 4),
        CHRISTMAS_FIRST_HALF: date(year, 12, 24),
        CHRISTMAS_SECOND_HALF: date(year, 12, 26),
    }


def assign_holiday(rules: HolidayRules, name: str, year: int) -> str:
    """Fixed assignments win over the even/odd rotation; unlisted names go to the co-parent."""
    if name in rules.always_user:
        return USER
    if name in rules.always_coparent:
        return COPARENT
    if year % 2 == 0:
        return USER if name in rules.even_year_user else COPARENT
    return USER if name in rules.odd_year_user else COPARENT


def holiday_assignments(rules: HolidayRules, year: int) -> List[HolidayAssignment]:
    # sorted by (date, name) so two holidays on one day always resolve the same way
    out = [
        HolidayAssignment(name, d, assign_holiday(rules, name, year))
        for name, d in holiday_dates(year).items()
    ]
    out.sort(key=lambda h: (h.date, h.name))
    return out


def holidays_on(rules: HolidayRules, day: date) -> List[HolidayAssignment]:
    return [h for h in holiday_assignments(rules, day.year) if h.date == day]
