# src/custodycompass/models.py
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, List, Optional

USER = "user"
COPARENT = "coparent"

# school event kinds
NO_SCHOOL = "no_school"
EARLY_RELEASE = "early_release"
MILESTONE = "milestone"

# session kinds (plus NO_SCHOOL and EARLY_RELEASE)
REGULAR = "regular"
NOT_IN_SESSION = "not_in_session"


def other_party(party: str) -> str:
    return COPARENT if party == USER else USER


@dataclass(frozen=True)
class WeekdayOvernight:
    """The recurring mid-week overnight (e.g. Wednesday night to Thursday morning)."""
    party: str
    pickup_weekday: int           # 0=Monday … 6=Sunday
    dropoff_weekday: int


@dataclass(frozen=True)
class AlternatingWeekends:
    """Every-other-weekend rhythm, anchored at a Friday that belongs to the user."""
    reference_date: date
    pickup_weekday: int
    dropoff_weekday: int
    pickup_time: Optional[str] = None    # "HH:MM", informational only
    dropoff_time: Optional[str] = None


@dataclass(frozen=True)
class HolidayRules:
    even_year_user: FrozenSet[str] = frozenset()
    odd_year_user: FrozenSet[str] = frozenset()
    always_user: FrozenSet[str] = frozenset()
    always_coparent: FrozenSet[str] = frozenset()

    def referenced_names(self) -> FrozenSet[str]:
        return self.even_year_user | self.odd_year_user | self.always_user | self.always_coparent


@dataclass(frozen=True)
class ScheduleConfig:
    weekday_overnight: WeekdayOvernight
    alternating_weekends: AlternatingWeekends
    holiday_rules: HolidayRules = field(default_factory=HolidayRules)


@dataclass(frozen=True)
class HolidayAssignment:
    name: str
    date: date
    party: str


@dataclass(frozen=True)
class CustodyTransition:
    """Next day on which the children change hands.

    `party` is the party gaining the children; it is None when no change was
    found in the look-ahead window and `date` is only the next weekend pickup.
    """
    date: date
    description: str
    party: Optional[str] = None
    is_fallback: bool = False


@dataclass(frozen=True)
class DaySummary:
    day: date
    party: str
    pickup: bool = False
    dropoff: bool = False


@dataclass(frozen=True)
class SchoolInfo:
    name: str = ""
    short_name: str = ""
    year: str = ""
    child: str = ""


@dataclass(frozen=True)
class SchoolTerm:
    name: str
    start: date
    end: date


@dataclass(frozen=True)
class SchoolEvent:
    date: date
    kind: str
    name: str
    end_date: Optional[date] = None

    def covers(self, day: date) -> bool:
        if self.end_date is None:
            return day == self.date
        return self.date <= day <= self.end_date


@dataclass(frozen=True)
class DailySchedule:
    regular_start: str
    regular_end: str
    early_out_start: str
    early_out_end: str
    early_out_weekdays: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class SchoolCalendarConfig:
    daily_schedule: DailySchedule
    terms: List[SchoolTerm] = field(default_factory=list)
    events: List[SchoolEvent] = field(default_factory=list)
    school: SchoolInfo = field(default_factory=SchoolInfo)


@dataclass(frozen=True)
class SchoolDayInfo:
    kind: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    event_name: Optional[str] = None
    term: Optional[str] = None
    child: Optional[str] = None
    school_name: Optional[str] = None


@dataclass(frozen=True)
class UpcomingSchoolEvent:
    name: str
    date: date
    kind: str
    days_until: int
    end_date: Optional[date] = None


@dataclass(frozen=True)
class DisplaySettings:
    """Names and timezone used when rendering text."""
    user_name: str = "You"
    coparent_name: str = "Co-parent"
    timezone: Optional[str] = None


@dataclass(frozen=True)
class Configuration:
    """One consistent snapshot of everything loaded from disk."""
    schedule: Optional[ScheduleConfig] = None
    school: Optional[SchoolCalendarConfig] = None
