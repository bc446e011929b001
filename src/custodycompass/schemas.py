"""
Pydantic schemas for schedule.json and school-calendar.json.

Field names follow the JSON documents (camelCase aliases); `to_config()`
turns a validated document into the frozen dataclasses in models.py.
Weekday names, ISO dates and holiday names fail with their own error types
so config.py can report them as InvalidWeekdayName / MalformedDate /
UnknownHolidayName.
"""

from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

from .holidays import HOLIDAY_NAMES
from .models import (
    AlternatingWeekends, DailySchedule, HolidayRules, SchoolCalendarConfig,
    SchoolEvent, SchoolInfo, SchoolTerm, ScheduleConfig, WeekdayOvernight,
)

WEEKDAY_LOOKUP = {
    'monday': 0,
    'tuesday': 1,
    'wednesday': 2,
    'thursday': 3,
    'friday': 4,
    'saturday': 5,
    'sunday': 6,
}

INVALID_WEEKDAY = 'invalid_weekday'
MALFORMED_DATE = 'malformed_date'
UNKNOWN_HOLIDAY = 'unknown_holiday'


def _weekday(value: Any) -> int:
    if isinstance(value, str) and value.strip().lower() in WEEKDAY_LOOKUP:
        return WEEKDAY_LOOKUP[value.strip().lower()]
    raise PydanticCustomError(INVALID_WEEKDAY, 'Invalid day name: {value}', {'value': repr(value)})


def _iso_date(value: Any) -> date:
    # only 'YYYY-MM-DD' strings; no timestamps or other pydantic coercions
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise PydanticCustomError(MALFORMED_DATE, 'Invalid date: {value}', {'value': repr(value)})


def _holiday_name(value: Any) -> str:
    if isinstance(value, str) and value in HOLIDAY_NAMES:
        return value
    raise PydanticCustomError(UNKNOWN_HOLIDAY, 'Unknown holiday name: {value}', {'value': repr(value)})


Weekday = Annotated[int, BeforeValidator(_weekday)]
IsoDate = Annotated[date, BeforeValidator(_iso_date)]
HolidayName = Annotated[str, BeforeValidator(_holiday_name)]
ClockTime = Annotated[str, Field(pattern=r'^([01]?\d|2[0-3]):[0-5]\d$')]


class _Document(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


# --- schedule.json --------------------------------------------------------

class WeekdayOvernightDoc(_Document):
    parent: Literal['user', 'coparent']
    pickup_day: Weekday = Field(alias='pickupDay')
    dropoff_day: Weekday = Field(alias='dropoffDay')


class AlternatingWeekendsDoc(_Document):
    reference_date: IsoDate = Field(alias='referenceDate')
    pickup_day: Weekday = Field(alias='pickupDay')
    dropoff_day: Weekday = Field(alias='dropoffDay')
    pickup_time: Optional[ClockTime] = Field(None, alias='pickupTime')
    dropoff_time: Optional[ClockTime] = Field(None, alias='dropoffTime')


class HolidaysDoc(_Document):
    even_year_user: List[HolidayName] = Field(default_factory=list, alias='evenYearUser')
    odd_year_user: List[HolidayName] = Field(default_factory=list, alias='oddYearUser')
    always_user: List[HolidayName] = Field(default_factory=list, alias='alwaysUser')
    always_coparent: List[HolidayName] = Field(default_factory=list, alias='alwaysCoparent')


class ScheduleDocument(_Document):
    weekday_overnight: WeekdayOvernightDoc = Field(alias='weekdayOvernight')
    alternating_weekends: AlternatingWeekendsDoc = Field(alias='alternatingWeekends')
    holidays: HolidaysDoc = Field(default_factory=HolidaysDoc)

    def to_config(self) -> ScheduleConfig:
        on, we, hol = self.weekday_overnight, self.alternating_weekends, self.holidays
        return ScheduleConfig(
            WeekdayOvernight(on.parent, on.pickup_day, on.dropoff_day),
            AlternatingWeekends(we.reference_date, we.pickup_day, we.dropoff_day,
                                we.pickup_time, we.dropoff_time),
            HolidayRules(
                even_year_user=frozenset(hol.even_year_user),
                odd_year_user=frozenset(hol.odd_year_user),
                always_user=frozenset(hol.always_user),
                always_coparent=frozenset(hol.always_coparent),
            ),
        )


# --- school-calendar.json -------------------------------------------------

class SchoolInfoDoc(_Document):
    name: str = ''
    short_name: str = Field('', alias='shortName')
    year: str = ''
    child: str = ''


class DailyScheduleDoc(_Document):
    regular_start: ClockTime = Field(alias='regularStart')
    regular_end: ClockTime = Field(alias='regularEnd')
    early_out_start: ClockTime = Field(alias='earlyOutStart')
    early_out_end: ClockTime = Field(alias='earlyOutEnd')
    early_out_days: List[Weekday] = Field(default_factory=list, alias='earlyOutDays')


class TermDoc(_Document):
    name: str
    start: IsoDate
    end: IsoDate

    @model_validator(mode='after')
    def _ordered(self) -> 'TermDoc':
        if self.end < self.start:
            raise ValueError(f"term '{self.name}' ends before it starts")
        return self


class SchoolEventDoc(_Document):
    start: IsoDate = Field(alias='date')
    end_date: Optional[IsoDate] = Field(None, alias='endDate')
    type: Literal['no_school', 'early_release', 'milestone']
    name: str

    @model_validator(mode='after')
    def _ordered(self) -> 'SchoolEventDoc':
        if self.end_date is not None and self.end_date < self.start:
            raise ValueError(f"event '{self.name}' ends before it starts")
        return self


class SchoolCalendarDocument(_Document):
    school: SchoolInfoDoc = Field(default_factory=SchoolInfoDoc)
    schedule: DailyScheduleDoc
    terms: List[TermDoc] = Field(default_factory=list)
    events: List[SchoolEventDoc] = Field(default_factory=list)

    @model_validator(mode='after')
    def _terms_sorted(self) -> 'SchoolCalendarDocument':
        for prev, term in zip(self.terms, self.terms[1:]):
            if term.start <= prev.end:
                raise ValueError(f"term '{term.name}' overlaps or precedes '{prev.name}'")
        return self

    def to_config(self) -> SchoolCalendarConfig:
        s = self.schedule
        return SchoolCalendarConfig(
            daily_schedule=DailySchedule(
                s.regular_start, s.regular_end, s.early_out_start, s.early_out_end,
                frozenset(s.early_out_days),
            ),
            terms=[SchoolTerm(t.name, t.start, t.end) for t in self.terms],
            events=[SchoolEvent(e.start, e.type, e.name, e.end_date) for e in self.events],
            school=SchoolInfo(self.school.name, self.school.short_name, self.school.year, self.school.child),
        )
