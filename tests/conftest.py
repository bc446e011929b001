import copy
import json

import pytest

from custodycompass.calendar_logic import CustodyCalculator
from custodycompass.config import school_calendar_from_dict, schedule_from_dict
from custodycompass.school import SchoolCalendar

# Wednesday overnight with the user, every other Fri-Sun weekend from 2024-01-05
SCHEDULE = {
    "weekdayOvernight": {"parent": "user", "pickupDay": "wednesday", "dropoffDay": "thursday"},
    "alternatingWeekends": {
        "referenceDate": "2024-01-05",
        "pickupDay": "friday",
        "pickupTime": "17:00",
        "dropoffDay": "sunday",
        "dropoffTime": "18:00",
    },
    "holidays": {
        "evenYearUser": ["MLK Day", "July 4th", "Thanksgiving"],
        "oddYearUser": ["New Year's Day", "Memorial Day"],
        "alwaysUser": ["Father's Day"],
        "alwaysCoparent": ["Mother's Day"],
    },
}

SCHOOL = {
    "school": {"name": "Example Elementary School", "shortName": "Example Elementary",
               "year": "2025-2026", "child": "Alex"},
    "schedule": {
        "regularStart": "08:45",
        "regularEnd": "15:30",
        "earlyOutStart": "08:45",
        "earlyOutEnd": "13:30",
        "earlyOutDays": ["Friday"],
    },
    "terms": [
        {"name": "Term 1", "start": "2025-08-20", "end": "2025-10-24"},
        {"name": "Term 2", "start": "2025-10-27", "end": "2026-01-16"},
    ],
    "events": [
        {"date": "2025-08-20", "type": "milestone", "name": "First day of school"},
        {"date": "2025-09-01", "type": "no_school", "name": "Labor Day"},
        {"date": "2025-09-01", "type": "no_school", "name": "Labor Day"},
        {"date": "2025-10-16", "type": "early_release", "name": "Parent conferences"},
        {"date": "2025-10-16", "endDate": "2025-10-17", "type": "no_school", "name": "Fall Break"},
        {"date": "2025-11-26", "type": "early_release", "name": "Thanksgiving early out"},
    ],
}


@pytest.fixture
def schedule_doc():
    return copy.deepcopy(SCHEDULE)


@pytest.fixture
def school_doc():
    return copy.deepcopy(SCHOOL)


@pytest.fixture
def calc(schedule_doc):
    return CustodyCalculator(schedule_from_dict(schedule_doc))


@pytest.fixture
def school(school_doc):
    return SchoolCalendar(school_calendar_from_dict(school_doc))


@pytest.fixture
def config_dir(tmp_path, schedule_doc, school_doc):
    """Directory with both schedule.json and school-calendar.json."""
    (tmp_path / "schedule.json").write_text(json.dumps(schedule_doc), encoding="utf-8")
    (tmp_path / "school-calendar.json").write_text(json.dumps(school_doc), encoding="utf-8")
    return tmp_path
