# tests/test_school.py

from datetime import date, timedelta

from custodycompass.config import school_calendar_from_dict
from custodycompass.models import EARLY_RELEASE, NO_SCHOOL, NOT_IN_SESSION, REGULAR
from custodycompass.school import WEEKLY_EARLY_RELEASE, SchoolCalendar


def test_regular_day(school):
    info = school.session_on(date(2025, 9, 2))
    assert info.kind == REGULAR
    assert (info.start_time, info.end_time) == ("08:45", "15:30")
    assert info.term == "Term 1"
    assert info.child == "Alex"
    assert info.school_name == "Example Elementary"
    assert school.is_school_day(date(2025, 9, 2))


def test_outside_school_year(school):
    for d in (date(2025, 8, 19), date(2026, 1, 17), date(2026, 7, 1)):
        info = school.session_on(d)
        assert info.kind == NOT_IN_SESSION
        assert info.term is None
    assert school.session_on(date(2025, 8, 20)).kind == REGULAR   # first day, milestone only
    assert school.session_on(date(2026, 1, 16)).kind == EARLY_RELEASE  # last day is a Friday


def test_weekend_keeps_term(school):
    info = school.session_on(date(2025, 9, 6))
    assert info.kind == NOT_IN_SESSION
    assert info.term == "Term 1"
    assert not school.is_school_day(date(2025, 9, 6))


def test_no_school_event(school):
    info = school.session_on(date(2025, 9, 1))
    assert info.kind == NO_SCHOOL
    assert info.event_name == "Labor Day"
    assert info.start_time is None


def test_no_school_wins_over_early_release(school):
    # Parent conferences (early release) and Fall Break (no school) share 2025-10-16
    info = school.session_on(date(2025, 10, 16))
    assert info.kind == NO_SCHOOL
    assert info.event_name == "Fall Break"
    # ranged event covers its end date, which is also a weekly early-out Friday
    assert school.session_on(date(2025, 10, 17)).kind == NO_SCHOOL


def test_early_release_event(school):
    info = school.session_on(date(2025, 11, 26))
    assert info.kind == EARLY_RELEASE
    assert info.event_name == "Thanksgiving early out"
    assert (info.start_time, info.end_time) == ("08:45", "13:30")


def test_weekly_early_release(school):
    info = school.session_on(date(2025, 9, 5))
    assert info.kind == EARLY_RELEASE
    assert info.event_name == WEEKLY_EARLY_RELEASE
    assert school.is_school_day(date(2025, 9, 5))


def test_no_terms_means_never_in_session(school_doc):
    school_doc["terms"] = []
    cal = SchoolCalendar(school_calendar_from_dict(school_doc))
    assert cal.session_on(date(2025, 9, 2)).kind == NOT_IN_SESSION


def test_upcoming_events_window(school):
    out = school.upcoming_events(date(2025, 10, 10), 14)
    assert [(e.name, e.days_until) for e in out] == [
        ("Parent conferences", 6),
        ("Fall Break", 6),
    ]
    assert out[1].end_date == date(2025, 10, 17)


def test_upcoming_events_includes_ongoing_range(school):
    out = school.upcoming_events(date(2025, 10, 17), 14)
    assert [(e.name, e.days_until) for e in out] == [("Fall Break", 0)]


def test_upcoming_events_dedupes_and_sorts(school):
    out = school.upcoming_events(date(2025, 8, 20), 14)
    assert [(e.name, e.date) for e in out] == [
        ("First day of school", date(2025, 8, 20)),
        ("Labor Day", date(2025, 9, 1)),
    ]
    assert [e.date for e in school.upcoming_events(date(2025, 8, 1), 400)] == \
        sorted(e.date for e in school.upcoming_events(date(2025, 8, 1), 400))


def test_school_calendar_never_changes_with_custody(school):
    # pure function of the date; repeated calls give the same answer
    d = date(2025, 8, 18)
    for i in range(200):
        day = d + timedelta(days=i)
        assert school.session_on(day) == school.session_on(day)
