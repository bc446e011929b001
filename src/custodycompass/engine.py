from datetime import date
from typing import List, Optional

from .calendar_logic import CustodyCalculator
from .config import ConfigStore, schedule_missing
from .export_utils import format_briefing, format_schedule_context, format_school_context
from .models import (
    Configuration, CustodyTransition, DaySummary, DisplaySettings,
    HolidayAssignment, SchoolDayInfo, UpcomingSchoolEvent,
)
from .school import SchoolCalendar


class ScheduleEngine:
    """
    Query surface for the rest of the system.

    Every call takes the reference date explicitly and reads the store's
    snapshot once, so a concurrent reload cannot mix two configurations
    into one answer.
    """

    def __init__(self, store: Optional[ConfigStore] = None, display: Optional[DisplaySettings] = None):
        self.store = store or ConfigStore()
        self.display = display or DisplaySettings()

    def _calculator(self, cfg: Configuration) -> CustodyCalculator:
        if cfg.schedule is None:
            raise schedule_missing(self.store.schedule_path)
        return CustodyCalculator(cfg.schedule, self.display)

    def _school(self, cfg: Configuration) -> Optional[SchoolCalendar]:
        return SchoolCalendar(cfg.school) if cfg.school is not None else None

    # --- custody ---

    def custody_status(self, day: date) -> str:
        return self._calculator(self.store.current).status_on(day)

    def next_transition(self, day: date) -> CustodyTransition:
        return self._calculator(self.store.current).next_transition(day)

    def week_summary(self, day: date) -> List[DaySummary]:
        return self._calculator(self.store.current).week_summary(day)

    def upcoming_holidays(self, day: date, days_ahead: int = 30) -> List[HolidayAssignment]:
        return self._calculator(self.store.current).upcoming_holidays(day, days_ahead)

    # --- school ---

    def school_session_info(self, day: date) -> Optional[SchoolDayInfo]:
        school = self._school(self.store.current)
        return school.session_on(day) if school else None

    def upcoming_school_events(self, day: date, days_ahead: int = 14) -> List[UpcomingSchoolEvent]:
        school = self._school(self.store.current)
        return school.upcoming_events(day, days_ahead) if school else []

    def is_school_day(self, day: date) -> bool:
        school = self._school(self.store.current)
        return school.is_school_day(day) if school else False

    # --- text ---

    def schedule_context_text(self, day: date) -> str:
        """Prompt context for `day`; empty string when no schedule is configured."""
        cfg = self.store.current
        if cfg.schedule is None:
            return ""
        calc = self._calculator(cfg)
        school = self._school(cfg)
        school_text = ""
        if school is not None:
            school_text = format_school_context(school.session_on(day), school.upcoming_events(day, 14))
        return format_schedule_context(
            day,
            calc.status_on(day),
            calc.next_transition(day),
            calc.upcoming_holidays(day, 30),
            self.display,
            school_text,
        )

    def briefing_text(self, day: date) -> str:
        cfg = self.store.current
        if cfg.schedule is None:
            return ""
        calc = self._calculator(cfg)
        school = self._school(cfg)
        return format_briefing(
            day,
            calc.status_on(day),
            calc.next_transition(day),
            calc.week_summary(day),
            calc.upcoming_holidays(day, 30),
            self.display,
            school.session_on(day) if school else None,
            school.upcoming_events(day, 7) if school else None,
        )

    def reload_configuration(self) -> Configuration:
        return self.store.reload()
