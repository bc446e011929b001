import json
import logging
import os
import threading
from typing import Dict, Optional

from pydantic import ValidationError

from .models import Configuration, SchoolCalendarConfig, ScheduleConfig
from .schemas import (
    INVALID_WEEKDAY, MALFORMED_DATE, UNKNOWN_HOLIDAY, SchoolCalendarDocument, ScheduleDocument,
)

SCHEDULE_FILE = 'schedule.json'
SCHOOL_CALENDAR_FILE = 'school-calendar.json'


class ConfigError(ValueError):
    """A configuration document is present but cannot be used."""


class ConfigurationMissing(ConfigError):
    """No schedule configuration; custody questions cannot be answered."""


class InvalidWeekdayName(ConfigError):
    pass


class MalformedDate(ConfigError):
    pass


class UnknownHolidayName(ConfigError):
    pass


_ERROR_TYPES = {
    INVALID_WEEKDAY: InvalidWeekdayName,
    MALFORMED_DATE: MalformedDate,
    UNKNOWN_HOLIDAY: UnknownHolidayName,
}


def default_config_dir() -> str:
    return os.path.join(os.path.expanduser('~'), '.custodycompass')


def schedule_missing(path: str) -> ConfigurationMissing:
    return ConfigurationMissing(f"{path} not found. Copy schedule.example.json there and customize it.")


def _config_error(what: str, exc: ValidationError) -> ConfigError:
    """Report the first weekday/date/holiday error if any, else the first error."""
    errors = exc.errors()
    err = next((e for e in errors if e['type'] in _ERROR_TYPES), errors[0])
    where = '.'.join(str(p) for p in err['loc']) or 'document'
    cls = _ERROR_TYPES.get(err['type'], ConfigError)
    more = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return cls(f"{what}: {where}: {err['msg']}{more}")


def schedule_from_dict(doc: Dict) -> ScheduleConfig:
    """Validate a schedule.json document and build the ScheduleConfig."""
    try:
        return ScheduleDocument.model_validate(doc).to_config()
    except ValidationError as e:
        raise _config_error('schedule', e) from None


def school_calendar_from_dict(doc: Dict) -> SchoolCalendarConfig:
    try:
        return SchoolCalendarDocument.model_validate(doc).to_config()
    except ValidationError as e:
        raise _config_error('school calendar', e) from None


def _read_json(path: str) -> Dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})") from e


def load_schedule_config(path: str) -> ScheduleConfig:
    if not os.path.exists(path):
        raise schedule_missing(path)
    try:
        doc = _read_json(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationMissing(f"{path} could not be read: {e}") from e
    return schedule_from_dict(doc)


def load_school_calendar(path: str) -> Optional[SchoolCalendarConfig]:
    """None when the file does not exist; the school overlay is then disabled."""
    if not os.path.exists(path):
        return None
    try:
        doc = _read_json(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{path} could not be read: {e}") from e
    return school_calendar_from_dict(doc)


def load_configuration(config_dir: Optional[str] = None) -> Configuration:
    """
    Read both documents from `config_dir` (default ~/.custodycompass).

    A missing schedule is not an error at this point: the snapshot simply has
    no schedule and custody queries raise ConfigurationMissing. Any invalid
    document does raise.
    """
    base = config_dir or default_config_dir()
    sched_path = os.path.join(base, SCHEDULE_FILE)
    try:
        schedule = load_schedule_config(sched_path)
    except ConfigurationMissing as e:
        logging.warning(f"[CustodyCompass] {e}")
        schedule = None
    school = load_school_calendar(os.path.join(base, SCHOOL_CALENDAR_FILE))
    return Configuration(schedule=schedule, school=school)


class ConfigStore:
    """
    Holds the current Configuration snapshot.

    The snapshot is loaded on first access and replaced as a whole on reload,
    so readers always see either the old or the new configuration.
    """

    def __init__(self, config_dir: Optional[str] = None, configuration: Optional[Configuration] = None):
        self.config_dir = config_dir or default_config_dir()
        self._current = configuration
        self._lock = threading.Lock()

    @classmethod
    def from_dicts(cls, schedule: Optional[Dict] = None, school: Optional[Dict] = None) -> 'ConfigStore':
        cfg = Configuration(
            schedule=schedule_from_dict(schedule) if schedule is not None else None,
            school=school_calendar_from_dict(school) if school is not None else None,
        )
        return cls(configuration=cfg)

    @property
    def schedule_path(self) -> str:
        return os.path.join(self.config_dir, SCHEDULE_FILE)

    @property
    def current(self) -> Configuration:
        cfg = self._current
        if cfg is None:
            with self._lock:
                if self._current is None:
                    self._current = self._load()
                cfg = self._current
        return cfg

    def reload(self) -> Configuration:
        with self._lock:
            try:
                self._current = self._load()
            except ConfigError:
                self._current = None
                raise
            return self._current

    def _load(self) -> Configuration:
        try:
            cfg = load_configuration(self.config_dir)
        except ConfigError as e:
            logging.error(f"[CustodyCompass] Configuration error in {self.config_dir}: {e}")
            raise
        logging.info(
            f"[CustodyCompass] Configuration loaded from {self.config_dir} "
            f"(schedule={'yes' if cfg.schedule else 'no'}, school calendar={'yes' if cfg.school else 'no'})"
        )
        return cfg

