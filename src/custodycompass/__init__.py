from .config import (
    ConfigError, ConfigStore, ConfigurationMissing, InvalidWeekdayName,
    MalformedDate, UnknownHolidayName,
)
from .engine import ScheduleEngine
from .models import COPARENT, USER, DisplaySettings
