"""calendar-arithmetic: calendar-aware date offsets and differences."""

from calendar_arithmetic.calendar import CalendarDateDiff, CalendarDateOffset
from calendar_arithmetic.collector import CollectorContext, PeriodCollector
from calendar_arithmetic.config import (
    CalendarConfig,
    configure_calendar,
    get_calendar_config,
    reset_calendar_config,
)
from calendar_arithmetic.diff import InstantDiff
from calendar_arithmetic.filters import (
    CollectorFilter,
    DayHourRange,
    DayRangeSpec,
    HourRangeInDay,
    MonthRangeSpec,
    PeriodFilter,
)
from calendar_arithmetic.formatting import DurationFormatter
from calendar_arithmetic.intervals import ANYTIME, Interval, combine, gaps
from calendar_arithmetic.loaders import load_rules_json, rules_from_config
from calendar_arithmetic.logging import configure_logging
from calendar_arithmetic.offset import DateOffset
from calendar_arithmetic.rules import WorkingRules
from calendar_arithmetic.types import (
    ContractViolationError,
    FilterError,
    Scope,
    SeekBoundaryMode,
    SeekDirection,
)
from calendar_arithmetic.visitor import PeriodVisitor

__all__ = [
    "ANYTIME",
    "CalendarConfig",
    "CalendarDateDiff",
    "CalendarDateOffset",
    "CollectorContext",
    "CollectorFilter",
    "ContractViolationError",
    "DateOffset",
    "DayHourRange",
    "DayRangeSpec",
    "DurationFormatter",
    "FilterError",
    "HourRangeInDay",
    "InstantDiff",
    "Interval",
    "MonthRangeSpec",
    "PeriodCollector",
    "PeriodFilter",
    "PeriodVisitor",
    "Scope",
    "SeekBoundaryMode",
    "SeekDirection",
    "WorkingRules",
    "combine",
    "configure_calendar",
    "configure_logging",
    "gaps",
    "get_calendar_config",
    "load_rules_json",
    "reset_calendar_config",
    "rules_from_config",
]
