"""Period filters and the range specs used to collect coalesced periods.

Filters are frozen once built. Any iterable is accepted for a restriction
set and frozen on construction; an empty set means "no restriction".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable

from calendar_arithmetic.intervals import Interval, overlaps_any
from calendar_arithmetic.types import FilterError

WORKING_WEEK_DAYS = frozenset({0, 1, 2, 3, 4})  # Mon-Fri
WEEKEND_DAYS = frozenset({5, 6})  # Sat, Sun

_MIDNIGHT = time(0, 0)


def parse_time(value: time | str | int) -> time:
    """Coerce a time of day. 'HH:MM' strings and whole hours are accepted.

    24 (or '24:00') is midnight at the end of the day and maps to time(0, 0).
    """
    if isinstance(value, time):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if value == 24:
            return _MIDNIGHT
        if 0 <= value <= 23:
            return time(value, 0)
        raise FilterError(f"Hour out of range: {value} (must be 0-24)")
    if isinstance(value, str):
        if value in ("24:00", "24"):
            return _MIDNIGHT
        try:
            return time.fromisoformat(value)
        except ValueError as e:
            raise FilterError(f"Invalid time {value!r}: {e}") from e
    raise FilterError(f"Unsupported time value: {value!r}")


def _check_range(name: str, values: frozenset[int], low: int, high: int) -> list[str]:
    return [
        f"{name}: {v} out of range ({low}-{high})"
        for v in sorted(values, key=str)
        if not isinstance(v, int) or v < low or v > high
    ]


# ----------------------------------------------------------------------
# Range specs
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class MonthRangeSpec:
    """A single month of the year, or the inclusive span min..max."""

    min: int
    max: int | None = None

    def __post_init__(self) -> None:
        if self.max is None:
            object.__setattr__(self, "max", self.min)
        errors = _check_range("month", frozenset({self.min, self.max}), 1, 12)
        if not errors and self.max < self.min:
            errors.append(f"month range max {self.max} < min {self.min}")
        if errors:
            raise FilterError(errors)

    @property
    def is_single(self) -> bool:
        return self.min == self.max


@dataclass(frozen=True)
class DayRangeSpec:
    """A single day of the month, or the inclusive span min..max."""

    min: int
    max: int | None = None

    def __post_init__(self) -> None:
        if self.max is None:
            object.__setattr__(self, "max", self.min)
        errors = _check_range("day", frozenset({self.min, self.max}), 1, 31)
        if not errors and self.max < self.min:
            errors.append(f"day range max {self.max} < min {self.min}")
        if errors:
            raise FilterError(errors)

    @property
    def is_single(self) -> bool:
        return self.min == self.max


@dataclass(frozen=True)
class HourRangeInDay:
    """Working period within any day, e.g. HourRangeInDay(8, 18) or ("08:30", "12:00").

    An end of 00:00 (or 24) is midnight at the end of the day.
    """

    start: time
    end: time

    def __post_init__(self) -> None:
        _coerce_times(self)

    def bind(self, day: date) -> Interval:
        """Concrete interval of this period on the given day."""
        return _bind(day, self.start, self.end)


@dataclass(frozen=True)
class DayHourRange:
    """Working period on one weekday only (0=Monday..6=Sunday)."""

    weekday: int
    start: time
    end: time

    def __post_init__(self) -> None:
        if self.weekday not in range(7):
            raise FilterError(f"weekday {self.weekday} out of range (0-6)")
        _coerce_times(self)

    def applies_to(self, day: date) -> bool:
        return day.weekday() == self.weekday

    def bind(self, day: date) -> Interval:
        return _bind(day, self.start, self.end)


def _coerce_times(spec: HourRangeInDay | DayHourRange) -> None:
    start = parse_time(spec.start)
    end = parse_time(spec.end)
    object.__setattr__(spec, "start", start)
    object.__setattr__(spec, "end", end)
    if end != _MIDNIGHT and end < start:
        raise FilterError(
            f"hour range end {end.isoformat()} is before start {start.isoformat()}"
        )


def _bind(day: date, start: time, end: time) -> Interval:
    dt_start = datetime.combine(day, start)
    if end == _MIDNIGHT:
        # Midnight = end of this day
        dt_end = datetime.combine(day, _MIDNIGHT) + timedelta(days=1)
    else:
        dt_end = datetime.combine(day, end)
    return Interval(dt_start, dt_end)


# ----------------------------------------------------------------------
# Filters
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class PeriodFilter:
    """Restriction sets over calendar components plus excluded periods."""

    years: frozenset[int] = frozenset()
    months: frozenset[int] = frozenset()
    days: frozenset[int] = frozenset()
    weekdays: frozenset[int] = frozenset()
    hours: frozenset[int] = frozenset()
    minutes: frozenset[int] = frozenset()
    exclude_periods: tuple[Interval, ...] = ()

    def __post_init__(self) -> None:
        for name in ("years", "months", "days", "weekdays", "hours", "minutes"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(self, "exclude_periods", tuple(self.exclude_periods))

        errors: list[str] = []
        errors.extend(_check_range("year", self.years, 1, 9999))
        errors.extend(_check_range("month", self.months, 1, 12))
        errors.extend(_check_range("day", self.days, 1, 31))
        errors.extend(_check_range("weekday", self.weekdays, 0, 6))
        errors.extend(_check_range("hour", self.hours, 0, 23))
        errors.extend(_check_range("minute", self.minutes, 0, 59))
        for i, period in enumerate(self.exclude_periods):
            if not isinstance(period, Interval):
                errors.append(f"exclude_periods[{i}]: expected Interval, got {period!r}")
        if errors:
            raise FilterError(errors)

    def is_excluded(self, target: Interval) -> bool:
        """True if target overlaps any excluded period."""
        return bool(self.exclude_periods) and overlaps_any(self.exclude_periods, target)


@dataclass(frozen=True)
class CollectorFilter(PeriodFilter):
    """PeriodFilter plus specs for emitting coalesced multi-unit periods."""

    collecting_months: tuple[MonthRangeSpec, ...] = ()
    collecting_days: tuple[DayRangeSpec, ...] = ()
    collecting_hours: tuple[HourRangeInDay, ...] = ()
    collecting_day_hours: tuple[DayHourRange, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        for name in (
            "collecting_months",
            "collecting_days",
            "collecting_hours",
            "collecting_day_hours",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def has_collecting_hours(self) -> bool:
        return bool(self.collecting_hours or self.collecting_day_hours)


def weekdays_of(names: Iterable[int | str]) -> frozenset[int]:
    """Weekday set from ints (0=Monday) or names like 'mon'/'Monday'."""
    lookup = {"mon": 0, "tue": 1, "wed": 2, "thu": 3, "fri": 4, "sat": 5, "sun": 6}
    result = set()
    for name in names:
        if isinstance(name, str):
            key = name.strip().lower()[:3]
            if key not in lookup:
                raise FilterError(f"Unknown weekday name: {name!r}")
            result.add(lookup[key])
        else:
            result.add(name)
    return frozenset(result)
