"""Top-down walk over Years -> Months -> Days -> Hours -> Minutes.

Subclasses override the hooks. Every hook returns True by default, so a bare
PeriodVisitor walks every unit overlapping the limits. Returning False from
an on_visit_* hook prunes that unit's subtree; returning False from an
enter_* hook stops before descending into the next level.

The start_*_visit methods walk the other way round: open-ended from one
unit, forward or backward, until the unit's on_visit_* hook returns False.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable

from calendar_arithmetic.filters import PeriodFilter
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.logging import get_logger
from calendar_arithmetic.ranges import (
    add_months,
    day_range,
    days_of,
    hour_range,
    hours_of,
    minutes_of,
    month_range,
    months_of,
    year_range,
    years_of,
)
from calendar_arithmetic.types import SeekDirection

# Open-ended seeks stop one year short of the representable end
_SEEK_MIN = datetime.min
_SEEK_MAX = datetime.max.replace(year=datetime.max.year - 1)


class PeriodVisitor:
    """Walks the calendar units overlapping a limits interval."""

    def __init__(
        self,
        filter: PeriodFilter,
        limits: Interval,
        seek_direction: SeekDirection = SeekDirection.FORWARD,
    ) -> None:
        self.filter = filter
        self.limits = limits
        self.seek_direction = seek_direction
        self._log = get_logger(__name__)

    def _ordered(self, units: list[Interval]) -> list[Interval]:
        if self.seek_direction is SeekDirection.BACKWARD:
            return list(reversed(units))
        return units

    def visit(self, context: Any, limits: Interval | None = None) -> None:
        """Walk every unit overlapping limits (default: self.limits).

        A moment-length period contains no units and visits nothing.
        """
        period = limits if limits is not None else self.limits
        if period.is_moment:
            return

        self._log.debug("visit_start", period=str(period), context=str(context))
        self.on_visit_start()

        years = years_of(period)
        if self.on_visit_years(years, context) and self.enter_years(years, context):
            for year in self._ordered(years):
                if not year.overlaps_with(period) or not self.on_visit_year(year, context):
                    continue
                if not self.enter_months(year, context):
                    continue
                self._visit_months(year, period, context)

        self.on_visit_end()
        self._log.debug("visit_end", period=str(period), context=str(context))

    def _visit_months(self, year: Interval, period: Interval, context: Any) -> None:
        for month in self._ordered(months_of(year)):
            if not month.overlaps_with(period) or not self.on_visit_month(month, context):
                continue
            if not self.enter_days(month, context):
                continue
            for day in self._ordered(days_of(month)):
                if not day.overlaps_with(period) or not self.on_visit_day(day, context):
                    continue
                if not self.enter_hours(day, context):
                    continue
                for hour in self._ordered(hours_of(day)):
                    if not hour.overlaps_with(period) or not self.on_visit_hour(hour, context):
                        continue
                    if not self.enter_minutes(hour, context):
                        continue
                    for minute in self._ordered(minutes_of(hour)):
                        if minute.overlaps_with(period):
                            self.on_visit_minute(minute, context)

    # ------------------------------------------------------------------
    # Open-ended seeks
    # ------------------------------------------------------------------

    def start_year_visit(
        self, year: Interval, context: Any, direction: SeekDirection | None = None
    ) -> Interval | None:
        """Step year by year from year until on_visit_year returns False.

        Returns the year that stopped the walk, or None when the walk runs
        into the representable range first.
        """
        return self._seek_units(
            "year", year, context, direction, self.on_visit_year,
            lambda unit, step: year_range(unit.start.year + step),
        )

    def start_month_visit(
        self, month: Interval, context: Any, direction: SeekDirection | None = None
    ) -> Interval | None:
        """Month-by-month counterpart of start_year_visit (on_visit_month)."""
        def step_month(unit: Interval, step: int) -> Interval:
            moved = add_months(unit.start, step)
            return month_range(moved.year, moved.month)

        return self._seek_units("month", month, context, direction, self.on_visit_month, step_month)

    def start_day_visit(
        self, day: Interval, context: Any, direction: SeekDirection | None = None
    ) -> Interval | None:
        """Day-by-day counterpart of start_year_visit (on_visit_day)."""
        return self._seek_units(
            "day", day, context, direction, self.on_visit_day,
            lambda unit, step: day_range(unit.start.date() + timedelta(days=step)),
        )

    def start_hour_visit(
        self, hour: Interval, context: Any, direction: SeekDirection | None = None
    ) -> Interval | None:
        """Hour-by-hour counterpart of start_year_visit (on_visit_hour)."""
        return self._seek_units(
            "hour", hour, context, direction, self.on_visit_hour,
            lambda unit, step: hour_range(unit.start + timedelta(hours=step)),
        )

    def _seek_units(
        self,
        unit_name: str,
        unit: Interval,
        context: Any,
        direction: SeekDirection | None,
        on_visit: Callable[[Interval, Any], bool],
        advance: Callable[[Interval, int], Interval],
    ) -> Interval | None:
        direction = direction or self.seek_direction
        step = 1 if direction is SeekDirection.FORWARD else -1
        self._log.debug(
            "seek_visit_start", unit=unit_name, start=str(unit), direction=direction.value
        )

        last_visited: Interval | None = None
        self.on_visit_start()
        while unit.start > _SEEK_MIN and unit.end < _SEEK_MAX:
            if not on_visit(unit, context):
                last_visited = unit
                break
            unit = advance(unit, step)
        self.on_visit_end()

        self._log.debug(
            "seek_visit_end",
            unit=unit_name,
            last_visited=str(last_visited) if last_visited else None,
        )
        return last_visited

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def on_visit_start(self) -> None:
        pass

    def on_visit_end(self) -> None:
        pass

    def enter_years(self, years: list[Interval], context: Any) -> bool:
        return True

    def enter_months(self, year: Interval, context: Any) -> bool:
        return True

    def enter_days(self, month: Interval, context: Any) -> bool:
        return True

    def enter_hours(self, day: Interval, context: Any) -> bool:
        return True

    def enter_minutes(self, hour: Interval, context: Any) -> bool:
        return True

    def on_visit_years(self, years: list[Interval], context: Any) -> bool:
        return True

    def on_visit_year(self, year: Interval, context: Any) -> bool:
        return True

    def on_visit_month(self, month: Interval, context: Any) -> bool:
        return True

    def on_visit_day(self, day: Interval, context: Any) -> bool:
        return True

    def on_visit_hour(self, hour: Interval, context: Any) -> bool:
        return True

    def on_visit_minute(self, minute: Interval, context: Any) -> bool:
        return True

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def check_limits(self, target: Interval) -> bool:
        """True if target lies entirely inside the limits."""
        return self.limits.has_inside(target)

    def check_exclude_periods(self, target: Interval) -> bool:
        """True if target overlaps no excluded period."""
        return not self.filter.is_excluded(target)

    def is_matching_year(self, year: Interval, context: Any) -> bool:
        f = self.filter
        if f.years and year.start.year not in f.years:
            return False
        return self.check_exclude_periods(year)

    def is_matching_month(self, month: Interval, context: Any) -> bool:
        f = self.filter
        start = month.start
        if f.years and start.year not in f.years:
            return False
        if f.months and start.month not in f.months:
            return False
        return self.check_exclude_periods(month)

    def is_matching_day(self, day: Interval, context: Any) -> bool:
        f = self.filter
        start = day.start
        if f.years and start.year not in f.years:
            return False
        if f.months and start.month not in f.months:
            return False
        if f.days and start.day not in f.days:
            return False
        if f.weekdays and start.weekday() not in f.weekdays:
            return False
        return self.check_exclude_periods(day)

    def is_matching_hour(self, hour: Interval, context: Any) -> bool:
        f = self.filter
        if f.hours and hour.start.hour not in f.hours:
            return False
        return self.is_matching_day(hour, context)

    def is_matching_minute(self, minute: Interval, context: Any) -> bool:
        f = self.filter
        if f.minutes and minute.start.minute not in f.minutes:
            return False
        return self.is_matching_hour(minute, context)
