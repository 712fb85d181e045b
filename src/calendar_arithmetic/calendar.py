"""Calendar-aware offset and difference driven by WorkingRules.

CalendarDateOffset walks week by week: the working periods of each week
become the include set of one DateOffset walk, and whatever duration is left
over carries into the next (or previous) week.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

from calendar_arithmetic.config import get_calendar_config
from calendar_arithmetic.filters import DayHourRange, HourRangeInDay
from calendar_arithmetic.intervals import Interval, combine, gaps, subtract, total_duration
from calendar_arithmetic.logging import get_logger, timed_block
from calendar_arithmetic.offset import DateOffset
from calendar_arithmetic.ranges import week_range
from calendar_arithmetic.rules import WorkingRules
from calendar_arithmetic.types import ContractViolationError, SeekBoundaryMode, SeekDirection

_TICK = timedelta(microseconds=1)


class CalendarDateOffset(DateOffset):
    """DateOffset whose available time comes from weekday and working-hour rules.

    The include set is derived week by week and cannot be set directly.

    Example:
        offset = CalendarDateOffset()
        offset.add_working_week_days()
        offset.working_hours.append(HourRangeInDay("09:00", "18:00"))
        offset.add(datetime(2024, 1, 1, 8), timedelta(hours=10))
        # -> datetime(2024, 1, 2, 10, 0)
    """

    def __init__(
        self,
        rules: WorkingRules | None = None,
        first_day_of_week: int | None = None,
        max_weeks: int | None = None,
    ) -> None:
        super().__init__()
        config = get_calendar_config()
        self.rules = rules if rules is not None else WorkingRules()
        self.first_day_of_week = (
            first_day_of_week if first_day_of_week is not None
            else config.first_day_of_week
        )
        self.max_weeks = max_weeks if max_weeks is not None else config.max_week_iterations
        self._log = get_logger(__name__)

    @property
    def include_periods(self) -> list[Interval]:
        raise ContractViolationError(
            "CalendarDateOffset.include_periods",
            "include periods are derived from the working rules",
        )

    @include_periods.setter
    def include_periods(self, value: list[Interval]) -> None:
        raise ContractViolationError(
            "CalendarDateOffset.include_periods",
            "include periods are derived from the working rules",
        )

    @property
    def exclude_periods(self) -> list[Interval]:
        return self.rules.exclude_periods

    @property
    def week_days(self) -> list[int]:
        return self.rules.week_days

    @property
    def working_hours(self) -> list[HourRangeInDay]:
        return self.rules.working_hours

    @property
    def working_day_hours(self) -> list[DayHourRange]:
        return self.rules.working_day_hours

    def add_working_week_days(self) -> None:
        self.rules.add_working_week_days()

    def add_weekend_week_days(self) -> None:
        self.rules.add_weekend_week_days()

    def _is_unrestricted(self) -> bool:
        return self.rules.is_unrestricted

    def _calculate_end(
        self,
        start: datetime,
        offset: timedelta,
        direction: SeekDirection,
        mode: SeekBoundaryMode,
        search_periods: list[Interval] | None = None,
    ) -> tuple[datetime | None, timedelta | None]:
        if search_periods is not None:
            raise ContractViolationError(
                "CalendarDateOffset._calculate_end",
                "search periods are derived from the working rules",
            )
        if offset < timedelta(0):
            raise ContractViolationError(
                "CalendarDateOffset._calculate_end",
                f"offset must not be negative, got {offset}",
            )

        with timed_block(
            self._log,
            "calendar_seek_timed",
            start=start.isoformat(),
            offset=str(offset),
            direction=direction.value,
        ):
            return self._walk_weeks(start, offset, direction, mode)

    def _walk_weeks(
        self,
        start: datetime,
        offset: timedelta,
        direction: SeekDirection,
        mode: SeekBoundaryMode,
    ) -> tuple[datetime | None, timedelta | None]:
        remaining: timedelta | None = offset
        moment = start
        try:
            week: Interval | None = week_range(start, self.first_day_of_week)
        except OverflowError:
            return None, offset

        for _ in range(self.max_weeks):
            include = self.rules.available_periods(week)
            if include:
                end, remaining = super()._calculate_end(
                    moment, remaining, direction, mode, search_periods=include
                )
                if end is not None or remaining is None:
                    return end, remaining
            else:
                self._log.debug("week_skipped", week=str(week))

            if direction is SeekDirection.FORWARD:
                week = self._find_next_week(week)
                if week is None:
                    return None, remaining
                moment = week.start
            else:
                week = self._find_previous_week(week)
                if week is None:
                    return None, remaining
                moment = week.end
            self._log.debug("week_advanced", week=str(week), remaining=str(remaining))

        self._log.warning(
            "week_limit_reached",
            start=start.isoformat(),
            offset=str(offset),
            max_weeks=self.max_weeks,
        )
        return None, remaining

    def _find_next_week(self, current: Interval) -> Interval | None:
        """Next week holding time that is not excluded, or None past the last date."""
        try:
            if not self.exclude_periods:
                return week_range(current.end, self.first_day_of_week)
            limits = Interval(current.end + _TICK, datetime.max)
            remaining = gaps(self.exclude_periods, limits)
            if not remaining:
                return None
            return week_range(remaining[0].start, self.first_day_of_week)
        except OverflowError:
            return None

    def _find_previous_week(self, current: Interval) -> Interval | None:
        """Previous week holding time that is not excluded, or None before the first date."""
        try:
            if not self.exclude_periods:
                return week_range(current.start - _TICK, self.first_day_of_week)
            limits = Interval(datetime.min, current.start - _TICK)
            remaining = gaps(self.exclude_periods, limits)
            if not remaining:
                return None
            return week_range(remaining[-1].end, self.first_day_of_week)
        except OverflowError:
            return None


def _day_hull(start: datetime, end: datetime) -> Interval:
    """[start, end] widened to whole days."""
    hull_start = datetime.combine(start.date(), time(0, 0))
    hull_end = datetime.combine(end.date(), time(0, 0))
    if hull_end < end:
        try:
            hull_end += timedelta(days=1)
        except OverflowError:
            hull_end = datetime.max
    return Interval(hull_start, hull_end)


class CalendarDateDiff:
    """Available time between two instants under a set of WorkingRules."""

    def __init__(self, rules: WorkingRules | None = None) -> None:
        self.rules = rules if rules is not None else WorkingRules()
        self._log = get_logger(__name__)

    def difference(self, start: datetime, end: datetime) -> timedelta:
        """Available time in [start, end]; negated when end is before start."""
        if start == end:
            return timedelta(0)
        if end < start:
            return -self.difference(end, start)
        if self.rules.is_unrestricted:
            return end - start

        bound = Interval(start, end)
        with timed_block(self._log, "calendar_diff_timed", start=start.isoformat(), end=end.isoformat()):
            if self.rules.has_working_rules:
                candidates = self.rules.available_periods(_day_hull(start, end))
            else:
                candidates = [bound]
            available = combine(candidates)
            if self.rules.exclude_periods:
                available = combine(subtract(available, list(self.rules.exclude_periods)))
            clipped = [
                piece for piece in (iv.intersection(bound) for iv in available)
                if piece is not None
            ]
            result = total_duration(clipped)

        self._log.debug("calendar_diff", start=start.isoformat(), end=end.isoformat(), result=str(result))
        return result
