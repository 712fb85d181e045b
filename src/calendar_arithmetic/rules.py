"""WorkingRules: the weekday / working-hour / exclusion rules of a calendar engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from calendar_arithmetic.collector import PeriodCollector
from calendar_arithmetic.filters import (
    WEEKEND_DAYS,
    WORKING_WEEK_DAYS,
    CollectorFilter,
    DayHourRange,
    HourRangeInDay,
)
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.types import SeekDirection


@dataclass
class WorkingRules:
    """Mutable rule lists. Callers may edit them between calculations.

    A fresh CollectorFilter is built from the lists for every calculation,
    so nothing retains a reference to a filter across calls.
    """

    week_days: list[int] = field(default_factory=list)
    working_hours: list[HourRangeInDay] = field(default_factory=list)
    working_day_hours: list[DayHourRange] = field(default_factory=list)
    exclude_periods: list[Interval] = field(default_factory=list)

    def add_working_week_days(self) -> None:
        """Add Monday through Friday."""
        self.week_days.extend(sorted(WORKING_WEEK_DAYS))

    def add_weekend_week_days(self) -> None:
        """Add Saturday and Sunday."""
        self.week_days.extend(sorted(WEEKEND_DAYS))

    @property
    def has_working_rules(self) -> bool:
        return bool(self.week_days or self.working_hours or self.working_day_hours)

    @property
    def is_unrestricted(self) -> bool:
        return not self.has_working_rules and not self.exclude_periods

    def to_filter(self) -> CollectorFilter:
        """Filter selecting working time. Exclusions are left out and are
        subtracted afterwards, so a partly excluded working block keeps its
        remaining part.
        """
        return CollectorFilter(
            weekdays=self.week_days,
            collecting_hours=self.working_hours,
            collecting_day_hours=self.working_day_hours,
        )

    def available_periods(
        self,
        limits: Interval,
        direction: SeekDirection = SeekDirection.FORWARD,
    ) -> list[Interval]:
        """Working periods inside limits, before exclusions are applied.

        Without weekday or hour rules the whole of limits is available.
        """
        if not self.has_working_rules:
            return [limits]

        collector = PeriodCollector(self.to_filter(), limits, direction)
        if self.working_hours or self.working_day_hours:
            return collector.collect_hours()
        # Whole days give the same union as their 24 hours
        return collector.collect_days()
