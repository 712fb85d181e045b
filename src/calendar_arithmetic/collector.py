"""PeriodCollector: emits the calendar units (or coalesced spans) matching a filter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from calendar_arithmetic.filters import CollectorFilter
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.ranges import (
    day_range,
    day_span,
    days_in_month,
    days_of,
    hours_of,
    minutes_of,
    month_range,
    month_span,
    months_of,
)
from calendar_arithmetic.types import Scope, SeekDirection
from calendar_arithmetic.visitor import PeriodVisitor


@dataclass
class CollectorContext:
    """Traversal state for one collect_* call."""

    scope: Scope

    def __str__(self) -> str:
        return f"CollectorContext(scope={self.scope.name})"


class PeriodCollector(PeriodVisitor):
    """Collects matching periods at one granularity per call.

    Each collect_* call returns the intervals it found and also appends them
    to `periods`, which accumulates across calls.
    """

    filter: CollectorFilter

    def __init__(
        self,
        filter: CollectorFilter,
        limits: Interval,
        seek_direction: SeekDirection = SeekDirection.FORWARD,
    ) -> None:
        super().__init__(filter, limits, seek_direction)
        self.periods: list[Interval] = []
        self._collected: list[Interval] = []

    def collect_years(self) -> list[Interval]:
        return self._collect(Scope.YEAR)

    def collect_months(self) -> list[Interval]:
        return self._collect(Scope.MONTH)

    def collect_days(self) -> list[Interval]:
        return self._collect(Scope.DAY)

    def collect_hours(self) -> list[Interval]:
        return self._collect(Scope.HOUR)

    def collect_minutes(self) -> list[Interval]:
        return self._collect(Scope.MINUTE)

    def _collect(self, scope: Scope) -> list[Interval]:
        self._collected = []
        self.visit(CollectorContext(scope=scope))
        collected = self._collected
        self._collected = []
        self.periods.extend(collected)
        self._log.debug("periods_collected", scope=scope.name, count=len(collected))
        return collected

    def _emit(self, periods: list[Interval]) -> None:
        self._collected.extend(self._ordered(periods))

    # ------------------------------------------------------------------
    # Descent gating
    # ------------------------------------------------------------------

    def enter_years(self, years: list[Interval], context: CollectorContext) -> bool:
        return context.scope.is_deeper_than(Scope.YEAR)

    def enter_months(self, year: Interval, context: CollectorContext) -> bool:
        return context.scope.is_deeper_than(Scope.MONTH)

    def enter_days(self, month: Interval, context: CollectorContext) -> bool:
        return context.scope.is_deeper_than(Scope.DAY)

    def enter_hours(self, day: Interval, context: CollectorContext) -> bool:
        return context.scope.is_deeper_than(Scope.HOUR)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def on_visit_years(self, years: list[Interval], context: CollectorContext) -> bool:
        if context.scope is not Scope.YEAR:
            return True
        self._emit([
            y for y in years
            if self.is_matching_year(y, context) and self.check_limits(y)
        ])
        return False

    def on_visit_year(self, year: Interval, context: CollectorContext) -> bool:
        if context.scope is not Scope.MONTH:
            return True

        y = year.start.year
        specs = self.filter.collecting_months
        if not specs:
            self._emit([
                m for m in months_of(year)
                if self.is_matching_month(m, context) and self.check_limits(m)
            ])
            return False

        found: list[Interval] = []
        for spec in specs:
            if spec.is_single:
                candidate = month_range(y, spec.min)
                if self.is_matching_month(candidate, context) and self.check_limits(candidate):
                    found.append(candidate)
                continue
            # Spans are all-or-nothing
            months = [month_range(y, m) for m in range(spec.min, spec.max + 1)]
            span = month_span(y, spec.min, spec.max)
            if all(self.is_matching_month(m, context) for m in months) and self.check_limits(span):
                found.append(span)
        self._emit(found)
        return False

    def on_visit_month(self, month: Interval, context: CollectorContext) -> bool:
        if context.scope is not Scope.DAY:
            return True

        y, m = month.start.year, month.start.month
        specs = self.filter.collecting_days
        if not specs:
            self._emit([
                d for d in days_of(month)
                if self.is_matching_day(d, context) and self.check_limits(d)
            ])
            return False

        last_day = days_in_month(y, m)
        found: list[Interval] = []
        for spec in specs:
            if spec.max > last_day:
                # e.g. day 31 in a 30-day month
                continue
            if spec.is_single:
                candidate = day_range(date(y, m, spec.min))
                if self.is_matching_day(candidate, context) and self.check_limits(candidate):
                    found.append(candidate)
                continue
            days = [day_range(date(y, m, d)) for d in range(spec.min, spec.max + 1)]
            span = day_span(y, m, spec.min, spec.max)
            if all(self.is_matching_day(d, context) for d in days) and self.check_limits(span):
                found.append(span)
        self._emit(found)
        return False

    def on_visit_day(self, day: Interval, context: CollectorContext) -> bool:
        if context.scope is not Scope.HOUR:
            return True

        if not self.filter.has_collecting_hours:
            self._emit([
                h for h in hours_of(day)
                if self.is_matching_hour(h, context) and self.check_limits(h)
            ])
            return False

        if not self.is_matching_day(day, context):
            return False

        d = day.start.date()
        candidates = [spec.bind(d) for spec in self.filter.collecting_hours]
        candidates.extend(
            spec.bind(d)
            for spec in self.filter.collecting_day_hours
            if spec.applies_to(d)
        )
        self._emit(sorted(
            c for c in candidates
            if self.check_exclude_periods(c) and self.check_limits(c)
        ))
        return False

    def on_visit_hour(self, hour: Interval, context: CollectorContext) -> bool:
        if context.scope is not Scope.MINUTE:
            return True
        self._emit([
            m for m in minutes_of(hour)
            if self.is_matching_minute(m, context) and self.check_limits(m)
        ])
        return False

    def __str__(self) -> str:
        return "[" + ", ".join(str(p) for p in self.periods) + "]"
