"""InstantDiff: calendar difference between two instants.

All counts are computed once by InstantDiff.between() and stored on a
frozen dataclass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from calendar_arithmetic.config import get_calendar_config
from calendar_arithmetic.formatting import DurationFormatter
from calendar_arithmetic.logging import get_logger
from calendar_arithmetic.ranges import (
    DAYS_PER_WEEK,
    MONTHS_PER_YEAR,
    QUARTERS_PER_YEAR,
    add_months,
    add_years,
    days_in_month,
    quarter_of_month,
    start_of_week,
    year_of,
)
from calendar_arithmetic.types import ContractViolationError

logger = get_logger(__name__)

_DEFAULT_FORMATTER = DurationFormatter()


def round_half_away(value: float) -> int:
    """Round to the nearest int; .5 rounds away from zero (2.5 -> 3, -2.5 -> -3)."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _calc_years(date1: datetime, date2: datetime) -> int:
    if date1 == date2:
        return 0
    compare_day = min(date2.day, days_in_month(date1.year, date2.month))
    compare = datetime.combine(date(date1.year, date2.month, compare_day), date2.time())
    if date2 > date1:
        if compare < date1:
            compare = add_years(compare, 1)
    elif compare > date1:
        compare = add_years(compare, -1)
    return date2.year - compare.year


def _calc_months(date1: datetime, date2: datetime) -> int:
    if date1 == date2:
        return 0
    compare_day = min(date2.day, days_in_month(date1.year, date1.month))
    compare = datetime.combine(date(date1.year, date1.month, compare_day), date2.time())
    if date2 > date1:
        if compare < date1:
            compare = add_months(compare, 1)
    elif compare > date1:
        compare = add_months(compare, -1)
    return (date2.year * MONTHS_PER_YEAR + date2.month) - (
        compare.year * MONTHS_PER_YEAR + compare.month
    )


def _calc_quarters(date1: datetime, date2: datetime, year_base_month: int) -> int:
    if date1 == date2:
        return 0
    year1 = year_of(year_base_month, date1.year, date1.month)
    quarter1 = quarter_of_month(year_base_month, date1.month)
    year2 = year_of(year_base_month, date2.year, date2.month)
    quarter2 = quarter_of_month(year_base_month, date2.month)
    return (year2 * QUARTERS_PER_YEAR + quarter2) - (year1 * QUARTERS_PER_YEAR + quarter1)


def _week_start_clamped(d: date, first_day_of_week: int) -> date:
    # The week holding 0001-01-01 may start before date.min
    try:
        return start_of_week(d, first_day_of_week)
    except OverflowError:
        return date.min


def _calc_weeks(date1: datetime, date2: datetime, first_day_of_week: int) -> int:
    if date1 == date2:
        return 0
    week1 = _week_start_clamped(date1.date(), first_day_of_week)
    week2 = _week_start_clamped(date2.date(), first_day_of_week)
    return int((week2 - week1).days / DAYS_PER_WEEK)


@dataclass(frozen=True)
class InstantDiff:
    """Difference between date1 and date2 in calendar units.

    years/quarters/months/weeks count calendar rollovers; days/hours/minutes/
    seconds are rounded totals and week_days is the rounded day total in whole
    weeks. The elapsed_* fields break the difference
    down: whole years, then the months left over, then the days left over,
    and so on.
    """

    date1: datetime
    date2: datetime
    difference: timedelta
    first_day_of_week: int
    year_base_month: int
    years: int
    quarters: int
    months: int
    weeks: int
    days: int
    week_days: int
    hours: int
    minutes: int
    seconds: int
    elapsed_years: int
    elapsed_quarters: int
    elapsed_months: int
    elapsed_days: int
    elapsed_hours: int
    elapsed_minutes: int
    elapsed_seconds: int

    @classmethod
    def between(
        cls,
        date1: datetime,
        date2: datetime,
        first_day_of_week: int | None = None,
        year_base_month: int | None = None,
    ) -> InstantDiff:
        config = get_calendar_config()
        if first_day_of_week is None:
            first_day_of_week = config.first_day_of_week
        if year_base_month is None:
            year_base_month = config.year_base_month

        difference = date2 - date1
        years = _calc_years(date1, date2)
        months = _calc_months(date1, date2)
        quarters = _calc_quarters(date1, date2, year_base_month)

        # Elapsed breakdown: add each whole unit back onto date1 in turn
        elapsed_years = years
        elapsed_months = months - elapsed_years * MONTHS_PER_YEAR
        moment = add_months(add_years(date1, elapsed_years), elapsed_months)
        elapsed_days = int((date2 - moment) / timedelta(days=1))
        moment += timedelta(days=elapsed_days)
        elapsed_hours = int((date2 - moment) / timedelta(hours=1))
        moment += timedelta(hours=elapsed_hours)
        elapsed_minutes = int((date2 - moment) / timedelta(minutes=1))
        moment += timedelta(minutes=elapsed_minutes)
        elapsed_seconds = int((date2 - moment) / timedelta(seconds=1))

        result = cls(
            date1=date1,
            date2=date2,
            difference=difference,
            first_day_of_week=first_day_of_week,
            year_base_month=year_base_month,
            years=years,
            quarters=quarters,
            months=months,
            weeks=_calc_weeks(date1, date2, first_day_of_week),
            days=round_half_away(difference / timedelta(days=1)),
            week_days=int(round_half_away(difference / timedelta(days=1)) / DAYS_PER_WEEK),
            hours=round_half_away(difference / timedelta(hours=1)),
            minutes=round_half_away(difference / timedelta(minutes=1)),
            seconds=round_half_away(difference / timedelta(seconds=1)),
            elapsed_years=elapsed_years,
            elapsed_quarters=quarters,
            elapsed_months=elapsed_months,
            elapsed_days=elapsed_days,
            elapsed_hours=elapsed_hours,
            elapsed_minutes=elapsed_minutes,
            elapsed_seconds=elapsed_seconds,
        )
        logger.debug(
            "instant_diff",
            date1=date1.isoformat(),
            date2=date2.isoformat(),
            difference=str(difference),
        )
        return result

    @property
    def is_empty(self) -> bool:
        return self.difference == timedelta(0)

    def get_description(
        self,
        precision: int | None = None,
        formatter: DurationFormatter | None = None,
    ) -> str:
        """Elapsed breakdown as text, keeping only the first `precision` components.

        Raises ContractViolationError when precision is not positive.
        """
        if precision is not None and precision <= 0:
            raise ContractViolationError(
                "InstantDiff.get_description", f"precision must be positive, got {precision}"
            )
        formatter = formatter or _DEFAULT_FORMATTER

        elapsed = [
            self.elapsed_years,
            self.elapsed_months,
            self.elapsed_days,
            self.elapsed_hours,
            self.elapsed_minutes,
            self.elapsed_seconds,
        ]
        if precision is not None:
            for i in range(precision, len(elapsed)):
                elapsed[i] = 0
        return formatter.get_duration(*elapsed)

    def __str__(self) -> str:
        return self.get_description()
