"""Calendar unit ranges: years, months, weeks, days, hours and minutes.

All ranges are naive-datetime Intervals whose end is the start of the next
unit. Month and year arithmetic clamps the day to the target month's length.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from calendar_arithmetic.intervals import Interval

DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12
MONTHS_PER_QUARTER = 3
QUARTERS_PER_YEAR = 4
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60


def _start_of_year(year: int) -> datetime:
    # Year 10000 does not exist; the last year ends at datetime.max.
    if year > datetime.max.year:
        return datetime.max
    return datetime(year, 1, 1)


def _start_of_month(year: int, month: int) -> datetime:
    if month > MONTHS_PER_YEAR:
        return _start_of_year(year + 1)
    return datetime(year, month, 1)


def _add_clamped(moment: datetime, delta: timedelta) -> datetime:
    try:
        return moment + delta
    except OverflowError:
        return datetime.max if delta > timedelta(0) else datetime.min


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_years(moment: datetime, years: int) -> datetime:
    """Shift by whole years; Feb 29 becomes Feb 28 in common years."""
    return moment + relativedelta(years=years)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months; the day is clamped (Jan 31 + 1 month = Feb 28/29)."""
    return moment + relativedelta(months=months)


def year_of(year_base_month: int, year: int, month: int) -> int:
    """Fiscal year a (year, month) belongs to when years start at year_base_month."""
    return year if month >= year_base_month else year - 1


def quarter_of_month(year_base_month: int, month: int) -> int:
    """Quarter (1-4) of a month within a year starting at year_base_month."""
    month_index = month - 1
    base_index = year_base_month - 1
    if month_index < base_index:
        month_index += MONTHS_PER_YEAR
    return (month_index - base_index) // MONTHS_PER_QUARTER + 1


def start_of_week(d: date, first_day_of_week: int) -> date:
    """Date of the first day of the week containing d (weekday ints as date.weekday())."""
    return d - timedelta(days=(d.weekday() - first_day_of_week) % DAYS_PER_WEEK)


# ----------------------------------------------------------------------
# Single-unit ranges
# ----------------------------------------------------------------------


def year_range(year: int) -> Interval:
    return Interval(_start_of_year(year), _start_of_year(year + 1))


def month_range(year: int, month: int) -> Interval:
    return Interval(_start_of_month(year, month), _start_of_month(year, month + 1))


def month_span(year: int, first: int, last: int) -> Interval:
    """Contiguous months first..last (inclusive) of one year."""
    return Interval(_start_of_month(year, first), _start_of_month(year, last + 1))


def day_range(d: date) -> Interval:
    start = datetime.combine(d, time(0, 0))
    return Interval(start, _add_clamped(start, timedelta(days=1)))


def day_span(year: int, month: int, first: int, last: int) -> Interval:
    """Contiguous days first..last (inclusive) of one month."""
    start = datetime(year, month, first)
    end = _add_clamped(datetime(year, month, last), timedelta(days=1))
    return Interval(start, end)


def hour_range(moment: datetime) -> Interval:
    start = moment.replace(minute=0, second=0, microsecond=0)
    return Interval(start, _add_clamped(start, timedelta(hours=1)))


def minute_range(moment: datetime) -> Interval:
    start = moment.replace(second=0, microsecond=0)
    return Interval(start, _add_clamped(start, timedelta(minutes=1)))


def week_range(moment: datetime, first_day_of_week: int) -> Interval:
    """The 7-day week containing moment.

    Raises OverflowError when the week falls outside the representable range.
    """
    start = datetime.combine(start_of_week(moment.date(), first_day_of_week), time(0, 0))
    return Interval(start, start + timedelta(days=DAYS_PER_WEEK))


# ----------------------------------------------------------------------
# Unit generators (children of a parent range)
# ----------------------------------------------------------------------


def years_of(period: Interval) -> list[Interval]:
    return [
        year_range(y) for y in range(period.start.year, period.end.year + 1)
    ]


def months_of(year: Interval) -> list[Interval]:
    y = year.start.year
    return [month_range(y, m) for m in range(1, MONTHS_PER_YEAR + 1)]


def days_of(month: Interval) -> list[Interval]:
    y, m = month.start.year, month.start.month
    return [
        day_range(date(y, m, d)) for d in range(1, days_in_month(y, m) + 1)
    ]


def hours_of(day: Interval) -> list[Interval]:
    return [
        hour_range(day.start.replace(hour=h)) for h in range(HOURS_PER_DAY)
    ]


def minutes_of(hour: Interval) -> list[Interval]:
    return [
        minute_range(hour.start.replace(minute=m))
        for m in range(MINUTES_PER_HOUR)
    ]
