"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from calendar_arithmetic.intervals import Interval, combine, subtract

if TYPE_CHECKING:
    from calendar_arithmetic.rules import WorkingRules

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# 24-hour timeline, each char = 30 minutes (48 chars per day)
_CHARS_PER_DAY = 48
_MINUTES_PER_CHAR = 30


def show_intervals(
    intervals: list[Interval],
    start: date,
    end: date,
    marks: list[datetime] | None = None,
) -> str:
    """Print ASCII view of available time for a date range.

    Each row is one day. '#' = a half-hour slot touched by an interval,
    '.' = unavailable, '|' = the slot holding one of the marked instants.
    Returns the string and also prints to stdout.

    Args:
        intervals: available periods (any order, may overlap)
        start: First date to show (inclusive)
        end: Last date to show (exclusive)
        marks: instants to highlight, e.g. the result of an add()
    """
    lines: list[str] = []
    merged = combine(intervals)
    marks = marks or []

    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    lines.append(f"{'':>16s}  {header_hours}")

    current = start
    while current < end:
        label = f"{_DAY_NAMES[current.weekday()]} {current.strftime('%d %b')}"
        day_start = datetime.combine(current, time(0, 0))
        row = list("." * _CHARS_PER_DAY)

        for i in range(_CHARS_PER_DAY):
            slot = Interval(
                day_start + timedelta(minutes=i * _MINUTES_PER_CHAR),
                day_start + timedelta(minutes=(i + 1) * _MINUTES_PER_CHAR),
            )
            if any(iv.overlaps_with(slot) for iv in merged):
                row[i] = "#"
            if any(slot.start <= m < slot.end for m in marks):
                row[i] = "|"

        lines.append(f"{label:>16s}  {''.join(row)}")
        current += timedelta(days=1)

    result = "\n".join(lines)
    print(result)
    return result


def show_rules(
    rules: WorkingRules,
    start: date,
    end: date,
    marks: list[datetime] | None = None,
) -> str:
    """Print ASCII view of the time a WorkingRules leaves available."""
    limits = Interval(
        datetime.combine(start, time(0, 0)), datetime.combine(end, time(0, 0))
    )
    periods = rules.available_periods(limits)
    if rules.exclude_periods:
        periods = subtract(combine(periods), list(rules.exclude_periods))
    return show_intervals(periods, start, end, marks)
