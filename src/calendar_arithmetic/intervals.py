"""Time intervals, gap calculation and period combination.

Intervals are closed: [start, end]. Two intervals that only share an edge
touch but do not overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable


@dataclass(frozen=True, order=True)
class Interval:
    """Immutable time range. Never constructed with start > end."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval start {self.start.isoformat()} is after "
                f"end {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_moment(self) -> bool:
        return self.start == self.end

    def has_inside(self, target: datetime | Interval) -> bool:
        """True if the instant (or the whole interval) lies within this one."""
        if isinstance(target, Interval):
            return self.start <= target.start and target.end <= self.end
        return self.start <= target <= self.end

    def overlaps_with(self, other: Interval) -> bool:
        if self.start == other.start and self.end == other.end:
            return True
        return self.start < other.end and other.start < self.end

    def intersection(self, other: Interval) -> Interval | None:
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start > end:
            return None
        return Interval(start, end)

    def __str__(self) -> str:
        return f"[{self.start.isoformat()} ~ {self.end.isoformat()}]"


ANYTIME = Interval(datetime.min, datetime.max)


def overlaps_any(intervals: Iterable[Interval], target: Interval) -> bool:
    """True if target overlaps at least one of the intervals."""
    return any(iv.overlaps_with(target) for iv in intervals)


def combine(intervals: Iterable[Interval]) -> list[Interval]:
    """Merge overlapping and touching intervals into a sorted disjoint list."""
    ordered = sorted(intervals, key=lambda iv: (iv.start, iv.end))
    result: list[Interval] = []

    for iv in ordered:
        if result and iv.start <= result[-1].end:
            last = result[-1]
            if iv.end > last.end:
                result[-1] = Interval(last.start, iv.end)
        else:
            result.append(iv)

    return result


def gaps(covering: Iterable[Interval], bound: Interval) -> list[Interval]:
    """Return the sub-intervals of bound not covered by any covering interval.

    Zero-length gaps are dropped. The result is sorted and disjoint.
    """
    result: list[Interval] = []
    cursor = bound.start

    for iv in combine(covering):
        if iv.end <= bound.start:
            continue
        if iv.start >= bound.end:
            break
        if iv.start > cursor:
            result.append(Interval(cursor, iv.start))
        if iv.end > cursor:
            cursor = iv.end

    if cursor < bound.end:
        result.append(Interval(cursor, bound.end))

    return result


def subtract(search: Iterable[Interval], exclude: list[Interval]) -> list[Interval]:
    """Remove the excluded ranges from each search interval."""
    result: list[Interval] = []
    for period in search:
        if exclude and overlaps_any(exclude, period):
            result.extend(gaps(exclude, period))
        else:
            result.append(period)
    return result


def total_duration(intervals: Iterable[Interval]) -> timedelta:
    return sum((iv.duration for iv in intervals), timedelta(0))
