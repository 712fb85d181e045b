"""DateOffset: move an instant by a duration, counting only available time.

Available time is the include set (or all time when it is empty) minus the
exclude set. The walk consumes available intervals one by one in the seek
direction until the offset is used up.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from calendar_arithmetic.intervals import ANYTIME, Interval, combine, subtract
from calendar_arithmetic.logging import get_logger
from calendar_arithmetic.types import ContractViolationError, SeekBoundaryMode, SeekDirection

_ZERO = timedelta(0)


def _shift(start: datetime, offset: timedelta) -> datetime | None:
    try:
        return start + offset
    except OverflowError:
        return None


def find_next_period(
    start: datetime, periods: list[Interval]
) -> tuple[Interval | None, datetime]:
    """Period containing start, else the nearest one after it.

    Returns (period, seek_moment). seek_moment is start when a period contains
    it, otherwise the start of the following period.
    """
    nearest: Interval | None = None
    moment = start
    best: timedelta | None = None

    for period in periods:
        if period.has_inside(start):
            return period, start
        if period.end < start:
            continue
        distance = period.start - start
        if best is not None and distance >= best:
            continue
        best = distance
        nearest = period
        moment = period.start

    return nearest, moment


def find_previous_period(
    start: datetime, periods: list[Interval]
) -> tuple[Interval | None, datetime]:
    """Period containing start, else the nearest one before it (seek_moment = its end)."""
    nearest: Interval | None = None
    moment = start
    best: timedelta | None = None

    for period in periods:
        if period.has_inside(start):
            return period, start
        if period.start > start:
            continue
        distance = start - period.end
        if best is not None and distance >= best:
            continue
        best = distance
        nearest = period
        moment = period.end

    return nearest, moment


class DateOffset:
    """Adds and subtracts durations over include/exclude interval sets.

    Both sets are plain lists owned by the caller and may be changed between
    calls. An empty include set means "anytime".

    Example:
        offset = DateOffset(exclude_periods=[Interval(holiday_start, holiday_end)])
        offset.add(datetime(2011, 4, 12), timedelta(days=3))
    """

    def __init__(
        self,
        include_periods: list[Interval] | None = None,
        exclude_periods: list[Interval] | None = None,
    ) -> None:
        self._include_periods: list[Interval] = (
            include_periods if include_periods is not None else []
        )
        self._exclude_periods: list[Interval] = (
            exclude_periods if exclude_periods is not None else []
        )
        self._log = get_logger(__name__)

    @property
    def include_periods(self) -> list[Interval]:
        return self._include_periods

    @property
    def exclude_periods(self) -> list[Interval]:
        return self._exclude_periods

    def _is_unrestricted(self) -> bool:
        return not self._include_periods and not self.exclude_periods

    def add(
        self,
        start: datetime,
        offset: timedelta,
        mode: SeekBoundaryMode = SeekBoundaryMode.NEXT,
    ) -> datetime | None:
        """Instant `offset` of available time after start, or None."""
        return self._seek(start, offset, SeekDirection.FORWARD, mode)

    def subtract(
        self,
        start: datetime,
        offset: timedelta,
        mode: SeekBoundaryMode = SeekBoundaryMode.NEXT,
    ) -> datetime | None:
        """Instant `offset` of available time before start, or None."""
        return self._seek(start, offset, SeekDirection.BACKWARD, mode)

    def _seek(
        self,
        start: datetime,
        offset: timedelta,
        direction: SeekDirection,
        mode: SeekBoundaryMode,
    ) -> datetime | None:
        self._log.debug(
            "seek_start",
            start=start.isoformat(),
            offset=str(offset),
            direction=direction.value,
            mode=mode.value,
        )

        if self._is_unrestricted():
            signed = offset if direction is SeekDirection.FORWARD else -offset
            return _shift(start, signed)

        if offset < _ZERO:
            offset = -offset
            direction = direction.reverse()

        end, remaining = self._calculate_end(start, offset, direction, mode)
        self._log.debug(
            "seek_end",
            start=start.isoformat(),
            end=end.isoformat() if end else None,
            remaining=str(remaining) if remaining is not None else None,
        )
        return end

    def _available_periods(self, search: list[Interval]) -> list[Interval]:
        """search minus the excluded periods, combined into a sorted disjoint list."""
        exclude = list(self.exclude_periods)
        available = subtract(search, exclude) if exclude else list(search)
        if len(available) > 1:
            available = combine(available)
        return available

    def _calculate_end(
        self,
        start: datetime,
        offset: timedelta,
        direction: SeekDirection,
        mode: SeekBoundaryMode,
        search_periods: list[Interval] | None = None,
    ) -> tuple[datetime | None, timedelta | None]:
        """Walk available time from start.

        Returns (end, remaining). remaining is None once the offset is fully
        consumed; otherwise it is the unconsumed part (the whole offset when
        no start period exists) and end is None.

        Raises ContractViolationError for a negative offset.
        """
        if offset < _ZERO:
            raise ContractViolationError(
                "_calculate_end", f"offset must not be negative, got {offset}"
            )

        if search_periods is None:
            search_periods = self._include_periods
        search = list(search_periods) or [ANYTIME]

        available = self._available_periods(search)
        if not available:
            return None, offset

        if direction is SeekDirection.FORWARD:
            start_period, seek_moment = find_next_period(start, available)
        else:
            start_period, seek_moment = find_previous_period(start, available)
        if start_period is None:
            return None, offset

        if offset == _ZERO:
            return seek_moment, None

        remaining = offset
        index = available.index(start_period)

        if direction is SeekDirection.FORWARD:
            for i in range(index, len(available)):
                gap = available[i]
                gap_remaining = gap.end - seek_moment
                self._log.debug(
                    "seek_forward",
                    gap=str(gap),
                    gap_remaining=str(gap_remaining),
                    remaining=str(remaining),
                )
                if _fits(gap_remaining, remaining, mode):
                    return _shift(seek_moment, remaining), None
                remaining -= gap_remaining
                if i == len(available) - 1:
                    return None, remaining
                seek_moment = available[i + 1].start
        else:
            for i in range(index, -1, -1):
                gap = available[i]
                gap_remaining = seek_moment - gap.start
                self._log.debug(
                    "seek_backward",
                    gap=str(gap),
                    gap_remaining=str(gap_remaining),
                    remaining=str(remaining),
                )
                if _fits(gap_remaining, remaining, mode):
                    return _shift(seek_moment, -remaining), None
                remaining -= gap_remaining
                if i == 0:
                    return None, remaining
                seek_moment = available[i - 1].end

        return None, remaining


def _fits(gap_remaining: timedelta, remaining: timedelta, mode: SeekBoundaryMode) -> bool:
    if mode is SeekBoundaryMode.FILL:
        return gap_remaining >= remaining
    return gap_remaining > remaining
