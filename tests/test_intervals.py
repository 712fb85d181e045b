"""Tests for Interval, gaps(), combine() and calendar unit ranges."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from calendar_arithmetic.intervals import (
    ANYTIME,
    Interval,
    combine,
    gaps,
    overlaps_any,
    subtract,
    total_duration,
)
from calendar_arithmetic.ranges import (
    add_months,
    add_years,
    day_range,
    days_of,
    month_range,
    quarter_of_month,
    start_of_week,
    week_range,
    year_of,
    year_range,
    years_of,
)


def _iv(start: str, end: str) -> Interval:
    return Interval(datetime.fromisoformat(start), datetime.fromisoformat(end))


class TestInterval:

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            _iv("2024-01-02", "2024-01-01")

    def test_moment(self):
        moment = datetime(2024, 1, 1, 12)
        iv = Interval(moment, moment)
        assert iv.is_moment
        assert iv.duration == timedelta(0)

    def test_has_inside_is_closed(self):
        iv = _iv("2024-01-01T09:00", "2024-01-01T18:00")
        assert iv.has_inside(datetime(2024, 1, 1, 9))
        assert iv.has_inside(datetime(2024, 1, 1, 18))
        assert not iv.has_inside(datetime(2024, 1, 1, 18, 0, 0, 1))
        assert iv.has_inside(_iv("2024-01-01T09:00", "2024-01-01T10:00"))
        assert not iv.has_inside(_iv("2024-01-01T08:00", "2024-01-01T10:00"))

    def test_touching_is_not_overlapping(self):
        a = _iv("2024-01-01T09:00", "2024-01-01T12:00")
        b = _iv("2024-01-01T12:00", "2024-01-01T13:00")
        assert not a.overlaps_with(b)
        assert a.overlaps_with(_iv("2024-01-01T11:59", "2024-01-01T13:00"))

    def test_identical_moments_overlap(self):
        moment = datetime(2024, 1, 1)
        assert Interval(moment, moment).overlaps_with(Interval(moment, moment))

    def test_intersection(self):
        a = _iv("2024-01-01T09:00", "2024-01-01T12:00")
        assert a.intersection(_iv("2024-01-01T11:00", "2024-01-01T13:00")) == _iv(
            "2024-01-01T11:00", "2024-01-01T12:00"
        )
        assert a.intersection(_iv("2024-01-02", "2024-01-03")) is None

    def test_anytime_spans_representable_range(self):
        assert ANYTIME.start == datetime.min
        assert ANYTIME.end == datetime.max


class TestCombine:

    def test_merges_overlapping_and_touching(self):
        result = combine([
            _iv("2024-01-01T13:00", "2024-01-01T15:00"),
            _iv("2024-01-01T09:00", "2024-01-01T12:00"),
            _iv("2024-01-01T12:00", "2024-01-01T13:00"),
            _iv("2024-01-02T09:00", "2024-01-02T10:00"),
            _iv("2024-01-02T09:30", "2024-01-02T09:45"),
        ])
        assert result == [
            _iv("2024-01-01T09:00", "2024-01-01T15:00"),
            _iv("2024-01-02T09:00", "2024-01-02T10:00"),
        ]

    def test_empty(self):
        assert combine([]) == []


class TestGaps:

    def test_gaps_within_bound(self):
        bound = _iv("2024-01-01T00:00", "2024-01-02T00:00")
        covering = [
            _iv("2024-01-01T09:00", "2024-01-01T12:00"),
            _iv("2024-01-01T13:00", "2024-01-01T18:00"),
        ]
        assert gaps(covering, bound) == [
            _iv("2024-01-01T00:00", "2024-01-01T09:00"),
            _iv("2024-01-01T12:00", "2024-01-01T13:00"),
            _iv("2024-01-01T18:00", "2024-01-02T00:00"),
        ]

    def test_covering_beyond_bound_is_clipped(self):
        bound = _iv("2024-01-01T10:00", "2024-01-01T20:00")
        covering = [_iv("2024-01-01T00:00", "2024-01-01T12:00")]
        assert gaps(covering, bound) == [_iv("2024-01-01T12:00", "2024-01-01T20:00")]

    def test_fully_covered(self):
        bound = _iv("2024-01-01T10:00", "2024-01-01T12:00")
        assert gaps([ANYTIME], bound) == []

    def test_unbounded(self):
        excluded = _iv("2024-01-01", "2024-01-02")
        assert gaps([excluded], ANYTIME) == [
            Interval(datetime.min, excluded.start),
            Interval(excluded.end, datetime.max),
        ]


class TestSubtract:

    def test_only_overlapping_periods_are_split(self):
        search = [
            _iv("2024-01-01T09:00", "2024-01-01T18:00"),
            _iv("2024-01-02T09:00", "2024-01-02T18:00"),
        ]
        exclude = [_iv("2024-01-02T12:00", "2024-01-02T13:00")]
        assert subtract(search, exclude) == [
            _iv("2024-01-01T09:00", "2024-01-01T18:00"),
            _iv("2024-01-02T09:00", "2024-01-02T12:00"),
            _iv("2024-01-02T13:00", "2024-01-02T18:00"),
        ]
        assert total_duration(subtract(search, exclude)) == timedelta(hours=17)

    def test_overlaps_any(self):
        exclude = [_iv("2024-01-02", "2024-01-03")]
        assert overlaps_any(exclude, _iv("2024-01-02T10:00", "2024-01-02T11:00"))
        assert not overlaps_any(exclude, _iv("2024-01-01", "2024-01-02"))


class TestRanges:

    def test_year_and_month(self):
        assert year_range(2024) == _iv("2024-01-01", "2025-01-01")
        assert month_range(2024, 12) == _iv("2024-12-01", "2025-01-01")
        assert year_range(9999).end == datetime.max

    def test_years_of_period(self):
        years = years_of(_iv("2023-12-31", "2025-01-01"))
        assert [y.start.year for y in years] == [2023, 2024, 2025]

    def test_days_of_leap_february(self):
        assert len(days_of(month_range(2024, 2))) == 29
        assert len(days_of(month_range(2023, 2))) == 28

    def test_day_range(self):
        assert day_range(date(2024, 1, 1)) == _iv("2024-01-01", "2024-01-02")

    @pytest.mark.parametrize("first_day, expected_start", [
        (6, "2023-12-31"),  # Sunday
        (0, "2024-01-01"),  # Monday
    ])
    def test_week_range(self, first_day, expected_start):
        week = week_range(datetime(2024, 1, 3, 15), first_day)
        assert week.start == datetime.fromisoformat(expected_start)
        assert week.duration == timedelta(days=7)

    def test_start_of_week(self):
        assert start_of_week(date(2011, 5, 14), 6) == date(2011, 5, 8)

    def test_month_arithmetic_clamps(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
        assert add_years(datetime(2024, 2, 29), 1) == datetime(2025, 2, 28)

    @pytest.mark.parametrize("base, month, quarter, year", [
        (1, 1, 1, 2011), (1, 12, 4, 2011), (4, 3, 4, 2010), (4, 4, 1, 2011), (10, 9, 4, 2010),
    ])
    def test_fiscal_quarters(self, base, month, quarter, year):
        assert quarter_of_month(base, month) == quarter
        assert year_of(base, 2011, month) == year
