"""Tests for CalendarDateOffset: week-by-week walks over working rules.

Test data loaded from: data/fixtures/scenarios/calendar_offset.json,
data/fixtures/scenarios/working_hours_offset.json
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from structlog.testing import capture_logs

from calendar_arithmetic.calendar import CalendarDateOffset
from calendar_arithmetic.config import configure_calendar
from calendar_arithmetic.filters import HourRangeInDay
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.rules import WorkingRules
from calendar_arithmetic.types import ContractViolationError, SeekBoundaryMode, SeekDirection

from conftest import dt, duration, load_scenarios, make_offset

_offset_scenarios = load_scenarios("calendar_offset")
_hour_scenarios = load_scenarios("working_hours_offset")

_MODES = {"next": SeekBoundaryMode.NEXT, "fill": SeekBoundaryMode.FILL}


def _run(spec: dict, offset) -> datetime | None:
    op = getattr(offset, spec.get("op", "add"))
    return op(dt(spec["start"]), duration(spec["offset"]), _MODES[spec["mode"]])


class TestExclusionScenarios:
    """Whole-day exclusions with no weekday or hour rules."""

    @pytest.mark.parametrize("spec", _offset_scenarios, ids=lambda s: s["id"])
    def test_scenario(self, spec):
        result = _run(spec, make_offset(spec["calendar"]))
        assert result == dt(spec["expected"]), spec["notes"]


class TestWorkingHourScenarios:
    """Weekday and working-hour rules, with and without exclusions."""

    @pytest.mark.parametrize("spec", _hour_scenarios, ids=lambda s: s["id"])
    def test_scenario(self, spec):
        result = _run(spec, make_offset(spec["calendar"]))
        assert result == dt(spec["expected"]), spec["notes"]

    def test_monday_first_week_gives_same_result(self):
        """The week boundary does not change where time is counted."""
        offset = make_offset("april_8_18", first_day_of_week=0)
        result = offset.add(datetime(2011, 4, 1, 9), timedelta(hours=22))
        assert result == datetime(2011, 4, 6, 11)


class TestSubtractWorkingHours:

    def test_subtract_across_weekend(self, office_rules):
        offset = CalendarDateOffset(office_rules)
        # Mon 10:00 back 2h: Mon 09:00-10:00, then Fri 17:00-18:00
        result = offset.subtract(datetime(2024, 1, 8, 10), timedelta(hours=2))
        assert result == datetime(2024, 1, 5, 17)

    def test_subtract_from_non_working_time(self, office_rules):
        offset = CalendarDateOffset(office_rules)
        # Saturday noon snaps back to Fri 18:00
        result = offset.subtract(datetime(2024, 1, 6, 12), timedelta(hours=1))
        assert result == datetime(2024, 1, 5, 17)

    def test_negative_subtract_is_add(self, office_rules):
        offset = CalendarDateOffset(office_rules)
        result = offset.subtract(datetime(2024, 1, 1, 8), timedelta(hours=-10))
        assert result == datetime(2024, 1, 2, 10)


class TestFastPath:

    def test_no_rules_is_plain_arithmetic(self):
        offset = CalendarDateOffset()
        start = datetime(2024, 2, 28, 22, 15)
        assert offset.add(start, timedelta(hours=5)) == start + timedelta(hours=5)
        assert offset.subtract(start, timedelta(days=400)) == start - timedelta(days=400)

    def test_overflow_is_none(self):
        offset = CalendarDateOffset()
        assert offset.add(datetime(9999, 12, 31), timedelta(days=2)) is None
        assert offset.subtract(datetime(1, 1, 1), timedelta(days=2)) is None


class TestRulesAreLive:
    """Rule lists are read per call, so edits between calls take effect."""

    def test_rules_mutated_between_calls(self):
        offset = CalendarDateOffset()
        start = datetime(2024, 1, 6, 9)  # Saturday
        assert offset.add(start, timedelta(hours=1)) == datetime(2024, 1, 6, 10)

        offset.add_working_week_days()
        offset.working_hours.append(HourRangeInDay(9, 18))
        assert offset.add(start, timedelta(hours=1)) == datetime(2024, 1, 8, 10)

        offset.exclude_periods.append(
            Interval(datetime(2024, 1, 8), datetime(2024, 1, 9))
        )
        assert offset.add(start, timedelta(hours=1)) == datetime(2024, 1, 9, 10)

    def test_weekend_helper(self):
        offset = CalendarDateOffset()
        offset.add_weekend_week_days()
        assert offset.week_days == [5, 6]
        # Fri 12:00 + 1h lands on Saturday 01:00
        assert offset.add(datetime(2024, 1, 5, 12), timedelta(hours=1)) == datetime(2024, 1, 6, 1)


class TestContract:

    def test_include_periods_read_rejected(self):
        with pytest.raises(ContractViolationError):
            CalendarDateOffset().include_periods

    def test_include_periods_write_rejected(self):
        offset = CalendarDateOffset()
        with pytest.raises(ContractViolationError):
            offset.include_periods = [Interval(datetime(2024, 1, 1), datetime(2024, 1, 2))]

    def test_negative_internal_offset_rejected(self, office_rules):
        offset = CalendarDateOffset(office_rules)
        with pytest.raises(ContractViolationError):
            offset._calculate_end(
                datetime(2024, 1, 1),
                timedelta(hours=-1),
                SeekDirection.FORWARD,
                SeekBoundaryMode.NEXT,
            )


class TestWeekLimit:

    def test_contradictory_rules_return_none(self):
        offset = make_offset("contradictory", max_weeks=5)
        with capture_logs() as logs:
            result = offset.add(datetime(2024, 1, 1), timedelta(hours=1))
        assert result is None
        warnings = [e for e in logs if e["event"] == "week_limit_reached"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["max_weeks"] == 5

    def test_cap_comes_from_config(self):
        configure_calendar(max_week_iterations=3)
        offset = make_offset("contradictory")
        assert offset.max_weeks == 3

    def test_empty_weeks_are_skipped_without_consuming_time(self):
        rules = WorkingRules(week_days=[0], working_hours=[HourRangeInDay(9, 10)])
        rules.exclude_periods.append(Interval(datetime(2024, 1, 8), datetime(2024, 1, 9)))
        offset = CalendarDateOffset(rules)
        # Mon Jan 8 is excluded, so the week of Jan 7 has nothing left
        result = offset.add(datetime(2024, 1, 1, 9), timedelta(hours=1), SeekBoundaryMode.FILL)
        assert result == datetime(2024, 1, 1, 10)
        result = offset.add(datetime(2024, 1, 1, 9), timedelta(hours=2), SeekBoundaryMode.FILL)
        assert result == datetime(2024, 1, 15, 10)
        # NEXT never stops on a period's far edge, so the exact fit on Jan 15
        # carries over to the following Monday
        result = offset.add(datetime(2024, 1, 1, 9), timedelta(hours=2))
        assert result == datetime(2024, 1, 22, 9)
