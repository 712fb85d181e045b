"""Tests for rule-config validation and loading."""

from __future__ import annotations

import json
from datetime import datetime, time

import pytest

from calendar_arithmetic.filters import DayHourRange, HourRangeInDay
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.loaders import load_rules_json, rules_from_config
from calendar_arithmetic.schema import validate_rules_config
from calendar_arithmetic.types import FilterError

from conftest import FIXTURES_DIR, rules_config


class TestValidateRulesConfig:

    @pytest.mark.parametrize("name", json.loads((FIXTURES_DIR / "calendars.json").read_text()))
    def test_fixture_calendars_are_valid(self, name):
        assert validate_rules_config(rules_config(name)) == []

    def test_unknown_key(self):
        errors = validate_rules_config({"weekdays": [0]})
        assert errors == ["Unknown key: 'weekdays'"]

    def test_bad_week_days(self):
        errors = validate_rules_config({"week_days": [0, 7, "funday", True]})
        assert len(errors) == 3

    def test_overlapping_hours(self):
        errors = validate_rules_config(
            {"working_hours": [["08:00", "12:00"], ["11:00", "18:00"]]}
        )
        assert len(errors) == 1
        assert "overlapping" in errors[0]

    def test_touching_hours_are_fine(self):
        assert validate_rules_config(
            {"working_hours": [["08:00", "12:00"], ["12:00", "24:00"]]}
        ) == []

    def test_reversed_hours(self):
        errors = validate_rules_config({"working_hours": [["18:00", "08:00"]]})
        assert len(errors) == 1

    def test_bad_day_hours_key(self):
        errors = validate_rules_config({"working_day_hours": {"9": [["10:00", "12:00"]], "x": []}})
        assert len(errors) == 2

    def test_bad_exclusions(self):
        errors = validate_rules_config({
            "exclude_periods": [
                ["2024-01-02T00:00", "2024-01-01T00:00"],
                ["not a date", "2024-01-01T00:00"],
                ["2024-01-01T00:00"],
            ]
        })
        assert len(errors) == 3

    def test_not_a_mapping(self):
        assert len(validate_rules_config([])) == 1


class TestRulesFromConfig:

    def test_full_config(self):
        rules = rules_from_config({
            "week_days": ["mon", "tue", 2],
            "working_hours": [["08:00", "12:00"], ["13:00", 18]],
            "working_day_hours": {"5": [["10:00", "14:00"]]},
            "exclude_periods": [["2024-12-25T00:00", "2024-12-26T00:00"]],
        })
        assert rules.week_days == [0, 1, 2]
        assert rules.working_hours == [HourRangeInDay(8, 12), HourRangeInDay(13, 18)]
        assert rules.working_day_hours == [DayHourRange(5, time(10), time(14))]
        assert rules.exclude_periods == [Interval(datetime(2024, 12, 25), datetime(2024, 12, 26))]

    def test_empty_config_is_unrestricted(self):
        assert rules_from_config({}).is_unrestricted

    def test_invalid_raises_with_all_errors(self):
        with pytest.raises(FilterError) as exc_info:
            rules_from_config({"week_days": [9], "working_hours": [["x", "y"]]})
        assert len(exc_info.value.errors) == 2


class TestLoadRulesJson:

    def test_nested_rules(self, tmp_path):
        path = tmp_path / "office.json"
        path.write_text(json.dumps({
            "id": "office",
            "rules": {"week_days": [0, 1, 2, 3, 4], "working_hours": [["09:00", "18:00"]]},
        }))
        rules = load_rules_json(path)
        assert rules.week_days == [0, 1, 2, 3, 4]
        assert rules.has_working_rules

    def test_top_level_rules(self, tmp_path):
        path = tmp_path / "plain.json"
        path.write_text(json.dumps({"week_days": [5, 6]}))
        assert load_rules_json(path).week_days == [5, 6]

    def test_errors_name_the_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"rules": {"week_days": [8]}}))
        with pytest.raises(FilterError) as exc_info:
            load_rules_json(path)
        assert exc_info.value.errors[0].startswith("broken.json:")
