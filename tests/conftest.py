"""Shared test fixtures and data loading for calendar-arithmetic.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Named rule sets live in data/fixtures/calendars.json; scenario tables in
data/fixtures/scenarios/*.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from calendar_arithmetic.config import reset_calendar_config
from calendar_arithmetic.intervals import Interval

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_calendars = _load_json(FIXTURES_DIR / "calendars.json")


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def dt(value: str | None) -> datetime | None:
    """ISO string to datetime; None passes through.

    >>> dt("2011-04-12T09:30")
    datetime.datetime(2011, 4, 12, 9, 30)
    """
    return datetime.fromisoformat(value) if value is not None else None


def duration(spec: dict) -> timedelta:
    """{"days": 3, "hours": -2} -> timedelta(days=3, hours=-2)."""
    return timedelta(**spec)


def interval(pair: list[str]) -> Interval:
    """["2011-04-15", "2011-04-20"] -> Interval."""
    return Interval(dt(pair[0]), dt(pair[1]))


def rules_config(name: str) -> dict:
    """Raw rules mapping from calendars.json."""
    return _calendars[name]


def make_rules(name: str):
    """Build WorkingRules from calendars.json by name."""
    from calendar_arithmetic.loaders import rules_from_config

    return rules_from_config(_calendars[name])


def make_offset(name: str, **kwargs):
    """CalendarDateOffset over a named rule set."""
    from calendar_arithmetic.calendar import CalendarDateOffset

    return CalendarDateOffset(make_rules(name), **kwargs)


def make_date_offset(name: str):
    """Plain DateOffset using the exclusions of a named rule set."""
    from calendar_arithmetic.offset import DateOffset

    return DateOffset(exclude_periods=list(make_rules(name).exclude_periods))


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts and ends with default configuration."""
    reset_calendar_config()
    yield
    reset_calendar_config()


@pytest.fixture
def office_rules():
    """Mon-Fri 09:00-18:00, no exclusions."""
    return make_rules("office")


@pytest.fixture
def weekday_rules():
    """Mon-Fri whole days, no hour restriction."""
    return make_rules("weekdays")
