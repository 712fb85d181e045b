"""Module-level defaults for the calendar engines."""

from __future__ import annotations

import calendar
import threading
from dataclasses import dataclass


@dataclass
class CalendarConfig:
    """Defaults used when an engine is constructed without explicit values."""

    # date.weekday() numbering: 0=Monday .. 6=Sunday
    first_day_of_week: int = calendar.SUNDAY
    year_base_month: int = 1
    max_week_iterations: int = 2000


_calendar_config: CalendarConfig | None = None
_config_lock = threading.Lock()


def get_calendar_config() -> CalendarConfig:
    """Get the global configuration singleton."""
    global _calendar_config
    if _calendar_config is None:
        with _config_lock:
            if _calendar_config is None:
                _calendar_config = CalendarConfig()
    return _calendar_config


def configure_calendar(
    first_day_of_week: int | None = None,
    year_base_month: int | None = None,
    max_week_iterations: int | None = None,
) -> None:
    """Override global defaults. Arguments left as None keep their value.

    Raises ValueError for out-of-range values.

    Example:
        from calendar_arithmetic import configure_calendar

        configure_calendar(first_day_of_week=calendar.MONDAY)
    """
    if first_day_of_week is not None and first_day_of_week not in range(7):
        raise ValueError(f"first_day_of_week must be 0-6, got {first_day_of_week}")
    if year_base_month is not None and year_base_month not in range(1, 13):
        raise ValueError(f"year_base_month must be 1-12, got {year_base_month}")
    if max_week_iterations is not None and max_week_iterations < 1:
        raise ValueError(
            f"max_week_iterations must be positive, got {max_week_iterations}"
        )

    config = get_calendar_config()
    with _config_lock:
        if first_day_of_week is not None:
            config.first_day_of_week = first_day_of_week
        if year_base_month is not None:
            config.year_base_month = year_base_month
        if max_week_iterations is not None:
            config.max_week_iterations = max_week_iterations


def reset_calendar_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _calendar_config
    with _config_lock:
        _calendar_config = CalendarConfig()
