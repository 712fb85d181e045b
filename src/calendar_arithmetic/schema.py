"""Input validation for working-rule configurations."""

from __future__ import annotations

from datetime import datetime, time

_WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
_KNOWN_KEYS = {"week_days", "working_hours", "working_day_hours", "exclude_periods"}


def _parse_clock(value) -> time | None:
    """Parse 'HH:MM' or an int hour. '24:00' / 24 mean end of day."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if value == 24:
            return time(0, 0)
        return time(value, 0) if 0 <= value <= 23 else None
    if isinstance(value, str):
        if value in ("24:00", "24"):
            return time(0, 0)
        try:
            return time.fromisoformat(value)
        except ValueError:
            return None
    return None


def _validate_hour_ranges(label: str, periods) -> list[str]:
    errors: list[str] = []
    if not isinstance(periods, list):
        return [f"{label}: expected a list of [start, end], got {periods!r}"]

    parsed: list[tuple[time, time]] = []
    for i, period in enumerate(periods):
        if not isinstance(period, list) or len(period) != 2:
            errors.append(f"{label}, period {i}: expected [start, end], got {period}")
            continue
        start = _parse_clock(period[0])
        end = _parse_clock(period[1])
        if start is None or end is None:
            errors.append(f"{label}, period {i}: invalid time in {period}")
            continue
        if end != time(0, 0) and end < start:
            errors.append(f"{label}, period {i}: end {period[1]} is before start {period[0]}")
            continue
        parsed.append((start, end))

    # Midnight end sorts last
    day_periods = sorted(
        (s, e if e != time(0, 0) else time.max) for s, e in parsed
    )
    for j in range(1, len(day_periods)):
        if day_periods[j][0] < day_periods[j - 1][1]:
            errors.append(
                f"{label}: overlapping periods "
                f"{day_periods[j - 1][0].isoformat('minutes')}-"
                f"{day_periods[j - 1][1].isoformat('minutes')} and "
                f"{day_periods[j][0].isoformat('minutes')}-"
                f"{day_periods[j][1].isoformat('minutes')}"
            )
    return errors


def validate_week_days(week_days) -> list[str]:
    """Weekdays must be ints 0-6 (0=Monday) or weekday names."""
    if not isinstance(week_days, list):
        return [f"week_days: expected a list, got {week_days!r}"]
    errors: list[str] = []
    for value in week_days:
        if isinstance(value, str):
            if value.strip().lower()[:3] not in _WEEKDAY_NAMES:
                errors.append(f"week_days: unknown weekday name {value!r}")
        elif isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
            errors.append(f"week_days: invalid weekday {value!r} (must be 0-6)")
    return errors


def validate_exclude_periods(periods) -> list[str]:
    """Each exclusion is [start, end] as ISO datetimes with start <= end."""
    if not isinstance(periods, list):
        return [f"exclude_periods: expected a list, got {periods!r}"]
    errors: list[str] = []
    for i, period in enumerate(periods):
        if not isinstance(period, list) or len(period) != 2:
            errors.append(f"exclude_periods[{i}]: expected [start, end], got {period}")
            continue
        try:
            start = datetime.fromisoformat(period[0])
            end = datetime.fromisoformat(period[1])
        except (ValueError, TypeError) as e:
            errors.append(f"exclude_periods[{i}]: invalid datetime - {e}")
            continue
        if start > end:
            errors.append(f"exclude_periods[{i}]: start {period[0]} is after end {period[1]}")
    return errors


def validate_rules_config(config: dict) -> list[str]:
    """Validate a working-rules mapping. Returns list of error messages (empty = valid).

    Checks:
    - Only known keys are present
    - week_days are 0-6 or weekday names
    - working_hours / working_day_hours periods parse and do not overlap
    - working_day_hours keys are weekdays 0-6
    - exclude_periods are ordered ISO datetime pairs
    """
    if not isinstance(config, dict):
        return [f"Rules config must be a mapping, got {type(config).__name__}"]

    errors: list[str] = []
    for key in sorted(set(config) - _KNOWN_KEYS):
        errors.append(f"Unknown key: {key!r}")

    if "week_days" in config:
        errors.extend(validate_week_days(config["week_days"]))

    if "working_hours" in config:
        errors.extend(_validate_hour_ranges("working_hours", config["working_hours"]))

    day_hours = config.get("working_day_hours", {})
    if not isinstance(day_hours, dict):
        errors.append(f"working_day_hours: expected a mapping, got {day_hours!r}")
    else:
        for weekday, periods in day_hours.items():
            try:
                day = int(weekday)
            except (ValueError, TypeError):
                errors.append(f"working_day_hours: invalid weekday key {weekday!r}")
                continue
            if not 0 <= day <= 6:
                errors.append(f"working_day_hours: invalid weekday key {weekday!r} (must be 0-6)")
                continue
            errors.extend(_validate_hour_ranges(f"working_day_hours[{day}]", periods))

    if "exclude_periods" in config:
        errors.extend(validate_exclude_periods(config["exclude_periods"]))

    return errors
