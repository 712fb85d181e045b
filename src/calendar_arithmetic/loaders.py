"""Build WorkingRules from plain mappings and JSON files."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from calendar_arithmetic.filters import DayHourRange, HourRangeInDay, weekdays_of
from calendar_arithmetic.intervals import Interval
from calendar_arithmetic.logging import get_logger
from calendar_arithmetic.rules import WorkingRules
from calendar_arithmetic.schema import validate_rules_config
from calendar_arithmetic.types import FilterError

logger = get_logger(__name__)


def rules_from_config(config: dict) -> WorkingRules:
    """Build WorkingRules from a mapping:

    {
        "week_days": [0, 1, 2, 3, 4],
        "working_hours": [["08:00", "12:00"], ["13:00", "18:00"]],
        "working_day_hours": {"5": [["10:00", "14:00"]]},
        "exclude_periods": [["2024-12-25T00:00", "2024-12-26T00:00"]]
    }

    Every key is optional. Raises FilterError listing all problems found.
    """
    errors = validate_rules_config(config)
    if errors:
        raise FilterError(errors)

    rules = WorkingRules()
    rules.week_days.extend(sorted(weekdays_of(config.get("week_days", []))))
    for start, end in config.get("working_hours", []):
        rules.working_hours.append(HourRangeInDay(start, end))
    for weekday, periods in sorted(
        config.get("working_day_hours", {}).items(), key=lambda kv: int(kv[0])
    ):
        for start, end in periods:
            rules.working_day_hours.append(DayHourRange(int(weekday), start, end))
    for start, end in config.get("exclude_periods", []):
        rules.exclude_periods.append(
            Interval(datetime.fromisoformat(start), datetime.fromisoformat(end))
        )

    logger.debug(
        "rules_loaded",
        week_days=rules.week_days,
        working_hours=len(rules.working_hours),
        working_day_hours=len(rules.working_day_hours),
        exclude_periods=len(rules.exclude_periods),
    )
    return rules


def load_rules_json(path: str | Path) -> WorkingRules:
    """Load WorkingRules from a JSON file.

    The rules mapping may sit at the top level or under a "rules" key:
    { "id": "...", "rules": { "week_days": [...], ... } }

    Raises FilterError naming the file if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    config = data.get("rules", data) if isinstance(data, dict) else data
    if isinstance(config, dict):
        config = {k: v for k, v in config.items() if k != "id"}
    try:
        return rules_from_config(config)
    except FilterError as e:
        raise FilterError([f"{path.name}: {err}" for err in e.errors]) from e
