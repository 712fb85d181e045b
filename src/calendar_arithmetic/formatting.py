"""Human-readable rendering of durations."""

from __future__ import annotations

from datetime import datetime, timedelta


class DurationFormatter:
    """Renders duration components as text, e.g. '1 Year 2 Months 3 Days'.

    Zero components are omitted. Subclass and replace the unit labels to
    localise the output.
    """

    units: tuple[tuple[str, str], ...] = (
        ("Year", "Years"),
        ("Month", "Months"),
        ("Day", "Days"),
        ("Hour", "Hours"),
        ("Minute", "Minutes"),
        ("Second", "Seconds"),
    )

    def __init__(self, use_seconds: bool = False) -> None:
        self.use_seconds = use_seconds

    def get_duration(
        self,
        years: int,
        months: int,
        days: int,
        hours: int,
        minutes: int,
        seconds: int,
    ) -> str:
        parts = []
        values = (years, months, days, hours, minutes, seconds)
        for value, (singular, plural) in zip(values, self.units):
            if value != 0:
                parts.append(f"{value} {singular if value == 1 else plural}")
        return " ".join(parts)

    def format_timedelta(self, delta: timedelta, detailed: bool = False) -> str:
        """Compact 'D.HH:MM' form, or the detailed component form.

        Seconds are included only when use_seconds is set.
        """
        sign = "-" if delta < timedelta(0) else ""
        delta = abs(delta)
        days = delta.days
        hours, rest = divmod(delta.seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        if not self.use_seconds:
            seconds = 0

        if detailed:
            if sign:
                days, hours, minutes, seconds = -days, -hours, -minutes, -seconds
            return self.get_duration(0, 0, days, hours, minutes, seconds)

        text = f"{sign}{days}.{hours:02d}:{minutes:02d}"
        if self.use_seconds:
            text += f":{seconds:02d}"
        return text

    def format_period(self, start: datetime, end: datetime) -> str:
        """'start - end | duration' for a pair of instants."""
        return (
            f"{start.isoformat(sep=' ')} - {end.isoformat(sep=' ')}"
            f" | {self.format_timedelta(end - start)}"
        )
