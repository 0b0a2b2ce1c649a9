"""Wording helpers for presenting converted times."""

from datetime import datetime

_TIME_OF_DAY = (
    (5, 6, "early morning"),
    (6, 9, "morning"),
    (9, 12, "late morning"),
    (12, 13, "noon"),
    (13, 17, "afternoon"),
    (17, 19, "early evening"),
    (19, 21, "evening"),
    (21, 23, "late evening"),
)


def time_of_day(dt: datetime) -> str:
    """Describe the hour of a datetime, e.g. 'late morning' or 'night'."""
    for start, end, label in _TIME_OF_DAY:
        if start <= dt.hour < end:
            return label
    return "night"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def relative_to_human(dt: datetime, now: datetime) -> str:
    """
    Describe how far a datetime is from now.

    Uses at most the two largest non-zero units out of days, hours and
    minutes: "in 2 hours 5 minutes", "3 days 1 hour ago", or "now" when the
    difference is under a minute.
    """
    delta = int((dt - now).total_seconds())
    if abs(delta) < 60:
        return "now"

    days, rest = divmod(abs(delta), 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    parts = [
        _plural(count, unit)
        for count, unit in ((days, "day"), (hours, "hour"), (minutes, "minute"))
        if count
    ][:2]
    text = " ".join(parts)
    return f"in {text}" if delta > 0 else f"{text} ago"
