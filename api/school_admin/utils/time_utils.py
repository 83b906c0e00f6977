"""
Date and time helpers for weekly lesson slots.
"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from school_admin.i18n.uk import DAY_NAMES


def parse_start_time(value: str) -> time:
    """
    Parse a group start time in HH:MM form.

    Raises:
        ValueError: If the value is not a valid 24-hour HH:MM time
    """
    if not isinstance(value, str):
        raise ValueError(f"Start time must be a string in HH:MM format, got {value!r}")
    parts = value.strip().split(":")
    if len(parts) < 2 or not all(p.isdigit() for p in parts[:2]):
        raise ValueError(f"Start time must be in HH:MM format, got {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Start time out of range: {value!r}")
    return time(hours, minutes)


def calculate_end_time(start_time: str, duration_minutes: int) -> str:
    """Add duration to an HH:MM time, wrapping past midnight."""
    start = parse_start_time(start_time)
    total_minutes = start.hour * 60 + start.minute + duration_minutes
    end_hours = (total_minutes // 60) % 24
    end_minutes = total_minutes % 60
    return f"{end_hours:02d}:{end_minutes:02d}"


def first_weekday_on_or_after(day: date, iso_weekday: int) -> date:
    """Return the first date on or after `day` that falls on `iso_weekday`."""
    return day + timedelta(days=(iso_weekday - day.isoweekday()) % 7)


def weekly_occurrences(iso_weekday: int, window_start: date, horizon_end: date) -> List[date]:
    """
    Dates in [window_start, horizon_end) that fall on the given ISO weekday.

    Args:
        iso_weekday: 1 = Monday ... 7 = Sunday
        window_start: First date that may be returned
        horizon_end: Exclusive upper bound
    """
    if not 1 <= iso_weekday <= 7:
        raise ValueError(f"ISO weekday must be between 1 and 7, got {iso_weekday}")

    occurrences = []
    current = first_weekday_on_or_after(window_start, iso_weekday)
    while current < horizon_end:
        occurrences.append(current)
        current += timedelta(days=7)
    return occurrences


def week_start(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.isoweekday() - 1)


def day_name_uk(iso_weekday: int) -> str:
    return DAY_NAMES.get(iso_weekday, "")


def local_today(timezone: str, now: Optional[datetime] = None) -> date:
    """Current calendar date in the school's timezone."""
    now = now or datetime.now(ZoneInfo("UTC"))
    return now.astimezone(ZoneInfo(timezone)).date()
