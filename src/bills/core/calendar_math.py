#!/usr/bin/env python3
"""
Calendar Arithmetic

Month stepping, month-end clamping and date comparison over timezone-naive
calendar dates. Scheduling and matching only ever see `datetime.date`
values; there is no time-of-day component anywhere.
"""

import calendar
from datetime import date, timedelta


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """
    Date for `day` in the given month, clamped to the month's last day.

    Never rolls over into the following month:
        clamp_day(2025, 2, 31) -> 2025-02-28
        clamp_day(2024, 2, 31) -> 2024-02-29
        clamp_day(2025, 4, 31) -> 2025-04-30
    """
    return date(year, month, min(day, days_in_month(year, month)))


def month_index(value: date) -> int:
    """Months since year 0, used to step months without drifting."""
    return value.year * 12 + (value.month - 1)


def from_month_index(index: int) -> tuple[int, int]:
    """Inverse of `month_index`: (year, month) for a month index."""
    year, zero_based_month = divmod(index, 12)
    return year, zero_based_month + 1


def add_months(value: date, months: int) -> date:
    """
    Shift a date by whole months, clamping the day to the target month.

    add_months(date(2025, 1, 31), 1) -> 2025-02-28
    """
    year, month = from_month_index(month_index(value) + months)
    return clamp_day(year, month, value.day)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def days_between(first: date, second: date) -> int:
    """Absolute whole-day distance between two dates."""
    return abs((second - first).days)


def compare_dates(first: date, second: date) -> int:
    """Three-way comparison: -1, 0 or 1."""
    if first < second:
        return -1
    if first > second:
        return 1
    return 0


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))
