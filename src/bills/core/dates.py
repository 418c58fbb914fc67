#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar-date wrapper with consistent ISO formatting for bill
schedules and bank transactions.
"""

from dataclasses import dataclass
from datetime import date, datetime

from . import calendar_math


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        ISO timestamps ("2025-06-15T08:30:00Z") are accepted for the default
        format and truncated to their calendar date.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        if date_format == "%Y-%m-%d" and len(date_str) > 10 and date_str[10] in "T ":
            date_str = date_str[:10]
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def from_value(cls, value: "str | date | FinancialDate") -> "FinancialDate":
        """Coerce a string, date or FinancialDate."""
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        return cls.from_string(value)

    @classmethod
    def of(cls, year: int, month: int, day: int) -> "FinancialDate":
        return cls(date=date(year, month, day))

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def add_days(self, days: int) -> "FinancialDate":
        return FinancialDate(date=calendar_math.add_days(self.date, days))

    def add_months(self, months: int) -> "FinancialDate":
        """Shift by whole months, clamping to the end of shorter months."""
        return FinancialDate(date=calendar_math.add_months(self.date, months))

    def days_from(self, other: "FinancialDate") -> int:
        """Absolute whole-day distance to another date."""
        return calendar_math.days_between(self.date, other.date)

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
