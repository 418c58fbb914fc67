#!/usr/bin/env python3
"""
Schedule Domain Models

Recurring bill definitions (obligations) and the expected due dates derived
from them (occurrences). Both are immutable; occurrences are regenerated on
demand and never stored as mutable entities.
"""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money

# Start of the active period for obligations saved without a start date.
DEFAULT_ACTIVE_FROM = FinancialDate(date=date(2020, 1, 1))


class Frequency(Enum):
    """How often an obligation falls due."""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    YEARLY = "yearly"

    @property
    def interval_days(self) -> int | None:
        """Fixed day interval for interval-stepping frequencies."""
        return _INTERVAL_DAYS.get(self)

    @property
    def month_step(self) -> int | None:
        """Month increment for calendar-anchored frequencies."""
        return _MONTH_STEPS.get(self)

    @property
    def is_calendar_anchored(self) -> bool:
        return self in _MONTH_STEPS


_INTERVAL_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.FORTNIGHTLY: 14,
}

_MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.BIANNUAL: 6,
    Frequency.YEARLY: 12,
}


class OccurrenceStatus(Enum):
    """Lifecycle of one expected payment."""

    DUE = "due"
    PAID = "paid"
    OVERDUE = "overdue"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Obligation:
    """
    Recurring bill definition.

    `due_day` anchors monthly, quarterly, biannual and yearly schedules;
    weekly and fortnightly schedules step from `active_from` instead.
    """

    id: str
    name: str
    expected_amount: Money
    due_day: int
    frequency: Frequency
    provider_hint: str | None = None
    active_from: FinancialDate = DEFAULT_ACTIVE_FROM
    active_until: FinancialDate | None = None
    is_active: bool = True
    linked_account_id: str | None = None

    @property
    def match_hint(self) -> str:
        """Text used for provider matching: the provider, else the bill name."""
        return self.provider_hint or self.name or ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Obligation":
        """
        Create Obligation from an exported bill record.

        Args:
            data: Dictionary with id, name, amount (decimal pounds), due_day,
                frequency and optional provider, start_date, end_date,
                is_active and account_id

        Returns:
            Obligation instance

        Raises:
            KeyError: If a required field is missing
            ValueError: If the frequency, amount, due day or a date is malformed
        """
        due_day = int(data["due_day"])
        if not 1 <= due_day <= 31:
            raise ValueError(f"due_day must be 1-31, got {due_day}")

        start_date = data.get("start_date")
        end_date = data.get("end_date")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            expected_amount=Money.from_pounds(data["amount"]).abs(),
            due_day=due_day,
            frequency=Frequency(data["frequency"]),
            provider_hint=data.get("provider"),
            active_from=FinancialDate.from_value(start_date) if start_date else DEFAULT_ACTIVE_FROM,
            active_until=FinancialDate.from_value(end_date) if end_date else None,
            is_active=bool(data.get("is_active", True)),
            linked_account_id=data.get("account_id"),
        )


def occurrence_id(obligation_id: str, due_date: FinancialDate) -> str:
    """Deterministic occurrence identity: obligation id plus ISO due date."""
    return f"{obligation_id}-{due_date.to_iso_string()}"


@dataclass(frozen=True)
class Occurrence:
    """One expected due date of an obligation."""

    id: str
    obligation: Obligation
    due_date: FinancialDate
    expected_amount: Money
    status: OccurrenceStatus = OccurrenceStatus.DUE
    paid_transaction_id: str | None = None
    match_confidence: str | None = None  # "high", "medium" or "manual"

    @classmethod
    def for_obligation(cls, obligation: Obligation, due_date: FinancialDate) -> "Occurrence":
        return cls(
            id=occurrence_id(obligation.id, due_date),
            obligation=obligation,
            due_date=due_date,
            expected_amount=obligation.expected_amount,
        )

    @property
    def obligation_id(self) -> str:
        return self.obligation.id

    @property
    def obligation_name(self) -> str:
        return self.obligation.name

    def with_status(
        self,
        status: OccurrenceStatus,
        paid_transaction_id: str | None = None,
        match_confidence: str | None = None,
    ) -> "Occurrence":
        """Copy of this occurrence with a resolved status."""
        return replace(
            self,
            status=status,
            paid_transaction_id=paid_transaction_id,
            match_confidence=match_confidence,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert occurrence to dict for JSON serialization."""
        return {
            "id": self.id,
            "obligation_id": self.obligation_id,
            "obligation_name": self.obligation_name,
            "due_date": self.due_date.to_iso_string(),
            "expected_amount": self.expected_amount.to_pence(),
            "status": self.status.value,
            "paid_transaction_id": self.paid_transaction_id,
            "match_confidence": self.match_confidence,
        }
