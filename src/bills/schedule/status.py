#!/usr/bin/env python3
"""
Occurrence Status Resolution

The generator only ever emits "due" occurrences. The application keeps one
stored record per occurrence the user (or the auto-matcher) acted on - paid or
skipped - keyed by obligation id and due date. This module merges those
records back onto freshly generated occurrences and builds new records when a
match is applied.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..core.currency import pence_to_pounds_str
from ..core.dates import FinancialDate
from ..core.money import Money
from .models import Occurrence, OccurrenceStatus, occurrence_id

if TYPE_CHECKING:
    from ..matching.models import MatchResult

logger = logging.getLogger(__name__)

MANUAL_CONFIDENCE = "manual"


@dataclass(frozen=True)
class OccurrenceRecord:
    """
    Stored state of one occurrence.

    `occurrence_id` is the uniqueness key the persistence layer must enforce so
    that applying the same auto-match twice is idempotent.
    """

    obligation_id: str
    due_date: FinancialDate
    status: OccurrenceStatus
    expected_amount: Money | None = None
    paid_transaction_id: str | None = None
    match_confidence: str | None = None
    paid_at: datetime | None = None

    @property
    def occurrence_id(self) -> str:
        return occurrence_id(self.obligation_id, self.due_date)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OccurrenceRecord":
        """
        Create OccurrenceRecord from a stored row.

        Args:
            data: Dictionary with bill_id, due_date, status and optional
                expected_amount (decimal pounds), paid_transaction_id,
                match_confidence and paid_at (ISO timestamp)
        """
        expected = data.get("expected_amount")
        paid_at = data.get("paid_at")
        return cls(
            obligation_id=str(data["bill_id"]),
            due_date=FinancialDate.from_value(data["due_date"]),
            status=OccurrenceStatus(data["status"]),
            expected_amount=Money.from_pounds(expected) if expected is not None else None,
            paid_transaction_id=data.get("paid_transaction_id"),
            match_confidence=data.get("match_confidence"),
            paid_at=datetime.fromisoformat(paid_at.replace("Z", "+00:00")) if paid_at else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert record to the stored row shape."""
        return {
            "bill_id": self.obligation_id,
            "due_date": self.due_date.to_iso_string(),
            "status": self.status.value,
            "expected_amount": pence_to_pounds_str(self.expected_amount.to_pence()) if self.expected_amount else None,
            "paid_transaction_id": self.paid_transaction_id,
            "match_confidence": self.match_confidence,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
        }


def resolve_statuses(
    occurrences: Iterable[Occurrence],
    records: Iterable[OccurrenceRecord],
    today: FinancialDate,
) -> list[Occurrence]:
    """
    Apply stored statuses to generated occurrences.

    An occurrence with a stored record takes the record's status, paid
    transaction and confidence. Without a record, a "due" occurrence whose due
    date is before `today` becomes "overdue".

    Args:
        occurrences: Freshly generated occurrences
        records: Stored occurrence records
        today: Reference date for overdue detection

    Returns:
        New occurrences in input order; inputs are not modified
    """
    by_id = {record.occurrence_id: record for record in records}

    resolved = []
    for occurrence in occurrences:
        record = by_id.get(occurrence.id)
        if record is not None:
            resolved.append(
                occurrence.with_status(
                    record.status,
                    paid_transaction_id=record.paid_transaction_id,
                    match_confidence=record.match_confidence,
                )
            )
        elif occurrence.status == OccurrenceStatus.DUE and occurrence.due_date < today:
            resolved.append(occurrence.with_status(OccurrenceStatus.OVERDUE))
        else:
            resolved.append(occurrence)

    return resolved


def existing_links(records: Iterable[OccurrenceRecord]) -> dict[str, str]:
    """Map of transaction id -> occurrence id for records holding a payment."""
    return {
        record.paid_transaction_id: record.occurrence_id
        for record in records
        if record.paid_transaction_id
    }


def record_from_match(match: "MatchResult", paid_at: datetime) -> OccurrenceRecord:
    """Paid record to upsert when a match is applied."""
    occurrence = match.occurrence
    logger.debug("Recording %s as paid by %s", occurrence.id, match.transaction_id)
    return OccurrenceRecord(
        obligation_id=occurrence.obligation_id,
        due_date=occurrence.due_date,
        status=OccurrenceStatus.PAID,
        expected_amount=occurrence.expected_amount,
        paid_transaction_id=match.transaction_id,
        match_confidence=match.confidence.value,
        paid_at=paid_at,
    )


def record_paid_manually(
    occurrence: Occurrence,
    paid_at: datetime,
    transaction_id: str | None = None,
) -> OccurrenceRecord:
    """Paid record for an occurrence the user marked paid themselves."""
    return OccurrenceRecord(
        obligation_id=occurrence.obligation_id,
        due_date=occurrence.due_date,
        status=OccurrenceStatus.PAID,
        expected_amount=occurrence.expected_amount,
        paid_transaction_id=transaction_id,
        match_confidence=MANUAL_CONFIDENCE,
        paid_at=paid_at,
    )


def record_skipped(occurrence: Occurrence) -> OccurrenceRecord:
    """Record for an occurrence the user chose to skip."""
    return OccurrenceRecord(
        obligation_id=occurrence.obligation_id,
        due_date=occurrence.due_date,
        status=OccurrenceStatus.SKIPPED,
        expected_amount=occurrence.expected_amount,
    )
