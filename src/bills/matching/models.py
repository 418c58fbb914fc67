#!/usr/bin/env python3
"""
Reconciliation Domain Models

Bank transactions as the matcher sees them, and the scored candidate matches
it produces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money
from ..schedule.models import Occurrence


class MatchConfidence(Enum):
    """Confidence bands for a candidate match. Low candidates are never returned."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Transaction:
    """
    Bank transaction, read-only from the reconciliation side.

    `amount` is the unsigned magnitude of the payment. `existing_obligation_link`
    is set when the transaction was already reconciled to a bill.
    """

    id: str
    amount: Money
    description_text: str
    date: FinancialDate
    account_id: str
    merchant_text: str | None = None
    is_pending: bool = False
    existing_obligation_link: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Create Transaction from an exported transaction row.

        Args:
            data: Dictionary with id, amount (decimal pounds, sign ignored),
                description, transaction_date, account_id and optional
                merchant, is_pending and bill_id

        Returns:
            Transaction instance
        """
        return cls(
            id=str(data["id"]),
            amount=Money.from_pounds(data["amount"]).abs(),
            description_text=data.get("description") or "",
            date=FinancialDate.from_value(data["transaction_date"]),
            account_id=str(data["account_id"]),
            merchant_text=data.get("merchant"),
            is_pending=bool(data.get("is_pending") or False),
            existing_obligation_link=data.get("bill_id"),
        )


@dataclass
class MatchResult:
    """
    Scored candidate: one transaction proposed as payment for one occurrence.

    `reasons` lists one human-readable entry per contributing factor, in the
    order the factors were scored.
    """

    occurrence: Occurrence
    transaction_id: str
    score: int
    confidence: MatchConfidence
    reasons: list[str] = field(default_factory=list)

    @property
    def occurrence_id(self) -> str:
        return self.occurrence.id

    def to_dict(self) -> dict[str, Any]:
        """Convert match result to dict for JSON serialization."""
        return {
            "occurrence_id": self.occurrence.id,
            "obligation_id": self.occurrence.obligation_id,
            "obligation_name": self.occurrence.obligation_name,
            "due_date": self.occurrence.due_date.to_iso_string(),
            "expected_amount": self.occurrence.expected_amount.to_pence(),
            "transaction_id": self.transaction_id,
            "score": self.score,
            "confidence": self.confidence.value,
            "reasons": list(self.reasons),
        }


@dataclass
class AutoMatchResult:
    """Outcome of one auto-match pass."""

    auto_apply: list[MatchResult] = field(default_factory=list)
    for_review: list[MatchResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "auto_apply": [m.to_dict() for m in self.auto_apply],
            "for_review": [m.to_dict() for m in self.for_review],
        }


@dataclass
class CandidateDiagnostic:
    """
    Raw factor breakdown for one near-miss transaction.

    Produced by diagnostics only; score and reasons are what the factors would
    contribute, with no gates or confidence floor applied.
    """

    transaction: Transaction
    amount_difference: Money
    days_difference: int
    provider_match: str | None
    account_match: bool
    score: int
    reasons: list[str] = field(default_factory=list)

    @property
    def is_pending(self) -> bool:
        return self.transaction.is_pending

    @property
    def existing_obligation_link(self) -> str | None:
        return self.transaction.existing_obligation_link

    def to_dict(self) -> dict[str, Any]:
        return {
            "transaction_id": self.transaction.id,
            "transaction_date": self.transaction.date.to_iso_string(),
            "amount": self.transaction.amount.to_pence(),
            "amount_difference": self.amount_difference.to_pence(),
            "days_difference": self.days_difference,
            "provider_match": self.provider_match,
            "account_match": self.account_match,
            "is_pending": self.is_pending,
            "existing_obligation_link": self.existing_obligation_link,
            "score": self.score,
            "reasons": list(self.reasons),
        }
