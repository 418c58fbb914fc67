#!/usr/bin/env python3
"""
Synthetic Test Data Generators

Factories for obligations, transactions and stored occurrence records, plus
writers for the JSON exports the CLI reads. All names, ids and amounts are
synthetic.
"""

from pathlib import Path
from typing import Any

from bills.core.dates import FinancialDate
from bills.core.json_utils import write_json
from bills.core.money import Money
from bills.matching.models import Transaction
from bills.schedule.models import DEFAULT_ACTIVE_FROM, Frequency, Obligation


def make_obligation(
    id: str = "bill-1",
    name: str = "Netflix",
    amount: str = "15.99",
    due_day: int = 15,
    frequency: str = "monthly",
    provider: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    is_active: bool = True,
    account_id: str | None = None,
) -> Obligation:
    """Build an Obligation with readable string inputs."""
    return Obligation(
        id=id,
        name=name,
        expected_amount=Money.from_pounds(amount),
        due_day=due_day,
        frequency=Frequency(frequency),
        provider_hint=provider,
        active_from=FinancialDate.from_string(start_date) if start_date else DEFAULT_ACTIVE_FROM,
        active_until=FinancialDate.from_string(end_date) if end_date else None,
        is_active=is_active,
        linked_account_id=account_id,
    )


def make_transaction(
    id: str = "txn-1",
    amount: str = "15.99",
    date: str = "2025-06-15",
    merchant: str | None = None,
    description: str = "CARD PAYMENT",
    account_id: str = "acc-1",
    is_pending: bool = False,
    bill_id: str | None = None,
) -> Transaction:
    """Build a Transaction with readable string inputs."""
    return Transaction(
        id=id,
        amount=Money.from_pounds(amount),
        description_text=description,
        date=FinancialDate.from_string(date),
        account_id=account_id,
        merchant_text=merchant,
        is_pending=is_pending,
        existing_obligation_link=bill_id,
    )


def bill_row(**overrides: Any) -> dict[str, Any]:
    """Exported bill record as the application stores it."""
    row: dict[str, Any] = {
        "id": "bill-1",
        "name": "Netflix",
        "provider": "Netflix",
        "amount": 15.99,
        "due_day": 15,
        "frequency": "monthly",
        "is_active": True,
        "start_date": "2024-01-01",
        "end_date": None,
        "account_id": None,
    }
    row.update(overrides)
    return row


def transaction_row(**overrides: Any) -> dict[str, Any]:
    """Exported transaction record; expenses are negative."""
    row: dict[str, Any] = {
        "id": "txn-1",
        "amount": -15.99,
        "merchant": "NETFLIX.COM",
        "description": "NETFLIX.COM 866-579-7172",
        "transaction_date": "2025-06-15",
        "account_id": "acc-1",
        "bill_id": None,
        "is_pending": False,
    }
    row.update(overrides)
    return row


def write_export(path: Path, data: Any) -> Path:
    """Write rows (or a {"table": rows} wrapper) as a JSON export and return the path."""
    write_json(path, data)
    return path
