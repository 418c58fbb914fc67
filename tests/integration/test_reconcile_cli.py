#!/usr/bin/env python3
"""
Integration tests for the reconcile CLI.

Exercises the full pipeline: bills and transactions exports in, matches and
paid records out, with a second run showing applied records are honoured.
"""

import json

import pytest
from click.testing import CliRunner

from bills.cli.main import main
from tests.fixtures.synthetic_data import bill_row, transaction_row, write_export


@pytest.fixture
def exports(temp_dir):
    """Bills and transactions for June 2025."""
    bills_file = write_export(
        temp_dir / "bills.json",
        {
            "bills": [
                bill_row(),
                bill_row(id="bill-2", name="Broadband", provider="Virgin Media", amount=32.0, due_day=1),
                bill_row(id="bill-3", name="Water", provider="Thames Water", amount=40.0, due_day=20),
            ]
        },
    )
    transactions_file = write_export(
        temp_dir / "transactions.json",
        [
            transaction_row(),
            transaction_row(
                id="txn-2",
                amount=-32.0,
                merchant=None,
                description="DD PAYMENT REF 88812",
                transaction_date="2025-06-02",
            ),
            transaction_row(id="txn-3", amount=-40.0, merchant="THAMES WATER", transaction_date="2025-06-20", is_pending=True),
        ],
    )
    return bills_file, transactions_file


@pytest.mark.integration
class TestReconcileMatch:
    def setup_method(self):
        self.runner = CliRunner()

    def _match(self, bills_file, transactions_file, output, *extra):
        return self.runner.invoke(
            main,
            [
                "reconcile",
                "match",
                "--obligations",
                str(bills_file),
                "--transactions",
                str(transactions_file),
                "--month",
                "2025-06",
                "--today",
                "2025-06-25",
                "--output",
                str(output),
                *extra,
            ],
        )

    def test_routes_matches_by_confidence(self, exports, temp_dir):
        output = temp_dir / "reconciliation.json"
        result = self._match(*exports, output)

        assert result.exit_code == 0, result.output
        assert "✅ 1 auto-applied, 1 for review, 1 unmatched of 3 unpaid occurrences" in result.output
        assert "Auto-applied amount: £15.99" in result.output
        assert "For review amount: £32.00" in result.output

        data = json.loads(output.read_text())
        assert [m["occurrence_id"] for m in data["auto_apply"]] == ["bill-1-2025-06-15"]
        assert data["auto_apply"][0]["reasons"] == [
            "Exact amount match",
            "Exact date match",
            "Provider match: netflix",
        ]
        # Exact amount, one day late, no provider text: 40 + 20
        assert [(m["occurrence_id"], m["transaction_id"], m["score"]) for m in data["for_review"]] == [
            ("bill-2-2025-06-01", "txn-2", 60)
        ]

        records = data["records"]
        assert len(records) == 1
        assert records[0]["bill_id"] == "bill-1"
        assert records[0]["status"] == "paid"
        assert records[0]["paid_transaction_id"] == "txn-1"
        assert records[0]["match_confidence"] == "high"
        assert records[0]["expected_amount"] == "15.99"

    def test_applied_records_are_honoured_on_rerun(self, exports, temp_dir):
        first_output = temp_dir / "first.json"
        assert self._match(*exports, first_output).exit_code == 0

        states_file = write_export(temp_dir / "states.json", json.loads(first_output.read_text())["records"])
        second_output = temp_dir / "second.json"
        result = self._match(*exports, second_output, "--states", str(states_file))

        assert result.exit_code == 0, result.output
        data = json.loads(second_output.read_text())
        assert data["auto_apply"] == []
        assert data["summary"]["occurrences_considered"] == 2

    def test_non_finite_amount_reported(self, exports, temp_dir):
        bills_file, _ = exports
        bad_file = write_export(temp_dir / "bad.json", [transaction_row(amount=float("inf"))])

        result = self._match(bills_file, bad_file, temp_dir / "out.json")

        assert result.exit_code == 1
        assert "Record #0 in transactions file" in result.output
        assert "Invalid currency amount" in result.output

    def test_missing_transactions_file_rejected(self, exports, temp_dir):
        bills_file, _ = exports
        result = self._match(bills_file, temp_dir / "missing.json", temp_dir / "out.json")

        assert result.exit_code == 2
        assert "does not exist" in result.output


@pytest.mark.integration
class TestReconcileDiagnose:
    def setup_method(self):
        self.runner = CliRunner()

    def _diagnose(self, exports, occurrence_id):
        bills_file, transactions_file = exports
        return self.runner.invoke(
            main,
            [
                "reconcile",
                "diagnose",
                "--obligations",
                str(bills_file),
                "--transactions",
                str(transactions_file),
                "--occurrence-id",
                occurrence_id,
            ],
        )

    def test_lists_near_misses(self, exports):
        result = self._diagnose(exports, "bill-3-2025-06-20")

        assert result.exit_code == 0, result.output
        assert "Water: £40.00 due 2025-06-20" in result.output
        assert "txn-3 2025-06-20 £40.00 score 100 [pending]" in result.output
        assert "- Provider match: thames water" in result.output

    def test_no_near_misses(self, exports):
        result = self._diagnose(exports, "bill-2-2025-07-01")

        assert result.exit_code == 0, result.output
        assert "No transactions within £10.00 and 7 days" in result.output

    def test_unknown_bill(self, exports):
        result = self._diagnose(exports, "bill-9-2025-06-15")

        assert result.exit_code == 1
        assert "No bill with id 'bill-9'" in result.output

    def test_date_that_is_not_a_due_date(self, exports):
        result = self._diagnose(exports, "bill-1-2025-06-14")

        assert result.exit_code == 1
        assert "Netflix is not due on 2025-06-14" in result.output

    def test_malformed_occurrence_id(self, exports):
        result = self._diagnose(exports, "nonsense")

        assert result.exit_code == 2
        assert "expected <bill id>-YYYY-MM-DD" in result.output
