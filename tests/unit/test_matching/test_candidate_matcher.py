#!/usr/bin/env python3
"""
Unit tests for candidate matching.

Covers exclusions, the amount and date gates, additive scoring and the
confidence floor, plus the relaxed diagnostics report.
"""

import pytest

from bills.core.dates import FinancialDate
from bills.matching.matcher import CandidateMatcher
from bills.matching.models import MatchConfidence
from bills.matching.scorer import ScoringPolicy
from bills.schedule.models import Occurrence
from tests.fixtures.synthetic_data import make_obligation, make_transaction


@pytest.fixture
def occurrence(netflix_bill, june_15):
    return Occurrence.for_obligation(netflix_bill, june_15)


@pytest.mark.matching
class TestFindCandidates:
    """Scoring and filtering of candidate transactions."""

    def setup_method(self):
        self.matcher = CandidateMatcher()

    def test_exact_match_scores_high(self, occurrence, exact_netflix_payment):
        candidates = self.matcher.find_candidates(occurrence, [exact_netflix_payment])

        assert len(candidates) == 1
        match = candidates[0]
        assert match.transaction_id == "txn-1"
        assert match.occurrence_id == "bill-1-2025-06-15"
        assert match.score == 100
        assert match.confidence == MatchConfidence.HIGH
        assert match.reasons == ["Exact amount match", "Exact date match", "Provider match: netflix"]

    def test_amount_gate_excludes_regardless_of_other_factors(self, occurrence):
        txn = make_transaction(amount="17.49", date="2025-06-15", merchant="NETFLIX.COM")
        assert self.matcher.find_candidates(occurrence, [txn]) == []

    def test_date_gate_excludes_regardless_of_other_factors(self, occurrence):
        txn = make_transaction(amount="15.99", date="2025-06-19", merchant="NETFLIX.COM")
        assert self.matcher.find_candidates(occurrence, [txn]) == []

    def test_date_window_is_symmetric(self, occurrence):
        early = make_transaction(id="early", date="2025-06-12", merchant="NETFLIX.COM")
        late = make_transaction(id="late", date="2025-06-18", merchant="NETFLIX.COM")

        candidates = self.matcher.find_candidates(occurrence, [early, late])
        assert [(m.transaction_id, m.score) for m in candidates] == [("early", 80), ("late", 80)]

    def test_near_amount_and_near_date(self, occurrence):
        txn = make_transaction(amount="16.49", date="2025-06-16", merchant="NETFLIX.COM")
        match = self.matcher.find_candidates(occurrence, [txn])[0]

        assert match.score == 25 + 20 + 30
        assert match.confidence == MatchConfidence.MEDIUM
        assert match.reasons == ["Amount within ±£1.00", "Within 1 day(s) of due date", "Provider match: netflix"]

    def test_low_scores_are_dropped(self, occurrence):
        # 25 (near amount) + 10 (three days) with no provider
        txn = make_transaction(amount="15.49", date="2025-06-18", merchant="TESCO STORES")
        assert self.matcher.find_candidates(occurrence, [txn]) == []

    def test_amount_and_date_without_provider_is_medium(self, occurrence):
        txn = make_transaction(amount="15.99", date="2025-06-15", merchant="CARD 1234")
        match = self.matcher.find_candidates(occurrence, [txn])[0]

        assert match.score == 70
        assert match.confidence == MatchConfidence.MEDIUM

    def test_account_match_requires_linked_account(self, june_15):
        linked = Occurrence.for_obligation(make_obligation(provider="Netflix", account_id="acc-1"), june_15)
        unlinked = Occurrence.for_obligation(make_obligation(provider="Netflix"), june_15)
        txn = make_transaction(merchant="CARD 1234", account_id="acc-1")

        linked_match = self.matcher.find_candidates(linked, [txn])[0]
        assert linked_match.score == 80
        assert linked_match.reasons[-1] == "Account match"
        assert self.matcher.find_candidates(unlinked, [txn])[0].score == 70

    def test_other_account_does_not_score(self, june_15):
        bill = Occurrence.for_obligation(make_obligation(provider="Netflix", account_id="acc-1"), june_15)
        txn = make_transaction(merchant="CARD 1234", account_id="acc-2")

        assert self.matcher.find_candidates(bill, [txn])[0].score == 70

    def test_pending_transactions_never_returned(self, occurrence):
        txn = make_transaction(merchant="NETFLIX.COM", is_pending=True)
        assert self.matcher.find_candidates(occurrence, [txn]) == []

    def test_already_linked_transactions_skipped(self, occurrence, exact_netflix_payment):
        assert self.matcher.find_candidates(occurrence, [exact_netflix_payment], {"txn-1"}) == []

    def test_transactions_reconciled_to_a_bill_skipped(self, occurrence):
        txn = make_transaction(merchant="NETFLIX.COM", bill_id="bill-9")
        assert self.matcher.find_candidates(occurrence, [txn]) == []

    def test_sorted_by_score_with_stable_ties(self, occurrence):
        transactions = [
            make_transaction(id="weak", date="2025-06-17", merchant="NETFLIX.COM"),
            make_transaction(id="tie-a", date="2025-06-15", merchant="CARD"),
            make_transaction(id="best", date="2025-06-15", merchant="NETFLIX.COM"),
            make_transaction(id="tie-b", date="2025-06-15", merchant="CARD"),
        ]
        candidates = self.matcher.find_candidates(occurrence, transactions)

        assert [m.transaction_id for m in candidates] == ["best", "weak", "tie-a", "tie-b"]
        assert [m.score for m in candidates] == [100, 85, 70, 70]

    def test_custom_policy(self, occurrence):
        matcher = CandidateMatcher(policy=ScoringPolicy(amount_tolerance_pence=200, date_window_days=5))
        txn = make_transaction(amount="17.49", date="2025-06-20", merchant="NETFLIX.COM")

        match = matcher.find_candidates(occurrence, [txn])[0]
        assert match.score == 25 + 10 + 30


@pytest.mark.matching
class TestDiagnose:
    """Near-miss report without gates or floor."""

    def test_reports_near_misses_with_breakdown(self, occurrence):
        txn = make_transaction(amount="17.49", date="2025-06-20", merchant="NETFLIX.COM")
        diagnostics = CandidateMatcher().diagnose(occurrence, [txn])

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.amount_difference.to_pence() == 150
        assert diagnostic.days_difference == 5
        assert diagnostic.provider_match == "netflix"
        assert diagnostic.account_match is False
        assert diagnostic.score == 30
        assert diagnostic.reasons == [
            "Amount outside tolerance (£1.50 off)",
            "Outside date window (5 days from due date)",
            "Provider match: netflix",
        ]

    def test_excludes_beyond_relaxed_window(self, occurrence):
        transactions = [
            make_transaction(id="too-much", amount="26.00"),
            make_transaction(id="too-late", date="2025-06-23"),
            make_transaction(id="edge", amount="25.99", date="2025-06-22"),
        ]
        diagnostics = CandidateMatcher().diagnose(occurrence, transactions)

        assert [d.transaction.id for d in diagnostics] == ["edge"]

    def test_flags_pending_and_linked_instead_of_excluding(self, occurrence):
        transactions = [
            make_transaction(id="pending", is_pending=True),
            make_transaction(id="linked", bill_id="bill-9"),
        ]
        diagnostics = CandidateMatcher().diagnose(occurrence, transactions)

        assert [d.transaction.id for d in diagnostics] == ["pending", "linked"]
        assert diagnostics[0].is_pending
        assert diagnostics[1].existing_obligation_link == "bill-9"
        assert diagnostics[1].to_dict()["existing_obligation_link"] == "bill-9"

    def test_low_scores_still_reported(self, occurrence):
        txn = make_transaction(amount="15.49", date="2025-06-18", merchant="TESCO")
        diagnostic = CandidateMatcher().diagnose(occurrence, [txn])[0]

        assert diagnostic.score == 35
        assert MatchConfidence.LOW == CandidateMatcher().scorer.classify(diagnostic.score)

    def test_dates_compare_as_calendar_days(self):
        bill = Occurrence.for_obligation(make_obligation(), FinancialDate.of(2025, 6, 15))
        txn = make_transaction(date="2025-06-15T23:59:00Z", merchant="NETFLIX.COM")

        assert CandidateMatcher().diagnose(bill, [txn])[0].days_difference == 0
