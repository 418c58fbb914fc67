#!/usr/bin/env python3
"""
Candidate Matcher

Finds and scores the bank transactions that could be the payment for one
expected bill occurrence.

Exclusions come first: transactions already linked (in this pass or stored),
transactions reconciled to another bill, and pending transactions are never
candidates. Amount and date are then hard gates; provider and account
agreement add confidence.
"""

import logging
from collections.abc import Iterable, Set

from ..core.money import Money
from ..schedule.models import Occurrence
from .models import CandidateDiagnostic, MatchConfidence, MatchResult, Transaction
from .providers import ProviderAliasResolver
from .scorer import FactorScore, MatchScorer, ScoringPolicy

logger = logging.getLogger(__name__)


class CandidateMatcher:
    """Scores transactions against bill occurrences."""

    def __init__(
        self,
        policy: ScoringPolicy | None = None,
        resolver: ProviderAliasResolver | None = None,
    ):
        """
        Initialize the matcher.

        Args:
            policy: Scoring weights and thresholds (defaults to ScoringPolicy())
            resolver: Provider alias resolver (defaults to the built-in aliases)
        """
        self.policy = policy or ScoringPolicy()
        self.scorer = MatchScorer(self.policy)
        self.resolver = resolver or ProviderAliasResolver()

    def find_candidates(
        self,
        occurrence: Occurrence,
        transactions: Iterable[Transaction],
        already_linked_ids: Set[str] = frozenset(),
    ) -> list[MatchResult]:
        """
        Score every eligible transaction for one occurrence.

        Args:
            occurrence: Expected bill payment
            transactions: Bank transactions to consider
            already_linked_ids: Transaction ids that are already claimed

        Returns:
            Medium and high confidence candidates, highest score first. Low
            scoring candidates are dropped.
        """
        candidates = []

        for txn in transactions:
            if txn.id in already_linked_ids:
                continue
            if txn.existing_obligation_link:
                continue
            if txn.is_pending:
                continue

            amount = self.scorer.score_amount(txn.amount.difference(occurrence.expected_amount))
            if amount is None:
                continue

            date = self.scorer.score_date(txn.date.days_from(occurrence.due_date))
            if date is None:
                continue

            factors = [
                amount,
                date,
                self.scorer.score_provider(self._resolve_provider(occurrence, txn)),
                self.scorer.score_account(self._account_matches(occurrence, txn)),
            ]
            score, reasons = _total(factors)
            confidence = self.scorer.classify(score)

            if confidence == MatchConfidence.LOW:
                logger.debug("Dropping %s for %s: score %d below floor", txn.id, occurrence.id, score)
                continue

            candidates.append(
                MatchResult(
                    occurrence=occurrence,
                    transaction_id=txn.id,
                    score=score,
                    confidence=confidence,
                    reasons=reasons,
                )
            )

        # Stable sort keeps input order between equal scores
        candidates.sort(key=lambda m: m.score, reverse=True)
        return candidates

    def diagnose(self, occurrence: Occurrence, transactions: Iterable[Transaction]) -> list[CandidateDiagnostic]:
        """
        Near-miss report for one occurrence, for debugging unmatched bills.

        No exclusions, no hard gates and no confidence floor: every
        transaction within the relaxed diagnostic window (default £10.00 and 7
        days) is returned with the raw factor breakdown, in input order.
        """
        tolerance = Money.from_pence(self.policy.diagnostic_amount_tolerance_pence)
        diagnostics = []

        for txn in transactions:
            amount_difference = txn.amount.difference(occurrence.expected_amount)
            days_difference = txn.date.days_from(occurrence.due_date)

            if amount_difference > tolerance or days_difference > self.policy.diagnostic_date_window_days:
                continue

            provider_match = self._resolve_provider(occurrence, txn)
            account_match = self._account_matches(occurrence, txn)

            factors = [
                self.scorer.score_amount(amount_difference)
                or FactorScore(0, f"Amount outside tolerance ({amount_difference} off)"),
                self.scorer.score_date(days_difference)
                or FactorScore(0, f"Outside date window ({days_difference} days from due date)"),
                self.scorer.score_provider(provider_match),
                self.scorer.score_account(account_match),
            ]
            score, reasons = _total(factors)

            diagnostics.append(
                CandidateDiagnostic(
                    transaction=txn,
                    amount_difference=amount_difference,
                    days_difference=days_difference,
                    provider_match=provider_match,
                    account_match=account_match,
                    score=score,
                    reasons=reasons,
                )
            )

        return diagnostics

    def _resolve_provider(self, occurrence: Occurrence, txn: Transaction) -> str | None:
        return self.resolver.resolve(occurrence.obligation.match_hint, txn.merchant_text, txn.description_text)

    @staticmethod
    def _account_matches(occurrence: Occurrence, txn: Transaction) -> bool:
        linked = occurrence.obligation.linked_account_id
        return bool(linked) and txn.account_id == linked


def _total(factors: list[FactorScore | None]) -> tuple[int, list[str]]:
    """Sum contributing factors, keeping their reasons in scoring order."""
    contributing = [f for f in factors if f is not None]
    return sum(f.points for f in contributing), [f.reason for f in contributing]
