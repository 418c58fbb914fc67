#!/usr/bin/env python3
"""
Match Scoring

Additive scoring of a transaction as the payment for an expected occurrence.
Amount and date are hard gates: outside tolerance the transaction is not a
candidate at all. Provider and account agreement only add points.

Default weights:
    exact amount            +40     amount within tolerance   +25
    exact date              +30     within N days             max(10, 25 - 5N)
    provider match          +30     account match             +10

Bands: high >= 80, medium >= 50, anything lower is dropped.
"""

from dataclasses import dataclass

from ..core.currency import format_pence
from ..core.money import Money
from .models import MatchConfidence


@dataclass(frozen=True)
class ScoringPolicy:
    """Scoring weights, gates and confidence thresholds."""

    exact_amount_points: int = 40
    near_amount_points: int = 25
    amount_tolerance_pence: int = 100

    exact_date_points: int = 30
    near_date_base_points: int = 25
    near_date_points_per_day: int = 5
    near_date_min_points: int = 10
    date_window_days: int = 3

    provider_points: int = 30
    account_points: int = 10

    high_threshold: int = 80
    medium_threshold: int = 50

    # Relaxed gates used by diagnostics only
    diagnostic_amount_tolerance_pence: int = 1000
    diagnostic_date_window_days: int = 7

    @property
    def amount_tolerance(self) -> Money:
        return Money.from_pence(self.amount_tolerance_pence)


@dataclass(frozen=True)
class FactorScore:
    """Points and audit reason for one scoring factor."""

    points: int
    reason: str


class MatchScorer:
    """Scores individual factors under a ScoringPolicy."""

    def __init__(self, policy: ScoringPolicy | None = None):
        self.policy = policy or ScoringPolicy()

    def score_amount(self, amount_difference: Money) -> FactorScore | None:
        """
        Score the amount factor.

        Returns:
            FactorScore, or None when the difference is outside tolerance
        """
        diff = amount_difference.to_pence()
        if diff == 0:
            return FactorScore(self.policy.exact_amount_points, "Exact amount match")
        if diff <= self.policy.amount_tolerance_pence:
            return FactorScore(
                self.policy.near_amount_points,
                f"Amount within ±{format_pence(self.policy.amount_tolerance_pence)}",
            )
        return None

    def score_date(self, days_difference: int) -> FactorScore | None:
        """
        Score the date factor.

        Returns:
            FactorScore, or None when the transaction is outside the date window
        """
        if days_difference == 0:
            return FactorScore(self.policy.exact_date_points, "Exact date match")
        if days_difference <= self.policy.date_window_days:
            return FactorScore(self._near_date_points(days_difference), f"Within {days_difference} day(s) of due date")
        return None

    def _near_date_points(self, days_difference: int) -> int:
        return max(
            self.policy.near_date_min_points,
            self.policy.near_date_base_points - self.policy.near_date_points_per_day * days_difference,
        )

    def score_provider(self, provider_key: str | None) -> FactorScore | None:
        if provider_key is None:
            return None
        return FactorScore(self.policy.provider_points, f"Provider match: {provider_key}")

    def score_account(self, account_match: bool) -> FactorScore | None:
        if not account_match:
            return None
        return FactorScore(self.policy.account_points, "Account match")

    def classify(self, score: int) -> MatchConfidence:
        """Confidence band for a total score."""
        if score >= self.policy.high_threshold:
            return MatchConfidence.HIGH
        if score >= self.policy.medium_threshold:
            return MatchConfidence.MEDIUM
        return MatchConfidence.LOW
