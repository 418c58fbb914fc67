"""
Transaction Reconciliation Package

Proves which bank transaction paid which expected bill occurrence.

This package provides:
- Provider alias resolution between bill names and statement text
- Additive, confidence-banded candidate scoring with amount and date gates
- An auto-match router that keeps occurrence/transaction pairing one-to-one
- A relaxed diagnostics report for debugging unmatched bills

Key Components:
- providers: ProviderAliasResolver and the default alias table
- scorer: ScoringPolicy and per-factor scoring
- matcher: CandidateMatcher (find_candidates, diagnose)
- router: auto_match and run summaries
"""

from .matcher import CandidateMatcher
from .models import (
    AutoMatchResult,
    CandidateDiagnostic,
    MatchConfidence,
    MatchResult,
    Transaction,
)
from .providers import (
    DEFAULT_PROVIDER_ALIASES,
    ProviderAliasResolver,
    load_provider_aliases,
)
from .router import auto_match, summarize_auto_match
from .scorer import FactorScore, MatchScorer, ScoringPolicy

__all__ = [
    "DEFAULT_PROVIDER_ALIASES",
    # Domain models
    "AutoMatchResult",
    "CandidateDiagnostic",
    # Matching
    "CandidateMatcher",
    "FactorScore",
    "MatchConfidence",
    "MatchResult",
    "MatchScorer",
    # Provider aliases
    "ProviderAliasResolver",
    # Scoring
    "ScoringPolicy",
    "Transaction",
    # Routing
    "auto_match",
    "load_provider_aliases",
    "summarize_auto_match",
]
