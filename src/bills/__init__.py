"""
Household Bills - Recurring Bill Scheduling and Reconciliation

Turns recurring bill definitions into calendar-accurate expected due dates and
reconciles real bank transactions against them with confidence-scored,
one-to-one matching.

Domain Packages:
- core: Money, dates, calendar arithmetic, configuration, JSON helpers
- schedule: Obligations, occurrence generation and status resolution
- matching: Provider aliases, candidate scoring, auto-match routing
- analysis: Occurrence reporting tables
- cli: Command-line interface

Example Usage:
    from bills import Obligation, generate_for_month, auto_match

    occurrences = generate_for_month(obligations, 2025, 6)
    result = auto_match(occurrences, transactions, existing_links={})
"""

__version__ = "0.1.0"
__author__ = "Household Bills Contributors"

from .core.config import Environment, get_config
from .core.dates import FinancialDate
from .core.money import Money
from .matching import (
    AutoMatchResult,
    CandidateMatcher,
    MatchConfidence,
    MatchResult,
    ProviderAliasResolver,
    ScoringPolicy,
    Transaction,
    auto_match,
)
from .schedule import (
    Frequency,
    Obligation,
    Occurrence,
    OccurrenceRecord,
    OccurrenceStatus,
    existing_links,
    generate_for_month,
    generate_for_range,
    generate_occurrences,
    record_from_match,
    resolve_statuses,
)

__all__ = [
    "AutoMatchResult",
    "CandidateMatcher",
    # Configuration
    "Environment",
    # Primitives
    "FinancialDate",
    # Scheduling
    "Frequency",
    # Matching
    "MatchConfidence",
    "MatchResult",
    "Money",
    "Obligation",
    "Occurrence",
    "OccurrenceRecord",
    "OccurrenceStatus",
    "ProviderAliasResolver",
    "ScoringPolicy",
    "Transaction",
    "auto_match",
    "existing_links",
    "generate_for_month",
    "generate_for_range",
    "generate_occurrences",
    "get_config",
    "record_from_match",
    "resolve_statuses",
]
