#!/usr/bin/env python3
"""
Auto-Match Router

Runs the candidate matcher over every unpaid occurrence and decides what
happens with each best candidate:
- high confidence: applied automatically, and the transaction is claimed so no
  later occurrence in the same pass can be offered it
- medium confidence: surfaced for review without claiming the transaction
- nothing above the floor: the occurrence stays unmatched

The claimed-transaction set is local to one call, so a pass never mutates its
inputs and independent groups of obligations can be matched in parallel.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..schedule.models import Occurrence, OccurrenceStatus
from .matcher import CandidateMatcher
from .models import AutoMatchResult, MatchConfidence, Transaction

logger = logging.getLogger(__name__)


def auto_match(
    occurrences: Iterable[Occurrence],
    transactions: Sequence[Transaction],
    existing_links: Mapping[str, str],
    matcher: CandidateMatcher | None = None,
) -> AutoMatchResult:
    """
    Match transactions to unpaid occurrences.

    Args:
        occurrences: Occurrences in processing order (usually chronological);
            paid ones are ignored
        transactions: Candidate bank transactions
        existing_links: Stored links, transaction id -> occurrence id
        matcher: Candidate matcher (defaults to CandidateMatcher())

    Returns:
        AutoMatchResult with auto-apply and for-review matches. Each occurrence
        and each auto-applied transaction appears at most once.
    """
    matcher = matcher or CandidateMatcher()
    linked_transaction_ids = set(existing_links.keys())
    matched_occurrences: set[str] = set()
    result = AutoMatchResult()

    unpaid = [o for o in occurrences if o.status != OccurrenceStatus.PAID]

    for occurrence in unpaid:
        if occurrence.id in matched_occurrences:
            continue

        candidates = matcher.find_candidates(occurrence, transactions, linked_transaction_ids)
        if not candidates:
            logger.debug("No candidates for %s", occurrence.id)
            continue

        best = candidates[0]

        if best.confidence == MatchConfidence.HIGH:
            result.auto_apply.append(best)
            matched_occurrences.add(occurrence.id)
            linked_transaction_ids.add(best.transaction_id)
            logger.debug("Auto-applying %s -> %s (score %d)", best.transaction_id, occurrence.id, best.score)
        elif best.confidence == MatchConfidence.MEDIUM:
            result.for_review.append(best)
            matched_occurrences.add(occurrence.id)
            logger.debug("Review %s -> %s (score %d)", best.transaction_id, occurrence.id, best.score)

    logger.info(
        "Auto-match: %d unpaid occurrence(s), %d auto-applied, %d for review",
        len(unpaid),
        len(result.auto_apply),
        len(result.for_review),
    )
    return result


def summarize_auto_match(result: AutoMatchResult, occurrences: Iterable[Occurrence]) -> dict[str, Any]:
    """
    Generate summary statistics for an auto-match pass.

    Args:
        result: Output of auto_match
        occurrences: The occurrences that were passed to auto_match

    Returns:
        Dictionary with occurrence counts and matched amounts in pence
    """
    unpaid = [o for o in occurrences if o.status != OccurrenceStatus.PAID]
    considered = len(unpaid)
    auto_applied = len(result.auto_apply)
    for_review = len(result.for_review)

    return {
        "occurrences_considered": considered,
        "auto_applied": auto_applied,
        "for_review": for_review,
        "unmatched": considered - auto_applied - for_review,
        "auto_match_rate": auto_applied / considered if considered else 0.0,
        "auto_applied_amount": sum(m.occurrence.expected_amount.to_pence() for m in result.auto_apply),
        "for_review_amount": sum(m.occurrence.expected_amount.to_pence() for m in result.for_review),
    }
