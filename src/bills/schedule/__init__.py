"""
Recurring Obligation Scheduler Package

Turns recurring bill definitions into calendar-accurate expected due dates.

This package provides:
- Obligation and Occurrence domain models
- Occurrence generation for weekly to yearly frequencies with month-end clamping
- Status resolution against stored paid/skipped records
"""

from .generator import (
    generate_for_month,
    generate_for_range,
    generate_occurrences,
)
from .models import (
    DEFAULT_ACTIVE_FROM,
    Frequency,
    Obligation,
    Occurrence,
    OccurrenceStatus,
    occurrence_id,
)
from .status import (
    OccurrenceRecord,
    existing_links,
    record_from_match,
    record_paid_manually,
    record_skipped,
    resolve_statuses,
)

__all__ = [
    "DEFAULT_ACTIVE_FROM",
    # Domain models
    "Frequency",
    "Obligation",
    "Occurrence",
    "OccurrenceRecord",
    "OccurrenceStatus",
    "existing_links",
    # Generation
    "generate_for_month",
    "generate_for_range",
    "generate_occurrences",
    "occurrence_id",
    "record_from_match",
    "record_paid_manually",
    "record_skipped",
    # Status resolution
    "resolve_statuses",
]
