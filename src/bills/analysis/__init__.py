"""
Bill Analysis Package

Reporting over generated occurrences.

Key Components:
- summary: occurrence tables, per-status and per-month totals
"""

from .summary import OCCURRENCE_COLUMNS, monthly_totals, occurrences_to_frame, summarize_by_status

__all__ = [
    "OCCURRENCE_COLUMNS",
    "monthly_totals",
    "occurrences_to_frame",
    "summarize_by_status",
]
