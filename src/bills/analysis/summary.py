#!/usr/bin/env python3
"""
Occurrence Reporting

Tabular views of generated occurrences for the upcoming-bills and month
summary screens: one row per occurrence, totals per status and per month.
Amounts stay in integer pence.
"""

from collections.abc import Iterable

import pandas as pd

from ..schedule.models import Occurrence, OccurrenceStatus

OCCURRENCE_COLUMNS = [
    "occurrence_id",
    "obligation_id",
    "obligation_name",
    "due_date",
    "expected_pence",
    "status",
]


def occurrences_to_frame(occurrences: Iterable[Occurrence]) -> pd.DataFrame:
    """
    One row per occurrence, sorted by due date then obligation id.

    `due_date` holds `datetime.date` values; `status` holds the status value
    string.
    """
    rows = [
        {
            "occurrence_id": o.id,
            "obligation_id": o.obligation_id,
            "obligation_name": o.obligation_name,
            "due_date": o.due_date.date,
            "expected_pence": o.expected_amount.to_pence(),
            "status": o.status.value,
        }
        for o in occurrences
    ]
    if not rows:
        return pd.DataFrame(columns=OCCURRENCE_COLUMNS)

    df = pd.DataFrame(rows, columns=OCCURRENCE_COLUMNS)
    return df.sort_values(["due_date", "obligation_id"], kind="stable").reset_index(drop=True)


def summarize_by_status(occurrences: Iterable[Occurrence]) -> pd.DataFrame:
    """
    Count and expected total per status.

    Every status appears, in lifecycle order, with zeros where nothing
    matched.
    """
    df = occurrences_to_frame(occurrences)
    statuses = [s.value for s in OccurrenceStatus]

    if df.empty:
        summary = pd.DataFrame({"count": 0, "expected_pence": 0}, index=statuses)
    else:
        summary = (
            df.groupby("status")
            .agg(count=("occurrence_id", "size"), expected_pence=("expected_pence", "sum"))
            .reindex(statuses, fill_value=0)
        )

    summary.index.name = "status"
    return summary.astype("int64")


def monthly_totals(occurrences: Iterable[Occurrence]) -> pd.DataFrame:
    """Count and expected total per calendar month ("YYYY-MM")."""
    df = occurrences_to_frame(occurrences)
    if df.empty:
        empty = pd.DataFrame(columns=["count", "expected_pence"], dtype="int64")
        empty.index.name = "month"
        return empty

    df["month"] = df["due_date"].map(lambda d: f"{d.year:04d}-{d.month:02d}")
    return (
        df.groupby("month")
        .agg(count=("occurrence_id", "size"), expected_pence=("expected_pence", "sum"))
        .astype("int64")
    )
