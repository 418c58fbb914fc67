#!/usr/bin/env python3
"""
Occurrence Generator

Expands a recurring obligation into the expected due dates that fall inside a
queried date range. Generation is a pure function of (obligation, range):
nothing is cached or stored, so repeated calls return equal lists.

Two families of frequency:
1. Interval stepping (weekly, fortnightly) - fixed day steps from the
   obligation's start date
2. Calendar anchored (monthly, quarterly, biannual, yearly) - the obligation's
   due day in every Nth month counted from its start month, clamped to the
   month's last day

Every generated occurrence has status "due"; callers upgrade it after
cross-referencing stored payments (see `bills.schedule.status`).
"""

import logging
from collections.abc import Iterable
from datetime import date

from ..core.calendar_math import add_days, clamp_day, from_month_index, month_bounds, month_index
from ..core.dates import FinancialDate
from .models import Obligation, Occurrence

logger = logging.getLogger(__name__)


def generate_occurrences(
    obligation: Obligation,
    range_start: FinancialDate,
    range_end: FinancialDate,
) -> list[Occurrence]:
    """
    Generate an obligation's occurrences within an inclusive date range.

    Args:
        obligation: Recurring bill definition
        range_start: First day of the range (inclusive)
        range_end: Last day of the range (inclusive)

    Returns:
        Occurrences ordered by ascending due date. Empty for an inactive
        obligation, a reversed range, a range outside the active period and a
        month-based obligation whose due day is not 1-31.
    """
    if not obligation.is_active:
        return []

    if range_end < range_start:
        logger.warning(
            "Reversed range %s..%s for obligation %s; nothing generated",
            range_start,
            range_end,
            obligation.id,
        )
        return []

    if range_end < obligation.active_from:
        return []

    if obligation.active_until is not None and obligation.active_until < range_start:
        return []

    if obligation.frequency.is_calendar_anchored:
        if not 1 <= obligation.due_day <= 31:
            logger.warning(
                "Obligation %s has due_day %d outside 1-31; nothing generated",
                obligation.id,
                obligation.due_day,
            )
            return []
        due_dates = _calendar_anchored_dates(obligation, range_start.date, range_end.date)
    else:
        due_dates = _interval_dates(obligation, range_start.date, range_end.date)

    occurrences = [Occurrence.for_obligation(obligation, FinancialDate(date=d)) for d in due_dates]

    logger.debug(
        "Generated %d occurrence(s) for %s (%s) in %s..%s",
        len(occurrences),
        obligation.id,
        obligation.frequency.value,
        range_start,
        range_end,
    )
    return occurrences


def _interval_dates(obligation: Obligation, range_start: date, range_end: date) -> list[date]:
    """Due dates for weekly/fortnightly obligations, stepping from the start date."""
    interval = obligation.frequency.interval_days
    if interval is None:
        raise ValueError(f"{obligation.frequency} is not an interval frequency")

    active_until = obligation.active_until.date if obligation.active_until else None

    current = obligation.active_from.date
    if current < range_start:
        # Jump straight to the first step on or after range_start
        steps = -(-(range_start - current).days // interval)
        current = add_days(current, steps * interval)

    due_dates = []
    while current <= range_end:
        if active_until is not None and current > active_until:
            break
        due_dates.append(current)
        current = add_days(current, interval)

    return due_dates


def _calendar_anchored_dates(obligation: Obligation, range_start: date, range_end: date) -> list[date]:
    """
    Due dates for month-based obligations.

    Stepping runs on month indexes rather than on the previous due date, so a
    due day clamped in a short month (31 -> 28 February) is restored in the
    next long month.
    """
    step = obligation.frequency.month_step
    if step is None:
        raise ValueError(f"{obligation.frequency} is not a calendar-anchored frequency")

    active_from = obligation.active_from.date
    active_until = obligation.active_until.date if obligation.active_until else None

    # First schedule month at or after the month containing range_start,
    # counted in steps from the month the obligation started
    index = month_index(range_start)
    offset = (index - month_index(active_from)) % step
    if offset:
        index += step - offset
    current = _due_date_for_index(obligation, index)

    # This month's due date already passed at the start of the range
    if current < range_start:
        index += step
        current = _due_date_for_index(obligation, index)

    due_dates = []
    while current <= range_end:
        if active_until is not None and current > active_until:
            break
        if current >= active_from:
            due_dates.append(current)
        index += step
        current = _due_date_for_index(obligation, index)

    return due_dates


def _due_date_for_index(obligation: Obligation, index: int) -> date:
    year, month = from_month_index(index)
    return clamp_day(year, month, obligation.due_day)


def generate_for_range(
    obligations: Iterable[Obligation],
    range_start: FinancialDate,
    range_end: FinancialDate,
) -> list[Occurrence]:
    """
    Occurrences of several obligations within a date range.

    Results are grouped per obligation in input order, each group ascending
    by due date.
    """
    occurrences: list[Occurrence] = []
    for obligation in obligations:
        occurrences.extend(generate_occurrences(obligation, range_start, range_end))
    return occurrences


def generate_for_month(obligations: Iterable[Obligation], year: int, month: int) -> list[Occurrence]:
    """
    Occurrences of several obligations within one calendar month.

    Args:
        obligations: Obligations to expand
        year: Calendar year
        month: Calendar month, 1-12
    """
    first_day, last_day = month_bounds(year, month)
    return generate_for_range(obligations, FinancialDate(date=first_day), FinancialDate(date=last_day))
