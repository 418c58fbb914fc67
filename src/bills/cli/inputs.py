#!/usr/bin/env python3
"""
CLI Input Helpers

Loading of JSON exports and parsing of date options, with every failure turned
into a click error so commands exit cleanly with a message.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from ..core.calendar_math import month_bounds
from ..core.dates import FinancialDate
from ..core.json_utils import read_json_list
from ..matching.models import Transaction
from ..schedule.models import Obligation
from ..schedule.status import OccurrenceRecord

T = TypeVar("T")


def parse_date_option(value: str | None, option_name: str) -> FinancialDate | None:
    """Parse a YYYY-MM-DD option value."""
    if value is None:
        return None
    try:
        return FinancialDate.from_string(value)
    except ValueError as e:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option_name) from e


def resolve_range(month: str | None, start: str | None, end: str | None) -> tuple[FinancialDate, FinancialDate]:
    """
    Date range from either --month or --start/--end.

    Raises:
        click.UsageError: If neither or both forms are given, or the range is reversed
    """
    if month and (start or end):
        raise click.UsageError("Use either --month or --start/--end, not both")

    if month:
        try:
            year_str, month_str = month.split("-")
            first_day, last_day = month_bounds(int(year_str), int(month_str))
        except ValueError as e:
            raise click.BadParameter(f"expected YYYY-MM, got {month!r}", param_hint="--month") from e
        return FinancialDate(date=first_day), FinancialDate(date=last_day)

    if not (start and end):
        raise click.UsageError("Provide --month or both --start and --end")

    range_start = parse_date_option(start, "--start")
    range_end = parse_date_option(end, "--end")
    assert range_start is not None and range_end is not None

    if range_end < range_start:
        raise click.UsageError(f"--end {range_end} is before --start {range_start}")

    return range_start, range_end


def load_obligations(filepath: Path) -> list[Obligation]:
    """Load bill definitions from a JSON export."""
    return _parse_rows(filepath, "bills", Obligation.from_dict)


def load_transactions(filepath: Path) -> list[Transaction]:
    """Load bank transactions from a JSON export."""
    return _parse_rows(filepath, "transactions", Transaction.from_dict)


def load_records(filepath: Path | None) -> list[OccurrenceRecord]:
    """Load stored occurrence states; no file means no stored states."""
    if filepath is None:
        return []
    return _parse_rows(filepath, "occurrence states", OccurrenceRecord.from_dict)


def _parse_rows(filepath: Path, label: str, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    try:
        rows = read_json_list(filepath)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read {label} from {filepath}: {e}") from e

    parsed = []
    for index, row in enumerate(rows):
        try:
            parsed.append(parse(row))
        except KeyError as e:
            raise click.ClickException(f"Record #{index} in {label} file {filepath} is missing {e}") from e
        except (TypeError, ValueError) as e:
            raise click.ClickException(f"Record #{index} in {label} file {filepath} is invalid: {e}") from e
    return parsed
