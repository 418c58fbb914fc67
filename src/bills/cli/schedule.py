#!/usr/bin/env python3
"""
Schedule CLI - Occurrence Generation Commands

Expands bill definitions into expected due dates for a month or date range.
"""

from datetime import datetime
from pathlib import Path

import click

from ..analysis.summary import monthly_totals, summarize_by_status
from ..core.config import get_config
from ..core.currency import format_pence
from ..core.dates import FinancialDate
from ..core.json_utils import write_json
from ..schedule import generate_for_range, resolve_statuses
from .inputs import load_obligations, load_records, parse_date_option, resolve_range

INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group()
def schedule() -> None:
    """Bill schedule commands."""
    pass


@schedule.command()
@click.option("--obligations", "obligations_file", required=True, type=INPUT_FILE, help="Bills JSON export")
@click.option("--month", help="Month to generate (YYYY-MM)")
@click.option("--start", help="Range start (YYYY-MM-DD)")
@click.option("--end", help="Range end (YYYY-MM-DD)")
@click.option("--states", "states_file", type=INPUT_FILE, help="Stored occurrence states JSON (paid/skipped)")
@click.option("--today", help="Reference date for overdue detection (YYYY-MM-DD, default: today)")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Output JSON file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def generate(
    ctx: click.Context,
    obligations_file: Path,
    month: str | None,
    start: str | None,
    end: str | None,
    states_file: Path | None,
    today: str | None,
    output: Path | None,
    verbose: bool,
) -> None:
    """
    Generate expected bill due dates.

    Examples:
      bills schedule generate --obligations bills.json --month 2025-06
      bills schedule generate --obligations bills.json --start 2025-01-01 --end 2025-12-31
        --states occurrences.json --today 2025-07-01
    """
    config = get_config()
    range_start, range_end = resolve_range(month, start, end)
    reference_date = parse_date_option(today, "--today") or FinancialDate.today()

    obligations = load_obligations(obligations_file)
    records = load_records(states_file)

    if verbose or (ctx.obj or {}).get("verbose", False):
        click.echo(f"Loaded {len(obligations)} bills and {len(records)} stored occurrence states")
        click.echo(f"Range: {range_start} to {range_end}")
        click.echo()

    occurrences = resolve_statuses(generate_for_range(obligations, range_start, range_end), records, reference_date)
    occurrences.sort(key=lambda o: o.due_date)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output or config.output_dir / f"{timestamp}_occurrences.json"

    write_json(
        output_file,
        {
            "metadata": {
                "start_date": range_start.to_iso_string(),
                "end_date": range_end.to_iso_string(),
                "today": reference_date.to_iso_string(),
                "timestamp": timestamp,
            },
            "occurrences": [o.to_dict() for o in occurrences],
            "by_month": {
                month: {"count": int(row["count"]), "expected_pence": int(row["expected_pence"])}
                for month, row in monthly_totals(occurrences).iterrows()
            },
        },
    )

    click.echo(f"Generated {len(occurrences)} occurrences from {len(obligations)} bills")
    summary = summarize_by_status(occurrences)
    for status, row in summary.iterrows():
        click.echo(f"   {status:<8} {int(row['count']):>4}  {format_pence(int(row['expected_pence']))}")
    click.echo(f"   Results saved to: {output_file}")
