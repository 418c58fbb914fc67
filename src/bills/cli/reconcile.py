#!/usr/bin/env python3
"""
Reconcile CLI - Transaction Matching Commands

Runs the reconciliation pipeline over exported bills, transactions and stored
occurrence states: generate occurrences, resolve stored statuses, auto-match,
and write the matches plus the paid records the application should upsert.
"""

from datetime import datetime
from pathlib import Path

import click

from ..core.config import get_config
from ..core.currency import format_pence
from ..core.dates import FinancialDate
from ..core.json_utils import write_json
from ..matching import CandidateMatcher, auto_match, summarize_auto_match
from ..schedule import existing_links, generate_for_range, generate_occurrences, record_from_match, resolve_statuses
from .inputs import load_obligations, load_records, load_transactions, parse_date_option, resolve_range

INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _build_matcher() -> CandidateMatcher:
    config = get_config()
    try:
        resolver = config.providers.to_resolver()
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load provider aliases: {e}") from e
    return CandidateMatcher(policy=config.matching.to_policy(), resolver=resolver)


@click.group()
def reconcile() -> None:
    """Transaction reconciliation commands."""
    pass


@reconcile.command()
@click.option("--obligations", "obligations_file", required=True, type=INPUT_FILE, help="Bills JSON export")
@click.option("--transactions", "transactions_file", required=True, type=INPUT_FILE, help="Transactions JSON export")
@click.option("--month", help="Month to reconcile (YYYY-MM)")
@click.option("--start", help="Range start (YYYY-MM-DD)")
@click.option("--end", help="Range end (YYYY-MM-DD)")
@click.option("--states", "states_file", type=INPUT_FILE, help="Stored occurrence states JSON (paid/skipped)")
@click.option("--today", help="Reference date for overdue detection (YYYY-MM-DD, default: today)")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Output JSON file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def match(
    ctx: click.Context,
    obligations_file: Path,
    transactions_file: Path,
    month: str | None,
    start: str | None,
    end: str | None,
    states_file: Path | None,
    today: str | None,
    output: Path | None,
    verbose: bool,
) -> None:
    """
    Match bank transactions to unpaid bill occurrences.

    High confidence matches are listed for automatic application together with
    the paid records to store; medium confidence matches are listed for review.

    Examples:
      bills reconcile match --obligations bills.json --transactions txns.json --month 2025-06
      bills reconcile match --obligations bills.json --transactions txns.json
        --start 2025-06-01 --end 2025-06-30 --states occurrences.json
    """
    config = get_config()
    range_start, range_end = resolve_range(month, start, end)
    reference_date = parse_date_option(today, "--today") or FinancialDate.today()

    obligations = load_obligations(obligations_file)
    transactions = load_transactions(transactions_file)
    records = load_records(states_file)

    if verbose or (ctx.obj or {}).get("verbose", False):
        click.echo("Bill Reconciliation")
        click.echo(f"Range: {range_start} to {range_end}")
        click.echo(f"Loaded {len(obligations)} bills, {len(transactions)} transactions, {len(records)} stored states")
        click.echo()

    matcher = _build_matcher()

    occurrences = resolve_statuses(generate_for_range(obligations, range_start, range_end), records, reference_date)
    occurrences.sort(key=lambda o: o.due_date)

    result = auto_match(occurrences, transactions, existing_links(records), matcher=matcher)
    summary = summarize_auto_match(result, occurrences)

    now = datetime.now()
    timestamp = now.strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output or config.output_dir / f"{timestamp}_reconciliation.json"

    write_json(
        output_file,
        {
            "metadata": {
                "start_date": range_start.to_iso_string(),
                "end_date": range_end.to_iso_string(),
                "today": reference_date.to_iso_string(),
                "timestamp": timestamp,
            },
            "summary": summary,
            **result.to_dict(),
            "records": [record_from_match(m, paid_at=now).to_dict() for m in result.auto_apply],
        },
    )

    click.echo(
        f"✅ {summary['auto_applied']} auto-applied, {summary['for_review']} for review, "
        f"{summary['unmatched']} unmatched of {summary['occurrences_considered']} unpaid occurrences"
    )
    click.echo(f"   Auto-applied amount: {format_pence(summary['auto_applied_amount'])}")
    click.echo(f"   For review amount: {format_pence(summary['for_review_amount'])}")
    click.echo(f"   Results saved to: {output_file}")


@reconcile.command()
@click.option("--obligations", "obligations_file", required=True, type=INPUT_FILE, help="Bills JSON export")
@click.option("--transactions", "transactions_file", required=True, type=INPUT_FILE, help="Transactions JSON export")
@click.option("--occurrence-id", required=True, help="Occurrence id, e.g. bill-1-2025-06-15")
def diagnose(obligations_file: Path, transactions_file: Path, occurrence_id: str) -> None:
    """
    Show near-miss transactions for one occurrence.

    Lists every transaction within £10.00 and 7 days of the due date with its
    raw factor breakdown, ignoring the usual gates and confidence floor.

    Example:
      bills reconcile diagnose --obligations bills.json --transactions txns.json
        --occurrence-id bill-1-2025-06-15
    """
    obligation_id, due_date = _split_occurrence_id(occurrence_id)

    obligations = {o.id: o for o in load_obligations(obligations_file)}
    obligation = obligations.get(obligation_id)
    if obligation is None:
        raise click.ClickException(f"No bill with id {obligation_id!r}")

    scheduled = generate_occurrences(obligation, due_date, due_date)
    if not scheduled:
        raise click.ClickException(f"{obligation.name} is not due on {due_date}")
    occurrence = scheduled[0]

    transactions = load_transactions(transactions_file)
    diagnostics = _build_matcher().diagnose(occurrence, transactions)

    click.echo(f"{occurrence.obligation_name}: {occurrence.expected_amount} due {occurrence.due_date}")
    if not diagnostics:
        click.echo("No transactions within £10.00 and 7 days")
        return

    for diagnostic in diagnostics:
        txn = diagnostic.transaction
        flags = []
        if diagnostic.is_pending:
            flags.append("pending")
        if diagnostic.existing_obligation_link:
            flags.append(f"linked to {diagnostic.existing_obligation_link}")
        suffix = f" [{', '.join(flags)}]" if flags else ""

        click.echo(f"  {txn.id} {txn.date} {txn.amount} score {diagnostic.score}{suffix}")
        for reason in diagnostic.reasons:
            click.echo(f"    - {reason}")


def _split_occurrence_id(value: str) -> tuple[str, FinancialDate]:
    """Split "{obligation_id}-{YYYY-MM-DD}" into its parts."""
    obligation_id, separator, date_part = value[:-11], value[-11:-10], value[-10:]
    try:
        if separator != "-" or not obligation_id:
            raise ValueError(value)
        return obligation_id, FinancialDate.from_string(date_part)
    except ValueError as e:
        raise click.BadParameter(
            f"expected <bill id>-YYYY-MM-DD, got {value!r}", param_hint="--occurrence-id"
        ) from e
