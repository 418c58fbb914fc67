#!/usr/bin/env python3
"""
Main CLI Entry Point for Household Bills

Provides the unified command-line interface for scheduling and reconciliation.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Household Bills - Recurring Bill Scheduling and Reconciliation

    Generates expected bill due dates and matches bank transactions to them.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["BILLS_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("bills").setLevel(logging.DEBUG)

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from bills import __author__, __version__

    click.echo(f"Household Bills v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")
    click.echo(
        f"  Match Thresholds: high >= {config_obj.matching.high_threshold}, "
        f"medium >= {config_obj.matching.medium_threshold}"
    )
    click.echo(f"  Amount Tolerance: {config_obj.matching.amount_tolerance_pence} pence")
    click.echo(f"  Date Window: {config_obj.matching.date_window_days} days")
    click.echo(f"  Provider Aliases: {config_obj.providers.aliases_file or 'built-in'}")


from .reconcile import reconcile  # noqa: E402
from .schedule import schedule  # noqa: E402

main.add_command(schedule)
main.add_command(reconcile)


if __name__ == "__main__":
    main()
