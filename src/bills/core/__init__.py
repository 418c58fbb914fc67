"""
Core Utilities Package

Shared primitives used by the scheduler and the reconciliation matcher.

This package provides:
- Currency handling with integer pence for precision
- Immutable Money and FinancialDate value types
- Calendar arithmetic over timezone-naive dates
- Configuration management for environment-specific settings
- JSON helpers for the CLI's input and output files
"""

from .calendar_math import (
    add_months,
    clamp_day,
    compare_dates,
    days_between,
    days_in_month,
    month_bounds,
)
from .config import (
    Config,
    Environment,
    MatchingConfig,
    ProviderConfig,
    get_config,
    get_data_dir,
    get_output_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    amount_to_pence,
    format_pence,
    parse_pounds_to_pence,
    pence_to_pounds_str,
)
from .dates import FinancialDate
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "FinancialDate",
    "MatchingConfig",
    "Money",
    "ProviderConfig",
    # Calendar arithmetic
    "add_months",
    # Currency utilities
    "amount_to_pence",
    "clamp_day",
    "compare_dates",
    "days_between",
    "days_in_month",
    "format_pence",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "is_development",
    "is_production",
    "is_test",
    "month_bounds",
    "parse_pounds_to_pence",
    "pence_to_pounds_str",
    "reload_config",
]
