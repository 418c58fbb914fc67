#!/usr/bin/env python3
"""
Configuration Management for Household Bills

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production); the matching
policy constants can be tuned per environment without touching the matcher.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from .currency import parse_pounds_to_pence

if TYPE_CHECKING:
    from ..matching.providers import ProviderAliasResolver
    from ..matching.scorer import ScoringPolicy

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class MatchingConfig:
    """Reconciliation policy knobs."""

    high_threshold: int = 80
    medium_threshold: int = 50
    amount_tolerance_pence: int = 100
    date_window_days: int = 3

    def to_policy(self) -> "ScoringPolicy":
        """Build the scoring policy used by the candidate matcher."""
        from ..matching.scorer import ScoringPolicy

        return ScoringPolicy(
            high_threshold=self.high_threshold,
            medium_threshold=self.medium_threshold,
            amount_tolerance_pence=self.amount_tolerance_pence,
            date_window_days=self.date_window_days,
        )


@dataclass
class ProviderConfig:
    """Provider alias dictionary location."""

    aliases_file: Path | None = None

    def to_resolver(self) -> "ProviderAliasResolver":
        """Build a resolver from the configured file, or the built-in table."""
        from ..matching.providers import ProviderAliasResolver, load_provider_aliases

        if self.aliases_file is None:
            return ProviderAliasResolver()
        return ProviderAliasResolver(load_provider_aliases(self.aliases_file))


@dataclass
class Config:
    """
    Main configuration class for the bills application.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    matching: MatchingConfig
    providers: ProviderConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BILLS_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_bills"
            base_dir = Path(os.getenv("BILLS_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("BILLS_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "reconciliation"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        matching = MatchingConfig(
            high_threshold=int(os.getenv("MATCH_HIGH_THRESHOLD", "80")),
            medium_threshold=int(os.getenv("MATCH_MEDIUM_THRESHOLD", "50")),
            amount_tolerance_pence=parse_pounds_to_pence(os.getenv("MATCH_AMOUNT_TOLERANCE", "1.00")),
            date_window_days=int(os.getenv("MATCH_DATE_WINDOW_DAYS", "3")),
        )

        aliases_file = os.getenv("PROVIDER_ALIASES_FILE")
        providers = ProviderConfig(
            aliases_file=Path(aliases_file).expanduser() if aliases_file else None,
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            matching=matching,
            providers=providers,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.matching.medium_threshold <= 0:
            errors.append("MATCH_MEDIUM_THRESHOLD must be positive")
        if self.matching.medium_threshold > self.matching.high_threshold:
            errors.append("MATCH_MEDIUM_THRESHOLD must not exceed MATCH_HIGH_THRESHOLD")
        if self.matching.amount_tolerance_pence < 0:
            errors.append("MATCH_AMOUNT_TOLERANCE must be non-negative")
        if self.matching.date_window_days < 0:
            errors.append("MATCH_DATE_WINDOW_DAYS must be non-negative")

        if self.providers.aliases_file is not None and not self.providers.aliases_file.exists():
            errors.append(f"PROVIDER_ALIASES_FILE does not exist: {self.providers.aliases_file}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                result[field_name] = {
                    nested_name: str(nested_value) if isinstance(nested_value, Path) else nested_value
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the output directory path."""
    return get_config().output_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
