"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from bills.core import config as config_module
from bills.core.dates import FinancialDate
from tests.fixtures.synthetic_data import make_obligation, make_transaction


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def netflix_bill():
    """Monthly Netflix bill, £15.99 on the 15th."""
    return make_obligation(id="bill-1", name="Netflix", provider="Netflix", amount="15.99", due_day=15)


@pytest.fixture
def june_15() -> FinancialDate:
    return FinancialDate.of(2025, 6, 15)


@pytest.fixture
def exact_netflix_payment():
    """Settled Netflix debit on the due date for the exact amount."""
    return make_transaction(id="txn-1", amount="15.99", date="2025-06-15", merchant="NETFLIX.COM")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Isolate configuration from the developer's environment."""
    monkeypatch.setenv("BILLS_ENV", "test")
    monkeypatch.setenv("BILLS_DATA_DIR", str(tmp_path / "bills_data"))
    for name in [
        "MATCH_HIGH_THRESHOLD",
        "MATCH_MEDIUM_THRESHOLD",
        "MATCH_AMOUNT_TOLERANCE",
        "MATCH_DATE_WINDOW_DAYS",
        "PROVIDER_ALIASES_FILE",
        "LOG_LEVEL",
        "DEBUG",
    ]:
        monkeypatch.delenv(name, raising=False)

    # Every test starts from a fresh configuration
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "schedule: Tests for occurrence generation")
    config.addinivalue_line("markers", "matching: Tests for transaction reconciliation")
