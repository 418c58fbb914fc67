"""
Test Suite for Household Bills

Test Structure:
- fixtures/: Synthetic bills, transactions and export writers
- unit/: Unit tests mirroring the src/ package structure
- integration/: Configuration and CLI workflow tests

Test Categories:
- Core utilities (currency, money, dates, calendar arithmetic)
- Occurrence generation and status resolution
- Transaction reconciliation
- Occurrence reporting

All test data is synthetic.
"""
