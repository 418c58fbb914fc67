"""
Test Fixtures and Utilities

Factories for obligations and transactions, and writers for the JSON exports
the CLI reads. All test data is synthetic.
"""
