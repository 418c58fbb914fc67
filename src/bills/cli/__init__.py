"""
Command Line Interface Package

Developer and cron entry points that run the scheduler and reconciliation
core over JSON exports of bills, transactions and stored occurrence states.

Command Structure:
- bills: Main entry point with utility commands (version, config)
- bills schedule generate: Expected due dates for a month or date range
- bills reconcile match: Auto-match transactions to unpaid occurrences
- bills reconcile diagnose: Near-miss breakdown for one occurrence
"""
