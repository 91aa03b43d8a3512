"""
Reporting for Suite Runs

This package records the verdict of every check in a suite run.

Features:
    - One record per check: source, extract path, comparator, timing
    - Verdict evidence (missing, unexpected, duplicated, violating, ...)
    - Run status derived from the records
    - JSON serialization and a human-readable summary

Usage:
    from itercheck.reporting import Reporter

    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    reporter.record("hobbits", result)
    report = reporter.finish_run()
    print(report.summary())
    reporter.save_json("reports/run.json")
"""

# Models
from .models import (
    EVIDENCE_LABELS,
    CheckRecord,
    CheckStatus,
    RunReport,
    RunStatus,
)

# Reporter
from .reporter import Reporter, suite_hash

__all__ = [
    # Models
    "RunReport",
    "RunStatus",
    "CheckRecord",
    "CheckStatus",
    "EVIDENCE_LABELS",
    # Reporter
    "Reporter",
    "suite_hash",
]
