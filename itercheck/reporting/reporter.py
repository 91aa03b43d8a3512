"""
Reporter for building run reports.

The Reporter creates one pending CheckRecord per suite check, times
each check, and stores the verdict (pass, failure or error) that the
runner hands back.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from .models import CheckRecord, RunReport

if TYPE_CHECKING:
    from ..assertions import AssertionResult
    from ..suites import Suite


class Reporter:
    """
    Builds a RunReport while a suite runs.

    Example:
        reporter = Reporter.from_suite(suite)
        reporter.start_run()
        reporter.start_check("hobbits")
        reporter.record("hobbits", result)
        report = reporter.finish_run()
    """

    def __init__(self, report: RunReport):
        self.report = report
        self._run_started: float | None = None
        self._check_started: dict[str, float] = {}

    @classmethod
    def from_suite(cls, suite: Suite, run_id: str | None = None) -> Reporter:
        """Create a Reporter with one pending record per check of the suite."""
        report = RunReport(
            suite_name=suite.name,
            suite_version=suite.version,
            suite_hash=suite_hash(suite),
        )
        if run_id:
            report.run_id = run_id

        report.checks = [
            CheckRecord(
                check_id=check.id,
                op=check.op.value,
                source=check.from_path or "inline",
                extract=check.extract,
                comparator=check.comparator or suite.defaults.comparator,
            )
            for check in suite.checks
        ]
        return cls(report)

    def start_run(self) -> None:
        self.report.started_at = datetime.now(timezone.utc)
        self._run_started = time.perf_counter()

    def finish_run(self) -> RunReport:
        """Close the run and return the report."""
        self.report.duration_ms = _elapsed_ms(self._run_started) if self._run_started is not None else 0.0
        return self.report

    def start_check(self, check_id: str) -> None:
        self._get_check(check_id)
        self._check_started[check_id] = time.perf_counter()

    def record(self, check_id: str, result: AssertionResult) -> CheckRecord:
        """
        Store a check's verdict.

        The record's status follows the verdict's status, so failures
        keep their evidence and errors keep their error type.

        Raises:
            KeyError: If the suite has no check with that id
        """
        record = self._get_check(check_id)
        started = self._check_started.pop(check_id, None)
        record.record(result, _elapsed_ms(started) if started is not None else None)
        return record

    def save_json(self, path: str | Path) -> Path:
        """Write the report as JSON and return the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report.to_json(), encoding="utf-8")
        return path

    def _get_check(self, check_id: str) -> CheckRecord:
        record = self.report.get_check(check_id)
        if record is None:
            raise KeyError(f"Unknown check id: {check_id}")
        return record


def suite_hash(suite: Suite) -> str:
    """Short SHA-256 of the suite's content, to tell apart runs of edited suites."""
    serialized = json.dumps(asdict(suite), sort_keys=True, default=str)
    return hashlib.sha256(serialized.encode()).hexdigest()[:12]


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
