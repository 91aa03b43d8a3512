"""
Run report models.

A RunReport holds one CheckRecord per suite check. Each record keeps
the verdict the check ended with: its message, what was expected,
the collection that was inspected, and the mismatch evidence
(``not_found``, ``violating``, ``duplicates``, ...). The summary
renders that evidence, so a failing run can be read without
re-running it.
"""

from __future__ import annotations

import json
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..assertions.models import AssertionResult, AssertionStatus, format_value


class CheckStatus(str, Enum):
    """Status of an individual check."""
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


class RunStatus(str, Enum):
    """Overall status of a suite run."""
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


_STATUS_FOR_VERDICT = {
    AssertionStatus.PASSED: CheckStatus.PASSED,
    AssertionStatus.FAILED: CheckStatus.FAILED,
    AssertionStatus.ERROR: CheckStatus.ERROR,
}

# Evidence keys in display order, with their summary labels
EVIDENCE_LABELS: dict[str, str] = {
    "not_found": "missing",
    "not_expected": "unexpected",
    "found": "forbidden values present",
    "duplicates": "duplicated",
    "violating": "violating",
    "index": "first mismatch at index",
    "null_indexes": "None at indexes",
    "sequence": "sequence",
    "count": "satisfying count",
    "relation": "required relation",
    "times": "threshold",
    "satisfying": "satisfying",
    "size": "size",
    "expected_size": "expected size",
    "actual_size": "actual size",
    "error_type": "error type",
}

_ICONS = {
    CheckStatus.PENDING: "⏳",
    CheckStatus.PASSED: "✅",
    CheckStatus.FAILED: "❌",
    CheckStatus.ERROR: "⚠️",
}


@dataclass
class CheckRecord:
    """Where a check read its collection from, and the verdict it produced."""
    check_id: str
    op: str
    source: str = "inline"  # JSONPath into suite data, or "inline"
    extract: str | None = None
    comparator: str = "default"

    status: CheckStatus = CheckStatus.PENDING
    message: str | None = None
    expected: Any = None
    actual: Any = None
    evidence: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None

    def record(self, result: AssertionResult, duration_ms: float | None = None) -> None:
        """Take over status, message and evidence from a verdict."""
        self.status = _STATUS_FOR_VERDICT[result.status]
        self.message = result.message
        self.expected = result.expected
        self.actual = result.actual
        self.evidence = dict(result.details)
        self.duration_ms = duration_ms

    @property
    def origin(self) -> str:
        if self.extract:
            return f"{self.source} | extract {self.extract}"
        return self.source

    def evidence_lines(self) -> list[str]:
        """Evidence as ``label: value`` lines, known keys first."""
        keys = [key for key in EVIDENCE_LABELS if key in self.evidence]
        keys += sorted(key for key in self.evidence if key not in EVIDENCE_LABELS)
        return [f"{EVIDENCE_LABELS.get(key, key)}: {format_value(self.evidence[key])}" for key in keys]

    def to_dict(self) -> dict[str, Any]:
        return {
            "check_id": self.check_id,
            "op": self.op,
            "status": self.status.value,
            "source": self.source,
            "extract": self.extract,
            "comparator": self.comparator,
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            "evidence": dict(self.evidence),
            "duration_ms": self.duration_ms,
        }


@dataclass
class RunReport:
    """
    Verdicts of every check in one suite run.

    The run status is derived from the records: any error makes the run
    an error, otherwise any failure makes it a failure.
    """
    suite_name: str
    suite_version: int = 1
    suite_hash: str = ""
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime | None = None
    duration_ms: float | None = None  # set when the run is finished
    checks: list[CheckRecord] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.duration_ms is not None

    @property
    def status(self) -> RunStatus:
        if not self.finished:
            return RunStatus.PENDING
        counts = self.counts()
        if counts[CheckStatus.ERROR]:
            return RunStatus.ERROR
        if counts[CheckStatus.FAILED]:
            return RunStatus.FAILED
        return RunStatus.PASSED

    def counts(self) -> Counter[CheckStatus]:
        return Counter(record.status for record in self.checks)

    def get_check(self, check_id: str) -> CheckRecord | None:
        return next((record for record in self.checks if record.check_id == check_id), None)

    def problems(self) -> list[CheckRecord]:
        """Failed and errored records, in suite order."""
        return [r for r in self.checks if r.status in (CheckStatus.FAILED, CheckStatus.ERROR)]

    def to_dict(self) -> dict[str, Any]:
        counts = self.counts()
        return {
            "run_id": self.run_id,
            "suite": {
                "name": self.suite_name,
                "version": self.suite_version,
                "hash": self.suite_hash,
            },
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "duration_ms": self.duration_ms,
            "counts": {
                status.value: counts[status]
                for status in (CheckStatus.PASSED, CheckStatus.FAILED, CheckStatus.ERROR)
            },
            "checks": [record.to_dict() for record in self.checks],
        }

    def to_json(self, indent: int = 2) -> str:
        # evidence may hold arbitrary user objects
        return json.dumps(self.to_dict(), indent=indent, default=str, ensure_ascii=False)

    def summary(self) -> str:
        """One line per check, then the evidence of every problem."""
        counts = self.counts()
        duration = f"{self.duration_ms:.0f}ms" if self.finished else "not finished"
        status = self.status
        icon = _ICONS.get(CheckStatus(status.value), "⏳")
        lines = [
            f"{icon} {self.suite_name}: {status.value.upper()}",
            f"   {counts[CheckStatus.PASSED]} passed, {counts[CheckStatus.FAILED]} failed, "
            f"{counts[CheckStatus.ERROR]} errors in {duration} (run {self.run_id})",
            "",
        ]
        lines.extend(f"   {_ICONS[r.status]} [{r.check_id}] {r.op}" for r in self.checks)

        problems = self.problems()
        if problems:
            lines += ["", "Problems:"]
        for record in problems:
            lines.append(f"   [{record.check_id}] {record.op} on {record.origin}")
            lines.append(f"      {record.message}")
            lines.extend(f"      {line}" for line in record.evidence_lines())

        return "\n".join(lines)
