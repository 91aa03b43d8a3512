"""Run report and reporter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from itercheck.assertions import AssertionResult
from itercheck.reporting import CheckStatus, Reporter, RunStatus, suite_hash
from itercheck.suites import Check, CheckOp, Defaults, Suite


def _suite() -> Suite:
    return Suite(
        version=1,
        name="Reporting",
        data={"names": ["Frodo", "Sam"]},
        defaults=Defaults(comparator="case_insensitive"),
        checks=[
            Check(id="names", op=CheckOp.CONTAINS, from_path="$.names", values=["frodo"]),
            Check(id="inline", op=CheckOp.IS_EMPTY, actual=[1], comparator="default"),
            Check(id="broken", op=CheckOp.HAS_SIZE, actual=None, size=1),
        ],
    )


def _passed() -> AssertionResult:
    return AssertionResult.passed_result("contains", "ok", expected=["frodo"], actual=["Frodo", "Sam"])


def _not_empty() -> AssertionResult:
    return AssertionResult.failed_result("empty", "Expecting collection to be empty", actual=[1], details={"size": 1})


def _broken() -> AssertionResult:
    return AssertionResult.error_result("has_size", "Expecting actual not to be None", {"error_type": "PreconditionError"})


def test_from_suite_creates_pending_records() -> None:
    report = Reporter.from_suite(_suite(), run_id="run-1").report

    assert report.run_id == "run-1"
    assert report.suite_name == "Reporting"
    assert [record.status for record in report.checks] == [CheckStatus.PENDING] * 3
    assert report.status == RunStatus.PENDING

    names, inline, _ = report.checks
    assert names.origin == "$.names"
    assert names.comparator == "case_insensitive"
    assert inline.origin == "inline"
    assert inline.comparator == "default"


def test_suite_hash_follows_content() -> None:
    suite = _suite()
    edited = _suite()
    edited.checks[0].values = ["sam"]

    assert suite_hash(suite) == suite_hash(_suite())
    assert suite_hash(suite) != suite_hash(edited)
    assert len(suite_hash(suite)) == 12


def test_records_verdicts_and_final_status() -> None:
    reporter = Reporter.from_suite(_suite())
    reporter.start_run()

    reporter.start_check("names")
    reporter.record("names", _passed())
    reporter.start_check("inline")
    reporter.record("inline", _not_empty())
    reporter.record("broken", _broken())

    report = reporter.finish_run()

    assert report.status == RunStatus.ERROR
    counts = report.counts()
    assert (counts[CheckStatus.PASSED], counts[CheckStatus.FAILED], counts[CheckStatus.ERROR]) == (1, 1, 1)

    failed = report.get_check("inline")
    assert failed.status == CheckStatus.FAILED
    assert failed.message == "Expecting collection to be empty"
    assert failed.evidence == {"size": 1}
    assert failed.actual == [1]
    assert failed.duration_ms is not None
    assert report.get_check("broken").duration_ms is None
    assert [r.check_id for r in report.problems()] == ["inline", "broken"]


def test_failures_without_errors_give_failed_status() -> None:
    reporter = Reporter.from_suite(_suite())
    reporter.start_run()
    for check_id in ("names", "broken"):
        reporter.record(check_id, AssertionResult.passed_result("x", "ok"))
    reporter.record("inline", AssertionResult.failed_result("empty", "not empty"))

    assert reporter.finish_run().status == RunStatus.FAILED


def test_finish_without_start() -> None:
    report = Reporter.from_suite(_suite()).finish_run()

    assert report.duration_ms == 0.0
    assert report.status == RunStatus.PASSED


def test_evidence_lines_use_labels_in_display_order() -> None:
    reporter = Reporter.from_suite(_suite())
    record = reporter.record(
        "names",
        AssertionResult.failed_result(
            "contains_only",
            "Expecting collection to contain only the given values",
            details={"extra": "x", "not_expected": ["Gollum"], "not_found": ["Merry"]},
        ),
    )

    assert record.evidence_lines() == [
        'missing: ["Merry"]',
        'unexpected: ["Gollum"]',
        "extra: 'x'",
    ]


def test_summary_lists_problems_with_evidence() -> None:
    reporter = Reporter.from_suite(_suite())
    reporter.start_run()
    reporter.record("names", _passed())
    reporter.record("inline", _not_empty())
    reporter.record(
        "broken",
        AssertionResult.failed_result(
            "does_not_have_duplicates", "Found duplicates", details={"duplicates": ["Sam"]}
        ),
    )
    report = reporter.finish_run()

    summary = report.summary()
    assert summary.splitlines()[0].endswith("Reporting: FAILED")
    assert "1 passed, 2 failed, 0 errors" in summary
    assert "[names] contains" in summary

    problems = summary.split("Problems:")[1]
    assert "[names]" not in problems
    assert "[inline] is_empty on inline" in problems
    assert "size: 1" in problems
    assert 'duplicated: ["Sam"]' in problems


def test_summary_shows_extract_path() -> None:
    suite = _suite()
    suite.checks[0].extract = "race.name"
    reporter = Reporter.from_suite(suite)
    reporter.record("names", AssertionResult.failed_result("contains", "missing", details={"not_found": ["elf"]}))

    summary = reporter.finish_run().summary()

    assert "[names] contains on $.names | extract race.name" in summary
    assert 'missing: ["elf"]' in summary


def test_save_json(tmp_path: Path) -> None:
    reporter = Reporter.from_suite(_suite())
    reporter.start_run()
    reporter.record("inline", _not_empty())
    reporter.record("broken", AssertionResult.failed_result("has_size", "odd", details={"value": object()}))
    report = reporter.finish_run()

    path = reporter.save_json(tmp_path / "nested" / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["run_id"] == report.run_id
    assert data["suite"]["name"] == "Reporting"
    assert data["status"] == "failed"
    assert data["counts"] == {"passed": 0, "failed": 2, "error": 0}
    assert data["checks"][1]["evidence"] == {"size": 1}
    assert data["checks"][2]["evidence"]["value"].startswith("<object object")


def test_unknown_check_id() -> None:
    reporter = Reporter.from_suite(_suite())

    with pytest.raises(KeyError):
        reporter.start_check("missing")
    with pytest.raises(KeyError):
        reporter.record("missing", _passed())
