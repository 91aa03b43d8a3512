"""End-to-end suite runs: YAML in, run report out."""

from __future__ import annotations

import pytest
from itercheck.assertions import AssertionFailedError
from itercheck.reporting import CheckStatus, RunStatus
from itercheck.runner import CollectionResolutionError, SuiteRunner, run_suite
from itercheck.suites import validate_suite_yaml

FELLOWSHIP = """
version: 1
name: Fellowship
data:
  fellowship:
    - {name: Frodo, race: {name: Hobbit}, age: 33}
    - {name: Sam, race: {name: Hobbit}, age: 38}
    - {name: Aragorn, race: {name: Man}, age: 87}
    - {name: Boromir, race: {name: Man}, age: 41}
  count: 4
checks:
  - id: names
    from: $.fellowship
    extract: name
    op: contains_exactly
    values: [Frodo, Sam, Aragorn, Boromir]
  - id: races_ignoring_case
    from: $.fellowship
    extract: race.name
    op: contains_only
    values: [hobbit, man]
    comparator: case_insensitive
  - id: unique_races
    from: $.fellowship
    extract: race.name
    op: does_not_have_duplicates
  - id: ages_by_jsonpath
    from: $.fellowship[*].age
    op: are_at_least
    times: 4
    condition: {op: gte, value: 33}
  - id: scalar_match
    from: $.count
    op: contains
    values: [4]
  - id: nicknames
    from: $.fellowship
    extract: nickname
    op: is_not_empty
"""


def _suite(text: str = FELLOWSHIP):
    suite, result = validate_suite_yaml(text)
    assert result.is_valid, str(result)
    return suite


def test_run_records_every_outcome() -> None:
    report = run_suite(_suite())

    statuses = {record.check_id: record.status for record in report.checks}
    assert statuses == {
        "names": CheckStatus.PASSED,
        "races_ignoring_case": CheckStatus.PASSED,
        "unique_races": CheckStatus.FAILED,
        "ages_by_jsonpath": CheckStatus.PASSED,
        "scalar_match": CheckStatus.PASSED,
        "nicknames": CheckStatus.ERROR,
    }
    assert report.status == RunStatus.ERROR
    counts = report.counts()
    assert (counts[CheckStatus.PASSED], counts[CheckStatus.FAILED], counts[CheckStatus.ERROR]) == (4, 1, 1)


def test_failure_evidence_reaches_the_report() -> None:
    report = run_suite(_suite())

    duplicates = report.get_check("unique_races")
    assert duplicates.evidence == {"duplicates": ["Hobbit", "Man"]}
    assert duplicates.actual == ["Hobbit", "Hobbit", "Man", "Man"]


def test_resolution_errors_are_recorded_not_raised() -> None:
    report = run_suite(_suite())

    nicknames = report.get_check("nicknames")
    assert nicknames.evidence == {"error_type": "PropertyResolutionError"}
    assert "nickname" in nicknames.message


def test_evaluate_raises_on_failure() -> None:
    suite = _suite()
    runner = SuiteRunner(suite)
    unique_races = next(check for check in suite.checks if check.id == "unique_races")

    with pytest.raises(AssertionFailedError) as excinfo:
        runner.evaluate(unique_races)

    assert excinfo.value.result.description == "unique_races"


def test_missing_from_path() -> None:
    suite = _suite(
        """
version: 1
name: Missing
data: {items: []}
checks:
  - id: absent
    from: $.nothing
    op: is_empty
"""
    )

    with pytest.raises(CollectionResolutionError):
        SuiteRunner(suite).resolve_collection(suite.checks[0])

    report = run_suite(suite)
    assert report.checks[0].evidence == {"error_type": "CollectionResolutionError"}


def test_default_comparator_applies_to_all_checks() -> None:
    suite = _suite(
        """
version: 1
name: Defaults
defaults:
  comparator: numeric
checks:
  - id: numbers
    actual: ["1", "2.0", 3]
    op: contains_exactly
    values: [1, 2, "3"]
  - id: strict
    actual: ["1"]
    op: contains
    values: [1]
    comparator: default
"""
    )

    report = run_suite(suite)

    assert report.get_check("numbers").status == CheckStatus.PASSED
    assert report.get_check("strict").status == CheckStatus.FAILED


def test_on_check_callback_sees_each_check() -> None:
    seen = []

    SuiteRunner(_suite()).run(on_check=lambda check, reporter: seen.append(check.id))

    assert seen == ["names", "races_ignoring_case", "unique_races", "ages_by_jsonpath", "scalar_match", "nicknames"]


def test_predicate_exceptions_become_errors() -> None:
    suite = _suite(
        """
version: 1
name: Unorderable
checks:
  - id: mixed
    actual: [1, "two"]
    op: are
    condition: {op: gt, value: 0}
"""
    )

    report = run_suite(suite)

    assert report.checks[0].status == CheckStatus.ERROR
    assert report.checks[0].evidence == {"error_type": "TypeError"}


def test_summary_explains_each_problem() -> None:
    summary = run_suite(_suite()).summary()

    problems = summary.split("Problems:")[1]
    assert "[unique_races] does_not_have_duplicates on $.fellowship | extract race.name" in problems
    assert 'duplicated: ["Hobbit", "Man"]' in problems
    assert "[nicknames] is_not_empty" in problems
    assert "error type: 'PropertyResolutionError'" in problems
