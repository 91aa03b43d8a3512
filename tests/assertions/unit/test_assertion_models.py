"""Assertion context, verdict and error model tests."""

from __future__ import annotations

import dataclasses

import pytest
from itercheck.assertions import (
    STANDARD,
    AssertionFailedError,
    AssertionInfo,
    AssertionResult,
    AssertionStatus,
    ComparatorComparisonStrategy,
    PreconditionError,
    PropertyResolutionError,
    case_insensitive,
)


def test_info_is_immutable() -> None:
    info = AssertionInfo()

    with pytest.raises(dataclasses.FrozenInstanceError):
        info.description = "changed"  # type: ignore[misc]


def test_swapping_comparator_returns_new_info() -> None:
    info = AssertionInfo(description="names")
    custom = info.using_comparator(case_insensitive)

    assert info.strategy is STANDARD
    assert isinstance(custom.strategy, ComparatorComparisonStrategy)
    assert custom.description == "names"
    assert custom.using_default_comparator().strategy is STANDARD


def test_failed_result_string_lists_evidence() -> None:
    result = AssertionResult.failed_result(
        operation="contains",
        message="Collection does not contain the given values",
        info=AssertionInfo(description="hobbits"),
        expected=["Frodo", "Gollum"],
        actual=["Frodo", "Sam"],
        details={"not_found": ["Gollum"]},
    )

    text = str(result)

    assert "FAILED" in text
    assert "[hobbits]" in text
    assert 'not_found: ["Gollum"]' in text
    assert not result.passed
    assert result.failed


def test_result_to_dict() -> None:
    result = AssertionResult.passed_result("empty", "Collection is empty", actual=[])

    assert result.to_dict() == {
        "status": "passed",
        "operation": "empty",
        "message": "Collection is empty",
        "description": None,
        "expected": None,
        "actual": [],
        "details": {},
    }


def test_error_result() -> None:
    result = AssertionResult.error_result("contains", "bad input", {"error_type": "PreconditionError"})

    assert result.status == AssertionStatus.ERROR
    assert "ERROR" in str(result)


def test_error_hierarchy() -> None:
    result = AssertionResult.failed_result("empty", "Expecting collection to be empty")
    failure = AssertionFailedError(result)

    assert isinstance(failure, AssertionError)
    assert failure.result is result
    assert "Expecting collection to be empty" in str(failure)
    assert issubclass(PreconditionError, ValueError)


def test_resolution_error_names_segment_and_type() -> None:
    error = PropertyResolutionError("race.nickname", "nickname", "Race")

    assert isinstance(error, LookupError)
    assert "'nickname'" in str(error)
    assert "Race" in str(error)
