"""
Matching engine for assertions on iterables.

This module provides the set-, sequence- and size-based checks.
Every operation takes the session's AssertionInfo, the collection
under test and the expectation; it returns the passing result or
raises AssertionFailedError carrying the failing one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, NoReturn

from .comparison import ComparisonStrategy
from .errors import AssertionFailedError
from .models import AssertionInfo, AssertionResult
from .preconditions import require_actual, require_size, require_values, size_of

logger = logging.getLogger(__name__)


class IterablesEngine:
    """
    Engine for matching a collection against expected values.

    The engine holds no state: equality comes from ``info.strategy``,
    so one instance can serve any number of sessions.

    Example:
        engine = IterablesEngine()
        info = AssertionInfo()

        engine.assert_contains(info, [1, 2, 3], [3, 1])
        engine.assert_starts_with(info, [1, 2, 3], [1, 2])
        engine.assert_does_not_have_duplicates(info, [1, 2, 3])
    """

    # ─────────────────────────────────────────────────────────────────────
    # Emptiness and size
    # ─────────────────────────────────────────────────────────────────────

    def assert_null_or_empty(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        """Assert that actual is None or has no elements."""
        if actual is None:
            return self._pass(info, "null_or_empty", "Collection is None")
        elements = require_actual(actual)
        if not elements:
            return self._pass(info, "null_or_empty", "Collection is empty", actual=elements)
        self._fail(
            info,
            "null_or_empty",
            "Expecting collection to be None or empty",
            expected="None or empty",
            actual=elements,
            details={"size": len(elements)},
        )

    def assert_empty(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        """Assert that actual has no elements."""
        elements = require_actual(actual)
        if not elements:
            return self._pass(info, "empty", "Collection is empty", actual=elements)
        self._fail(
            info,
            "empty",
            "Expecting collection to be empty",
            expected="empty",
            actual=elements,
            details={"size": len(elements)},
        )

    def assert_not_empty(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        """Assert that actual has at least one element."""
        elements = require_actual(actual)
        if elements:
            return self._pass(info, "not_empty", "Collection is not empty", actual=elements)
        self._fail(
            info,
            "not_empty",
            "Expecting collection not to be empty",
            expected="not empty",
            actual=elements,
            details={"size": 0},
        )

    def assert_has_size(self, info: AssertionInfo, actual: Iterable[Any] | None, expected_size: int) -> AssertionResult:
        """Assert that actual has exactly ``expected_size`` elements."""
        elements = require_actual(actual)
        expected_size = require_size(expected_size)
        if len(elements) == expected_size:
            return self._pass(info, "has_size", f"Collection has {expected_size} elements", actual=elements)
        self._fail(
            info,
            "has_size",
            "Collection size mismatch",
            expected=f"size == {expected_size}",
            actual=elements,
            details={"expected_size": expected_size, "actual_size": len(elements)},
        )

    def assert_has_same_size_as(
        self, info: AssertionInfo, actual: Iterable[Any] | None, other: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that actual has as many elements as ``other``."""
        elements = require_actual(actual)
        other_size = size_of(other)
        if len(elements) == other_size:
            return self._pass(info, "has_same_size_as", f"Both collections have {other_size} elements", actual=elements)
        self._fail(
            info,
            "has_same_size_as",
            "Collections do not have the same size",
            expected=f"size == {other_size}",
            actual=elements,
            details={"expected_size": other_size, "actual_size": len(elements)},
        )

    # ─────────────────────────────────────────────────────────────────────
    # Set-like checks
    # ─────────────────────────────────────────────────────────────────────

    def assert_contains(self, info: AssertionInfo, actual: Iterable[Any] | None, values: Iterable[Any] | None) -> AssertionResult:
        """
        Assert that every given value has at least one equal element in actual.

        Order is irrelevant and duplicates in ``values`` collapse to a
        single requirement.
        """
        elements = require_actual(actual)
        expected = require_values(values)
        return self._check_contains(info, "contains", elements, expected)

    def assert_contains_all(
        self, info: AssertionInfo, actual: Iterable[Any] | None, iterable: Iterable[Any] | None
    ) -> AssertionResult:
        """Same as assert_contains, for any iterable source; an empty source passes."""
        elements = require_actual(actual)
        expected = require_values(iterable, name="iterable", allow_empty=True)
        return self._check_contains(info, "contains_all", elements, expected)

    def assert_contains_only(
        self, info: AssertionInfo, actual: Iterable[Any] | None, values: Iterable[Any] | None
    ) -> AssertionResult:
        """
        Assert that actual and values hold the same distinct elements.

        Every actual element must match some value and every value must
        match some actual element; multiplicity is ignored.
        """
        elements = require_actual(actual)
        expected = require_values(values)
        strategy = info.strategy

        not_expected = strategy.distinct(elements)
        not_found: list[Any] = []
        for value in strategy.distinct(expected):
            if strategy.iterable_contains(elements, value):
                strategy.iterable_remove_all(not_expected, value)
            else:
                not_found.append(value)

        if not not_found and not not_expected:
            return self._pass(info, "contains_only", "Collection contains only the given values",
                              expected=expected, actual=elements)
        self._fail(
            info,
            "contains_only",
            "Collection does not contain only the given values",
            expected=expected,
            actual=elements,
            details={"not_found": not_found, "not_expected": not_expected},
        )

    def assert_is_subset_of(
        self, info: AssertionInfo, actual: Iterable[Any] | None, values: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that every actual element matches some element of values."""
        elements = require_actual(actual)
        superset = require_values(values, allow_empty=True)
        strategy = info.strategy

        extra = [element for element in elements if not strategy.iterable_contains(superset, element)]
        if not extra:
            return self._pass(info, "is_subset_of", "Collection is a subset of the given values",
                              expected=superset, actual=elements)
        self._fail(
            info,
            "is_subset_of",
            "Collection is not a subset of the given values",
            expected=superset,
            actual=elements,
            details={"not_expected": extra},
        )

    def assert_does_not_contain(
        self, info: AssertionInfo, actual: Iterable[Any] | None, values: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that no given value equals any actual element."""
        elements = require_actual(actual)
        forbidden = require_values(values)
        strategy = info.strategy

        found = [value for value in strategy.distinct(forbidden) if strategy.iterable_contains(elements, value)]
        if not found:
            return self._pass(info, "does_not_contain", "Collection contains none of the given values",
                              expected=forbidden, actual=elements)
        self._fail(
            info,
            "does_not_contain",
            "Collection contains unexpected values",
            expected=forbidden,
            actual=elements,
            details={"found": found},
        )

    def assert_does_not_have_duplicates(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        """Assert that no two elements of actual are equal."""
        elements = require_actual(actual)
        duplicates = info.strategy.duplicates(elements)
        if not duplicates:
            return self._pass(info, "does_not_have_duplicates", "Collection has no duplicates", actual=elements)
        self._fail(
            info,
            "does_not_have_duplicates",
            "Collection has duplicates",
            expected="no duplicates",
            actual=elements,
            details={"duplicates": duplicates},
        )

    # ─────────────────────────────────────────────────────────────────────
    # Sequence checks
    # ─────────────────────────────────────────────────────────────────────

    def assert_contains_exactly(
        self, info: AssertionInfo, actual: Iterable[Any] | None, values: Iterable[Any] | None
    ) -> AssertionResult:
        """
        Assert that actual equals values element for element, in order.

        An empty values list only matches an empty collection.
        """
        elements = require_actual(actual)
        expected = require_values(values, allow_empty=True)
        strategy = info.strategy

        index = _first_divergence(strategy, elements, expected)
        if index is None:
            return self._pass(info, "contains_exactly", "Collection contains exactly the given values",
                              expected=expected, actual=elements)

        not_found, not_expected = _multiset_difference(strategy, elements, expected)
        if not not_found and not not_expected:
            message = "Collection has the expected elements but not in order"
        else:
            message = "Collection does not contain exactly the given values"
        self._fail(
            info,
            "contains_exactly",
            message,
            expected=expected,
            actual=elements,
            details={"index": index, "not_found": not_found, "not_expected": not_expected},
        )

    def assert_contains_sequence(
        self, info: AssertionInfo, actual: Iterable[Any] | None, sequence: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that sequence appears as a contiguous run somewhere in actual."""
        elements = require_actual(actual)
        expected = require_values(sequence, name="sequence")
        strategy = info.strategy

        window = len(expected)
        for start in range(len(elements) - window + 1):
            if _matches_at(strategy, elements, expected, start):
                return self._pass(
                    info, "contains_sequence", f"Sequence found at index {start}",
                    expected=expected, actual=elements,
                )
        self._fail(
            info,
            "contains_sequence",
            "Collection does not contain the sequence",
            expected=expected,
            actual=elements,
            details={"sequence": expected},
        )

    def assert_starts_with(
        self, info: AssertionInfo, actual: Iterable[Any] | None, sequence: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that actual begins with sequence."""
        elements = require_actual(actual)
        expected = require_values(sequence, name="sequence")
        return self._check_anchored(info, "starts_with", elements, expected, start=0)

    def assert_ends_with(
        self, info: AssertionInfo, actual: Iterable[Any] | None, sequence: Iterable[Any] | None
    ) -> AssertionResult:
        """Assert that actual finishes with sequence."""
        elements = require_actual(actual)
        expected = require_values(sequence, name="sequence")
        return self._check_anchored(info, "ends_with", elements, expected, start=len(elements) - len(expected))

    # ─────────────────────────────────────────────────────────────────────
    # None checks (identity, never delegated to the strategy)
    # ─────────────────────────────────────────────────────────────────────

    def assert_contains_null(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        elements = require_actual(actual)
        if any(element is None for element in elements):
            return self._pass(info, "contains_null", "Collection contains None", actual=elements)
        self._fail(
            info,
            "contains_null",
            "Expecting collection to contain None",
            expected="a None element",
            actual=elements,
        )

    def assert_does_not_contain_null(self, info: AssertionInfo, actual: Iterable[Any] | None) -> AssertionResult:
        elements = require_actual(actual)
        null_indexes = [index for index, element in enumerate(elements) if element is None]
        if not null_indexes:
            return self._pass(info, "does_not_contain_null", "Collection contains no None", actual=elements)
        self._fail(
            info,
            "does_not_contain_null",
            "Expecting collection not to contain None",
            expected="no None element",
            actual=elements,
            details={"null_indexes": null_indexes},
        )

    # ─────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────────────────────────────

    def _check_contains(
        self, info: AssertionInfo, operation: str, elements: list[Any], expected: list[Any]
    ) -> AssertionResult:
        strategy = info.strategy
        not_found = [value for value in strategy.distinct(expected) if not strategy.iterable_contains(elements, value)]
        if not not_found:
            return self._pass(info, operation, "Collection contains the given values",
                              expected=expected, actual=elements)
        self._fail(
            info,
            operation,
            "Collection does not contain the given values",
            expected=expected,
            actual=elements,
            details={"not_found": not_found},
        )

    def _check_anchored(
        self, info: AssertionInfo, operation: str, elements: list[Any], expected: list[Any], start: int
    ) -> AssertionResult:
        if len(expected) > len(elements):
            self._fail(
                info,
                operation,
                "Collection is shorter than the sequence",
                expected=expected,
                actual=elements,
                details={"expected_size": len(expected), "actual_size": len(elements)},
            )
        anchor = "start" if operation == "starts_with" else "end"
        for offset, value in enumerate(expected):
            if not info.strategy.are_equal(elements[start + offset], value):
                self._fail(
                    info,
                    operation,
                    f"Collection does not {anchor} with the sequence",
                    expected=expected,
                    actual=elements,
                    details={"index": start + offset},
                )
        return self._pass(info, operation, f"Collection {anchor}s with the sequence",
                          expected=expected, actual=elements)

    def _pass(
        self,
        info: AssertionInfo,
        operation: str,
        message: str,
        expected: Any = None,
        actual: Any = None,
    ) -> AssertionResult:
        logger.debug(f"{operation}: passed ({message})")
        return AssertionResult.passed_result(
            operation=operation,
            message=message,
            info=info,
            expected=expected,
            actual=actual,
        )

    def _fail(
        self,
        info: AssertionInfo,
        operation: str,
        message: str,
        expected: Any = None,
        actual: Any = None,
        details: dict[str, Any] | None = None,
    ) -> NoReturn:
        logger.debug(f"{operation}: failed ({message})")
        raise AssertionFailedError(
            AssertionResult.failed_result(
                operation=operation,
                message=message,
                info=info,
                expected=expected,
                actual=actual,
                details=details,
            )
        )


def _matches_at(strategy: ComparisonStrategy, elements: list[Any], sequence: list[Any], start: int) -> bool:
    return all(
        strategy.are_equal(elements[start + offset], value)
        for offset, value in enumerate(sequence)
    )


def _first_divergence(strategy: ComparisonStrategy, elements: list[Any], expected: list[Any]) -> int | None:
    """Index of the first position where the lists differ, None if they are equal."""
    for index, (element, value) in enumerate(zip(elements, expected)):
        if not strategy.are_equal(element, value):
            return index
    if len(elements) != len(expected):
        return min(len(elements), len(expected))
    return None


def _multiset_difference(
    strategy: ComparisonStrategy, elements: list[Any], expected: list[Any]
) -> tuple[list[Any], list[Any]]:
    """Split into (expected values missing from actual, actual elements not expected), counting multiplicity."""
    remaining = list(elements)
    not_found = [value for value in expected if not strategy.iterable_remove_first(remaining, value)]
    return not_found, remaining


# Convenience functions for quick assertions
def assert_contains(actual: Iterable[Any], values: Iterable[Any], info: AssertionInfo | None = None) -> AssertionResult:
    """Check that actual contains every value."""
    return IterablesEngine().assert_contains(info or AssertionInfo(), actual, values)


def assert_contains_exactly(
    actual: Iterable[Any], values: Iterable[Any], info: AssertionInfo | None = None
) -> AssertionResult:
    """Check that actual equals values in order."""
    return IterablesEngine().assert_contains_exactly(info or AssertionInfo(), actual, values)


def assert_does_not_have_duplicates(actual: Iterable[Any], info: AssertionInfo | None = None) -> AssertionResult:
    """Check that actual has no two equal elements."""
    return IterablesEngine().assert_does_not_have_duplicates(info or AssertionInfo(), actual)
