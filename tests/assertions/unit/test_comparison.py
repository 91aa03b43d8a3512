"""Comparison strategy tests."""

from __future__ import annotations

import pytest
from itercheck.assertions.comparison import (
    STANDARD,
    ComparatorComparisonStrategy,
    case_insensitive,
    comparison_strategy_for,
    named_strategy,
)


def _refuses_none(actual: object, other: object) -> int:
    if actual is None or other is None:
        raise AssertionError("comparator must not receive None")
    return case_insensitive(actual, other)


def test_standard_strategy_uses_natural_equality() -> None:
    assert STANDARD.are_equal(1, 1.0)
    assert STANDARD.are_equal([1, 2], [1, 2])
    assert STANDARD.are_equal(None, None)
    assert not STANDARD.are_equal(None, 0)
    assert not STANDARD.are_equal("A", "a")


def test_comparator_strategy_treats_zero_as_equal() -> None:
    strategy = comparison_strategy_for(case_insensitive)

    assert isinstance(strategy, ComparatorComparisonStrategy)
    assert strategy.are_equal("Frodo", "FRODO")
    assert not strategy.are_equal("Frodo", "Sam")


def test_comparator_is_never_called_with_none() -> None:
    strategy = comparison_strategy_for(_refuses_none)

    assert strategy.are_equal(None, None)
    assert not strategy.are_equal(None, "a")
    assert not strategy.are_equal("a", None)
    assert strategy.compare(None, None) == 0
    assert strategy.compare(None, "a") == -1
    assert strategy.compare("a", None) == 1


def test_compare_is_normalized_to_sign() -> None:
    strategy = comparison_strategy_for(lambda a, b: a - b)

    assert strategy.compare(10, 3) == 1
    assert strategy.compare(3, 10) == -1
    assert strategy.compare(4, 4) == 0


def test_missing_comparator_gives_standard_strategy() -> None:
    assert comparison_strategy_for(None) is STANDARD


def test_distinct_and_duplicates_follow_the_strategy() -> None:
    strategy = comparison_strategy_for(case_insensitive)

    assert strategy.distinct(["a", "A", "b"]) == ["a", "b"]
    assert strategy.duplicates(["a", "b", "A", "B", "a"]) == ["a", "b"]


def test_helpers_support_unhashable_elements() -> None:
    assert STANDARD.duplicates([[1], [1], [2]]) == [[1]]
    assert STANDARD.index_of([{"a": 1}, {"b": 2}], {"b": 2}) == 1


def test_remove_first_only_removes_one_occurrence() -> None:
    values = [1, 2, 1]

    assert STANDARD.iterable_remove_first(values, 1)
    assert values == [2, 1]
    assert not STANDARD.iterable_remove_first(values, 3)


def test_case_insensitive_orders_mixed_types_without_error() -> None:
    assert case_insensitive("a", 1) != 0
    assert case_insensitive(2, 1) == 1


def test_named_strategies() -> None:
    assert named_strategy("default") is STANDARD
    assert named_strategy(None) is STANDARD
    assert named_strategy("numeric").are_equal("1", 1.0)
    assert named_strategy("case_insensitive").are_equal("MAN", "man")

    with pytest.raises(KeyError):
        named_strategy("bogus")
