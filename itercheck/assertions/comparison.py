"""
Comparison strategies for element matching.

A strategy decides whether two elements are "the same" for the
matching engine. The standard strategy uses Python equality; the
comparator strategy wraps a caller-supplied ``comparator(a, b) -> int``
and treats a result of 0 as equal.

Usage:
    strategy = comparison_strategy_for(case_insensitive)
    strategy.are_equal("Frodo", "FRODO")  # True
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable

Comparator = Callable[[Any, Any], int]


class ComparisonStrategy(ABC):
    """
    Abstract equality/ordering used by the matching engine.

    Subclasses implement ``are_equal`` and ``compare``; the collection
    helpers below are all expressed in terms of ``are_equal`` so that
    they work with unhashable elements.
    """

    @abstractmethod
    def are_equal(self, actual: Any, other: Any) -> bool:
        """Return True if both values are considered equal."""

    @abstractmethod
    def compare(self, actual: Any, other: Any) -> int:
        """Return -1, 0 or 1."""

    def iterable_contains(self, iterable: Iterable[Any], value: Any) -> bool:
        return any(self.are_equal(element, value) for element in iterable)

    def index_of(self, sequence: Iterable[Any], value: Any) -> int:
        """Index of the first element equal to value, or -1."""
        for index, element in enumerate(sequence):
            if self.are_equal(element, value):
                return index
        return -1

    def distinct(self, iterable: Iterable[Any]) -> list[Any]:
        """Keep the first of each group of equal values, in order."""
        kept: list[Any] = []
        for value in iterable:
            if not self.iterable_contains(kept, value):
                kept.append(value)
        return kept

    def duplicates(self, iterable: Iterable[Any]) -> list[Any]:
        """Values seen more than once, each reported once, in order of first repeat."""
        seen: list[Any] = []
        found: list[Any] = []
        for value in iterable:
            if self.iterable_contains(seen, value):
                if not self.iterable_contains(found, value):
                    found.append(value)
            else:
                seen.append(value)
        return found

    def iterable_remove_first(self, values: list[Any], value: Any) -> bool:
        """Remove the first element equal to value from the list in place."""
        index = self.index_of(values, value)
        if index < 0:
            return False
        del values[index]
        return True

    def iterable_remove_all(self, values: list[Any], value: Any) -> None:
        values[:] = [element for element in values if not self.are_equal(element, value)]


class StandardComparisonStrategy(ComparisonStrategy):
    """Uses each value's intrinsic equality (``==``)."""

    def are_equal(self, actual: Any, other: Any) -> bool:
        if actual is None:
            return other is None
        return actual == other

    def compare(self, actual: Any, other: Any) -> int:
        return _natural_compare(actual, other)

    def __repr__(self) -> str:
        return "StandardComparisonStrategy()"


class ComparatorComparisonStrategy(ComparisonStrategy):
    """Uses a caller-supplied comparator; 0 means equal."""

    def __init__(self, comparator: Comparator):
        self.comparator = comparator

    def are_equal(self, actual: Any, other: Any) -> bool:
        # None is never handed to the comparator
        if actual is None or other is None:
            return actual is other
        return self.comparator(actual, other) == 0

    def compare(self, actual: Any, other: Any) -> int:
        # None sorts first
        if actual is None or other is None:
            return (other is None) - (actual is None)
        result = self.comparator(actual, other)
        return (result > 0) - (result < 0)

    def __repr__(self) -> str:
        name = getattr(self.comparator, "__name__", repr(self.comparator))
        return f"ComparatorComparisonStrategy({name})"


STANDARD = StandardComparisonStrategy()


def comparison_strategy_for(comparator: Comparator | None) -> ComparisonStrategy:
    """Build a strategy for the comparator, or the standard one for None."""
    if comparator is None:
        return STANDARD
    return ComparatorComparisonStrategy(comparator)


# ─────────────────────────────────────────────────────────────────────────────
# Built-in comparators
# ─────────────────────────────────────────────────────────────────────────────

def case_insensitive(actual: Any, other: Any) -> int:
    """Compare strings ignoring case; other values by natural order."""
    if isinstance(actual, str) and isinstance(other, str):
        return _natural_compare(actual.casefold(), other.casefold())
    return _natural_compare(actual, other)


def numeric(actual: Any, other: Any) -> int:
    """Compare values as floats, so that 1, 1.0 and "1" are equal."""
    try:
        return _natural_compare(float(actual), float(other))
    except (TypeError, ValueError):
        return _natural_compare(str(actual), str(other))


NAMED_COMPARATORS: dict[str, Comparator] = {
    "case_insensitive": case_insensitive,
    "numeric": numeric,
}


def named_strategy(name: str | None) -> ComparisonStrategy:
    """
    Resolve a comparator name to a strategy.

    "default" (or None) gives the standard strategy.

    Raises:
        KeyError: If the name is not a known comparator
    """
    if name is None or name == "default":
        return STANDARD
    return ComparatorComparisonStrategy(NAMED_COMPARATORS[name])


def _natural_compare(actual: Any, other: Any) -> int:
    if actual == other:
        return 0
    try:
        return (actual > other) - (actual < other)
    except TypeError:
        # unorderable mix of types: order by type name, then repr
        left = (type(actual).__name__, repr(actual))
        right = (type(other).__name__, repr(other))
        return (left > right) - (left < right)
