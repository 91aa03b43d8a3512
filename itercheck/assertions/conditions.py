"""
Quantified predicate engine.

A Condition is a named predicate over one element. The engine
checks that all (or none) of the elements satisfy it, or that the
number of satisfying elements stands in a given relation to a
threshold (at least, at most, exactly, and their negations).
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .errors import AssertionFailedError, PreconditionError
from .models import AssertionInfo, AssertionResult
from .preconditions import require_actual, require_times

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Condition:
    """A pure boolean predicate with a description used in diagnostics."""
    predicate: Callable[[Any], bool]
    description: str = ""

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def __str__(self) -> str:
        return self.description or getattr(self.predicate, "__name__", "condition")


def as_condition(condition: Condition | Callable[[Any], bool] | None) -> Condition:
    """Accept a Condition or a plain callable."""
    if condition is None:
        raise PreconditionError("The condition to evaluate should not be None")
    if isinstance(condition, Condition):
        return condition
    if not callable(condition):
        raise PreconditionError(f"The condition must be callable, got {type(condition).__name__}")
    return Condition(condition, getattr(condition, "__name__", ""))


class Cardinality(str, Enum):
    """Relation between the satisfying count and the threshold."""
    AT_LEAST = "at_least"
    NOT_AT_LEAST = "not_at_least"
    AT_MOST = "at_most"
    NOT_AT_MOST = "not_at_most"
    EXACTLY = "exactly"
    NOT_EXACTLY = "not_exactly"

    @property
    def symbol(self) -> str:
        return _RELATIONS[self][0]

    def holds(self, count: int, times: int) -> bool:
        return _RELATIONS[self][1](count, times)


_RELATIONS: dict[Cardinality, tuple[str, Callable[[int, int], bool]]] = {
    Cardinality.AT_LEAST: (">=", operator.ge),
    Cardinality.NOT_AT_LEAST: ("<", operator.lt),
    Cardinality.AT_MOST: ("<=", operator.le),
    Cardinality.NOT_AT_MOST: (">", operator.gt),
    Cardinality.EXACTLY: ("==", operator.eq),
    Cardinality.NOT_EXACTLY: ("!=", operator.ne),
}


class ConditionsEngine:
    """
    Engine for predicate-based assertions on a collection.

    The ``are``/``have`` spellings are equivalent; both exist so that
    callers can pick whichever reads naturally for their condition.

    Example:
        engine = ConditionsEngine()
        is_even = Condition(lambda n: n % 2 == 0, "even")

        engine.assert_are_exactly(AssertionInfo(), [2, 4, 5, 6], 3, is_even)
    """

    def assert_are(self, info: AssertionInfo, actual: Iterable[Any] | None, condition: Any) -> AssertionResult:
        """Assert that every element satisfies the condition."""
        return self._check_all(info, "are", actual, condition, expected_match=True)

    def assert_are_not(self, info: AssertionInfo, actual: Iterable[Any] | None, condition: Any) -> AssertionResult:
        """Assert that no element satisfies the condition."""
        return self._check_all(info, "are_not", actual, condition, expected_match=False)

    def assert_have(self, info: AssertionInfo, actual: Iterable[Any] | None, condition: Any) -> AssertionResult:
        return self._check_all(info, "have", actual, condition, expected_match=True)

    def assert_do_not_have(self, info: AssertionInfo, actual: Iterable[Any] | None, condition: Any) -> AssertionResult:
        return self._check_all(info, "do_not_have", actual, condition, expected_match=False)

    # are_* cardinality family

    def assert_are_at_least(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.AT_LEAST, "are_at_least")

    def assert_are_not_at_least(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_AT_LEAST, "are_not_at_least")

    def assert_are_at_most(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.AT_MOST, "are_at_most")

    def assert_are_not_at_most(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_AT_MOST, "are_not_at_most")

    def assert_are_exactly(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.EXACTLY, "are_exactly")

    def assert_are_not_exactly(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_EXACTLY, "are_not_exactly")

    # have_* cardinality family

    def assert_have_at_least(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.AT_LEAST, "have_at_least")

    def assert_do_not_have_at_least(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_AT_LEAST, "do_not_have_at_least")

    def assert_have_at_most(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.AT_MOST, "have_at_most")

    def assert_do_not_have_at_most(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_AT_MOST, "do_not_have_at_most")

    def assert_have_exactly(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.EXACTLY, "have_exactly")

    def assert_do_not_have_exactly(self, info: AssertionInfo, actual: Iterable[Any] | None, times: int, condition: Any) -> AssertionResult:
        return self.assert_cardinality(info, actual, times, condition, Cardinality.NOT_EXACTLY, "do_not_have_exactly")

    def assert_cardinality(
        self,
        info: AssertionInfo,
        actual: Iterable[Any] | None,
        times: int,
        condition: Any,
        cardinality: Cardinality,
        operation: str | None = None,
    ) -> AssertionResult:
        """
        Count the elements satisfying the condition and compare against times.

        Args:
            info: Assertion context
            actual: Collection under test
            times: Non-negative threshold
            condition: Condition or callable
            cardinality: Relation the count must satisfy
            operation: Name reported in the result (defaults to the cardinality)

        Returns:
            The passing AssertionResult

        Raises:
            PreconditionError: If actual or condition is None, or times < 0
            AssertionFailedError: If the relation does not hold
        """
        elements = require_actual(actual)
        times = require_times(times)
        condition = as_condition(condition)
        operation = operation or cardinality.value

        satisfying = [element for element in elements if condition.matches(element)]
        count = len(satisfying)
        expected = f"count {cardinality.symbol} {times} satisfying {condition}"

        if cardinality.holds(count, times):
            logger.debug(f"{operation}: passed ({count} {cardinality.symbol} {times})")
            return AssertionResult.passed_result(
                operation=operation,
                message=f"{count} element(s) satisfy {condition}",
                info=info,
                expected=expected,
                actual=elements,
            )

        logger.debug(f"{operation}: failed ({count} not {cardinality.symbol} {times})")
        raise AssertionFailedError(
            AssertionResult.failed_result(
                operation=operation,
                message=f"Expecting {cardinality.value.replace('_', ' ')} {times} element(s) to satisfy "
                        f"{condition} but {count} did",
                info=info,
                expected=expected,
                actual=elements,
                details={
                    "count": count,
                    "times": times,
                    "relation": cardinality.symbol,
                    "satisfying": satisfying,
                },
            )
        )

    def _check_all(
        self,
        info: AssertionInfo,
        operation: str,
        actual: Iterable[Any] | None,
        condition: Any,
        expected_match: bool,
    ) -> AssertionResult:
        elements = require_actual(actual)
        condition = as_condition(condition)

        violating_indexes = [
            index for index, element in enumerate(elements)
            if condition.matches(element) is not expected_match
        ]
        violating = [elements[index] for index in violating_indexes]
        wording = "satisfy" if expected_match else "not satisfy"
        if not violating:
            logger.debug(f"{operation}: passed")
            return AssertionResult.passed_result(
                operation=operation,
                message=f"All elements {wording} {condition}",
                info=info,
                actual=elements,
            )

        logger.debug(f"{operation}: failed with {len(violating)} violating element(s)")
        raise AssertionFailedError(
            AssertionResult.failed_result(
                operation=operation,
                message=f"Expecting all elements to {wording} {condition}",
                info=info,
                expected=f"all elements {wording} {condition}",
                actual=elements,
                details={"index": violating_indexes[0], "violating": violating},
            )
        )
