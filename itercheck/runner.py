"""
Suite runner.

Evaluates every check of a parsed Suite with the assertion engines
and records the verdicts in a RunReport. A failing or errored check
never stops the run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .assertions import (
    AssertionFailedError,
    AssertionInfo,
    AssertionResult,
    ConditionsEngine,
    IterablesEngine,
    IterCheckError,
    named_strategy,
)
from .extraction import PropertyExtractor
from .reporting import Reporter, RunReport
from .suites import Check, CheckOp, Suite, build_condition

logger = logging.getLogger(__name__)


class CollectionResolutionError(IterCheckError):
    """Raised when a check's 'from' path does not select a collection."""


class SuiteRunner:
    """
    Runs the checks of a suite.

    Example:
        suite, _ = load_suite("fellowship.yaml")
        report = SuiteRunner(suite).run()
        print(report.summary())
    """

    def __init__(
        self,
        suite: Suite,
        iterables: IterablesEngine | None = None,
        conditions: ConditionsEngine | None = None,
        extractor: PropertyExtractor | None = None,
    ):
        self.suite = suite
        self.iterables = iterables or IterablesEngine()
        self.conditions = conditions or ConditionsEngine()
        self.extractor = extractor or PropertyExtractor()
        self._dispatch = self._build_dispatch()

    def run(self, on_check: Callable[[Check, Reporter], None] | None = None) -> RunReport:
        """
        Evaluate every check and return the completed report.

        Args:
            on_check: Optional callback invoked after each check, e.g. for
                progress output
        """
        reporter = Reporter.from_suite(self.suite)
        reporter.start_run()
        logger.info(f"Running suite '{self.suite.name}' ({len(self.suite.checks)} checks)")

        for check in self.suite.checks:
            reporter.start_check(check.id)
            try:
                result = self.evaluate(check)
            except AssertionFailedError as e:
                result = e.result
            except IterCheckError as e:
                result = AssertionResult.error_result(check.op.value, str(e), {"error_type": type(e).__name__})
                logger.warning(f"[{check.id}] error: {e}")
            except Exception as e:
                # user predicates and comparators may raise anything
                message = f"{type(e).__name__}: {e}"
                result = AssertionResult.error_result(check.op.value, message, {"error_type": type(e).__name__})
                logger.warning(f"[{check.id}] unexpected error: {message}")

            record = reporter.record(check.id, result)
            logger.info(f"[{check.id}] {record.status.value}: {record.message}")

            if on_check:
                on_check(check, reporter)

        return reporter.finish_run()

    def evaluate(self, check: Check) -> AssertionResult:
        """
        Evaluate a single check.

        Returns:
            The passing AssertionResult

        Raises:
            AssertionFailedError: If the check fails
            IterCheckError: If the check cannot be evaluated
        """
        info = AssertionInfo(
            description=check.description or check.id,
            strategy=named_strategy(check.comparator or self.suite.defaults.comparator),
        )
        elements = self.resolve_collection(check)
        if check.extract:
            elements = self.extractor.extract(elements, check.extract)
        return self._dispatch[check.op](info, elements, check)

    def resolve_collection(self, check: Check) -> Any:
        """Select the collection under test: JSONPath into suite data, or the inline list."""
        if check.from_path is None:
            return check.actual

        try:
            expression = parse_jsonpath(check.from_path)
        except (JsonPathLexerError, JsonPathParserError) as e:
            raise CollectionResolutionError(f"Invalid JSONPath {check.from_path!r}: {e}") from e

        matches = expression.find(self.suite.data)
        if not matches:
            raise CollectionResolutionError(f"Path {check.from_path!r} does not exist in suite data")
        if len(matches) == 1 and isinstance(matches[0].value, (list, tuple)):
            return matches[0].value
        return [match.value for match in matches]

    def _build_dispatch(self) -> dict[CheckOp, Callable[[AssertionInfo, Any, Check], AssertionResult]]:
        it = self.iterables
        co = self.conditions

        def values(method):
            return lambda info, actual, check: method(info, actual, check.values)

        def condition(method):
            return lambda info, actual, check: method(info, actual, build_condition(check.condition))

        def cardinality(method):
            return lambda info, actual, check: method(info, actual, check.times, build_condition(check.condition))

        return {
            CheckOp.IS_EMPTY: lambda info, actual, check: it.assert_empty(info, actual),
            CheckOp.IS_NOT_EMPTY: lambda info, actual, check: it.assert_not_empty(info, actual),
            CheckOp.IS_NULL_OR_EMPTY: lambda info, actual, check: it.assert_null_or_empty(info, actual),
            CheckOp.HAS_SIZE: lambda info, actual, check: it.assert_has_size(info, actual, check.size),
            CheckOp.HAS_SAME_SIZE_AS: lambda info, actual, check: it.assert_has_same_size_as(info, actual, check.other),
            CheckOp.CONTAINS: values(it.assert_contains),
            CheckOp.CONTAINS_ONLY: values(it.assert_contains_only),
            CheckOp.CONTAINS_EXACTLY: values(it.assert_contains_exactly),
            CheckOp.CONTAINS_ALL: values(it.assert_contains_all),
            CheckOp.IS_SUBSET_OF: values(it.assert_is_subset_of),
            CheckOp.DOES_NOT_CONTAIN: values(it.assert_does_not_contain),
            CheckOp.DOES_NOT_HAVE_DUPLICATES: lambda info, actual, check: it.assert_does_not_have_duplicates(info, actual),
            CheckOp.CONTAINS_SEQUENCE: values(it.assert_contains_sequence),
            CheckOp.STARTS_WITH: values(it.assert_starts_with),
            CheckOp.ENDS_WITH: values(it.assert_ends_with),
            CheckOp.CONTAINS_NULL: lambda info, actual, check: it.assert_contains_null(info, actual),
            CheckOp.DOES_NOT_CONTAIN_NULL: lambda info, actual, check: it.assert_does_not_contain_null(info, actual),
            CheckOp.ARE: condition(co.assert_are),
            CheckOp.ARE_NOT: condition(co.assert_are_not),
            CheckOp.HAVE: condition(co.assert_have),
            CheckOp.DO_NOT_HAVE: condition(co.assert_do_not_have),
            CheckOp.ARE_AT_LEAST: cardinality(co.assert_are_at_least),
            CheckOp.ARE_NOT_AT_LEAST: cardinality(co.assert_are_not_at_least),
            CheckOp.ARE_AT_MOST: cardinality(co.assert_are_at_most),
            CheckOp.ARE_NOT_AT_MOST: cardinality(co.assert_are_not_at_most),
            CheckOp.ARE_EXACTLY: cardinality(co.assert_are_exactly),
            CheckOp.ARE_NOT_EXACTLY: cardinality(co.assert_are_not_exactly),
            CheckOp.HAVE_AT_LEAST: cardinality(co.assert_have_at_least),
            CheckOp.DO_NOT_HAVE_AT_LEAST: cardinality(co.assert_do_not_have_at_least),
            CheckOp.HAVE_AT_MOST: cardinality(co.assert_have_at_most),
            CheckOp.DO_NOT_HAVE_AT_MOST: cardinality(co.assert_do_not_have_at_most),
            CheckOp.HAVE_EXACTLY: cardinality(co.assert_have_exactly),
            CheckOp.DO_NOT_HAVE_EXACTLY: cardinality(co.assert_do_not_have_exactly),
        }


def run_suite(suite: Suite) -> RunReport:
    """Run every check of the suite with default engines."""
    return SuiteRunner(suite).run()
