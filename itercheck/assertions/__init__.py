"""
Assertion Engine for Iterables

This package decides pass/fail for expectations on collections and
produces structured verdicts describing every mismatch.

Components:
    - comparison: pluggable element equality (standard or comparator based)
    - engine: containment, exact contents, subset, sequence, prefix/suffix,
      duplicates and None checks
    - conditions: predicate checks and cardinality constraints
    - models: AssertionInfo (session context) and AssertionResult (verdict)

Usage:
    from itercheck.assertions import AssertionInfo, IterablesEngine, case_insensitive

    engine = IterablesEngine()
    info = AssertionInfo(description="names")

    engine.assert_contains(info, ["Frodo", "Sam"], ["Sam"])

    try:
        engine.assert_contains(info, ["A"], ["a"])
    except AssertionFailedError as e:
        print(e.result)  # Detailed failure, e.result.details["not_found"] == ["a"]

    engine.assert_contains(info.using_comparator(case_insensitive), ["A"], ["a"])
"""

# Models
from .models import AssertionInfo, AssertionResult, AssertionStatus

# Errors
from .errors import (
    AssertionFailedError,
    IterCheckError,
    PreconditionError,
    PropertyPathError,
    PropertyResolutionError,
)

# Comparison strategies
from .comparison import (
    NAMED_COMPARATORS,
    STANDARD,
    ComparatorComparisonStrategy,
    ComparisonStrategy,
    StandardComparisonStrategy,
    case_insensitive,
    comparison_strategy_for,
    named_strategy,
    numeric,
)

# Engines
from .engine import (
    IterablesEngine,
    # Convenience functions
    assert_contains,
    assert_contains_exactly,
    assert_does_not_have_duplicates,
)
from .conditions import Cardinality, Condition, ConditionsEngine, as_condition

__all__ = [
    # Models
    "AssertionInfo",
    "AssertionResult",
    "AssertionStatus",
    # Errors
    "AssertionFailedError",
    "IterCheckError",
    "PreconditionError",
    "PropertyPathError",
    "PropertyResolutionError",
    # Comparison
    "ComparisonStrategy",
    "StandardComparisonStrategy",
    "ComparatorComparisonStrategy",
    "STANDARD",
    "NAMED_COMPARATORS",
    "comparison_strategy_for",
    "named_strategy",
    "case_insensitive",
    "numeric",
    # Engines
    "IterablesEngine",
    "ConditionsEngine",
    "Condition",
    "Cardinality",
    "as_condition",
    # Convenience functions
    "assert_contains",
    "assert_contains_exactly",
    "assert_does_not_have_duplicates",
]
