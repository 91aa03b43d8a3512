"""
itercheck - Assertion engine for collections

This package decides pass/fail for expectations on iterables and
produces structured verdicts describing every mismatch.

Subpackages:
    - assertions: comparison strategies, matching and predicate engines, verdicts
    - extraction: nested property extraction ("race.name")
    - suites: parse and validate declarative YAML check suites
    - reporting: run reports and result tracking

Usage:
    from itercheck import AssertionInfo, IterablesEngine, extract

    engine = IterablesEngine()
    info = AssertionInfo(description="fellowship")

    names = extract(fellowship, "name")
    engine.assert_contains(info, names, ["Frodo", "Sam"])
    engine.assert_does_not_have_duplicates(info, names)

    # Or run a YAML suite
    suite, result = load_suite("checks/fellowship.yaml")
    report = run_suite(suite)
    print(report.summary())
"""

__version__ = "0.1.0"

# Re-export assertions for convenience
from .assertions import (
    # Models
    AssertionInfo,
    AssertionResult,
    AssertionStatus,
    # Errors
    AssertionFailedError,
    IterCheckError,
    PreconditionError,
    PropertyPathError,
    PropertyResolutionError,
    # Comparison
    ComparisonStrategy,
    StandardComparisonStrategy,
    ComparatorComparisonStrategy,
    STANDARD,
    comparison_strategy_for,
    named_strategy,
    case_insensitive,
    numeric,
    # Engines
    IterablesEngine,
    ConditionsEngine,
    Condition,
    Cardinality,
)

# Re-export extraction for convenience
from .extraction import PropertyExtractor, extract, parse_property_path

# Re-export suites for convenience
from .suites import (
    load_suite,
    validate_suite_yaml,
    Suite,
    Check,
    CheckOp,
    ValidationResult,
)

# Re-export reporting and runner for convenience
from .reporting import Reporter, RunReport, RunStatus, CheckStatus
from .runner import SuiteRunner, run_suite

__all__ = [
    # Package info
    "__version__",
    # Assertions - Models
    "AssertionInfo",
    "AssertionResult",
    "AssertionStatus",
    # Assertions - Errors
    "AssertionFailedError",
    "IterCheckError",
    "PreconditionError",
    "PropertyPathError",
    "PropertyResolutionError",
    # Assertions - Comparison
    "ComparisonStrategy",
    "StandardComparisonStrategy",
    "ComparatorComparisonStrategy",
    "STANDARD",
    "comparison_strategy_for",
    "named_strategy",
    "case_insensitive",
    "numeric",
    # Assertions - Engines
    "IterablesEngine",
    "ConditionsEngine",
    "Condition",
    "Cardinality",
    # Extraction
    "extract",
    "PropertyExtractor",
    "parse_property_path",
    # Suites
    "load_suite",
    "validate_suite_yaml",
    "Suite",
    "Check",
    "CheckOp",
    "ValidationResult",
    # Reporting
    "Reporter",
    "RunReport",
    "RunStatus",
    "CheckStatus",
    # Runner
    "SuiteRunner",
    "run_suite",
]
