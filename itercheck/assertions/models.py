"""
Assertion result models.

This module defines the verdict returned by every engine operation
and the per-session context (description and comparison strategy)
that is passed into each call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

from .comparison import STANDARD, ComparisonStrategy, comparison_strategy_for


class AssertionStatus(str, Enum):
    """Status of an assertion check."""
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"  # e.g., unresolvable property, bad arguments


@dataclass(frozen=True)
class AssertionInfo:
    """
    Diagnostic context for one assertion session.

    Holds the optional description shown with failures and the
    comparison strategy used by the matching engine. Swapping the
    strategy returns a new info, so a running evaluation keeps the
    strategy it started with.

    Example:
        info = AssertionInfo(description="fellowship names")
        info = info.using_comparator(case_insensitive)
    """
    description: str | None = None
    strategy: ComparisonStrategy = STANDARD

    def using_comparator(self, comparator: Callable[[Any, Any], int]) -> AssertionInfo:
        """Return a copy that compares elements with the given comparator."""
        return replace(self, strategy=comparison_strategy_for(comparator))

    def using_default_comparator(self) -> AssertionInfo:
        """Return a copy that compares elements with natural equality."""
        return replace(self, strategy=STANDARD)

    def described_as(self, description: str) -> AssertionInfo:
        return replace(self, description=description)


@dataclass
class AssertionResult:
    """
    Result of a single assertion check (the verdict).

    Attributes:
        status: Whether the assertion passed, failed, or errored
        operation: Engine operation that produced the result, e.g. "contains"
        message: Short description of the outcome
        description: Description taken from the AssertionInfo, if any
        expected: What was expected
        actual: The collection actually inspected
        details: Mismatch evidence (not_found, not_expected, index, ...)
    """
    status: AssertionStatus
    operation: str
    message: str
    description: str | None = None
    expected: Any = None
    actual: Any = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status == AssertionStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == AssertionStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "status": self.status.value,
            "operation": self.operation,
            "message": self.message,
            "description": self.description,
            "expected": self.expected,
            "actual": self.actual,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        """Format as a human-readable string."""
        prefix = f"[{self.description}] " if self.description else ""
        if self.status == AssertionStatus.PASSED:
            return f"✅ PASS: {prefix}{self.message}"

        icon = "❌" if self.status == AssertionStatus.FAILED else "⚠️"
        lines = [f"{icon} {self.status.value.upper()}: {prefix}{self.message}"]
        lines.append(f"   Operation: {self.operation}")

        if self.expected is not None:
            lines.append(f"   Expected: {format_value(self.expected)}")

        if self.actual is not None:
            lines.append(f"   Actual:   {format_value(self.actual)}")

        for key, value in self.details.items():
            lines.append(f"   {key}: {format_value(value)}")

        return "\n".join(lines)

    @classmethod
    def passed_result(
        cls,
        operation: str,
        message: str,
        info: AssertionInfo | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> AssertionResult:
        """Create a passing result."""
        return cls(
            status=AssertionStatus.PASSED,
            operation=operation,
            message=message,
            description=info.description if info else None,
            expected=expected,
            actual=actual,
        )

    @classmethod
    def failed_result(
        cls,
        operation: str,
        message: str,
        info: AssertionInfo | None = None,
        expected: Any = None,
        actual: Any = None,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        """Create a failing result."""
        return cls(
            status=AssertionStatus.FAILED,
            operation=operation,
            message=message,
            description=info.description if info else None,
            expected=expected,
            actual=actual,
            details=details or {},
        )

    @classmethod
    def error_result(
        cls,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        """Create an error result (assertion couldn't be evaluated)."""
        return cls(
            status=AssertionStatus.ERROR,
            operation=operation,
            message=message,
            details=details or {},
        )


def format_value(value: Any, max_length: int = 100) -> str:
    """Format a value for display, truncating if too long."""
    if value is None:
        return "null"

    if isinstance(value, str):
        formatted = repr(value)
    elif isinstance(value, (list, dict)):
        try:
            formatted = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            formatted = repr(value)
    else:
        formatted = repr(value)

    if len(formatted) > max_length:
        return formatted[: max_length - 3] + "..."

    return formatted
