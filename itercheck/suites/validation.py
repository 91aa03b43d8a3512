"""
Schema validation for check suites.

This module contains the validation logic that checks raw parsed YAML
against the suite schema and reports errors with helpful messages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from ..assertions.comparison import NAMED_COMPARATORS
from .models import (
    CARDINALITY_OPS,
    CONDITION_OPS,
    OTHER_OPS,
    SIZE_OPS,
    VALUELESS_CONDITION_OPS,
    VALUES_OPS,
    CheckOp,
    ConditionOp,
)


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "checks[0].condition.op"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema validation passed"
        lines = [f"Schema validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Schema Validator
# ─────────────────────────────────────────────────────────────────────────────

class SchemaValidator:
    """Validates raw parsed YAML against the suite schema."""

    REQUIRED_TOP_LEVEL = {"version", "name", "checks"}
    OPTIONAL_TOP_LEVEL = {"data", "defaults"}
    CHECK_FIELDS = {
        "id", "op", "from", "actual", "extract", "description", "comparator",
        "values", "size", "other", "times", "condition",
    }
    VALID_CHECK_OPS = {op.value for op in CheckOp}
    VALID_CONDITION_OPS = {op.value for op in ConditionOp}
    VALID_COMPARATORS = {"default"} | set(NAMED_COMPARATORS)

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()
        self.check_ids: set[str] = set()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_defaults()
        self._validate_checks()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your suite file"
            )

        for key in sorted(unknown):
            self.result.add_error(
                key,
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        name = self.data.get("name")
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Provide a descriptive name for your suite"
            )

    def _validate_defaults(self) -> None:
        defaults = self.data.get("defaults")
        if defaults is None:
            return
        if not isinstance(defaults, dict):
            self.result.add_error(
                "defaults",
                "Must be an object",
                value=defaults
            )
            return

        self._validate_comparator("defaults.comparator", defaults.get("comparator"))

    def _validate_comparator(self, path: str, comparator: Any) -> None:
        if comparator is not None and comparator not in self.VALID_COMPARATORS:
            self.result.add_error(
                path,
                "Unknown comparator",
                value=comparator,
                suggestion=f"Valid comparators: {', '.join(sorted(self.VALID_COMPARATORS))}"
            )

    def _validate_checks(self) -> None:
        checks = self.data.get("checks")
        if not isinstance(checks, list):
            self.result.add_error(
                "checks",
                "Must be a list",
                value=checks
            )
            return

        if len(checks) == 0:
            self.result.add_error(
                "checks",
                "Must contain at least one check",
                suggestion="Add at least one check with an 'op' field"
            )
            return

        for i, check in enumerate(checks):
            self._validate_check(i, check)

    def _validate_check(self, index: int, check: Any) -> None:
        path = f"checks[{index}]"

        if not isinstance(check, dict):
            self.result.add_error(
                path,
                "Check must be an object",
                value=check
            )
            return

        for key in sorted(set(check) - self.CHECK_FIELDS):
            self.result.add_error(
                f"{path}.{key}",
                f"Unknown check field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.CHECK_FIELDS))}"
            )

        check_id = check.get("id")
        if not check_id:
            self.result.add_error(
                f"{path}.id",
                "Check must have an 'id' field",
                suggestion="Add a unique identifier like 'id: my_check'"
            )
        elif not isinstance(check_id, str):
            self.result.add_error(
                f"{path}.id",
                "Check id must be a string",
                value=check_id
            )
        elif check_id in self.check_ids:
            self.result.add_error(
                f"{path}.id",
                "Duplicate check id",
                value=check_id,
                suggestion="Each check must have a unique id"
            )
        else:
            self.check_ids.add(check_id)

        self._validate_source(path, check)

        extract = check.get("extract")
        if extract is not None and (not isinstance(extract, str) or not extract.strip()):
            self.result.add_error(
                f"{path}.extract",
                "Extract must be a non-empty property path",
                value=extract,
                suggestion="Use a dotted path like 'race.name'"
            )

        self._validate_comparator(f"{path}.comparator", check.get("comparator"))

        op = check.get("op")
        if op not in self.VALID_CHECK_OPS:
            self.result.add_error(
                f"{path}.op",
                "Invalid check operator",
                value=op,
                suggestion=f"Valid operators: {', '.join(sorted(self.VALID_CHECK_OPS))}"
            )
            return

        self._validate_arguments(path, CheckOp(op), check)

    def _validate_source(self, path: str, check: dict) -> None:
        """A check reads its collection from 'from' (JSONPath into data) or 'actual'."""
        has_from = "from" in check
        has_actual = "actual" in check

        if has_from == has_actual:
            self.result.add_error(
                path,
                "Check needs exactly one of 'from' or 'actual'",
                suggestion="Use 'from: $.items' to read suite data, or 'actual: [...]' inline"
            )
            return

        if has_from:
            from_path = check.get("from")
            if not isinstance(from_path, str) or not from_path.strip():
                self.result.add_error(
                    f"{path}.from",
                    "'from' must be a JSONPath expression",
                    value=from_path
                )
            elif "data" not in self.data:
                self.result.add_error(
                    f"{path}.from",
                    "'from' requires a top-level 'data' field",
                    suggestion="Add 'data:' to the suite, or use 'actual:' inline"
                )

    def _validate_arguments(self, path: str, op: CheckOp, check: dict) -> None:
        """Check that the operator's required argument is present and well-typed."""
        if op in VALUES_OPS:
            values = check.get("values")
            if "values" not in check:
                self.result.add_error(
                    f"{path}.values",
                    f"Operator '{op.value}' requires a 'values' field"
                )
            elif not isinstance(values, list):
                self.result.add_error(
                    f"{path}.values",
                    "Values must be a list",
                    value=values
                )

        if op in SIZE_OPS:
            size = check.get("size")
            if not isinstance(size, int) or isinstance(size, bool) or size < 0:
                self.result.add_error(
                    f"{path}.size",
                    f"Operator '{op.value}' requires a non-negative integer 'size'",
                    value=size
                )

        if op in OTHER_OPS:
            other = check.get("other")
            if not isinstance(other, list):
                self.result.add_error(
                    f"{path}.other",
                    f"Operator '{op.value}' requires an 'other' list",
                    value=other
                )

        if op in CARDINALITY_OPS:
            times = check.get("times")
            if not isinstance(times, int) or isinstance(times, bool) or times < 0:
                self.result.add_error(
                    f"{path}.times",
                    f"Operator '{op.value}' requires a non-negative integer 'times'",
                    value=times
                )

        if op in CONDITION_OPS or op in CARDINALITY_OPS:
            self._validate_condition(f"{path}.condition", check.get("condition"))

    def _validate_condition(self, path: str, condition: Any) -> None:
        if not isinstance(condition, dict):
            self.result.add_error(
                path,
                "Condition must be an object",
                value=condition,
                suggestion="Use 'condition: {op: gte, value: 18}'"
            )
            return

        op = condition.get("op")
        if op not in self.VALID_CONDITION_OPS:
            self.result.add_error(
                f"{path}.op",
                "Invalid condition operator",
                value=op,
                suggestion=f"Valid operators: {', '.join(sorted(self.VALID_CONDITION_OPS))}"
            )
            return

        op = ConditionOp(op)
        if op in VALUELESS_CONDITION_OPS:
            return

        if "value" not in condition:
            self.result.add_error(
                f"{path}.value",
                f"Condition operator '{op.value}' requires a 'value' field"
            )
            return

        value = condition["value"]
        if op == ConditionOp.IN and not isinstance(value, list):
            self.result.add_error(
                f"{path}.value",
                "Operator 'in' requires a list",
                value=value
            )
        elif op == ConditionOp.MATCHES:
            if not isinstance(value, str):
                self.result.add_error(
                    f"{path}.value",
                    "Operator 'matches' requires a regular expression string",
                    value=value
                )
                return
            try:
                re.compile(value)
            except re.error as e:
                self.result.add_error(
                    f"{path}.value",
                    f"Invalid regular expression: {e}",
                    value=value
                )
