"""
Schema parser for check suites.

This module converts validated YAML data into typed Suite structures,
and declarative condition specs into executable Conditions.
"""

from __future__ import annotations

import operator
import re
from typing import Any, Callable

from ..assertions.conditions import Condition
from .models import Check, CheckOp, ConditionOp, ConditionSpec, Defaults, Suite

# Ordering operators never match None elements
_ORDERING: dict[ConditionOp, tuple[str, Callable[[Any, Any], bool]]] = {
    ConditionOp.GT: (">", operator.gt),
    ConditionOp.GTE: (">=", operator.ge),
    ConditionOp.LT: ("<", operator.lt),
    ConditionOp.LTE: ("<=", operator.le),
}


class SchemaParser:
    """Parses and converts validated YAML to typed Suite structure."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> Suite:
        """Convert validated data to typed Suite."""
        return Suite(
            version=self.data["version"],
            name=self.data["name"],
            data=self.data.get("data"),
            defaults=self._parse_defaults(),
            checks=self._parse_checks(),
        )

    def _parse_defaults(self) -> Defaults:
        defaults = self.data.get("defaults") or {}
        return Defaults(
            comparator=defaults.get("comparator", "default"),
        )

    def _parse_checks(self) -> list[Check]:
        return [self._parse_check(check) for check in self.data.get("checks", [])]

    def _parse_check(self, check: dict) -> Check:
        return Check(
            id=check["id"],
            op=CheckOp(check["op"]),
            from_path=check.get("from"),
            actual=check.get("actual"),
            extract=check.get("extract"),
            description=check.get("description"),
            comparator=check.get("comparator"),
            values=check.get("values"),
            size=check.get("size"),
            other=check.get("other"),
            times=check.get("times"),
            condition=self._parse_condition(check.get("condition")),
        )

    def _parse_condition(self, condition: dict | None) -> ConditionSpec | None:
        if condition is None:
            return None
        return ConditionSpec(
            op=ConditionOp(condition["op"]),
            value=condition.get("value"),
            description=condition.get("description"),
        )


def build_condition(spec: ConditionSpec) -> Condition:
    """Turn a declarative condition spec into an executable Condition."""
    description = spec.description or _describe(spec)
    op = spec.op
    expected = spec.value

    if op == ConditionOp.EQ:
        predicate = lambda value: value == expected
    elif op == ConditionOp.NE:
        predicate = lambda value: value != expected
    elif op == ConditionOp.IN:
        predicate = lambda value: value in expected
    elif op == ConditionOp.IS_NULL:
        predicate = lambda value: value is None
    elif op == ConditionOp.NOT_NULL:
        predicate = lambda value: value is not None
    elif op == ConditionOp.MATCHES:
        pattern = re.compile(expected)
        predicate = lambda value: value is not None and pattern.search(str(value)) is not None
    else:
        compare = _ORDERING[op][1]
        predicate = lambda value: value is not None and compare(value, expected)

    return Condition(predicate, description)


def _describe(spec: ConditionSpec) -> str:
    if spec.op in _ORDERING:
        return f"{_ORDERING[spec.op][0]} {spec.value!r}"
    if spec.op in (ConditionOp.IS_NULL, ConditionOp.NOT_NULL):
        return spec.op.value.replace("_", " ")
    return f"{spec.op.value} {spec.value!r}"
