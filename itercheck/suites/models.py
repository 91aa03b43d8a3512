"""
Typed data structures for check suites.

This module contains the enums and dataclasses that represent
the typed structure of a parsed suite file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class CheckOp(str, Enum):
    """Supported check operators, one per engine operation."""
    # Emptiness and size
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IS_NULL_OR_EMPTY = "is_null_or_empty"
    HAS_SIZE = "has_size"
    HAS_SAME_SIZE_AS = "has_same_size_as"
    # Values
    CONTAINS = "contains"
    CONTAINS_ONLY = "contains_only"
    CONTAINS_EXACTLY = "contains_exactly"
    CONTAINS_ALL = "contains_all"
    IS_SUBSET_OF = "is_subset_of"
    DOES_NOT_CONTAIN = "does_not_contain"
    DOES_NOT_HAVE_DUPLICATES = "does_not_have_duplicates"
    # Sequences
    CONTAINS_SEQUENCE = "contains_sequence"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    # None
    CONTAINS_NULL = "contains_null"
    DOES_NOT_CONTAIN_NULL = "does_not_contain_null"
    # Conditions
    ARE = "are"
    ARE_NOT = "are_not"
    HAVE = "have"
    DO_NOT_HAVE = "do_not_have"
    ARE_AT_LEAST = "are_at_least"
    ARE_NOT_AT_LEAST = "are_not_at_least"
    ARE_AT_MOST = "are_at_most"
    ARE_NOT_AT_MOST = "are_not_at_most"
    ARE_EXACTLY = "are_exactly"
    ARE_NOT_EXACTLY = "are_not_exactly"
    HAVE_AT_LEAST = "have_at_least"
    DO_NOT_HAVE_AT_LEAST = "do_not_have_at_least"
    HAVE_AT_MOST = "have_at_most"
    DO_NOT_HAVE_AT_MOST = "do_not_have_at_most"
    HAVE_EXACTLY = "have_exactly"
    DO_NOT_HAVE_EXACTLY = "do_not_have_exactly"


class ConditionOp(str, Enum):
    """Operators available to declarative conditions."""
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    IS_NULL = "is_null"
    NOT_NULL = "not_null"
    MATCHES = "matches"  # regex search on str(value)


# Arguments each operator needs
VALUES_OPS = {
    CheckOp.CONTAINS,
    CheckOp.CONTAINS_ONLY,
    CheckOp.CONTAINS_EXACTLY,
    CheckOp.CONTAINS_ALL,
    CheckOp.IS_SUBSET_OF,
    CheckOp.DOES_NOT_CONTAIN,
    CheckOp.CONTAINS_SEQUENCE,
    CheckOp.STARTS_WITH,
    CheckOp.ENDS_WITH,
}
SIZE_OPS = {CheckOp.HAS_SIZE}
OTHER_OPS = {CheckOp.HAS_SAME_SIZE_AS}
CONDITION_OPS = {
    CheckOp.ARE,
    CheckOp.ARE_NOT,
    CheckOp.HAVE,
    CheckOp.DO_NOT_HAVE,
}
CARDINALITY_OPS = {
    CheckOp.ARE_AT_LEAST,
    CheckOp.ARE_NOT_AT_LEAST,
    CheckOp.ARE_AT_MOST,
    CheckOp.ARE_NOT_AT_MOST,
    CheckOp.ARE_EXACTLY,
    CheckOp.ARE_NOT_EXACTLY,
    CheckOp.HAVE_AT_LEAST,
    CheckOp.DO_NOT_HAVE_AT_LEAST,
    CheckOp.HAVE_AT_MOST,
    CheckOp.DO_NOT_HAVE_AT_MOST,
    CheckOp.HAVE_EXACTLY,
    CheckOp.DO_NOT_HAVE_EXACTLY,
}
VALUELESS_CONDITION_OPS = {ConditionOp.IS_NULL, ConditionOp.NOT_NULL}


# ─────────────────────────────────────────────────────────────────────────────
# Checks
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ConditionSpec:
    """Declarative predicate over one element."""
    op: ConditionOp
    value: Any = None
    description: str | None = None


@dataclass
class Check:
    """One assertion to run against a collection."""
    id: str
    op: CheckOp
    from_path: str | None = None  # 'from' in YAML, JSONPath into suite data
    actual: list[Any] | None = None  # inline collection, used when 'from' is absent
    extract: str | None = None  # property path applied before the check
    description: str | None = None
    comparator: str | None = None  # overrides defaults.comparator
    values: list[Any] | None = None
    size: int | None = None
    other: list[Any] | None = None
    times: int | None = None
    condition: ConditionSpec | None = None


@dataclass
class Defaults:
    """Default settings for check execution."""
    comparator: str = "default"


# ─────────────────────────────────────────────────────────────────────────────
# Suite
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Suite:
    """Fully parsed and validated suite."""
    version: int
    name: str
    data: Any = None
    defaults: Defaults = field(default_factory=Defaults)
    checks: list[Check] = field(default_factory=list)
