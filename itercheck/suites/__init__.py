"""
Check Suites

This package parses and validates declarative YAML suites that run
iterable assertions against inline or document-embedded collections.

Usage:
    from itercheck.suites import load_suite, validate_suite_yaml

    # Load from file
    suite, result = load_suite("checks/fellowship.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    suite, result = validate_suite_yaml(yaml_string)
"""

# Public API
from .loader import load_suite, validate_suite_yaml

# Models (for type hints and isinstance checks)
from .models import (
    Check,
    CheckOp,
    ConditionOp,
    ConditionSpec,
    Defaults,
    Suite,
)

# Parsing and validation
from .parser import SchemaParser, build_condition
from .validation import SchemaValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_suite",
    "validate_suite_yaml",
    # Models
    "Suite",
    "Check",
    "CheckOp",
    "ConditionOp",
    "ConditionSpec",
    "Defaults",
    # Parsing
    "SchemaParser",
    "build_condition",
    # Validation
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
]
