"""
Suite loading.

A suite file goes through three stages: YAML parsing, schema
validation, then parsing into a Suite. Every stage reports problems
as a ValidationResult instead of raising, so the CLI can list them all.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .models import Suite
from .parser import SchemaParser
from .validation import SchemaValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_suite(path: str | Path) -> tuple[Suite | None, ValidationResult]:
    """
    Load and validate a suite file.

    Returns:
        Tuple of (Suite or None, ValidationResult). The Suite is None
        whenever the result holds errors.

    Example:
        suite, result = load_suite("checks/fellowship.yaml")
        if not result.is_valid:
            print(result)
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None, _failure(str(path), "File not found", suggestion="Check the file path is correct")
    except OSError as e:
        return None, _failure(str(path), f"Cannot read file: {e.strerror or e}")

    return _load(text, str(path))


def validate_suite_yaml(text: str, source: str = "yaml") -> tuple[Suite | None, ValidationResult]:
    """Load a suite from a YAML string; ``source`` names it in error paths."""
    return _load(text, source)


def _load(text: str, source: str) -> tuple[Suite | None, ValidationResult]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1}, column {mark.column + 1})" if mark is not None else ""
        problem = getattr(e, "problem", None) or str(e)
        return None, _failure(
            source,
            f"Invalid YAML syntax{where}: {problem}",
            suggestion="Check YAML formatting (indentation, colons, etc.)",
        )

    if not isinstance(data, dict):
        return None, _failure(source, "Suite must be a YAML mapping with version, name and checks", type(data).__name__)

    result = SchemaValidator(data).validate()
    if not result.is_valid:
        return None, result

    suite = SchemaParser(data).parse()
    logger.debug(f"Loaded suite '{suite.name}' from {source} ({len(suite.checks)} checks)")
    return suite, result


def _failure(path: str, message: str, value: object = None, suggestion: str | None = None) -> ValidationResult:
    result = ValidationResult()
    result.add_error(path, message, value=value, suggestion=suggestion)
    return result
