"""CLI command tests."""

from __future__ import annotations

from pathlib import Path

from itercheck import __version__
from itercheck.cli import app
from typer.testing import CliRunner

runner = CliRunner()

PASSING = """
version: 1
name: Passing
checks:
  - id: hobbits
    actual: [Frodo, Sam]
    op: contains
    values: [Sam]
"""

FAILING = """
version: 1
name: Failing
checks:
  - id: no_duplicates
    actual: [Frodo, Frodo]
    op: does_not_have_duplicates
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "run" in result.stdout
    assert "validate" in result.stdout


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_validate_valid_suite(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate", str(_write(tmp_path, "suite.yaml", PASSING))])

    assert result.exit_code == 0
    assert "Valid suite" in result.stdout
    assert "hobbits" in result.stdout


def test_validate_invalid_suite(tmp_path: Path) -> None:
    path = _write(tmp_path, "suite.yaml", "version: 1\nname: Broken\n")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Validation failed" in result.stdout


def test_run_passing_suite(tmp_path: Path) -> None:
    path = _write(tmp_path, "suite.yaml", PASSING)

    result = runner.invoke(app, ["run", str(path), "--no-report"])

    assert result.exit_code == 0
    assert "hobbits" in result.stdout
    assert "Passing: PASSED" in result.stdout


def test_run_failing_suite_exits_non_zero(tmp_path: Path) -> None:
    path = _write(tmp_path, "suite.yaml", FAILING)

    result = runner.invoke(app, ["run", str(path), "--no-report"])

    assert result.exit_code == 1
    assert "no_duplicates" in result.stdout
    problems = result.stdout.split("Problems:")[1]
    assert "Collection has duplicates" in problems
    assert 'duplicated: ["Frodo"]' in problems


def test_run_json_output(tmp_path: Path) -> None:
    path = _write(tmp_path, "suite.yaml", PASSING)

    result = runner.invoke(app, ["run", str(path), "--output", "json", "--no-report"])

    assert result.exit_code == 0
    assert '"status": "passed"' in result.stdout
    assert "Loading suite" not in result.stdout


def test_run_saves_report(tmp_path: Path) -> None:
    path = _write(tmp_path, "suite.yaml", PASSING)
    report_dir = tmp_path / "reports"

    result = runner.invoke(app, ["run", str(path), "--quiet", "--report-dir", str(report_dir)])

    assert result.exit_code == 0
    assert len(list(report_dir.glob("*.json"))) == 1


SHIPPED_SUITE = Path(__file__).parents[3] / "checks" / "fellowship.yaml"


def test_info_points_at_the_shipped_suite() -> None:
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "checks/fellowship.yaml" in result.stdout
    assert SHIPPED_SUITE.is_file()


def test_shipped_suite_validates_and_passes() -> None:
    validated = runner.invoke(app, ["validate", str(SHIPPED_SUITE)])
    ran = runner.invoke(app, ["run", str(SHIPPED_SUITE), "--no-report"])

    assert validated.exit_code == 0
    assert ran.exit_code == 0
    assert "Fellowship of the Ring: PASSED" in ran.stdout
