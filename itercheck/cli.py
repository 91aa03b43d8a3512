#!/usr/bin/env python3
"""
itercheck CLI - Iterable Assertion Suites

Usage:
    itercheck run <suite.yaml> [OPTIONS]
    itercheck validate <suite.yaml>
    itercheck --version
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .reporting import CheckStatus, Reporter
from .runner import SuiteRunner
from .suites import Check, load_suite

app = typer.Typer(
    name="itercheck",
    help="🔎 itercheck - Assertions on collections, from Python or YAML suites",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"🔎 itercheck v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    🔎 itercheck - Assertions on collections

    Run declarative YAML suites of iterable checks.
    """
    pass


def configure_logging(debug: bool) -> None:
    """Route library logging through Rich when debugging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show failures and final status"
    ),
    output: str = typer.Option(
        "text", "--output", "-o",
        help="Output format: text or json"
    ),
    report_dir: Path = typer.Option(
        Path("reports"), "--report-dir", "-r",
        help="Directory to save JSON reports"
    ),
    no_report: bool = typer.Option(
        False, "--no-report",
        help="Don't save a JSON report file"
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Enable debug logging"
    ),
):
    """
    Run a check suite.

    Evaluate every check in the suite and generate a run report.
    """
    configure_logging(debug)
    show_progress = output == "text" and not quiet

    if show_progress:
        console.print(f"\n📄 Loading suite: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    if show_progress:
        console.print(f"   [green]✅ Valid suite:[/green] {suite.name}\n")

    def print_check(check: Check, reporter: Reporter) -> None:
        record = reporter.report.get_check(check.id)
        if record.status == CheckStatus.PASSED:
            if show_progress:
                console.print(f"  [green]✅ {check.id}[/green] ({check.op.value})")
        elif output == "text":
            label = "Failed" if record.status == CheckStatus.FAILED else "Error"
            console.print(f"  [red]❌ {check.id}[/red] ({check.op.value}) {label}: {escape(str(record.message))}")

    report = SuiteRunner(suite).run(on_check=print_check)

    if output == "json":
        console.print_json(report.to_json())
    elif not quiet:
        console.print("\n" + report.summary(), markup=False)

    if not no_report:
        report_path = Reporter(report).save_json(report_dir / f"{report.run_id}.json")
        if show_progress:
            console.print(f"\n📁 Report saved: {report_path}")

    raise typer.Exit(code=0 if report.status.value == "passed" else 1)


@app.command()
def validate(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a suite YAML file.

    Check the schema and report any errors without running the checks.
    """
    console.print(f"\n📄 Validating: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid suite:[/green] {suite.name}")
    console.print(f"   Checks: {len(suite.checks)}")

    table = Table(title="Checks")
    table.add_column("ID", style="cyan")
    table.add_column("Op", style="magenta")
    table.add_column("Source")
    table.add_column("Extract")

    for check in suite.checks:
        table.add_row(check.id, check.op.value, check.from_path or "inline", check.extract or "")

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def info():
    """
    Show information about itercheck.
    """
    console.print(f"""
🔎 [bold]itercheck[/bold] v{__version__}

Assertion engine for collections

[bold]Features:[/bold]
  • Containment, exact contents, subset, sequence and duplicate checks
  • Predicate and cardinality checks (at least, at most, exactly)
  • Pluggable comparators (default, case_insensitive, numeric)
  • Nested property extraction ("race.name")
  • Declarative YAML suites with JSON run reports

[bold]Quick Start:[/bold]
  itercheck run checks/fellowship.yaml
  itercheck validate checks/fellowship.yaml
""")


if __name__ == "__main__":
    app()
