"""Gates command for gh-aw.

Compiles a workflow's gating conditions and shows the ``if:`` of every
generated job:
- text: table of job / needs / if, workflow condition and ``on:`` section
- json: CompiledGates as JSON

Example:
    $ gh-aw gates .github/workflows/triage.md
    $ gh-aw gates .github/workflows/triage.md --format json
"""

import dataclasses
import json
import logging
from pathlib import Path

import typer
import yaml
from rich.markup import escape
from rich.table import Table

from gh_aw.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    _error,
    _setup_logging,
    console,
)
from gh_aw.compiler import CompiledGates, compile_gates
from gh_aw.core.exceptions import CompilerError, ConfigError, ParserError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


def _format_text_output(compiled: CompiledGates) -> None:
    """Print compiled gates as human-readable text."""
    console.print(f"[bold]Workflow:[/bold] {escape(compiled.workflow_name)}")
    condition = compiled.workflow_condition or "(unconditional)"
    console.print(f"[bold]Workflow condition:[/bold] {escape(condition)}")
    console.print()

    table = Table(title="Job gates")
    table.add_column("Job", style="cyan", no_wrap=True)
    table.add_column("Needs")
    table.add_column("if:", overflow="fold")

    for job in compiled.jobs:
        table.add_row(
            job.name,
            ", ".join(job.depends) or "-",
            escape(job.condition) if job.condition else "-",
        )
        for step_id, step_condition in job.step_conditions.items():
            table.add_row(f"  step {step_id}", "", escape(step_condition))
    console.print(table)

    if compiled.on:
        console.print()
        console.print("[bold]on:[/bold]")
        on_yaml = yaml.safe_dump(compiled.on, sort_keys=False, default_flow_style=False)
        console.print(escape(on_yaml.rstrip()), highlight=False)


def gates_command(
    workflow: Path = typer.Argument(
        ...,
        help="Path to the workflow markdown file",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text or json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output with debug logging",
    ),
) -> None:
    """Compile and show the gating conditions of a workflow.

    Exit codes:
        0 = success
        1 = compiler error
        2 = configuration or parse error

    """
    _setup_logging(verbose=verbose, quiet=False)

    if output_format not in OUTPUT_FORMATS:
        _error(f"Invalid output format: '{output_format}'. Use 'text' or 'json'.")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        compiled = compile_gates(workflow)
    except (ConfigError, ParserError) as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except CompilerError as e:
        _error(str(e))
        if verbose:
            console.print_exception()
        raise typer.Exit(code=EXIT_ERROR) from None

    if output_format == "json":
        # Plain print avoids Rich markup/wrapping
        print(json.dumps(dataclasses.asdict(compiled), indent=2, default=str))
    else:
        _format_text_output(compiled)

    raise typer.Exit(code=EXIT_SUCCESS)
