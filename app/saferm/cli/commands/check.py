"""Check command implementation.

Reports the verdict for each path without deleting anything.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from saferm.cli.commands.rm import create_engine
from saferm.cli.display import (
    create_verdicts_table,
    print_outcome,
    printable,
    verdict_to_dict,
)
from saferm.gate.models import DeleteOptions
from saferm.utils.formatting import console


class OutputFormat(str, Enum):
    """Output format options for check."""

    TABLE = "table"
    JSON = "json"


def check(
    paths: Annotated[
        list[str],
        typer.Argument(help="Paths to evaluate.", metavar="PATH..."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Evaluate directories recursively."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Treat nonexistent paths as skipped."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show whether each path may be deleted, without deleting it.

    Exits with the code a real deletion would have produced.
    """
    options = DeleteOptions(recursive=recursive, force=force, dry_run=True)
    engine = create_engine()
    outcome = engine.run(paths, options, execute=False)

    if output_format == OutputFormat.JSON:
        data = {
            "boundary": printable(str(engine.boundary)),
            "exit_code": outcome.exit_code,
            "verdicts": [verdict_to_dict(v) for v in outcome.verdicts],
        }
        console.print_json(json.dumps(data))
    else:
        console.print(create_verdicts_table(list(outcome.verdicts)))
        boundary = escape(printable(str(engine.boundary)))
        console.print(f"[dim]Project boundary: {boundary}[/dim]", highlight=False)
        print_outcome(outcome)

    if outcome.exit_code:
        raise typer.Exit(code=outcome.exit_code)
