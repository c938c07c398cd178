"""Rm command implementation.

Evaluates each requested path through the deletion gate and removes the
admitted ones. This is also the sole command of the ``safe-rm`` script.
"""

import logging
from typing import Annotated

import typer

from saferm.cli.display import print_outcome, print_verdict
from saferm.core.config import build_allow_list, load_config
from saferm.gate.engine import DecisionEngine
from saferm.gate.models import DeleteOptions

logger = logging.getLogger(__name__)


def create_engine() -> DecisionEngine:
    """Build a decision engine from the user configuration."""
    config = load_config()
    return DecisionEngine.create(
        allow_project_deletion=config.allow_project_deletion,
        allow_list=build_allow_list(config),
    )


def rm(
    paths: Annotated[
        list[str],
        typer.Argument(help="Files or directories to delete.", metavar="PATH..."),
    ],
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive",
            "-r",
            "-R",
            help="Remove directories and their contents.",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Ignore nonexistent files.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be removed without removing anything.",
        ),
    ] = False,
) -> None:
    """Remove files, refusing anything outside the project or uncommitted.

    Only clean or ignored files inside the current git project may be
    deleted, unless a configured allow-list entry covers the path.

    Examples:
        safe-rm build.log             # Remove a clean or ignored file
        safe-rm -r target/            # Remove a directory tree
        safe-rm -n -r dist/           # Preview without removing
    """
    options = DeleteOptions(recursive=recursive, force=force, dry_run=dry_run)
    engine = create_engine()

    outcome = engine.run(paths, options, on_verdict=print_verdict)
    print_outcome(outcome)

    logger.debug(
        "%d removed, %d failed, exit code %d",
        outcome.succeeded,
        outcome.failed,
        outcome.exit_code,
    )
    if outcome.exit_code:
        raise typer.Exit(code=outcome.exit_code)
