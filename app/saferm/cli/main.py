"""Typer applications behind the ``saferm`` and ``safe-rm`` scripts.

``saferm`` groups the subcommands (rm, check, init, config) under shared
logging flags; ``safe-rm`` exposes only the deletion command so it can
stand in for ``rm`` in an agent's tool configuration.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from saferm import __version__
from saferm.cli.commands import check, config, init, rm
from saferm.utils.formatting import err_console

HELP_OPTIONS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    name="saferm",
    help="Git-aware deletion gate for automated agents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings=HELP_OPTIONS,
)


def version_callback(value: bool) -> None:
    """Print the installed version and stop."""
    if not value:
        return
    typer.echo(f"safe-rm version {__version__}")
    raise typer.Exit()


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Route the ``saferm`` logger to stderr through Rich."""
    level = logging.ERROR if quiet else logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=err_console, show_time=False, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger("saferm")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every decision to stderr.")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only log errors.")
    ] = False,
) -> None:
    """saferm - Git-aware deletion gate for automated agents.

    Deletes only clean or ignored files inside the current project,
    plus anything under configured allow-list directories.
    """
    if verbose or quiet:
        setup_logging(verbose, quiet)


app.command(name="rm")(rm.rm)
app.command(name="check")(check.check)
app.add_typer(init.app, name="init")
app.add_typer(config.app, name="config")

# Drop-in `safe-rm [-r] [-f] [-n] PATH...`
rm_app = typer.Typer(name="safe-rm", add_completion=False, context_settings=HELP_OPTIONS)
rm_app.command()(rm.rm)


if __name__ == "__main__":
    app()
