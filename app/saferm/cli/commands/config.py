"""Config inspection and editing commands."""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from saferm.core.config import (
    AllowedPathEntry,
    ConfigError,
    build_allow_list,
    load_config,
    read_config,
    save_config,
)
from saferm.core.paths import get_config_path
from saferm.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and edit the safe-rm configuration.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for config show."""

    TABLE = "table"
    JSON = "json"


@app.command()
def show(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the effective configuration and resolved allow-list."""
    config_path = get_config_path()
    config = load_config(config_path)
    allow_list = build_allow_list(config)

    if output_format == OutputFormat.JSON:
        data = {
            "path": str(config_path),
            "exists": config_path.exists(),
            "allow_project_deletion": config.allow_project_deletion,
            "allowed_paths": [
                {
                    "path": entry.path,
                    "resolved": str(resolved.canonical_path),
                    "recursive": entry.recursive,
                }
                for entry, resolved in zip(config.allowed_paths, allow_list.entries, strict=True)
            ],
        }
        console.print_json(json.dumps(data))
        return

    state = "" if config_path.exists() else " [muted](not found, using defaults)[/muted]"
    console.print(f"Config file: [info]{escape(str(config_path))}[/info]{state}")
    console.print(f"Allow project deletion: [bold]{config.allow_project_deletion}[/bold]")

    if not config.allowed_paths:
        console.print("[muted]No allowed paths configured.[/muted]")
        return

    table = Table(
        title="Allowed Paths",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Resolved", no_wrap=True)
    table.add_column("Scope")

    for entry, resolved in zip(config.allowed_paths, allow_list.entries, strict=True):
        table.add_row(
            escape(entry.path),
            f"[muted]{escape(str(resolved.canonical_path))}[/muted]",
            "recursive" if entry.recursive else "direct children",
        )

    console.print(table)


@app.command()
def path() -> None:
    """Print the configuration file location."""
    console.print(str(get_config_path()), markup=False, highlight=False, soft_wrap=True)


@app.command()
def allow(
    directory: Annotated[
        str,
        typer.Argument(help="Directory where deletion is always permitted.", metavar="PATH"),
    ],
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive",
            "-r",
            help="Also allow everything below the direct children.",
        ),
    ] = False,
) -> None:
    """Add an allow-list entry and save the configuration."""
    config_path = get_config_path()

    try:
        config = read_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if config.has_entry(directory, recursive):
        print_error(f"Already allowed: {directory}")
        raise typer.Exit(code=1)

    config.allowed_paths.append(AllowedPathEntry(path=directory, recursive=recursive))

    try:
        saved = save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scope = "recursive" if recursive else "direct children"
    print_success(f"Allowed {directory} ({scope}) in {saved}")
