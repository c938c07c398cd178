"""Init command implementation.

Creates the configuration file from the default template.
"""

import typer

from saferm.core.config import ConfigError, write_template
from saferm.core.paths import get_config_path
from saferm.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Create the configuration file with defaults.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(ctx: typer.Context) -> None:
    """Write the default configuration file.

    An existing file is left untouched.

    Examples:
        saferm init
        SAFE_RM_CONFIG=./safe-rm.toml saferm init
    """
    if ctx.invoked_subcommand is not None:
        return

    config_path = get_config_path()

    try:
        written = write_template(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if written is None:
        print_info(f"Config file already exists: {config_path}")
        print_info("To regenerate, delete the file first and run `saferm init` again.")
        return

    print_success(f"Created config file: {written}")
    console.print()
    console.print("Default: [info]~/.claude/skills[/info] is allowed (recursive).")
    console.print("[muted]Edit the file to add more allowed paths.[/muted]")
