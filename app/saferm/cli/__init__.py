"""CLI package for safe-rm.

This package contains the Typer applications and all subcommands.
"""

from saferm.cli.main import app, rm_app

__all__ = ["app", "rm_app"]
