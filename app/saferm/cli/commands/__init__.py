"""CLI commands for safe-rm.

This package contains all subcommand implementations.
"""

from saferm.cli.commands import check, config, init, rm

__all__ = ["check", "config", "init", "rm"]
