"""Shared Rich display functions for verdicts and outcomes.

Line output follows the contract agents parse: ``removed: <path>`` and
``would remove: <path>`` on stdout, ``safe-rm: <path>: <message>`` on
stderr.
"""

from typing import Any

from rich.markup import escape
from rich.table import Table

from saferm.gate.models import Denial, Outcome, Verdict
from saferm.utils.formatting import console, err_console

PROGRAM = "safe-rm"
BYPASS_SUFFIX = " (allowed by config)"


def printable(text: str) -> str:
    """Show undecodable file-name bytes as ``\\xNN`` escapes."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def verdict_line(verdict: Verdict) -> str | None:
    """Build the stdout line for an admitted verdict.

    Returns:
        The line, or None when nothing was acted on.
    """
    if verdict.denied or verdict.skipped:
        return None
    action = "would remove" if verdict.dry_run else "removed"
    suffix = BYPASS_SUFFIX if verdict.bypassed else ""
    return f"{action}: {verdict.requested}{suffix}"


def print_verdict(verdict: Verdict) -> None:
    """Print one verdict as soon as it is final."""
    if verdict.denial is not None:
        print_denial(verdict.denial, verdict.requested)
        return

    line = verdict_line(verdict)
    if line is not None:
        style = "bypassed" if verdict.bypassed else "removed"
        console.print(
            escape(printable(line)), style=style, soft_wrap=True, highlight=False, emoji=False
        )


def print_denial(denial: Denial, requested: str | None = None) -> None:
    """Print a denial to stderr, prefixed with the program name."""
    prefix = f"{PROGRAM}: {requested}: " if requested is not None else f"{PROGRAM}: "
    err_console.print(
        escape(printable(f"{prefix}{denial.message}")),
        style="error",
        soft_wrap=True,
        highlight=False,
        emoji=False,
    )


def print_outcome(outcome: Outcome) -> None:
    """Print the aggregate denial, if the run failed."""
    if outcome.denial is not None:
        print_denial(outcome.denial)


def _verdict_label(verdict: Verdict) -> str:
    if verdict.denial is not None:
        if verdict.denial.is_blocking:
            return "[blocked]blocked[/blocked]"
        return "[error]error[/error]"
    if verdict.skipped:
        return "[muted]skip[/muted]"
    return "[success]allow[/success]"


def create_verdicts_table(verdicts: list[Verdict]) -> Table:
    """Create a Rich table displaying verdicts.

    Args:
        verdicts: Verdicts to display, in request order.

    Returns:
        Rich Table with Verdict, Path, Bypass, and Reason columns.
    """
    table = Table(
        title="Deletion Check",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Verdict", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Bypass", width=6, justify="center")
    table.add_column("Reason")

    for verdict in verdicts:
        reason = verdict.denial.message.splitlines()[0] if verdict.denial is not None else ""
        table.add_row(
            _verdict_label(verdict),
            escape(printable(verdict.requested)),
            "[bypassed]yes[/bypassed]" if verdict.bypassed else "",
            f"[muted]{escape(printable(reason))}[/muted]",
        )

    return table


def verdict_to_dict(verdict: Verdict) -> dict[str, Any]:
    """Convert a verdict to a JSON-serializable dictionary."""
    denial = verdict.denial
    return {
        "path": printable(verdict.requested),
        "resolved": printable(str(verdict.path)) if verdict.path is not None else None,
        "admitted": verdict.admitted,
        "bypassed": verdict.bypassed,
        "skipped": verdict.skipped,
        "error": denial.kind.value if denial is not None else None,
        "exit_code": denial.exit_code if denial is not None else 0,
        "message": printable(denial.message) if denial is not None else None,
    }
