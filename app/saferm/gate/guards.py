"""Argument guards applied before any path is interpreted.

Arguments that still contain unexpanded shell constructs, or option
tokens that slipped into the path list, are refused outright.
"""

import re

from saferm.gate.models import Denial, dangerous_option, shell_expansion

DANGEROUS_OPTIONS: tuple[str, ...] = (
    "--no-preserve-root",
    "--preserve-root",
    "--one-file-system",
    "-P",
)

# (pattern, label) pairs, checked in order. A variable reference only counts
# at the start of a path segment, so names like `Outer$Inner.class` pass.
SHELL_EXPANSION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^~"), "~"),
    (re.compile(r"\$\("), "$("),
    (re.compile(r"\$\{"), "${"),
    (re.compile(r"(?:^|/)\$[A-Za-z_]"), "$VAR"),
    (re.compile(r"`"), "`"),
)


def check_argument(argument: str) -> Denial | None:
    """Check a raw path argument for forbidden constructs.

    Args:
        argument: The argument exactly as received.

    Returns:
        A DangerousOption or ShellExpansionDetected denial, or None.
    """
    option = argument.split("=", 1)[0]
    if option in DANGEROUS_OPTIONS:
        return dangerous_option(argument)

    for pattern, label in SHELL_EXPANSION_PATTERNS:
        if pattern.search(argument):
            return shell_expansion(argument, label)

    return None
