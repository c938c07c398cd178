"""Path normalization helpers.

Lexical and filesystem-aware path resolution used by containment and
allow-list checks. None of these functions raise for missing or
unreadable paths; canonicalization is best effort and callers always
re-check containment on the result.
"""

import os
from pathlib import Path


def to_absolute(base: Path, path: Path | str) -> Path:
    """Make a path absolute relative to a base directory.

    Args:
        base: Directory used for relative paths (usually the invoking cwd).
        path: Path to convert.

    Returns:
        The path unchanged if already absolute, otherwise ``base / path``.
    """
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return base / candidate


def clean(path: Path | str) -> Path:
    """Collapse ``.`` and ``..`` segments without touching the filesystem."""
    return Path(os.path.normpath(path))


def try_canonicalize(path: Path | str) -> Path:
    """Resolve symlinks as far as the filesystem allows.

    Existing leading components are resolved through their symlinks
    and the nonexistent remainder is appended lexically, so a missing
    file below a symlinked directory resolves to where it would live.

    Args:
        path: Absolute path to resolve.

    Returns:
        The resolved path, or the lexically cleaned path if resolution
        fails (symlink loops, permission errors).
    """
    cleaned = clean(path)
    try:
        return cleaned.resolve(strict=False)
    except (OSError, RuntimeError):
        return cleaned


def expand_home(path: str) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Falls back to the literal path when the home directory cannot be
    determined.
    """
    try:
        return Path(path).expanduser()
    except RuntimeError:
        return Path(path)


def resolve_target(cwd: Path, path: Path | str) -> Path:
    """Make a requested path absolute, clean it and canonicalize it."""
    return try_canonicalize(clean(to_absolute(cwd, path)))
