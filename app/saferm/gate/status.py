"""Version-control status flags and classification.

Raw per-path status is represented as a set of ``StatusFlag`` bits
decoded from git's two-letter porcelain codes. ``classify`` reduces any
flag combination to exactly one ``FileStatus`` through an ordered rule
table: the first rule whose mask intersects the flags wins.
"""

from enum import Flag, auto

from saferm.gate.models import FileStatus


class StatusFlag(Flag):
    """Raw status bits for a single path."""

    NONE = 0
    INDEX_NEW = auto()
    INDEX_MODIFIED = auto()
    INDEX_DELETED = auto()
    INDEX_RENAMED = auto()
    INDEX_TYPECHANGE = auto()
    WT_NEW = auto()
    WT_MODIFIED = auto()
    WT_DELETED = auto()
    WT_RENAMED = auto()
    WT_TYPECHANGE = auto()
    IGNORED = auto()
    CONFLICTED = auto()


INDEX_CHANGES = (
    StatusFlag.INDEX_NEW
    | StatusFlag.INDEX_MODIFIED
    | StatusFlag.INDEX_DELETED
    | StatusFlag.INDEX_RENAMED
    | StatusFlag.INDEX_TYPECHANGE
)

WORKTREE_CHANGES = (
    StatusFlag.WT_MODIFIED
    | StatusFlag.WT_DELETED
    | StatusFlag.WT_RENAMED
    | StatusFlag.WT_TYPECHANGE
    | StatusFlag.CONFLICTED
)

# Evaluated top to bottom; anything matching no rule is Clean.
CLASSIFICATION_RULES: tuple[tuple[StatusFlag, FileStatus], ...] = (
    (StatusFlag.IGNORED, FileStatus.IGNORED),
    (INDEX_CHANGES, FileStatus.STAGED),
    (WORKTREE_CHANGES, FileStatus.MODIFIED),
    (StatusFlag.WT_NEW, FileStatus.UNTRACKED),
)

_INDEX_CODES: dict[str, StatusFlag] = {
    "A": StatusFlag.INDEX_NEW,
    "C": StatusFlag.INDEX_NEW,
    "M": StatusFlag.INDEX_MODIFIED,
    "D": StatusFlag.INDEX_DELETED,
    "R": StatusFlag.INDEX_RENAMED,
    "T": StatusFlag.INDEX_TYPECHANGE,
}

_WORKTREE_CODES: dict[str, StatusFlag] = {
    "A": StatusFlag.WT_NEW,
    "M": StatusFlag.WT_MODIFIED,
    "D": StatusFlag.WT_DELETED,
    "R": StatusFlag.WT_RENAMED,
    "T": StatusFlag.WT_TYPECHANGE,
}

_UNMERGED_CODES: frozenset[str] = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


def flags_from_code(code: str) -> StatusFlag:
    """Decode a two-letter porcelain status code into status flags.

    Args:
        code: The ``XY`` code, X for the index and Y for the work tree.

    Returns:
        Combined StatusFlag bits (NONE for unknown or blank codes).
    """
    if code == "??":
        return StatusFlag.WT_NEW
    if code == "!!":
        return StatusFlag.IGNORED
    if code in _UNMERGED_CODES:
        return StatusFlag.CONFLICTED

    index_code, worktree_code = (code + "  ")[:2]
    flags = StatusFlag.NONE
    flags |= _INDEX_CODES.get(index_code, StatusFlag.NONE)
    flags |= _WORKTREE_CODES.get(worktree_code, StatusFlag.NONE)
    return flags


def parse_porcelain(output: str) -> dict[str, StatusFlag]:
    """Parse ``git status --porcelain=v1 -z`` output.

    Entries are NUL separated. Renames and copies carry the original
    path as an extra entry right after the new one, which is skipped.
    Directory entries (ignored or untracked directories) keep their
    path without the trailing slash.

    Args:
        output: Raw stdout of the status command.

    Returns:
        Mapping of repository-relative POSIX path to status flags.
    """
    entries: dict[str, StatusFlag] = {}
    tokens = output.split("\0")
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4:
            continue

        code, path = token[:2], token[3:]
        if code[0] in "RC":
            index += 1

        entries[path.rstrip("/")] = flags_from_code(code)

    return entries


def classify(flags: StatusFlag) -> FileStatus:
    """Reduce raw status flags to a single semantic status.

    Precedence is Ignored, Staged, Modified, Untracked, then Clean for
    everything else (including the empty set).
    """
    for mask, status in CLASSIFICATION_RULES:
        if flags & mask:
            return status
    return FileStatus.CLEAN
