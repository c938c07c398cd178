"""Deletion gate domain models.

This module defines the core data structures shared by every stage of
the deletion gate: version-control file statuses, the typed denial
reasons with their exit severities, per-path verdicts, and the
process-level outcome that aggregates them.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileStatus(str, Enum):
    """Semantic version-control status of a single path.

    Attributes:
        CLEAN: Tracked and identical to HEAD.
        IGNORED: Matches an ignore pattern.
        MODIFIED: Tracked with unstaged working-tree changes.
        STAGED: Has changes recorded in the index.
        UNTRACKED: Present in the work tree but unknown to the repository.
        NOT_IN_REPO: Outside any repository work tree, or unknown to git.
    """

    CLEAN = "Clean"
    IGNORED = "Ignored"
    MODIFIED = "Modified"
    STAGED = "Staged"
    UNTRACKED = "Untracked"
    NOT_IN_REPO = "NotInRepo"

    def __str__(self) -> str:
        return self.value

    @property
    def is_deletable(self) -> bool:
        """Check if a path with this status may be deleted."""
        return self in DELETABLE_STATUSES


DELETABLE_STATUSES: frozenset[FileStatus] = frozenset(
    {FileStatus.CLEAN, FileStatus.IGNORED, FileStatus.NOT_IN_REPO}
)


class ErrorKind(str, Enum):
    """Kind of denial produced by the gate.

    File-operation kinds carry exit severity 1; policy blocks carry 2.
    """

    NOT_FOUND = "not_found"
    IS_DIRECTORY = "is_directory"
    PARTIAL_FAILURE = "partial_failure"
    IO_ERROR = "io_error"
    GIT_ERROR = "git_error"
    OUTSIDE_PROJECT = "outside_project"
    DIRTY_FILES = "dirty_files"
    DIRECTORY_READ_ERROR = "directory_read_error"
    DANGEROUS_OPTION = "dangerous_option"
    SHELL_EXPANSION_DETECTED = "shell_expansion_detected"


BLOCKING_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.OUTSIDE_PROJECT,
        ErrorKind.DIRTY_FILES,
        ErrorKind.DIRECTORY_READ_ERROR,
        ErrorKind.DANGEROUS_OPTION,
        ErrorKind.SHELL_EXPANSION_DETECTED,
    }
)


@dataclass(frozen=True, slots=True)
class Denial:
    """A typed reason for refusing to delete a path.

    Attributes:
        kind: Which check produced the denial.
        path: Offending path (None for aggregate denials).
        boundary: Project boundary, for outside-project denials.
        status: Offending status, for dirty-file denials.
        detail: Extra text (backend message, matched pattern or option).
        succeeded: Success count, for partial-failure denials.
        failed: Failure count, for partial-failure denials.
    """

    kind: ErrorKind
    path: str | None = None
    boundary: str | None = None
    status: FileStatus | None = None
    detail: str | None = None
    succeeded: int = 0
    failed: int = 0

    @property
    def exit_code(self) -> int:
        """Exit severity: 2 for policy blocks, 1 for everything else."""
        return 2 if self.kind in BLOCKING_KINDS else 1

    @property
    def is_blocking(self) -> bool:
        """Check if this denial is a security/policy block."""
        return self.kind in BLOCKING_KINDS

    @property
    def message(self) -> str:
        """Human and agent readable description of the denial."""
        kind = self.kind
        if kind == ErrorKind.NOT_FOUND:
            return f"cannot remove '{self.path}': No such file or directory"
        if kind == ErrorKind.IS_DIRECTORY:
            return f"cannot remove '{self.path}': Is a directory (use -r for recursive)"
        if kind == ErrorKind.PARTIAL_FAILURE:
            return f"{self.succeeded} file(s) removed, {self.failed} failed"
        if kind == ErrorKind.SHELL_EXPANSION_DETECTED:
            return (
                "paths containing shell expansion are not allowed.\n"
                f"Path: {self.path}\nPattern: {self.detail}\n"
                "Use an absolute path without shell expansion."
            )
        if kind == ErrorKind.DANGEROUS_OPTION:
            return (
                f"dangerous option is not allowed: {self.detail}\n"
                "Specify the files to delete directly."
            )
        if kind == ErrorKind.DIRECTORY_READ_ERROR:
            return f"failed to read directory, deletion blocked for safety.\nPath: {self.path}"
        if kind == ErrorKind.OUTSIDE_PROJECT:
            return (
                "access outside the project is forbidden.\n"
                f"Path: {self.path}\nProject: {self.boundary}"
            )
        if kind == ErrorKind.DIRTY_FILES:
            return (
                "cannot remove a file with uncommitted changes.\n"
                f"Path: {self.path}\nStatus: {self.status}\n"
                "Commit the changes first."
            )
        if kind == ErrorKind.IO_ERROR:
            return f"I/O error: {self.detail}"
        return f"Git error: {self.detail}"

    def __str__(self) -> str:
        return self.message


def not_found(path: Path | str) -> Denial:
    """Create a denial for a path that does not exist."""
    return Denial(kind=ErrorKind.NOT_FOUND, path=str(path))


def is_directory(path: Path | str) -> Denial:
    """Create a denial for a directory requested without recursive mode."""
    return Denial(kind=ErrorKind.IS_DIRECTORY, path=str(path))


def partial_failure(succeeded: int, failed: int) -> Denial:
    """Create the aggregate denial for a run with file-operation failures."""
    return Denial(kind=ErrorKind.PARTIAL_FAILURE, succeeded=succeeded, failed=failed)


def outside_project(path: Path | str, boundary: Path | str) -> Denial:
    """Create a denial for a path outside the project boundary."""
    return Denial(kind=ErrorKind.OUTSIDE_PROJECT, path=str(path), boundary=str(boundary))


def dirty_file(path: Path | str, status: FileStatus) -> Denial:
    """Create a denial for a file whose status blocks deletion."""
    return Denial(kind=ErrorKind.DIRTY_FILES, path=str(path), status=status)


def directory_read_error(path: Path | str) -> Denial:
    """Create a fail-closed denial for an unreadable directory."""
    return Denial(kind=ErrorKind.DIRECTORY_READ_ERROR, path=str(path))


def dangerous_option(option: str) -> Denial:
    """Create a denial for a forbidden option-like argument."""
    return Denial(kind=ErrorKind.DANGEROUS_OPTION, path=option, detail=option)


def shell_expansion(path: str, pattern: str) -> Denial:
    """Create a denial for an argument with an unexpanded shell construct."""
    return Denial(kind=ErrorKind.SHELL_EXPANSION_DETECTED, path=path, detail=pattern)


def io_error(path: Path | str, detail: str) -> Denial:
    """Create a denial for a failed filesystem operation."""
    return Denial(kind=ErrorKind.IO_ERROR, path=str(path), detail=detail)


def git_error(path: Path | str, detail: str) -> Denial:
    """Create a denial for a failed repository query."""
    return Denial(kind=ErrorKind.GIT_ERROR, path=str(path), detail=detail)


@dataclass(frozen=True, slots=True)
class DeleteOptions:
    """Mode flags supplied with a deletion request.

    Attributes:
        recursive: Allow directories (and their contents).
        force: Ignore nonexistent paths instead of failing.
        dry_run: Report what would be removed without removing it.
    """

    recursive: bool = False
    force: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class Verdict:
    """Decision for a single requested path.

    Attributes:
        requested: The path exactly as it was requested.
        path: Absolute path the deletion acts on (None if never resolved).
        admitted: Whether the path may be (or was) deleted.
        bypassed: Admitted through an allow-list entry, skipping checks.
        skipped: Admitted without action (nonexistent path in force mode).
        denial: Reason for refusal when not admitted.
        dry_run: Whether the deletion was only simulated.
    """

    requested: str
    path: Path | None
    admitted: bool
    bypassed: bool = False
    skipped: bool = False
    denial: Denial | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate verdict consistency after initialization."""
        if self.admitted == (self.denial is not None):
            msg = "A verdict is either admitted or carries a denial, never both"
            raise ValueError(msg)

    @property
    def denied(self) -> bool:
        """Check if the path was refused."""
        return not self.admitted


def admit(
    requested: str,
    path: Path,
    *,
    bypassed: bool = False,
    skipped: bool = False,
) -> Verdict:
    """Create an admitting verdict."""
    return Verdict(
        requested=requested, path=path, admitted=True, bypassed=bypassed, skipped=skipped
    )


def deny(requested: str, denial: Denial, path: Path | None = None) -> Verdict:
    """Create a denying verdict."""
    return Verdict(requested=requested, path=path, admitted=False, denial=denial)


@dataclass(frozen=True, slots=True)
class Outcome:
    """Process-level result of evaluating every requested path.

    Attributes:
        verdicts: One verdict per requested path, in request order.
        succeeded: Number of admitted paths that were acted on.
        failed: Number of denied paths.
        denial: Aggregate denial (None when everything was admitted).
    """

    verdicts: tuple[Verdict, ...] = field(default_factory=tuple)
    succeeded: int = 0
    failed: int = 0
    denial: Denial | None = None

    @property
    def exit_code(self) -> int:
        """Process exit code: 0, 1 (file-operation failure) or 2 (policy block)."""
        return 0 if self.denial is None else self.denial.exit_code

    @property
    def success(self) -> bool:
        """Check if every requested path was admitted."""
        return self.denial is None
