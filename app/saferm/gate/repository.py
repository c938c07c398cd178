"""Git repository discovery and status queries.

All repository access goes through the ``git`` executable with captured
output. Queries are read-only: optional index locks are disabled and
pathspecs are taken literally so that file names containing glob
characters only ever match themselves.
"""

import logging
import subprocess
from pathlib import Path

from saferm.gate.normalize import try_canonicalize
from saferm.gate.status import StatusFlag, parse_porcelain
from saferm.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

GIT_ENV: dict[str, str] = {
    "GIT_OPTIONAL_LOCKS": "0",
    "GIT_LITERAL_PATHSPECS": "1",
    "LC_ALL": "C",
}

# check-ignore takes plain path names and rejects any pathspec magic
CHECK_IGNORE_ENV: dict[str, str] = {**GIT_ENV, "GIT_LITERAL_PATHSPECS": "0"}

_STATUS_ARGS: tuple[str, ...] = (
    "status",
    "--porcelain=v1",
    "-z",
    "--ignored=matching",
    "--untracked-files=all",
)


class RepositoryError(Exception):
    """Raised when a git query fails for reasons other than 'not found'."""


class GitRepository:
    """Read-only handle on a git work tree.

    Attributes:
        _workdir: Canonical path of the work tree root.
        _timeout: Per-query timeout in seconds.
    """

    def __init__(self, workdir: Path, *, timeout: float = 30.0) -> None:
        self._workdir = workdir
        self._timeout = timeout

    @classmethod
    def discover(cls, start: Path, *, timeout: float = 30.0) -> "GitRepository | None":
        """Find the work tree containing a directory.

        Absence of a repository (or of git itself) is a normal state and
        yields None rather than an error.

        Args:
            start: Directory to start the search from.
            timeout: Per-query timeout for the returned handle.

        Returns:
            GitRepository for the enclosing work tree, or None.
        """
        try:
            result = run_command(
                ["git", "-C", str(start), "rev-parse", "--show-toplevel"],
                timeout=timeout,
                env=GIT_ENV,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("git unavailable, treating %s as outside any repository: %s", start, e)
            return None

        toplevel = result.stdout.strip()
        if not result.success or not toplevel:
            logger.debug("No git work tree above %s", start)
            return None

        workdir = try_canonicalize(Path(toplevel))
        logger.debug("Discovered git work tree at %s", workdir)
        return cls(workdir, timeout=timeout)

    @property
    def workdir(self) -> Path:
        """Canonical root directory of the work tree."""
        return self._workdir

    def relative_path(self, path: Path) -> str | None:
        """Convert an absolute path to its repository-relative POSIX form.

        Returns:
            The relative path ("" for the work tree root), or None when the
            path lies outside the work tree.
        """
        try:
            relative = path.relative_to(self._workdir)
        except ValueError:
            return None
        return relative.as_posix() if relative.parts else ""

    def status(self, pathspec: str | None = None) -> dict[str, StatusFlag]:
        """Run a status scan covering tracked, untracked and ignored entries.

        Untracked directories are listed file by file. Ignored directories
        are listed once, as the directory itself.

        Args:
            pathspec: Restrict the scan to this repository-relative path.

        Returns:
            Mapping of repository-relative path to raw status flags.

        Raises:
            RepositoryError: If git fails.
        """
        args = list(_STATUS_ARGS)
        if pathspec is not None:
            args += ["--", pathspec]

        result = self._git(*args)
        if not result.success:
            raise RepositoryError(result.error_message)
        return parse_porcelain(result.stdout)

    def is_ignored(self, relative: str) -> bool:
        """Check whether a repository-relative path matches an ignore rule.

        Pass directories with a trailing slash so directory-only patterns
        apply. Tracked paths are never reported as ignored.

        Raises:
            RepositoryError: If git fails.
        """
        result = self._git("check-ignore", "-q", "--", relative, env=CHECK_IGNORE_ENV)
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise RepositoryError(result.error_message)

    def is_tracked(self, relative: str) -> bool:
        """Check whether the index knows a path (or files below it).

        Raises:
            RepositoryError: If git fails.
        """
        result = self._git("ls-files", "--error-unmatch", "--", relative)
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise RepositoryError(result.error_message)

    def tracked_files(self) -> frozenset[str]:
        """List every path recorded in the index.

        Returns:
            Repository-relative POSIX paths of all tracked files.

        Raises:
            RepositoryError: If git fails.
        """
        result = self._git("ls-files", "-z")
        if not result.success:
            raise RepositoryError(result.error_message)
        return frozenset(path for path in result.stdout.split("\0") if path)

    def file_flags(self, relative: str) -> StatusFlag | None:
        """Query the status of one path directly.

        Returns:
            The path's flags, ``StatusFlag.NONE`` for a tracked unchanged
            path, or None when git does not know the path at all.

        Raises:
            RepositoryError: If git fails.
        """
        entries = self.status(relative)
        if relative in entries:
            return entries[relative]
        if self.is_tracked(relative):
            return StatusFlag.NONE
        return None

    def _git(self, *args: str, env: dict[str, str] | None = None) -> CommandResult:
        """Run a git subcommand inside the work tree."""
        try:
            return run_command(
                ["git", *args],
                cwd=str(self._workdir),
                timeout=self._timeout,
                env=env if env is not None else GIT_ENV,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise RepositoryError(f"cannot run git: {e}") from e
