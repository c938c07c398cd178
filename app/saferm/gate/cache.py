"""Per-run repository status cache.

One full status scan populates an immutable mapping from
repository-relative path to ``FileStatus``, alongside the set of
tracked paths (unchanged tracked files never appear in a status scan).
Lookups that miss both fall through to targeted queries: ignored
ancestors already in the scan, then an ignore check, then a single-path
status query.
"""

import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from types import MappingProxyType

from saferm.gate.models import FileStatus
from saferm.gate.repository import GitRepository, RepositoryError
from saferm.gate.status import classify

logger = logging.getLogger(__name__)


def _is_metadata(relative: str) -> bool:
    """Check whether a relative path lies in the repository metadata directory."""
    return PurePosixPath(relative).parts[:1] == (".git",)


class StatusCache:
    """Read-through status lookup for one repository.

    Attributes:
        _repository: Repository the statuses belong to.
        _entries: Immutable scan results keyed by relative POSIX path.
        _tracked: Relative POSIX paths known to the index.
    """

    def __init__(
        self,
        repository: GitRepository,
        entries: Mapping[str, FileStatus],
        tracked: frozenset[str] = frozenset(),
    ) -> None:
        self._repository = repository
        self._entries: Mapping[str, FileStatus] = MappingProxyType(dict(entries))
        self._tracked = tracked

    @classmethod
    def build(cls, repository: GitRepository) -> "StatusCache":
        """Scan the whole repository once and cache every reported status.

        A failed scan is not fatal: the cache starts empty and every
        lookup falls back to a targeted query.

        Args:
            repository: Repository to scan.

        Returns:
            Populated StatusCache.
        """
        try:
            raw = repository.status()
            tracked = repository.tracked_files()
        except RepositoryError as e:
            logger.warning("Repository status scan failed, using per-path queries: %s", e)
            return cls(repository, {})

        entries = {path: classify(flags) for path, flags in raw.items()}
        logger.debug(
            "Cached status for %d path(s), %d tracked, in %s",
            len(entries),
            len(tracked),
            repository.workdir,
        )
        return cls(repository, entries, tracked)

    @property
    def repository(self) -> GitRepository:
        """Repository this cache was built from."""
        return self._repository

    @property
    def entries(self) -> Mapping[str, FileStatus]:
        """Read-only view of the scanned statuses."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, path: Path) -> FileStatus:
        """Get the status of an absolute, canonical path.

        Args:
            path: Path to look up.

        Returns:
            The cached status when present, otherwise the result of the
            fallback queries. Paths outside the work tree are NotInRepo.

        Raises:
            RepositoryError: If a fallback query fails.
        """
        relative = self._repository.relative_path(path)
        if relative is None:
            return FileStatus.NOT_IN_REPO

        cached = self._entries.get(relative)
        if cached is not None:
            return cached

        if relative in self._tracked:
            return FileStatus.CLEAN

        if _is_metadata(relative):
            return FileStatus.NOT_IN_REPO

        if self._has_ignored_ancestor(relative):
            return FileStatus.IGNORED

        if relative and self._repository.is_ignored(relative):
            return FileStatus.IGNORED

        flags = self._repository.file_flags(relative or ".")
        if flags is None:
            return FileStatus.NOT_IN_REPO
        return classify(flags)

    def is_ignored_directory(self, path: Path) -> bool:
        """Check whether a directory as a whole matches an ignore rule.

        The work tree root itself is never ignored.

        Raises:
            RepositoryError: If the ignore check fails.
        """
        relative = self._repository.relative_path(path)
        if not relative or _is_metadata(relative):
            return False

        if self._entries.get(relative) == FileStatus.IGNORED:
            return True
        if self._has_ignored_ancestor(relative):
            return True
        return self._repository.is_ignored(f"{relative}/")

    def _has_ignored_ancestor(self, relative: str) -> bool:
        """Check whether the scan reported an enclosing directory as ignored."""
        for parent in PurePosixPath(relative).parents:
            key = parent.as_posix()
            if key == ".":
                break
            if self._entries.get(key) == FileStatus.IGNORED:
                return True
        return False
