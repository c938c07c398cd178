"""Status policy for files and whole directory subtrees.

A file may be deleted when its status is deletable. A directory may be
deleted when it is ignored as a whole, or when every entry below it is
deletable. Unreadable directories deny the entire subtree.
"""

import logging
import os
from pathlib import Path

from saferm.gate.cache import StatusCache
from saferm.gate.models import Denial, directory_read_error, dirty_file, git_error, io_error
from saferm.gate.repository import RepositoryError

logger = logging.getLogger(__name__)


class DirectoryPolicy:
    """Evaluates version-control status for paths and subtrees.

    Attributes:
        _cache: Status source for individual lookups.
    """

    def __init__(self, cache: StatusCache) -> None:
        self._cache = cache

    def check(self, path: Path) -> Denial | None:
        """Check whether a path (file or directory) may be deleted.

        Symlinks are judged as entries of their own and never followed
        into their targets.

        Args:
            path: Canonical absolute path to check.

        Returns:
            None if deletion is allowed, otherwise the first disqualifying
            denial found (DirtyFiles, DirectoryReadError, GitError or IoError).
        """
        try:
            is_real_dir = path.is_dir() and not path.is_symlink()
        except OSError as e:
            return io_error(path, e.strerror or str(e))

        try:
            if is_real_dir:
                return self._check_directory(path)
            return self._check_file(path)
        except RepositoryError as e:
            return git_error(path, str(e))

    def _check_file(self, path: Path) -> Denial | None:
        status = self._cache.lookup(path)
        if status.is_deletable:
            return None
        logger.debug("%s blocked with status %s", path, status)
        return dirty_file(path, status)

    def _check_directory(self, directory: Path) -> Denial | None:
        if self._cache.is_ignored_directory(directory):
            logger.debug("%s is ignored as a whole", directory)
            return None

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.debug("Cannot read %s: %s", directory, e)
            return directory_read_error(directory)

        for entry in entries:
            child = Path(entry.path)
            try:
                is_subdir = entry.is_dir(follow_symlinks=False)
            except OSError:
                return directory_read_error(child)

            denial = self._check_directory(child) if is_subdir else self._check_file(child)
            if denial is not None:
                return denial

        return None
