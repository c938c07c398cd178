"""Deletion executor.

Removes admitted paths. Only paths that already passed the decision
engine reach this module; it performs no policy checks of its own.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single deletion.

    Attributes:
        path: Path that was operated on.
        success: Whether the removal completed (or would have, in dry-run).
        error: Error message if the removal failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False


class DeletionOperator:
    """Removes files, symlinks and directory trees.

    Attributes:
        _dry_run: If True, report success without modifying the filesystem.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Whether deletions are only simulated."""
        return self._dry_run

    def delete(self, path: Path, recursive: bool = False) -> DeletionResult:
        """Delete a single path.

        Dispatches on the path type:
        - Directories (not symlinks to directories): shutil.rmtree when
          recursive, os.rmdir semantics otherwise
        - Files, symlinks and dead symlinks: Path.unlink

        Args:
            path: Absolute path to delete.
            recursive: Whether directory contents may be removed.

        Returns:
            DeletionResult indicating success or failure.
        """
        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return DeletionResult(path=str(path), success=True, dry_run=True)

        try:
            if path.is_dir() and not path.is_symlink():
                if recursive:
                    shutil.rmtree(path)
                else:
                    path.rmdir()
            else:
                path.unlink()
        except OSError as e:
            logger.debug("Deleting %s failed: %s", path, e)
            return DeletionResult(path=str(path), success=False, error=str(e))

        logger.info("Deleted %s", path)
        return DeletionResult(path=str(path), success=True)
