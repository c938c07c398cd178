"""Unit tests for StatusCache.

The repository is a mock so that fallback queries can be counted.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from saferm.gate.cache import StatusCache
from saferm.gate.models import FileStatus
from saferm.gate.repository import GitRepository, RepositoryError
from saferm.gate.status import StatusFlag

ROOT = Path("/work/project")


@pytest.fixture
def repository() -> MagicMock:
    """Mock repository rooted at ROOT with real relative_path logic."""
    repo = MagicMock(spec=GitRepository)
    repo.workdir = ROOT
    real = GitRepository(ROOT)
    repo.relative_path.side_effect = real.relative_path
    repo.status.return_value = {
        "modified.txt": StatusFlag.WT_MODIFIED,
        "staged.txt": StatusFlag.INDEX_NEW,
        "new.txt": StatusFlag.WT_NEW,
        "build": StatusFlag.IGNORED,
    }
    repo.tracked_files.return_value = frozenset({"clean.txt", "modified.txt", "src/app.py"})
    repo.is_ignored.return_value = False
    repo.file_flags.return_value = None
    return repo


class TestBuild:
    """Tests for StatusCache.build."""

    def test_classifies_scan(self, repository: MagicMock) -> None:
        """The scan is classified once into FileStatus values."""
        cache = StatusCache.build(repository)

        assert cache.entries["modified.txt"] == FileStatus.MODIFIED
        assert cache.entries["staged.txt"] == FileStatus.STAGED
        assert cache.entries["new.txt"] == FileStatus.UNTRACKED
        assert cache.entries["build"] == FileStatus.IGNORED
        assert len(cache) == 4
        repository.status.assert_called_once_with()

    def test_entries_are_read_only(self, repository: MagicMock) -> None:
        """The cached mapping cannot be mutated."""
        cache = StatusCache.build(repository)

        with pytest.raises(TypeError):
            cache.entries["x"] = FileStatus.CLEAN  # type: ignore[index]

    def test_failed_scan_is_empty(self, repository: MagicMock) -> None:
        """A failed scan yields an empty cache instead of an error."""
        repository.status.side_effect = RepositoryError("boom")

        cache = StatusCache.build(repository)

        assert len(cache) == 0


class TestLookup:
    """Tests for StatusCache.lookup."""

    def test_cache_hit(self, repository: MagicMock) -> None:
        """Cached paths need no further queries."""
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "modified.txt") == FileStatus.MODIFIED
        repository.is_ignored.assert_not_called()
        repository.file_flags.assert_not_called()

    def test_tracked_unchanged_is_clean(self, repository: MagicMock) -> None:
        """Tracked paths absent from the scan are clean."""
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "src" / "app.py") == FileStatus.CLEAN
        repository.file_flags.assert_not_called()

    def test_ignored_ancestor(self, repository: MagicMock) -> None:
        """Files below an ignored directory in the scan are ignored."""
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "build" / "out" / "a.o") == FileStatus.IGNORED
        repository.is_ignored.assert_not_called()

    def test_ignore_check_fallback(self, repository: MagicMock) -> None:
        """Cache misses consult the ignore rules next."""
        repository.is_ignored.return_value = True
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "later.log") == FileStatus.IGNORED
        repository.is_ignored.assert_called_once_with("later.log")

    def test_targeted_query_fallback(self, repository: MagicMock) -> None:
        """Remaining misses issue a single-path status query."""
        repository.file_flags.return_value = StatusFlag.WT_NEW
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "appeared.txt") == FileStatus.UNTRACKED
        repository.file_flags.assert_called_once_with("appeared.txt")

    def test_unknown_is_not_in_repo(self, repository: MagicMock) -> None:
        """Paths git does not know are NotInRepo."""
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / "ghost.txt") == FileStatus.NOT_IN_REPO

    def test_outside_work_tree(self, repository: MagicMock) -> None:
        """Paths outside the work tree are NotInRepo without any query."""
        cache = StatusCache.build(repository)

        assert cache.lookup(Path("/elsewhere/file")) == FileStatus.NOT_IN_REPO
        repository.is_ignored.assert_not_called()

    def test_repository_metadata(self, repository: MagicMock) -> None:
        """Files inside .git are not version-controlled content."""
        cache = StatusCache.build(repository)

        assert cache.lookup(ROOT / ".git" / "HEAD") == FileStatus.NOT_IN_REPO
        repository.is_ignored.assert_not_called()

    def test_fallback_errors_propagate(self, repository: MagicMock) -> None:
        """Failures of fallback queries are raised to the caller."""
        repository.is_ignored.side_effect = RepositoryError("fatal")
        cache = StatusCache.build(repository)

        with pytest.raises(RepositoryError):
            cache.lookup(ROOT / "ghost.txt")


class TestIsIgnoredDirectory:
    """Tests for StatusCache.is_ignored_directory."""

    def test_scanned_directory(self, repository: MagicMock) -> None:
        """Directories reported ignored by the scan are ignored."""
        cache = StatusCache.build(repository)

        assert cache.is_ignored_directory(ROOT / "build") is True

    def test_root_never_ignored(self, repository: MagicMock) -> None:
        """The work tree root is never ignored."""
        repository.is_ignored.return_value = True
        cache = StatusCache.build(repository)

        assert cache.is_ignored_directory(ROOT) is False

    def test_directory_pattern_check(self, repository: MagicMock) -> None:
        """Other directories are checked with a trailing slash."""
        cache = StatusCache.build(repository)

        assert cache.is_ignored_directory(ROOT / "src") is False
        repository.is_ignored.assert_called_once_with("src/")
