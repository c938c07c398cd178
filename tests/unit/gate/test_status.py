"""Unit tests for status flag decoding and classification."""

import pytest
from saferm.gate.models import FileStatus
from saferm.gate.status import StatusFlag, classify, flags_from_code, parse_porcelain


class TestFlagsFromCode:
    """Tests for flags_from_code function."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("??", StatusFlag.WT_NEW),
            ("!!", StatusFlag.IGNORED),
            (" M", StatusFlag.WT_MODIFIED),
            ("M ", StatusFlag.INDEX_MODIFIED),
            ("MM", StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED),
            ("A ", StatusFlag.INDEX_NEW),
            (" D", StatusFlag.WT_DELETED),
            ("R ", StatusFlag.INDEX_RENAMED),
            (" T", StatusFlag.WT_TYPECHANGE),
            ("UU", StatusFlag.CONFLICTED),
            ("AA", StatusFlag.CONFLICTED),
        ],
    )
    def test_codes(self, code: str, expected: StatusFlag) -> None:
        """Porcelain XY codes decode to the matching flags."""
        assert flags_from_code(code) == expected

    def test_unknown_code(self) -> None:
        """Unrecognized codes decode to no flags."""
        assert flags_from_code("  ") == StatusFlag.NONE


class TestClassify:
    """Tests for classify function."""

    def test_empty_is_clean(self) -> None:
        """No flags classifies as Clean."""
        assert classify(StatusFlag.NONE) == FileStatus.CLEAN

    def test_ignored_wins(self) -> None:
        """Ignored takes precedence over everything else."""
        assert classify(StatusFlag.IGNORED | StatusFlag.INDEX_NEW) == FileStatus.IGNORED

    def test_staged_before_modified(self) -> None:
        """Index changes take precedence over work-tree changes."""
        flags = StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED
        assert classify(flags) == FileStatus.STAGED

    def test_modified_before_untracked(self) -> None:
        """Work-tree changes take precedence over untracked."""
        flags = StatusFlag.WT_DELETED | StatusFlag.WT_NEW
        assert classify(flags) == FileStatus.MODIFIED

    def test_untracked(self) -> None:
        """New work-tree files are Untracked."""
        assert classify(StatusFlag.WT_NEW) == FileStatus.UNTRACKED

    def test_conflicted_is_not_deletable(self) -> None:
        """Unmerged paths classify as Modified."""
        assert classify(StatusFlag.CONFLICTED) == FileStatus.MODIFIED

    def test_every_combination_classifies(self) -> None:
        """classify is total over every single flag."""
        for flag in StatusFlag:
            assert isinstance(classify(flag), FileStatus)


class TestParsePorcelain:
    """Tests for parse_porcelain function."""

    def test_parses_entries(self) -> None:
        """Entries are NUL separated and keyed by path."""
        output = " M modified.txt\0?? new.txt\0!! build/\0A  staged.txt\0"

        entries = parse_porcelain(output)

        assert entries == {
            "modified.txt": StatusFlag.WT_MODIFIED,
            "new.txt": StatusFlag.WT_NEW,
            "build": StatusFlag.IGNORED,
            "staged.txt": StatusFlag.INDEX_NEW,
        }

    def test_rename_skips_original_path(self) -> None:
        """The original path following a rename is not an entry."""
        output = "R  new name.txt\0old name.txt\0?? other.txt\0"

        entries = parse_porcelain(output)

        assert set(entries) == {"new name.txt", "other.txt"}

    def test_empty_output(self) -> None:
        """Empty output yields no entries."""
        assert parse_porcelain("") == {}
