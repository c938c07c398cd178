"""Unit tests for the project boundary containment check."""

from pathlib import Path

import pytest
from saferm.gate.containment import check_containment, is_contained
from saferm.gate.models import ErrorKind


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project directory with one file."""
    root = tmp_path.resolve() / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("")
    return root


class TestIsContained:
    """Tests for is_contained function."""

    def test_equal_is_contained(self) -> None:
        """The boundary itself is contained."""
        assert is_contained(Path("/a/b"), Path("/a/b")) is True

    def test_descendant_is_contained(self) -> None:
        """Descendants are contained."""
        assert is_contained(Path("/a/b"), Path("/a/b/c/d")) is True

    def test_sibling_prefix_not_contained(self) -> None:
        """Containment compares whole components, not string prefixes."""
        assert is_contained(Path("/a/b"), Path("/a/bc")) is False


class TestCheckContainment:
    """Tests for check_containment function."""

    def test_inside(self, project: Path) -> None:
        """A file inside the project is contained."""
        result = check_containment(project, project, "src/main.py")

        assert result.contained is True
        assert result.path == project / "src" / "main.py"

    def test_relative_resolved_from_cwd(self, project: Path) -> None:
        """Relative paths are resolved from cwd, not from the boundary."""
        result = check_containment(project, project / "src", "main.py")

        assert result.contained is True
        assert result.path == project / "src" / "main.py"

    def test_outside_absolute(self, project: Path) -> None:
        """An absolute path elsewhere is outside the project."""
        result = check_containment(project, project, "/etc/passwd")

        assert result.contained is False
        assert result.denial is not None
        assert result.denial.kind == ErrorKind.OUTSIDE_PROJECT
        assert result.denial.path == "/etc/passwd"
        assert result.denial.boundary == str(project)

    def test_outside_via_dotdot(self, project: Path) -> None:
        """Dot-dot escapes are caught after normalization."""
        result = check_containment(project, project, "../elsewhere.txt")

        assert result.contained is False

    def test_outside_regardless_of_existence(self, project: Path, tmp_path: Path) -> None:
        """Existing and missing outside paths get the same denial kind."""
        existing = tmp_path / "exists.txt"
        existing.write_text("")

        present = check_containment(project, project, str(existing))
        missing = check_containment(project, project, str(tmp_path / "missing.txt"))

        assert present.denial is not None and missing.denial is not None
        assert present.denial.kind == missing.denial.kind == ErrorKind.OUTSIDE_PROJECT

    def test_symlink_escape(self, project: Path, tmp_path: Path) -> None:
        """A symlink inside the project pointing outside is not contained."""
        outside = tmp_path.resolve() / "outside"
        outside.mkdir()
        (project / "escape").symlink_to(outside)

        result = check_containment(project, project, "escape/secret.txt")

        assert result.contained is False

    def test_boundary_itself(self, project: Path) -> None:
        """The project root is contained."""
        assert check_containment(project, project, ".").contained is True
