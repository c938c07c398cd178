"""Project boundary containment check.

A requested path may only be deleted under standard checks when, after
normalization and symlink resolution, it is the project boundary itself
or one of its descendants. The check runs before any existence check so
that out-of-project paths are refused identically whether or not they
exist.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from saferm.gate.models import Denial, outside_project
from saferm.gate.normalize import clean, resolve_target, try_canonicalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ContainmentResult:
    """Result of a containment check.

    Attributes:
        path: Canonicalized absolute path of the target.
        denial: Outside-project denial, or None if the path is contained.
    """

    path: Path
    denial: Denial | None = None

    @property
    def contained(self) -> bool:
        """Check if the target lies inside the boundary."""
        return self.denial is None


def is_contained(root: Path, path: Path) -> bool:
    """Check if ``path`` equals ``root`` or is one of its descendants.

    Comparison is by whole path components, so ``/a/bc`` is not inside
    ``/a/b``.
    """
    return path == root or path.is_relative_to(root)


def check_containment(boundary: Path, cwd: Path, target: Path | str) -> ContainmentResult:
    """Verify that a requested path lies inside the project boundary.

    Relative targets are resolved against ``cwd`` (as the invoking shell
    would), not against the boundary.

    Args:
        boundary: Project boundary directory.
        cwd: Directory the request was made from.
        target: Requested path, relative or absolute.

    Returns:
        ContainmentResult with the canonical path and, when the path is
        outside the boundary, an OutsideProject denial naming both.
    """
    resolved = resolve_target(cwd, target)
    canonical_boundary = try_canonicalize(clean(boundary))

    if not is_contained(canonical_boundary, resolved):
        logger.debug("%s resolves to %s, outside %s", target, resolved, canonical_boundary)
        return ContainmentResult(path=resolved, denial=outside_project(target, boundary))

    return ContainmentResult(path=resolved)
