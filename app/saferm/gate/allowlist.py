"""Allow-listed directories that bypass the standard deletion checks.

Each configured entry is expanded and canonicalized exactly once, when
the ``AllowList`` is built, and matching afterwards only canonicalizes
the target. A recursive entry covers the directory and everything below
it; a non-recursive entry covers only its direct children.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from saferm.gate.normalize import expand_home, resolve_target, to_absolute, try_canonicalize

logger = logging.getLogger(__name__)


class AllowListEntry(Protocol):
    """Anything carrying a configured path and a recursive flag."""

    path: str
    recursive: bool


@dataclass(frozen=True, slots=True)
class ResolvedAllowEntry:
    """An allow-list entry with its path expanded and canonicalized.

    Attributes:
        canonical_path: Absolute path (canonical when it could be resolved).
        recursive: Whether descendants at any depth are covered.
    """

    canonical_path: Path
    recursive: bool

    def matches(self, target: Path) -> bool:
        """Check if a canonical target path is covered by this entry."""
        if self.recursive:
            return target == self.canonical_path or target.is_relative_to(self.canonical_path)
        return target != target.parent and target.parent == self.canonical_path


def resolve_entry(path: str, recursive: bool) -> ResolvedAllowEntry:
    """Expand ``~`` and canonicalize a configured path.

    Canonicalization failures fall back to the expanded path.
    """
    expanded = to_absolute(Path.cwd(), expand_home(path))
    return ResolvedAllowEntry(canonical_path=try_canonicalize(expanded), recursive=recursive)


@dataclass(frozen=True, slots=True)
class AllowList:
    """Immutable set of resolved allow-list entries.

    Attributes:
        entries: Resolved entries in configuration order.
    """

    entries: tuple[ResolvedAllowEntry, ...] = ()

    @classmethod
    def from_entries(cls, entries: Iterable[AllowListEntry]) -> "AllowList":
        """Resolve configured entries once.

        Args:
            entries: Configured entries (e.g. AllowedPathEntry models).

        Returns:
            AllowList holding one resolved entry per configured entry.
        """
        resolved = tuple(resolve_entry(entry.path, entry.recursive) for entry in entries)
        for entry in resolved:
            logger.debug(
                "Allow-list entry %s (%s)",
                entry.canonical_path,
                "recursive" if entry.recursive else "direct children",
            )
        return cls(entries=resolved)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def is_allowed(self, target: Path | str, cwd: Path) -> bool:
        """Check if a requested path is covered by any entry.

        Args:
            target: Requested path, relative or absolute.
            cwd: Directory relative paths are resolved against.

        Returns:
            True if at least one entry covers the canonical target.
        """
        if not self.entries:
            return False

        resolved = resolve_target(cwd, target)
        return any(entry.matches(resolved) for entry in self.entries)
