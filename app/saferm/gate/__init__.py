"""Deletion gate.

This module provides path containment, git status classification and
caching, allow-list matching, directory subtree policy, and the
decision engine that combines them into one verdict per path.
"""

from saferm.gate.allowlist import AllowList, ResolvedAllowEntry
from saferm.gate.cache import StatusCache
from saferm.gate.containment import ContainmentResult, check_containment
from saferm.gate.directory import DirectoryPolicy
from saferm.gate.engine import DecisionEngine, Tally
from saferm.gate.models import (
    DELETABLE_STATUSES,
    DeleteOptions,
    Denial,
    ErrorKind,
    FileStatus,
    Outcome,
    Verdict,
)
from saferm.gate.operator import DeletionOperator, DeletionResult
from saferm.gate.repository import GitRepository, RepositoryError
from saferm.gate.status import StatusFlag, classify

__all__ = [
    "DELETABLE_STATUSES",
    "AllowList",
    "ContainmentResult",
    "DecisionEngine",
    "DeleteOptions",
    "DeletionOperator",
    "DeletionResult",
    "Denial",
    "DirectoryPolicy",
    "ErrorKind",
    "FileStatus",
    "GitRepository",
    "Outcome",
    "RepositoryError",
    "ResolvedAllowEntry",
    "StatusCache",
    "StatusFlag",
    "Tally",
    "Verdict",
    "check_containment",
    "classify",
]
