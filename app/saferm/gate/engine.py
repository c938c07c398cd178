"""Decision engine for deletion requests.

Each requested path moves through a fixed sequence of checks:

    guard -> allow-list -> containment -> existence -> directory flag
          -> status (skippable) -> execute

An allow-list match skips containment and status checks entirely.
Every path gets exactly one verdict; paths never influence each other's
verdicts, and the run never stops at the first failure. Verdicts are
folded into a ``Tally`` that is passed into and returned from each
step, then reduced to a single ``Outcome``.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from saferm.gate.allowlist import AllowList
from saferm.gate.cache import StatusCache
from saferm.gate.containment import check_containment
from saferm.gate.directory import DirectoryPolicy
from saferm.gate.guards import check_argument
from saferm.gate.models import (
    DeleteOptions,
    Denial,
    Outcome,
    Verdict,
    admit,
    deny,
    io_error,
    is_directory,
    not_found,
    partial_failure,
)
from saferm.gate.normalize import resolve_target, to_absolute, try_canonicalize
from saferm.gate.operator import DeletionOperator
from saferm.gate.repository import GitRepository

logger = logging.getLogger(__name__)

VerdictCallback = Callable[[Verdict], None]


@dataclass(frozen=True, slots=True)
class Tally:
    """Running totals across the paths of one run.

    Attributes:
        succeeded: Admitted paths that were acted on.
        failed: Denied paths.
        blocking: First policy-block denial seen, if any.
    """

    succeeded: int = 0
    failed: int = 0
    blocking: Denial | None = None

    def record(self, verdict: Verdict) -> "Tally":
        """Return a new tally including one more verdict."""
        if verdict.admitted:
            if verdict.skipped:
                return self
            return replace(self, succeeded=self.succeeded + 1)

        blocking = self.blocking
        if blocking is None and verdict.denial is not None and verdict.denial.is_blocking:
            blocking = verdict.denial
        return Tally(succeeded=self.succeeded, failed=self.failed + 1, blocking=blocking)

    def to_outcome(self, verdicts: Iterable[Verdict]) -> Outcome:
        """Reduce the tally to the process-level outcome.

        A policy block dominates; otherwise any failure becomes a
        partial-failure denial carrying both counts.
        """
        if self.failed == 0:
            denial = None
        elif self.blocking is not None:
            denial = self.blocking
        else:
            denial = partial_failure(self.succeeded, self.failed)

        return Outcome(
            verdicts=tuple(verdicts),
            succeeded=self.succeeded,
            failed=self.failed,
            denial=denial,
        )


class DecisionEngine:
    """Decides, per requested path, whether it may be deleted.

    Attributes:
        _cwd: Directory requests are made from.
        _boundary: Project boundary (work tree root, or cwd without a repo).
        _allow_list: Resolved allow-list entries.
        _allow_project_deletion: Skip status checks inside the project.
        _repository: Repository handle, None outside any repository.
        _policy: Status policy, built on first use.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        boundary: Path,
        allow_list: AllowList | None = None,
        allow_project_deletion: bool = True,
        repository: GitRepository | None = None,
    ) -> None:
        self._cwd = cwd
        self._boundary = boundary
        self._allow_list = allow_list if allow_list is not None else AllowList()
        self._allow_project_deletion = allow_project_deletion
        self._repository = repository
        self._policy: DirectoryPolicy | None = None

    @classmethod
    def create(
        cls,
        *,
        cwd: Path | None = None,
        allow_project_deletion: bool = True,
        allow_list: AllowList | None = None,
    ) -> "DecisionEngine":
        """Set up an engine for the current invocation.

        The project boundary is the enclosing git work tree when one is
        discoverable from ``cwd``, otherwise ``cwd`` itself.

        Args:
            cwd: Invoking directory. Defaults to the process cwd.
            allow_project_deletion: Skip status checks inside the project.
            allow_list: Resolved allow-list entries.

        Returns:
            Configured DecisionEngine.
        """
        cwd = cwd if cwd is not None else Path.cwd()
        repository = GitRepository.discover(cwd)
        boundary = repository.workdir if repository is not None else try_canonicalize(cwd)
        logger.debug("Project boundary: %s", boundary)

        return cls(
            cwd=cwd,
            boundary=boundary,
            allow_list=allow_list,
            allow_project_deletion=allow_project_deletion,
            repository=repository,
        )

    @property
    def boundary(self) -> Path:
        """Project boundary for this run."""
        return self._boundary

    @property
    def repository(self) -> GitRepository | None:
        """Repository handle, if the boundary is a git work tree."""
        return self._repository

    @property
    def checks_status(self) -> bool:
        """Whether in-project paths are subject to status checks."""
        return self._repository is not None and not self._allow_project_deletion

    def evaluate(self, target: str, options: DeleteOptions) -> Verdict:
        """Decide whether one requested path may be deleted.

        Args:
            target: Requested path exactly as received.
            options: Recursive/force flags for the request.

        Returns:
            The verdict for the path. Nothing is deleted.
        """
        denial = check_argument(target)
        if denial is not None:
            return deny(target, denial)

        path = to_absolute(self._cwd, target)
        bypassed = self._allow_list.is_allowed(target, self._cwd)

        if bypassed:
            logger.debug("%s admitted by allow-list, skipping containment and status", target)
            resolved = resolve_target(self._cwd, target)
        else:
            containment = check_containment(self._boundary, self._cwd, target)
            if containment.denial is not None:
                return deny(target, containment.denial, path)
            resolved = containment.path

        try:
            exists = path.exists() or path.is_symlink()
            is_real_dir = exists and path.is_dir() and not path.is_symlink()
        except OSError as e:
            return deny(target, io_error(path, e.strerror or str(e)), path)

        if not exists:
            if options.force:
                return admit(target, path, bypassed=bypassed, skipped=True)
            return deny(target, not_found(path), path)

        if is_real_dir and not options.recursive:
            return deny(target, is_directory(path), path)

        if not bypassed and self.checks_status:
            denial = self._status_policy().check(resolved)
            if denial is not None:
                return deny(target, denial, path)

        return admit(target, path, bypassed=bypassed)

    def run(
        self,
        targets: Iterable[str],
        options: DeleteOptions,
        *,
        execute: bool = True,
        on_verdict: VerdictCallback | None = None,
    ) -> Outcome:
        """Evaluate every requested path and delete the admitted ones.

        Args:
            targets: Requested paths, processed in order.
            options: Flags for the request (dry_run suppresses deletion).
            execute: If False, only evaluate; nothing is deleted.
            on_verdict: Called with each verdict as soon as it is final.

        Returns:
            Aggregated Outcome for the run.
        """
        operator = DeletionOperator(dry_run=options.dry_run or not execute)
        tally = Tally()
        verdicts: list[Verdict] = []

        for target in targets:
            verdict, tally = self._process(target, options, operator, tally)
            verdicts.append(verdict)
            if on_verdict is not None:
                on_verdict(verdict)

        return tally.to_outcome(verdicts)

    def _process(
        self,
        target: str,
        options: DeleteOptions,
        operator: DeletionOperator,
        tally: Tally,
    ) -> tuple[Verdict, Tally]:
        """Decide on one path, act on it, and fold it into the tally."""
        verdict = self.evaluate(target, options)

        if verdict.admitted and not verdict.skipped and verdict.path is not None:
            result = operator.delete(verdict.path, recursive=options.recursive)
            if result.success:
                verdict = replace(verdict, dry_run=result.dry_run)
            else:
                denial = io_error(verdict.path, result.error or "unknown error")
                verdict = deny(target, denial, verdict.path)

        if verdict.denial is not None:
            logger.debug("%s denied: %s", target, verdict.denial.kind.value)

        return verdict, tally.record(verdict)

    def _status_policy(self) -> DirectoryPolicy:
        """Build the status cache on first use (one scan per run)."""
        if self._policy is None:
            if self._repository is None:
                msg = "Status checks require a repository"
                raise RuntimeError(msg)
            self._policy = DirectoryPolicy(StatusCache.build(self._repository))
        return self._policy
