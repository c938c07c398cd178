"""Subprocess helpers for the read-only git queries the gate issues.

Output is captured as bytes and decoded the way the OS decodes file
names (``os.fsdecode``), so names that are not valid UTF-8 survive as the
same strings ``os.scandir`` yields. A non-zero exit is reported through
``CommandResult`` rather than raised, so callers decide what a failure
means for them.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one finished process.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True when the process exited with status 0."""
        return self.returncode == 0

    @property
    def error_message(self) -> str:
        """First non-blank stderr line, or the exit status when stderr is empty."""
        lines = [line.strip() for line in self.stderr.splitlines() if line.strip()]
        return lines[0] if lines else f"exited with status {self.returncode}"


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a process to completion and capture what it printed.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds to wait before giving up, or None to wait forever.
        cwd: Directory to run in; the current one when None.
        env: Variables layered on top of ``os.environ`` for this call only.

    Returns:
        CommandResult for the finished process, whatever its exit status.
        Undecodable bytes are kept as surrogate escapes.

    Raises:
        subprocess.TimeoutExpired: If the process outlives ``timeout``.
        OSError: If the executable cannot be started.
    """
    proc_env = {**os.environ, **env} if env else None
    completed = subprocess.run(
        args,
        cwd=cwd,
        env=proc_env,
        timeout=timeout,
        capture_output=True,
        check=False,
    )
    return CommandResult(
        os.fsdecode(completed.stdout), os.fsdecode(completed.stderr), completed.returncode
    )


def command_exists(name: str) -> bool:
    """Tell whether ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None
