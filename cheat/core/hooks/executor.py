"""Hook executor module.

Responsible for validating hook programs and executing them as child
processes with the event arguments and the hook environment.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import contextlib
from dataclasses import dataclass
import logging
import os
import signal
import stat
import subprocess
import time

from cheat.core.hooks.types import (
    HookExecutionError,
    HookIsDirectoryError,
    HookNotFoundError,
)

logger = logging.getLogger(__name__)


def _merge_environment(env: Mapping[str, str]) -> dict[str, str]:
    """Copy the host environment and overlay ``env`` on top of it."""
    merged = os.environ.copy()
    merged.update(env)
    return merged


@dataclass(frozen=True)
class Hook:
    """A single hook program.

    The hook -> event association lives in the HookManager, not here, so a
    Hook can be registered for several events.

    Construction checks that ``path`` exists and is not a directory. It does
    *not* check that the file is executable by the current user; that
    surfaces when the hook is executed.

    Attributes:
        name: Display name used in diagnostics.
        path: Filesystem path of the program.
        timeout: Seconds to wait for the process, ``None`` waits forever.
    """

    name: str
    path: str
    timeout: float | None = None

    def __post_init__(self) -> None:
        try:
            mode = os.stat(self.path).st_mode
        except OSError as e:
            raise HookNotFoundError(self.name, self.path, e.strerror or str(e)) from e

        if stat.S_ISDIR(mode):
            raise HookIsDirectoryError(
                self.name, self.path, "given hook path is a directory, but must be a file"
            )

    def execute(self, args: Sequence[str], env: Mapping[str, str]) -> None:
        """Execute the hook and wait for it to exit.

        Args:
            args: Positional arguments passed to the program.
            env: Variables added to a copy of the host environment. They
                take precedence over host variables with the same name.

        The hook runs in its own session. On timeout its whole process
        group is killed, including background children it left running.

        Raises:
            HookExecutionError: If the process could not be spawned, exited
                with a non-zero code or ran into the timeout.
        """
        start_time = time.perf_counter()
        command = [self.path, *args]

        try:
            process = subprocess.Popen(
                command,
                env=_merge_environment(env),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning(f"Hook '{self.name}' could not be executed: {e}")
            raise HookExecutionError(
                self.name, self.path, f"could not be executed: {e}"
            ) from e

        try:
            _, stderr_bytes = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            # Background children of the hook may hold stderr open.
            _kill_process_group(process)
            process.stderr.close()
            process.wait()
            logger.warning(f"Hook '{self.name}' timed out after {self.timeout}s")
            raise HookExecutionError(
                self.name,
                self.path,
                f"timed out after {self.timeout}s",
                stderr=_decode(e.stderr),
                timed_out=True,
            ) from e

        execution_time = time.perf_counter() - start_time
        stderr = _decode(stderr_bytes)

        if process.returncode != 0:
            logger.warning(
                f"Hook '{self.name}' exited with code {process.returncode}: {stderr.strip()}"
            )
            raise HookExecutionError(
                self.name,
                self.path,
                f"exited with code {process.returncode}",
                exit_code=process.returncode,
                stderr=stderr,
            )

        logger.debug(f"Hook '{self.name}' finished in {execution_time:.3f}s")


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the hook and every process it started in its session."""
    with contextlib.suppress(ProcessLookupError):
        os.killpg(process.pid, signal.SIGKILL)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
