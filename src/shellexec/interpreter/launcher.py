"""Process launcher.

Runs one command as one child process. The child's stdin/stdout are wired
to the requested endpoints by the spawning facility itself, so no window
exists in which the child holds a stray copy of a parent descriptor.
"""

from __future__ import annotations

import asyncio
import errno
import logging
from dataclasses import dataclass
from typing import Optional

from .arguments import exec_argv
from .errors import ExecError, ResourceError
from .types import ExecutionContext, StreamEndpoint, endpoint_fd

logger = logging.getLogger(__name__)

# Spawn failures that mean "this program cannot run", as opposed to the
# system being out of processes, memory or descriptors.
_EXEC_ERRNOS = frozenset({
    errno.ENOENT,
    errno.EACCES,
    errno.EPERM,
    errno.ENOTDIR,
    errno.EISDIR,
    errno.ENOEXEC,
    errno.ENAMETOOLONG,
    errno.ELOOP,
    errno.E2BIG,
    errno.ETXTBSY,
})


def _status_from_returncode(returncode: int) -> int:
    """Convey a child's exit status; signal deaths become 128 + signal."""
    if returncode < 0:
        return 128 - returncode
    return returncode


@dataclass(eq=False)
class LaunchedProcess:
    """Handle to a launched stage, reaped exactly once by wait()."""

    command: str
    process: Optional[asyncio.subprocess.Process] = None
    returncode: Optional[int] = None
    reaped: bool = False

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process is not None else None

    async def wait(self) -> int:
        """Block until the child terminates and return its status."""
        if not self.reaped:
            if self.process is not None:
                self.returncode = _status_from_returncode(await self.process.wait())
                logger.debug("reaped %s (pid %d): %d", self.command, self.process.pid, self.returncode)
            self.reaped = True
        if self.returncode is None:
            raise RuntimeError(f"{self.command}: reaped without a status")
        return self.returncode


class ProcessLauncher:
    """Creates child processes for commands."""

    def __init__(self, context: ExecutionContext):
        self._ctx = context

    async def _spawn(
        self,
        argv: list[str],
        stdin: StreamEndpoint,
        stdout: StreamEndpoint,
    ) -> asyncio.subprocess.Process:
        """Create the child process.

        Raises:
            ExecError: If the child was created but its program could not
                replace it, or the argument vector cannot be passed to exec.
            ResourceError: If the OS cannot create the process.
        """
        command = argv[0]
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdin=endpoint_fd(stdin),
                stdout=endpoint_fd(stdout),
                stderr=self._ctx.stderr,
                env=self._ctx.env,
                cwd=self._ctx.cwd,
            )
        except ValueError as e:
            # e.g. an embedded NUL byte; no program can receive this argv
            raise ExecError(command, str(e)) from e
        except OSError as e:
            # Failures reported back from the child carry the program (or
            # cwd) as filename; fork failures never do.
            if e.errno in _EXEC_ERRNOS or e.filename is not None:
                raise ExecError(command, e.strerror or str(e)) from e
            logger.error("cannot create process for %s: %s", command, e)
            raise ResourceError(f"{command}: cannot create process: {e.strerror or e}", command) from e

    async def launch(
        self,
        vector: list[Optional[str]],
        stdin: StreamEndpoint = None,
        stdout: StreamEndpoint = None,
    ) -> LaunchedProcess:
        """Start a child for a materialized argument vector without waiting.

        If the program cannot be executed, a diagnostic is written and the
        returned handle already carries status 1.

        Raises:
            ResourceError: If the OS cannot create the process.
        """
        argv = exec_argv(vector)
        command = argv[0]
        try:
            process = await self._spawn(argv, stdin, stdout)
        except ExecError as error:
            self._ctx.diagnostic(str(error))
            return LaunchedProcess(command, returncode=error.exit_code, reaped=True)

        logger.debug("spawned %s as pid %d", command, process.pid)
        return LaunchedProcess(command, process)

    async def run(
        self,
        vector: list[Optional[str]],
        stdin: StreamEndpoint = None,
        stdout: StreamEndpoint = None,
    ) -> int:
        """Launch a child and wait for it."""
        launched = await self.launch(vector, stdin, stdout)
        return await launched.wait()
