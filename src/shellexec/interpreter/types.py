"""Interpreter types for shellexec."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, Union

from ..types import ExecutionLimits
from .errors import ResourceError


@dataclass(eq=False)
class ChannelEnd:
    """One end of a channel, held by the parent until handed to a stage."""

    fd: int
    """OS file descriptor for this end."""

    mode: Literal["r", "w"]
    """'r' for the read end, 'w' for the write end."""

    closed: bool = False
    """Whether the parent's copy has been closed."""

    def close(self) -> None:
        """Close the parent's copy. Closing twice is a no-op."""
        if not self.closed:
            self.closed = True
            os.close(self.fd)


@dataclass(eq=False)
class Channel:
    """A unidirectional byte stream between two pipeline stages."""

    read_end: ChannelEnd
    write_end: ChannelEnd

    @classmethod
    def open(cls) -> Channel:
        """Allocate a new OS pipe."""
        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise ResourceError(f"cannot create channel: {e.strerror or e}") from e
        return cls(ChannelEnd(read_fd, "r"), ChannelEnd(write_fd, "w"))

    @property
    def closed(self) -> bool:
        return self.read_end.closed and self.write_end.closed

    def close(self) -> None:
        self.read_end.close()
        self.write_end.close()


StreamEndpoint = Union[None, int, ChannelEnd]
"""Where a stage's stream goes.

None inherits the parent's stream, an int is a descriptor owned by the
caller, and a ChannelEnd is a channel end owned by the pipeline evaluator.
"""


def endpoint_fd(endpoint: StreamEndpoint) -> Optional[int]:
    """Return the descriptor to hand to the child, or None to inherit."""
    if endpoint is None:
        return None
    if isinstance(endpoint, ChannelEnd):
        if endpoint.closed:
            raise ValueError(f"channel end {endpoint.fd} already closed")
        return endpoint.fd
    return endpoint


Builtin = Callable[[list[str]], int]
"""An in-process command: receives the full argv and returns a status."""


@dataclass
class ShellOptions:
    """Shell options (set -o ...)."""

    pipefail: bool = False
    """set -o pipefail: Return exit status of last failing command in pipeline."""


@dataclass
class ExecutionContext:
    """Everything an evaluation needs from the surrounding shell.

    Passed explicitly so the core holds no process-wide state.
    """

    env: Optional[dict[str, str]] = None
    """Child environment. None inherits the shell's environment."""

    cwd: Optional[str] = None
    """Child working directory. None inherits the shell's."""

    stdin: StreamEndpoint = None
    """Input of the first stage."""

    stdout: StreamEndpoint = None
    """Output of the last stage."""

    stderr: Optional[int] = None
    """Error stream of every stage and of shell diagnostics."""

    builtins: dict[str, Builtin] = field(default_factory=dict)
    """Commands intercepted before process creation."""

    options: ShellOptions = field(default_factory=ShellOptions)
    """Shell options."""

    limits: ExecutionLimits = field(default_factory=ExecutionLimits)
    """Execution limits."""

    def diagnostic(self, message: str) -> None:
        """Write a one-line diagnostic to the shell's error stream."""
        fd = self.stderr if self.stderr is not None else 2
        os.write(fd, f"shellexec: {message}\n".encode())
