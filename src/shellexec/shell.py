"""Main Shell class - the API the read-loop calls.

Example usage:
    from shellexec import Shell, build_command, build_pipeline, free_node

    shell = Shell()
    root = build_pipeline([build_command("ls"), build_command("wc", ["-l"])])
    status = shell.run(root).exit_code
    free_node(root)

    # Async usage (for async applications)
    result = await shell.exec(root)
"""

from __future__ import annotations

import asyncio
from typing import Optional

import nest_asyncio  # type: ignore[import-untyped]

from .ast.types import SyntaxNode
from .interpreter import Builtin, ExecutionContext, Interpreter, ShellOptions, StreamEndpoint
from .types import ExecResult, ExecutionLimits


class Shell:
    """Evaluates parsed command lines as OS processes."""

    def __init__(
        self,
        *,
        env: Optional[dict[str, str]] = None,
        cwd: Optional[str] = None,
        stdin: StreamEndpoint = None,
        stdout: StreamEndpoint = None,
        stderr: Optional[int] = None,
        builtins: Optional[dict[str, Builtin]] = None,
        limits: Optional[ExecutionLimits] = None,
        pipefail: bool = False,
        context: Optional[ExecutionContext] = None,
    ):
        """Initialize the shell.

        Args:
            context: A ready-made execution context. When given, the other
                keyword arguments are ignored.
            env: Environment for child processes. Inherits the current one if not provided.
            cwd: Working directory for child processes.
            stdin: Input endpoint of the first stage (inherited if not provided).
            stdout: Output endpoint of the last stage (inherited if not provided).
            stderr: Error descriptor for children and diagnostics.
            builtins: Commands run in-process instead of being spawned.
            limits: Execution limits.
            pipefail: Enable pipefail mode.
        """
        self._context = context or ExecutionContext(
            env=env,
            cwd=cwd,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            builtins=dict(builtins or {}),
            options=ShellOptions(pipefail=pipefail),
            limits=limits or ExecutionLimits(),
        )
        self._interpreter = Interpreter(self._context)
        self.last_exit_code = 0

    @property
    def context(self) -> ExecutionContext:
        """Get the execution context."""
        return self._context

    async def exec(self, root: Optional[SyntaxNode]) -> ExecResult:
        """Evaluate one parsed command line.

        The tree is left intact; the caller frees it afterwards.
        """
        result = await self._interpreter.execute_node(root)
        self.last_exit_code = result.exit_code
        return result

    def run(self, root: Optional[SyntaxNode]) -> ExecResult:
        """Evaluate one parsed command line synchronously.

        This is a convenience wrapper around exec() that also works inside
        an already running event loop.
        """
        try:
            asyncio.get_running_loop()
            # Already inside an event loop (Jupyter, async framework, etc.)
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(self.exec(root))


def evaluate(root: Optional[SyntaxNode], context: Optional[ExecutionContext] = None) -> int:
    """Evaluate a parsed command line and return its status.

    0 means the final stage succeeded, a positive value is the final
    stage's exit status, and a negative value is a reserved internal error
    (see shellexec.types).
    """
    return Shell(context=context).run(root).exit_code
