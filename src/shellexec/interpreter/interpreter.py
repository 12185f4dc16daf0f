"""Interpreter - AST Execution Engine.

Entry point for evaluating one parsed command line. Delegates to:
- Argument materialization (arguments.py)
- Process creation (launcher.py)
- Pipelines (pipeline.py)

The interpreter only reads the tree; freeing it is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..ast.types import CommandNode, PipelineNode, SyntaxNode
from ..types import STATUS_INVALID_NODE, STATUS_RESOURCE_ERROR, ExecResult
from .arguments import exec_argv, materialize_command
from .errors import ResourceError, StructuralError
from .launcher import ProcessLauncher
from .pipeline import execute_pipeline
from .types import ExecutionContext

logger = logging.getLogger(__name__)


class Interpreter:
    """AST interpreter for parsed command lines."""

    def __init__(self, context: Optional[ExecutionContext] = None):
        """Initialize the interpreter.

        Args:
            context: Streams, environment, builtins and options for every
                evaluation (inherit-everything defaults if not provided)
        """
        self._ctx = context or ExecutionContext()
        self._launcher = ProcessLauncher(self._ctx)

    @property
    def context(self) -> ExecutionContext:
        """Get the execution context."""
        return self._ctx

    async def execute_node(self, node: Optional[SyntaxNode]) -> ExecResult:
        """Execute the root node of a command line.

        Structural and resource failures are reported on stderr and turned
        into reserved negative statuses; the shell keeps running.
        """
        if node is None:
            return ExecResult(exit_code=0)

        try:
            node_type = getattr(node, "type", None)
            if node_type == "Command":
                return await self.execute_command(node)
            elif node_type == "Pipeline":
                return await self.execute_pipeline(node)
            raise StructuralError(f"cannot evaluate node of type {node_type!r}", node_type)
        except StructuralError as error:
            self._ctx.diagnostic(str(error))
            return ExecResult(exit_code=STATUS_INVALID_NODE)
        except ResourceError as error:
            self._ctx.diagnostic(str(error))
            return ExecResult(exit_code=STATUS_RESOURCE_ERROR)

    async def execute_command(self, node: CommandNode) -> ExecResult:
        """Execute a single command and wait for it."""
        logger.debug("evaluating command %s", node.name)
        vector = materialize_command(node)

        builtin = self._ctx.builtins.get(node.name)
        if builtin is not None:
            exit_code = builtin(exec_argv(vector))
        else:
            exit_code = await self._launcher.run(vector, self._ctx.stdin, self._ctx.stdout)
        return ExecResult(exit_code=exit_code, pipestatus=[exit_code])

    async def execute_pipeline(self, node: PipelineNode) -> ExecResult:
        """Execute a pipeline AST node."""
        return await execute_pipeline(self._ctx, node, self._launcher)
