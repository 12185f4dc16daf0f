"""Pipeline execution.

Launches every stage of a pipeline before waiting on any of them, so the
stages run concurrently and talk only through their channels.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..ast.types import CommandNode, PipelineNode, SyntaxNode
from ..types import ExecResult
from .arguments import materialize_command
from .errors import ResourceError, StructuralError
from .launcher import LaunchedProcess, ProcessLauncher
from .types import Channel, ExecutionContext

logger = logging.getLogger(__name__)


def _flatten_stage(node: Optional[SyntaxNode]) -> list[CommandNode]:
    node_type = getattr(node, "type", None)
    if node_type == "Command":
        return [node]
    if node_type == "Pipeline":
        return flatten_pipeline(node)
    raise StructuralError(f"invalid pipeline stage of type {node_type!r}", node_type)


def flatten_pipeline(node: PipelineNode) -> list[CommandNode]:
    """Collect the stages of a pipeline in left-to-right order.

    Nested pipelines on either side are spliced into one linear list.

    Raises:
        StructuralError: If a stage is missing or is not a command.
    """
    stages: list[CommandNode] = []
    current: Optional[SyntaxNode] = node
    while current is not None:
        if getattr(current, "type", None) != "Pipeline":
            stages.extend(_flatten_stage(current))
            break
        stages.extend(_flatten_stage(current.command))
        current = current.pipe
    return stages


def _open_channels(count: int) -> list[Channel]:
    channels: list[Channel] = []
    try:
        for _ in range(count):
            channels.append(Channel.open())
    except ResourceError:
        for channel in channels:
            channel.close()
        raise
    logger.debug("opened %d channels", count)
    return channels


async def _reap(launched: list[LaunchedProcess]) -> list[int]:
    return [await stage.wait() for stage in launched]


async def execute_pipeline(
    ctx: ExecutionContext,
    node: PipelineNode,
    launcher: Optional[ProcessLauncher] = None,
) -> ExecResult:
    """Execute a pipeline AST node.

    Raises:
        StructuralError: If the pipeline contains a non-command stage.
        ResourceError: If a channel or process cannot be created. Stages
            already launched are reaped before this propagates.
    """
    launcher = launcher or ProcessLauncher(ctx)
    stages = flatten_pipeline(node)
    logger.debug("evaluating pipeline of %d stages", len(stages))

    if len(stages) > ctx.limits.max_pipeline_stages:
        raise ResourceError(
            f"pipeline too long ({len(stages)} stages, limit {ctx.limits.max_pipeline_stages})"
        )

    vectors = [materialize_command(stage) for stage in stages]
    last = len(vectors) - 1
    channels = _open_channels(last)
    launched: list[LaunchedProcess] = []

    try:
        for i, vector in enumerate(vectors):
            stdin = channels[i - 1].read_end if i > 0 else ctx.stdin
            stdout = channels[i].write_end if i < last else ctx.stdout
            try:
                launched.append(await launcher.launch(vector, stdin, stdout))
            finally:
                # The stage now owns these ends; drop the parent's copies.
                if i > 0:
                    channels[i - 1].read_end.close()
                if i < last:
                    channels[i].write_end.close()
    except Exception:
        for channel in channels:
            channel.close()
        await _reap(launched)
        raise

    pipestatus = await _reap(launched)

    for i, status in enumerate(pipestatus[:-1]):
        if status != 0:
            logger.warning("pipeline stage %d (%s) exited with status %d", i, stages[i].name, status)

    exit_code = pipestatus[-1]
    if ctx.options.pipefail:
        failed = [status for status in pipestatus if status != 0]
        if failed:
            exit_code = failed[-1]

    return ExecResult(exit_code=exit_code, pipestatus=pipestatus)
