"""AST node types for shellexec.

The parser reduces a command line bottom-up into four node variants:

- CommandNode: a command name plus an optional argument chain
- PipelineNode: a left-hand stage plus an optional continuation
- ParamNode: a single argument string
- ParamsNode: one link of the right-extending argument chain

Every node carries a ``type`` tag that the interpreter dispatches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal, Optional, Union


@dataclass(eq=False)
class ParamNode:
    """A single argument string."""

    value: str
    type: Literal["Param"] = "Param"
    released: bool = False


@dataclass(eq=False)
class ParamsNode:
    """One link of an argument chain.

    ``first`` is always a ParamNode; ``second`` is the rest of the chain
    or None at the end.
    """

    first: Optional[ParamNode]
    second: Optional[ParamsNode] = None
    type: Literal["Params"] = "Params"
    released: bool = False


@dataclass(eq=False)
class CommandNode:
    """A command name with its (possibly absent) argument chain."""

    name: str
    params: Optional[ParamsNode] = None
    type: Literal["Command"] = "Command"
    released: bool = False


@dataclass(eq=False)
class PipelineNode:
    """A pipeline stage and the rest of the pipeline.

    ``command`` is never None. ``pipe`` is None on the final stage.
    """

    command: Optional[SyntaxNode]
    pipe: Optional[SyntaxNode] = None
    type: Literal["Pipeline"] = "Pipeline"
    released: bool = False


SyntaxNode = Union[CommandNode, PipelineNode, ParamNode, ParamsNode]

NODE_TYPES = ("Command", "Pipeline", "Param", "Params")


def new_command(command: str, childparams: Optional[ParamsNode] = None) -> CommandNode:
    """Create a command node owning its name and argument chain."""
    return CommandNode(name=command, params=childparams)


def new_pipe(command: SyntaxNode, pipe: Optional[SyntaxNode] = None) -> PipelineNode:
    """Create a pipeline node owning its stage and continuation."""
    if command is None:
        raise ValueError("pipeline stage cannot be empty")
    return PipelineNode(command=command, pipe=pipe)


def new_param(param: str) -> ParamNode:
    """Create an argument node."""
    return ParamNode(value=param)


def new_params(first: ParamNode, second: Optional[ParamsNode] = None) -> ParamsNode:
    """Create an argument chain link."""
    return ParamsNode(first=first, second=second)


def build_params(args: Iterable[str]) -> Optional[ParamsNode]:
    """Build an argument chain from a sequence of strings.

    Returns None for an empty sequence, meaning "no arguments".
    """
    head: Optional[ParamsNode] = None
    for arg in reversed(list(args)):
        head = new_params(new_param(arg), head)
    return head


def build_command(name: str, args: Iterable[str] = ()) -> CommandNode:
    """Build a command node from a name and argument strings."""
    return new_command(name, build_params(args))


def build_pipeline(stages: Iterable[SyntaxNode]) -> PipelineNode:
    """Build a right-chained pipeline from an ordered list of stages.

    A single stage yields a degenerate one-stage pipeline.
    """
    stage_list = list(stages)
    if not stage_list:
        raise ValueError("pipeline needs at least one stage")
    node = new_pipe(stage_list[-1])
    for stage in reversed(stage_list[:-1]):
        node = new_pipe(stage, node)
    return node


def iter_params(params: Optional[ParamsNode]) -> Iterator[str]:
    """Yield the argument strings of a chain in the order they were built."""
    current = params
    while current is not None:
        if current.first is not None:
            yield current.first.value
        current = current.second
