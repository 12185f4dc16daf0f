"""shellexec - execution core of a command-line shell.

Turns a parsed command line (commands, argument chains, pipelines) into OS
processes, wires pipeline stages together and reports the final status.
"""

from .ast import (
    CommandNode,
    PipelineNode,
    ParamNode,
    ParamsNode,
    SyntaxNode,
    new_command,
    new_pipe,
    new_param,
    new_params,
    build_params,
    build_command,
    build_pipeline,
    free_node,
    print_node,
    format_node,
)
from .interpreter import (
    ArgumentCountMismatch,
    ExecError,
    ExecutionContext,
    Interpreter,
    ResourceError,
    ShellCoreError,
    ShellOptions,
    StructuralError,
    count_args,
    materialize_argv,
)
from .shell import Shell, evaluate
from .types import (
    STATUS_INVALID_NODE,
    STATUS_RESOURCE_ERROR,
    STATUS_SUCCESS,
    ExecResult,
    ExecutionLimits,
)

__version__ = "0.1.0"

__all__ = [
    "Shell",
    "evaluate",
    "Interpreter",
    "ExecutionContext",
    "ShellOptions",
    "ExecutionLimits",
    "ExecResult",
    "STATUS_SUCCESS",
    "STATUS_INVALID_NODE",
    "STATUS_RESOURCE_ERROR",
    "CommandNode",
    "PipelineNode",
    "ParamNode",
    "ParamsNode",
    "SyntaxNode",
    "new_command",
    "new_pipe",
    "new_param",
    "new_params",
    "build_params",
    "build_command",
    "build_pipeline",
    "free_node",
    "print_node",
    "format_node",
    "count_args",
    "materialize_argv",
    "ShellCoreError",
    "StructuralError",
    "ResourceError",
    "ExecError",
    "ArgumentCountMismatch",
]
