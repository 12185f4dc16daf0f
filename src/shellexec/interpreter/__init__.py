"""Interpreter module for shellexec."""

from .errors import (
    ShellCoreError,
    StructuralError,
    ResourceError,
    ExecError,
    ArgumentCountMismatch,
)
from .types import (
    Channel,
    ChannelEnd,
    StreamEndpoint,
    Builtin,
    ShellOptions,
    ExecutionContext,
)
from .arguments import ARGV_TERMINATOR, count_args, materialize_argv, materialize_command, exec_argv
from .launcher import LaunchedProcess, ProcessLauncher
from .pipeline import flatten_pipeline, execute_pipeline
from .interpreter import Interpreter

__all__ = [
    # Errors
    "ShellCoreError",
    "StructuralError",
    "ResourceError",
    "ExecError",
    "ArgumentCountMismatch",
    # Types
    "Channel",
    "ChannelEnd",
    "StreamEndpoint",
    "Builtin",
    "ShellOptions",
    "ExecutionContext",
    # Arguments
    "ARGV_TERMINATOR",
    "count_args",
    "materialize_argv",
    "materialize_command",
    "exec_argv",
    # Processes
    "LaunchedProcess",
    "ProcessLauncher",
    "flatten_pipeline",
    "execute_pipeline",
    "Interpreter",
]
