"""Syntax tree module for shellexec."""

from .types import (
    CommandNode,
    PipelineNode,
    ParamNode,
    ParamsNode,
    SyntaxNode,
    NODE_TYPES,
    new_command,
    new_pipe,
    new_param,
    new_params,
    build_params,
    build_command,
    build_pipeline,
    iter_params,
)
from .lifecycle import free_node, print_node, format_node

__all__ = [
    # Nodes
    "CommandNode",
    "PipelineNode",
    "ParamNode",
    "ParamsNode",
    "SyntaxNode",
    "NODE_TYPES",
    # Construction
    "new_command",
    "new_pipe",
    "new_param",
    "new_params",
    "build_params",
    "build_command",
    "build_pipeline",
    "iter_params",
    # Lifecycle
    "free_node",
    "print_node",
    "format_node",
]
