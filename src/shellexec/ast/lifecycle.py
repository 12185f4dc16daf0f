"""Teardown and debug printing for syntax trees.

Both walk the tree with the same dispatch on ``node.type``. An unknown tag
during teardown means the tree is corrupt, so it raises; the printer only
reports it.
"""

from __future__ import annotations

import io
import sys
from typing import Optional, TextIO

from ..interpreter.errors import StructuralError
from .types import SyntaxNode


def free_node(node: Optional[SyntaxNode]) -> None:
    """Release a node and everything it owns.

    Children are detached as they are released, so no node stays reachable
    through a released parent. Releasing the same node twice raises
    StructuralError.
    """
    if node is None:
        return
    if getattr(node, "released", False):
        raise StructuralError(f"node {node.type} released twice", node.type)

    node_type = getattr(node, "type", None)
    if node_type == "Command":
        free_node(node.params)
        node.params = None
    elif node_type == "Pipeline":
        free_node(node.command)
        free_node(node.pipe)
        node.command = None
        node.pipe = None
    elif node_type == "Params":
        free_node(node.first)
        free_node(node.second)
        node.first = None
        node.second = None
    elif node_type == "Param":
        pass
    else:
        raise StructuralError(f"free_node: invalid node type {node_type!r}", node_type)
    node.released = True


def print_node(node: Optional[SyntaxNode], out: Optional[TextIO] = None) -> int:
    """Print a tree for debugging.

    Returns 0 on success and -1 if an unknown node type was met.
    """
    if out is None:
        out = sys.stdout
    if node is None:
        return 0

    node_type = getattr(node, "type", None)
    if node_type == "Command":
        out.write(f"{node.name} \n")
        if print_node(node.params, out) < 0:
            return -1
    elif node_type == "Pipeline":
        if print_node(node.command, out) < 0:
            return -1
        if node.pipe is not None:
            out.write(" | \n")
            if print_node(node.pipe, out) < 0:
                return -1
    elif node_type == "Param":
        out.write(f"{node.value} \n")
    elif node_type == "Params":
        if print_node(node.first, out) < 0:
            return -1
        if print_node(node.second, out) < 0:
            return -1
    else:
        sys.stderr.write(f"shellexec: cannot print node of invalid type {node_type!r}\n")
        return -1
    return 0


def format_node(node: Optional[SyntaxNode]) -> str:
    """Return what print_node would print."""
    buf = io.StringIO()
    print_node(node, buf)
    return buf.getvalue()
