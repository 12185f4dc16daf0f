"""Argument materialization.

Flattens a command's argument chain into the vector handed to the OS:
``[name, arg1, ..., argN, ARGV_TERMINATOR]``.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..ast.types import CommandNode, ParamsNode, iter_params
from .errors import ArgumentCountMismatch

logger = logging.getLogger(__name__)

ARGV_TERMINATOR = None


def count_args(params: Optional[ParamsNode]) -> int:
    """Count the links of an argument chain. An absent chain has 0."""
    count = 0
    current = params
    while current is not None:
        count += 1
        current = current.second
    return count


def materialize_argv(name: str, params: Optional[ParamsNode]) -> list[Optional[str]]:
    """Build the argument vector for a command.

    The vector has exactly ``count_args(params) + 2`` slots. It borrows
    the strings of the tree, so it must be used before the tree is freed.

    Raises:
        ArgumentCountMismatch: If the chain yields a different number of
            arguments than it was counted to have.
    """
    numparams = count_args(params)
    logger.debug("materializing %s with %d params", name, numparams)

    vector: list[Optional[str]] = [ARGV_TERMINATOR] * (numparams + 2)
    vector[0] = name
    filled = 0
    for arg in iter_params(params):
        filled += 1
        if filled > numparams:
            break
        vector[filled] = arg
    if filled != numparams:
        raise ArgumentCountMismatch(numparams, filled)
    return vector


def materialize_command(node: CommandNode) -> list[Optional[str]]:
    """Build the argument vector for a command node."""
    return materialize_argv(node.name, node.params)


def exec_argv(vector: list[Optional[str]]) -> list[str]:
    """Strip the terminator from a materialized vector.

    Raises:
        ValueError: If the vector is empty, unterminated, or has a hole.
    """
    if len(vector) < 2 or vector[-1] is not ARGV_TERMINATOR:
        raise ValueError("argument vector is not terminated")
    argv = vector[:-1]
    if any(arg is None for arg in argv):
        raise ValueError("argument vector has an empty slot")
    return [arg for arg in argv if arg is not None]
