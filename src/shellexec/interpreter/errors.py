"""Interpreter errors.

StructuralError and ArgumentCountMismatch mean the tree or the core itself
is broken. ResourceError and ExecError are operational failures that the
interpreter reports and turns into a status.
"""

from __future__ import annotations

from typing import Optional


class ShellCoreError(Exception):
    """Base class for all shellexec errors."""


class StructuralError(ShellCoreError):
    """A syntax node has an unknown tag or was used after release."""

    def __init__(self, message: str, node_type: Optional[str] = None):
        super().__init__(message)
        self.node_type = node_type


class ResourceError(ShellCoreError):
    """The OS refused to create a process or a channel."""

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class ExecError(ShellCoreError):
    """The named program could not be executed.

    Raised by the launcher when the child cannot take on its program image;
    the launcher reports it and turns the stage into one with status 1.
    """

    exit_code = 1

    def __init__(self, command: str, reason: str):
        super().__init__(f"{command}: cannot execute: {reason}")
        self.command = command
        self.reason = reason


class ArgumentCountMismatch(ShellCoreError):
    """The argument count and fill passes disagree."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"argument vector sized for {expected} arguments but chain yielded {actual}"
        )
        self.expected = expected
        self.actual = actual
