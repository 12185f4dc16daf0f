"""Public types for shellexec."""

from __future__ import annotations

from dataclasses import dataclass, field

STATUS_SUCCESS = 0
"""The final pipeline stage exited successfully."""

STATUS_INVALID_NODE = -1
"""The root node was not a Command or a Pipeline."""

STATUS_RESOURCE_ERROR = -2
"""A process or channel could not be created; the evaluation was aborted."""

RESERVED_STATUSES = frozenset({STATUS_INVALID_NODE, STATUS_RESOURCE_ERROR})


@dataclass
class ExecutionLimits:
    """Execution limits."""

    max_pipeline_stages: int = 256
    """Maximum number of stages (and so processes) in one pipeline."""


@dataclass
class ExecResult:
    """Result of evaluating one syntax tree."""

    exit_code: int
    """Overall status handed back to the read-loop."""

    pipestatus: list[int] = field(default_factory=list)
    """Status of every stage, in pipeline order."""

    @property
    def ok(self) -> bool:
        return self.exit_code == STATUS_SUCCESS
