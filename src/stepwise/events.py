"""Typed feedback events published by the workflow core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


_Params = Mapping[str, Any] | Sequence[Any] | str | None


@dataclass(frozen=True, slots=True)
class RunStarted:
    """Emitted when the driver accepts a user request."""

    request: str


@dataclass(frozen=True, slots=True)
class StepReceived:
    """Emitted after a backend reply parsed into a step."""

    step: str
    content: str
    function: str | None = None


@dataclass(frozen=True, slots=True)
class ToolCallStarted:
    """Emitted before a tool callable is executed."""

    tool_name: str
    parameters: _Params = None
    forced: bool = False


@dataclass(frozen=True, slots=True)
class ToolCallCompleted:
    """Emitted after a tool callable finishes."""

    tool_name: str
    result: Any = None
    duration: float | None = None


@dataclass(frozen=True, slots=True)
class FileMaterialized:
    """Reports the outcome of one file write."""

    filepath: str
    outcome: str
    message: str


@dataclass(frozen=True, slots=True)
class StructureProposed:
    """Carries the structure the approval gate is about to present."""

    structure: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ApprovalResolved:
    """Records the user's answer to a proposed structure."""

    approved: bool
    structure: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    """Describes a high-level status message and associated phase."""

    message: str
    phase: str | None = None


@dataclass(frozen=True, slots=True)
class ExecutionComplete:
    """Summary emitted when a run ends, successfully or not."""

    summary: str
    success: bool
    reason: str | None = None


FeedbackEvent = (
    RunStarted
    | StepReceived
    | ToolCallStarted
    | ToolCallCompleted
    | FileMaterialized
    | StructureProposed
    | ApprovalResolved
    | StatusUpdate
    | ExecutionComplete
)

__all__ = [
    "ApprovalResolved",
    "ExecutionComplete",
    "FeedbackEvent",
    "FileMaterialized",
    "RunStarted",
    "StatusUpdate",
    "StepReceived",
    "StructureProposed",
    "ToolCallCompleted",
    "ToolCallStarted",
]
