"""Stepwise-specific exception hierarchy with structured context support."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, MutableMapping


@dataclass(slots=True)
class StepwiseError(Exception):
    """Base class for all Stepwise exceptions with optional context metadata."""

    message: str
    context: MutableMapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize context mapping."""
        if not isinstance(self.context, Mapping):
            self.context = {"detail": str(self.context)}
        else:
            self.context = dict(self.context)
        Exception.__init__(self, self.__str__())

    def __str__(self) -> str:
        """Include context metadata in the string representation."""
        if self.context:
            context_parts = ", ".join(f"{key}={value}" for key, value in self.context.items())
            return f"{self.message} ({context_parts})"
        return self.message


class StepwiseConfigurationError(StepwiseError):
    """Raised when Stepwise configuration or environment is invalid."""


class StepwiseValidationError(StepwiseError):
    """Raised when backend or user inputs fail validation."""


class StepParseError(StepwiseValidationError):
    """Raised when a backend reply does not conform to the step protocol."""


class StepwiseToolError(StepwiseError):
    """Raised when a tool invocation cannot be performed."""


class ToolArgumentError(StepwiseToolError):
    """Raised when backend-declared arguments do not match a tool's contract."""


__all__ = [
    "StepwiseError",
    "StepwiseConfigurationError",
    "StepwiseValidationError",
    "StepParseError",
    "StepwiseToolError",
    "ToolArgumentError",
]
