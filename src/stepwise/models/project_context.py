"""Per-run project context tracked by the workflow driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from stepwise.utils.extraction import RequestKind


@dataclass
class ProjectContext:
    """Mutable record of what the current run has learned so far.

    A single instance lives on the driver; it is reset when a run starts and
    again when the run finishes or aborts.
    """

    request: str = ""
    project_type: Optional[str] = None
    project_name: Optional[str] = None
    proposed_structure: list[str] = field(default_factory=list)
    is_update_request: bool = False
    is_execution_request: bool = False
    update_issue: Optional[str] = None
    update_file: Optional[str] = None
    structure_reviewed: bool = False

    def reset(self) -> None:
        """Return every field to its empty default."""
        self.request = ""
        self.project_type = None
        self.project_name = None
        self.proposed_structure = []
        self.is_update_request = False
        self.is_execution_request = False
        self.update_issue = None
        self.update_file = None
        self.structure_reviewed = False

    def apply_classification(self, kind: RequestKind) -> None:
        """Record the request class; exactly one flag holds afterwards."""
        self.is_update_request = kind is RequestKind.UPDATE
        self.is_execution_request = kind is RequestKind.EXECUTION
        self.update_issue = self.request if self.is_update_request else None

    def propose_structure(self, structure: list[str]) -> None:
        """Store a proposed structure; a different one needs a fresh review."""
        if structure != self.proposed_structure:
            self.structure_reviewed = False
        self.proposed_structure = list(structure)

    @property
    def kind(self) -> RequestKind:
        """Return the current request classification."""
        if self.is_update_request:
            return RequestKind.UPDATE
        if self.is_execution_request:
            return RequestKind.EXECUTION
        return RequestKind.NEW_PROJECT

    @property
    def needs_structure_approval(self) -> bool:
        """Return True when a new-project structure awaits its single review."""
        return (
            bool(self.proposed_structure)
            and self.kind is RequestKind.NEW_PROJECT
            and not self.structure_reviewed
        )


__all__ = ["ProjectContext"]
