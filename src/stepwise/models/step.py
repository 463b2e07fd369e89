"""Step records emitted by the backend and the parser that validates them."""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from stepwise.exceptions import StepParseError

_FENCE_EDGES = re.compile(r"^```json\s*|\s*```$", re.MULTILINE)
_FENCE_LINES = re.compile(r"^```.*$", re.MULTILINE)
_LINE_BREAKS = re.compile(r"\n\s*")


class StepName(str, Enum):
    """The five workflow phases, in protocol order."""

    INITIALIZATION = "initialization"
    ANALYZE = "analyze"
    GENERATE_STRUCTURE = "generate_structure"
    GENERATE_FILES = "generate_files"
    FINAL_RESULT = "final_result"


class StepRecord(BaseModel):
    """One validated backend reply."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    step: StepName
    content: StrictStr
    function: StrictStr | None = None
    args: Any = None

    @property
    def is_terminal(self) -> bool:
        """Return True for the step that ends a run."""
        return self.step is StepName.FINAL_RESULT

    def to_json(self) -> str:
        """Serialize the record the way it is archived in the conversation."""
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)


def clean_reply(raw_text: str) -> str:
    """Strip fence markers and collapse line breaks around a JSON payload."""
    cleaned = _FENCE_EDGES.sub("", raw_text or "")
    cleaned = _FENCE_LINES.sub("", cleaned)
    cleaned = _LINE_BREAKS.sub("", cleaned)
    return cleaned.strip()


def parse_step_reply(raw_text: str) -> StepRecord:
    """Parse raw backend text into a StepRecord.

    Raises:
        StepParseError: If the text is not a single JSON object with a valid
            ``step`` and a string ``content``.
    """
    cleaned = clean_reply(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise StepParseError(
            "Backend reply is not valid JSON.",
            context={"error": exc.msg, "preview": cleaned[:80]},
        ) from exc

    if not isinstance(payload, dict):
        raise StepParseError(
            "Backend reply must be a JSON object.",
            context={"type": type(payload).__name__},
        )

    try:
        return StepRecord.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(loc) for loc in error["loc"]) for error in exc.errors())
        raise StepParseError(
            "Backend reply does not match the step protocol.",
            context={"fields": fields, "step": payload.get("step")},
        ) from exc


class StructureProposal(BaseModel):
    """Result payload of the structure-generation tool."""

    structure: list[str] = Field(default_factory=list)


def parse_structure_result(raw_text: str) -> list[str]:
    """Strictly parse a structure-generation result into its path list.

    Raises:
        StepParseError: If the payload is not a JSON object with an optional
            list-of-strings ``structure`` field.
    """
    try:
        proposal = StructureProposal.model_validate_json(raw_text or "")
    except ValidationError as exc:
        raise StepParseError(
            "Structure result is not a valid structure object.",
            context={"preview": (raw_text or "")[:80]},
        ) from exc
    return list(proposal.structure)


__all__ = [
    "StepName",
    "StepRecord",
    "StructureProposal",
    "clean_reply",
    "parse_step_reply",
    "parse_structure_result",
]
