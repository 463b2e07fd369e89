"""Typed tool-call contract between backend-declared steps and the registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from stepwise.exceptions import ToolArgumentError


class ToolName(str, Enum):
    """Closed set of tools the backend may declare."""

    READ_DIRECTORY = "read_directory"
    CREATE_DYNAMIC_FILE = "create_dynamic_file"
    GENERATE_PROJECT_STRUCTURE = "generate_project_structure"
    GENERATE_FILE_CONTENT = "generate_file_content"


class ReadDirectoryArgs(BaseModel):
    """Arguments for ``read_directory``; a bare string is the path."""

    path: StrictStr | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_path(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            return {"path": value}
        return value


class FileSpec(BaseModel):
    """A single file to materialize."""

    model_config = ConfigDict(populate_by_name=True)

    file_name: StrictStr = Field(alias="fileName")
    content: StrictStr

    @field_validator("file_name")
    @classmethod
    def _require_file_name(cls, value: str) -> str:
        """File names must not be blank."""
        if not value.strip():
            raise ValueError("fileName is required")
        return value.strip()


class CreateDynamicFileArgs(BaseModel):
    """Arguments for ``create_dynamic_file``: one record or an ordered list."""

    files: list[FileSpec]

    @model_validator(mode="before")
    @classmethod
    def _wrap_records(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"files": value}
        if isinstance(value, dict) and "files" not in value:
            return {"files": [value]}
        return value


class GenerateProjectStructureArgs(BaseModel):
    """Arguments for ``generate_project_structure``."""

    model_config = ConfigDict(populate_by_name=True)

    project_type: StrictStr = Field(alias="projectType")
    description: StrictStr


class GenerateFileContentArgs(BaseModel):
    """Arguments for ``generate_file_content``.

    The update flag and issue are not part of the backend's arguments; the
    driver supplies them from the project context.
    """

    model_config = ConfigDict(populate_by_name=True)

    file_path: StrictStr = Field(alias="filePath")
    project_type: StrictStr = Field(default="", alias="projectType")
    description: StrictStr = ""


ToolArguments = Union[
    ReadDirectoryArgs,
    CreateDynamicFileArgs,
    GenerateProjectStructureArgs,
    GenerateFileContentArgs,
]

TOOL_ARGUMENT_MODELS: dict[ToolName, type[BaseModel]] = {
    ToolName.READ_DIRECTORY: ReadDirectoryArgs,
    ToolName.CREATE_DYNAMIC_FILE: CreateDynamicFileArgs,
    ToolName.GENERATE_PROJECT_STRUCTURE: GenerateProjectStructureArgs,
    ToolName.GENERATE_FILE_CONTENT: GenerateFileContentArgs,
}


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool invocation tagged by tool name with validated arguments."""

    name: ToolName
    arguments: ToolArguments


def is_known_tool(name: str | None) -> bool:
    """Return True when ``name`` is one of the registered tools."""
    return name in {tool.value for tool in ToolName}


def parse_tool_call(name: str, raw_args: Any) -> ToolCall:
    """Validate backend-declared arguments against the tool's contract.

    Raises:
        ToolArgumentError: If the tool is unknown or the arguments do not fit
            its argument model.
    """
    if not is_known_tool(name):
        raise ToolArgumentError("Unknown tool.", context={"tool": name})

    tool = ToolName(name)
    model = TOOL_ARGUMENT_MODELS[tool]
    try:
        arguments = model.model_validate(raw_args)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(loc) for loc in error["loc"]) or "args" for error in exc.errors())
        raise ToolArgumentError(
            "Arguments do not match the tool contract.",
            context={"tool": tool.value, "fields": fields},
        ) from exc
    return ToolCall(name=tool, arguments=arguments)  # type: ignore[arg-type]


__all__ = [
    "CreateDynamicFileArgs",
    "FileSpec",
    "GenerateFileContentArgs",
    "GenerateProjectStructureArgs",
    "ReadDirectoryArgs",
    "TOOL_ARGUMENT_MODELS",
    "ToolArguments",
    "ToolCall",
    "ToolName",
    "is_known_tool",
    "parse_tool_call",
]
