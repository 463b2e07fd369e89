"""Project-root scoped registry of the tools the backend may declare."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import Any

from stepwise.config import EXECUTION_GUIDE_FILENAME
from stepwise.event_bus import EventBus, get_event_bus
from stepwise.events import FileMaterialized, ToolCallCompleted, ToolCallStarted
from stepwise.exceptions import StepParseError
from stepwise.models.project_context import ProjectContext
from stepwise.models.step import clean_reply, parse_structure_result
from stepwise.models.tool_call import (
    CreateDynamicFileArgs,
    FileSpec,
    GenerateFileContentArgs,
    GenerateProjectStructureArgs,
    ReadDirectoryArgs,
    ToolCall,
    ToolName,
)
from stepwise.prompts import build_file_content_prompt, build_structure_prompt, render_execution_guide
from stepwise.services.gemini_backend import Backend
from stepwise.tools.file_operations import materialize_file
from stepwise.tools.file_system_tools import read_directory
from stepwise.utils.paths import confine_path, ensure_root

LOGGER = logging.getLogger(__name__)

EMPTY_STRUCTURE = "{}"

TOOL_DESCRIPTIONS: dict[ToolName, str] = {
    ToolName.READ_DIRECTORY: "Reads the contents of a directory and returns files and subdirectories",
    ToolName.CREATE_DYNAMIC_FILE: "Creates or updates a file with the specified name and content",
    ToolName.GENERATE_PROJECT_STRUCTURE: "Generates the folder and file structure for a project",
    ToolName.GENERATE_FILE_CONTENT: (
        "Generates content for a file based on its path, project type, and description"
    ),
}


class ToolManager:
    """Run registry tools against a single project root."""

    def __init__(
        self,
        project_root: str | Path,
        backend: Backend,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self.project_root = ensure_root(Path(project_root).expanduser())
        self.root_name = self.project_root.name
        self._backend = backend
        self._event_bus = event_bus or get_event_bus()

    @staticmethod
    def describe_tools() -> dict[str, str]:
        """Return tool names mapped to their descriptions."""
        return {tool.value: description for tool, description in TOOL_DESCRIPTIONS.items()}

    def dispatch(self, call: ToolCall, context: ProjectContext, *, forced: bool = False) -> Any:
        """Route a validated call to its tool.

        Each branch reshapes the call's arguments into that tool's parameter
        order; ``generate_file_content`` also takes the update flag, issue and
        project name from ``context``.
        """
        arguments = call.arguments
        self._event_bus.emit(
            ToolCallStarted(
                tool_name=call.name.value,
                parameters=arguments.model_dump(by_alias=True),
                forced=forced,
            )
        )
        started = time.perf_counter()

        if call.name is ToolName.READ_DIRECTORY:
            assert isinstance(arguments, ReadDirectoryArgs)
            result: Any = self.read_directory(arguments.path)
        elif call.name is ToolName.CREATE_DYNAMIC_FILE:
            assert isinstance(arguments, CreateDynamicFileArgs)
            result = self.create_dynamic_file(arguments.files)
        elif call.name is ToolName.GENERATE_PROJECT_STRUCTURE:
            assert isinstance(arguments, GenerateProjectStructureArgs)
            result = self.generate_project_structure(arguments.project_type, arguments.description)
        elif call.name is ToolName.GENERATE_FILE_CONTENT:
            assert isinstance(arguments, GenerateFileContentArgs)
            result = self.generate_file_content(
                arguments.file_path,
                arguments.project_type,
                arguments.description,
                context.is_update_request,
                context.update_issue,
                project_name=context.project_name,
            )
        else:  # pragma: no cover - ToolName is a closed enum
            raise ValueError(f"Unhandled tool: {call.name}")

        self._event_bus.emit(
            ToolCallCompleted(
                tool_name=call.name.value,
                result=result,
                duration=time.perf_counter() - started,
            )
        )
        return result

    def read_directory(self, path: str | None = None) -> dict[str, Any]:
        """List a directory under the project root (default: the root)."""
        return read_directory(self.project_root, path)

    def create_dynamic_file(self, files: Sequence[FileSpec]) -> str:
        """Materialize each file in order and join the outcome messages."""
        LOGGER.info("TOOL CALLED: create_dynamic_file(%d file(s))", len(files))
        messages: list[str] = []
        failures = 0
        for spec in files:
            outcome = materialize_file(self.project_root, spec.file_name, spec.content)
            self._event_bus.emit(
                FileMaterialized(
                    filepath=self._display_path(spec.file_name),
                    outcome=outcome.outcome.value,
                    message=outcome.message,
                )
            )
            messages.append(outcome.message)
            if not outcome.succeeded:
                failures += 1
        if failures:
            LOGGER.warning("create_dynamic_file: %d of %d file(s) failed", failures, len(files))
        return "\n".join(messages)

    def generate_project_structure(self, project_type: str, description: str) -> str:
        """Ask the backend for a project structure.

        Returns:
            JSON text of the form ``{"structure": [...]}``, or ``"{}"`` when the
            backend is unreachable or its reply is not a structure object
        """
        LOGGER.info("TOOL CALLED: generate_project_structure(%s)", project_type)
        prompt = build_structure_prompt(self.root_name, project_type, description)
        raw = self._backend.generate_text(prompt)
        if raw is None:
            return EMPTY_STRUCTURE

        try:
            structure = parse_structure_result(clean_reply(raw))
        except StepParseError as exc:
            LOGGER.warning("Discarding unusable structure reply: %s", exc)
            return EMPTY_STRUCTURE
        return json.dumps({"structure": structure})

    def generate_file_content(
        self,
        file_path: str,
        project_type: str,
        description: str,
        is_update: bool = False,
        update_issue: str | None = None,
        *,
        project_name: str | None = None,
    ) -> str:
        """Produce content for one file.

        The execution guide is rendered locally; every other file is
        generated by the backend. Failures yield a placeholder comment.
        """
        LOGGER.info("TOOL CALLED: generate_file_content(%s, update=%s)", file_path, is_update)
        display_path = self._display_path(file_path)
        pure = PurePosixPath(file_path.replace("\\", "/"))
        file_type = pure.suffix[1:] or pure.name

        if file_type == "md" and display_path.endswith(EXECUTION_GUIDE_FILENAME):
            return render_execution_guide(project_type, project_name, self.root_name)

        prompt = build_file_content_prompt(
            display_path,
            file_type,
            project_type,
            description,
            is_update=is_update,
            update_issue=update_issue,
        )
        text = self._backend.generate_text(prompt)
        if text is None:
            return f"// Error generating content for {display_path}"
        return text or f"// Default {file_type} content"

    def _display_path(self, file_path: str) -> str:
        """Return the confined path as ``<root name>/<relative path>``."""
        confined = confine_path(file_path, self.project_root)
        relative = confined.relative_to(self.project_root)
        return PurePosixPath(self.root_name, *relative.parts).as_posix()


__all__ = ["TOOL_DESCRIPTIONS", "ToolManager"]
