"""Tests for the ToolManager registry."""

from __future__ import annotations

import json
from pathlib import Path

from helpers import EventRecorder, ScriptedBackend

from stepwise.events import FileMaterialized, ToolCallCompleted, ToolCallStarted
from stepwise.models import ProjectContext, parse_tool_call
from stepwise.tools.tool_manager import TOOL_DESCRIPTIONS, ToolManager


def test_tool_manager_creates_root_and_exposes_name(project_root: Path, tool_manager: ToolManager) -> None:
    assert project_root.is_dir()
    assert tool_manager.root_name == "projects"


def test_describe_tools_lists_every_registered_tool() -> None:
    described = ToolManager.describe_tools()

    assert set(described) == {
        "read_directory",
        "create_dynamic_file",
        "generate_project_structure",
        "generate_file_content",
    }
    assert len(described) == len(TOOL_DESCRIPTIONS)


def test_dispatch_emits_started_and_completed(tool_manager: ToolManager, recorder: EventRecorder) -> None:
    call = parse_tool_call("read_directory", "projects")

    result = tool_manager.dispatch(call, ProjectContext())

    started = recorder.of_type(ToolCallStarted)
    completed = recorder.of_type(ToolCallCompleted)
    assert [event.tool_name for event in started] == ["read_directory"]
    assert started[0].parameters == {"path": "projects"}
    assert started[0].forced is False
    assert completed[0].result is result
    assert completed[0].duration >= 0


def test_create_dynamic_file_batch_is_sequential(
    project_root: Path, tool_manager: ToolManager, recorder: EventRecorder
) -> None:
    call = parse_tool_call(
        "create_dynamic_file",
        [
            {"fileName": "todo-app/index.html", "content": "<html></html>"},
            {"fileName": "projects/todo-app/style.css", "content": "body {}"},
        ],
    )

    result = tool_manager.dispatch(call, ProjectContext())

    assert (project_root / "todo-app" / "index.html").read_text(encoding="utf-8") == "<html></html>"
    assert (project_root / "todo-app" / "style.css").read_text(encoding="utf-8") == "body {}"
    assert len(result.splitlines()) == 2
    assert [event.filepath for event in recorder.of_type(FileMaterialized)] == [
        "projects/todo-app/index.html",
        "projects/todo-app/style.css",
    ]
    assert [event.outcome for event in recorder.of_type(FileMaterialized)] == ["created", "created"]


def test_generate_project_structure_returns_structure_json(
    tool_manager: ToolManager, backend: ScriptedBackend
) -> None:
    backend.queue_text('```json\n{"structure": ["projects/todo-app/index.html",\n "projects/todo-app/execute.md"]}\n```')

    result = tool_manager.generate_project_structure("HTML web app", "creates a to-do list")

    assert json.loads(result) == {
        "structure": ["projects/todo-app/index.html", "projects/todo-app/execute.md"]
    }
    assert "HTML web app" in backend.prompts[0]
    assert "creates a to-do list" in backend.prompts[0]


def test_generate_project_structure_unusable_reply_yields_empty_object(
    tool_manager: ToolManager, backend: ScriptedBackend
) -> None:
    backend.queue_text("Sure! Here is a structure: index.html")

    assert tool_manager.generate_project_structure("HTML web app", "todo") == "{}"
    assert tool_manager.generate_project_structure("HTML web app", "todo") == "{}"


def test_execution_guide_is_rendered_without_backend(tool_manager: ToolManager, backend: ScriptedBackend) -> None:
    content = tool_manager.generate_file_content(
        "todo-app/execute.md", "HTML web app", "todo", project_name="todo-app"
    )

    assert content.startswith("# Execution Instructions for todo-app")
    assert "projects/todo-app" in content
    assert backend.prompts == []


def test_generate_file_content_placeholders(tool_manager: ToolManager, backend: ScriptedBackend) -> None:
    backend.queue_text(None, "")

    failed = tool_manager.generate_file_content("todo-app/app.js", "React app", "todo")
    empty = tool_manager.generate_file_content("todo-app/app.js", "React app", "todo")

    assert failed == "// Error generating content for projects/todo-app/app.js"
    assert empty == "// Default js content"


def test_dispatch_threads_update_issue_from_context(tool_manager: ToolManager, backend: ScriptedBackend) -> None:
    backend.queue_text("body { color: red; }")
    context = ProjectContext(request="css file is not working")
    context.is_update_request = True
    context.update_issue = "css file is not working"
    call = parse_tool_call(
        "generate_file_content",
        {"filePath": "todo-app/style.css", "projectType": "HTML web app", "description": "todo"},
    )

    result = tool_manager.dispatch(call, context)

    assert result == "body { color: red; }"
    assert 'The file has an issue: "css file is not working"' in backend.prompts[0]
    assert "projects/todo-app/style.css" in backend.prompts[0]
