"""Shared pytest fixtures for the Stepwise test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from stepwise.event_bus import EventBus, reset_event_bus
from stepwise.tools.tool_manager import ToolManager
from helpers import EventRecorder, ScriptedBackend


@pytest.fixture()
def workspace_dir(tmp_path: Path) -> Path:
    """Provide an isolated workspace directory for filesystem-heavy tests."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture()
def project_root(workspace_dir: Path) -> Path:
    """Return the (not yet created) project root inside the workspace."""
    return workspace_dir / "projects"


@pytest.fixture(autouse=True)
def fresh_global_bus() -> Iterator[None]:
    """Keep the process-wide event bus from leaking handlers between tests."""
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def recorder(event_bus: EventBus) -> EventRecorder:
    """Record every event published on ``event_bus``."""
    return EventRecorder(event_bus)


@pytest.fixture()
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture()
def tool_manager(project_root: Path, backend: ScriptedBackend, event_bus: EventBus) -> ToolManager:
    """Instantiate a ToolManager scoped to the temporary project root."""
    return ToolManager(project_root, backend, event_bus=event_bus)
