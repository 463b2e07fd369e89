"""Tests for the application controller and interactive loop."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from helpers import ScriptedAnswers

from stepwise import main as main_module
from stepwise.exceptions import StepwiseConfigurationError
from stepwise.main import API_KEY_ENV_VAR, ApplicationController
from stepwise.orchestrator import Orchestrator, RunResult, RunStatus
from stepwise.utils.settings import DEFAULT_MODEL


class RecordingDisplay:
    """Display double for the REPL."""

    def __init__(self, answers: list[str]) -> None:
        self.ask = ScriptedAnswers(answers)
        self.console = MagicMock()
        self.calls: list[str] = []
        self.results: list[RunResult] = []

    def show_welcome(self) -> None:
        self.calls.append("welcome")

    def show_help(self) -> None:
        self.calls.append("help")

    def show_goodbye(self) -> None:
        self.calls.append("goodbye")

    def show_error(self, message: str) -> None:
        self.calls.append(f"error:{message}")

    def show_result(self, result: RunResult) -> None:
        self.results.append(result)


def _controller(answers: list[str]) -> tuple[ApplicationController, RecordingDisplay, MagicMock]:
    controller = ApplicationController()
    display = RecordingDisplay(answers)
    orchestrator = MagicMock()
    orchestrator.run.return_value = RunResult(status=RunStatus.DONE, message="Done.", root_name="projects", steps=5)
    controller.display = display  # type: ignore[assignment]
    controller.orchestrator = orchestrator
    return controller, display, orchestrator


def test_repl_dispatches_requests_and_commands() -> None:
    controller, display, orchestrator = _controller(["", "help", "Create a to-do list", "  EXIT  "])

    assert controller.repl() == 0

    orchestrator.run.assert_called_once_with("Create a to-do list")
    assert display.calls == ["welcome", "help", "goodbye"]
    assert [result.message for result in display.results] == ["Done."]


def test_repl_end_of_input_says_goodbye() -> None:
    controller, display, orchestrator = _controller(["quit"])
    assert controller.repl() == 0

    controller, display, orchestrator = _controller([])
    assert controller.repl() == 0
    assert display.calls == ["welcome", "goodbye"]
    orchestrator.run.assert_not_called()


def test_repl_survives_interrupt_and_exits_on_closed_input_during_a_run() -> None:
    controller, display, orchestrator = _controller(["Create a to-do list", "Create a calculator"])
    orchestrator.run.side_effect = [KeyboardInterrupt, EOFError]

    assert controller.repl() == 0

    assert orchestrator.run.call_count == 2
    assert display.calls == ["welcome", "error:Request interrupted.", "goodbye"]
    assert display.results == []


def test_repl_requires_setup() -> None:
    with pytest.raises(RuntimeError):
        ApplicationController().repl()


def test_setup_requires_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
    settings = {"model_name": DEFAULT_MODEL, "project_root": str(tmp_path / "projects"), "max_steps": 12, "temperature": 0.2}

    with pytest.raises(StepwiseConfigurationError) as excinfo:
        ApplicationController().setup(settings)

    assert excinfo.value.context["env_var"] == API_KEY_ENV_VAR


def test_setup_wires_components(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(API_KEY_ENV_VAR, "secret")
    backend_factory = MagicMock()
    monkeypatch.setattr(main_module, "GeminiBackend", backend_factory)
    root = tmp_path / "projects"
    settings = {"model_name": "gemini-test", "project_root": str(root), "max_steps": 7, "temperature": 0.3}

    orchestrator = ApplicationController().setup(settings)

    assert isinstance(orchestrator, Orchestrator)
    backend_factory.assert_called_once_with(api_key="secret", model_name="gemini-test", temperature=0.3)
    assert root.is_dir()
    assert '"projects"' in orchestrator.system_instruction
