"""Tests for the JSON settings loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stepwise.config import DEFAULT_PROJECT_ROOT
from stepwise.utils import settings as settings_module
from stepwise.utils.settings import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_STEPS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    PROJECT_ROOT_ENV_VAR,
    load_settings,
    save_settings,
)


@pytest.fixture()
def settings_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / ".stepwise" / "settings.json"
    monkeypatch.setattr(settings_module, "get_settings_path", lambda: path)
    monkeypatch.delenv(PROJECT_ROOT_ENV_VAR, raising=False)
    return path


def test_missing_file_yields_defaults(settings_path: Path) -> None:
    settings = load_settings()

    assert settings == {
        "model_name": DEFAULT_MODEL,
        "project_root": DEFAULT_PROJECT_ROOT,
        "max_steps": DEFAULT_MAX_STEPS,
        "temperature": DEFAULT_TEMPERATURE,
        "log_level": DEFAULT_LOG_LEVEL,
    }
    assert not settings_path.exists()


def test_out_of_range_values_are_clamped_and_persisted(settings_path: Path) -> None:
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(
        json.dumps(
            {
                "model_name": "gemini-pro",
                "project_root": "  ",
                "max_steps": 500,
                "temperature": -1,
                "log_level": "loud",
            }
        ),
        encoding="utf-8",
    )

    settings = load_settings()

    assert settings["model_name"] == DEFAULT_MODEL
    assert settings["project_root"] == DEFAULT_PROJECT_ROOT
    assert settings["max_steps"] == 50
    assert settings["temperature"] == 0.0
    assert settings["log_level"] == DEFAULT_LOG_LEVEL
    assert json.loads(settings_path.read_text(encoding="utf-8")) == settings


def test_non_numeric_values_fall_back_to_defaults(settings_path: Path) -> None:
    save_settings({"model_name": DEFAULT_MODEL, "max_steps": "many", "temperature": "hot"})

    settings = load_settings()

    assert settings["max_steps"] == DEFAULT_MAX_STEPS
    assert settings["temperature"] == DEFAULT_TEMPERATURE


def test_invalid_json_yields_defaults(settings_path: Path) -> None:
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json", encoding="utf-8")

    assert load_settings()["max_steps"] == DEFAULT_MAX_STEPS


def test_environment_overrides_project_root_without_persisting(
    settings_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    save_settings({"model_name": DEFAULT_MODEL, "project_root": "stored", "log_level": "info"})
    monkeypatch.setenv(PROJECT_ROOT_ENV_VAR, "/tmp/elsewhere")

    settings = load_settings()

    assert settings["project_root"] == "/tmp/elsewhere"
    assert settings["log_level"] == "INFO"
    assert json.loads(settings_path.read_text(encoding="utf-8"))["project_root"] == "stored"
