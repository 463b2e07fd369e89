"""Tests for the file materializer."""

from __future__ import annotations

from pathlib import Path

from stepwise.tools.file_operations import MaterializeOutcome, materialize_file


def test_create_writes_exact_content(project_root: Path) -> None:
    result = materialize_file(project_root, "app/x.txt", "hi")

    target = project_root / "app" / "x.txt"
    assert result.outcome is MaterializeOutcome.CREATED
    assert result.succeeded
    assert result.path == target.as_posix()
    assert result.message.endswith("created successfully")
    assert target.read_bytes() == b"hi"


def test_identical_content_is_left_unchanged(project_root: Path) -> None:
    materialize_file(project_root, "app/x.txt", "hi")
    target = project_root / "app" / "x.txt"
    before = target.stat().st_mtime_ns

    result = materialize_file(project_root, "app/x.txt", "hi")

    assert result.outcome is MaterializeOutcome.UNCHANGED
    assert result.message.endswith("unchanged (content identical)")
    assert target.stat().st_mtime_ns == before


def test_different_content_updates_file(project_root: Path) -> None:
    materialize_file(project_root, "app/x.txt", "hi")

    result = materialize_file(project_root, "app/x.txt", "hello")

    assert result.outcome is MaterializeOutcome.UPDATED
    assert result.message.endswith("updated successfully")
    assert (project_root / "app" / "x.txt").read_text(encoding="utf-8") == "hello"


def test_root_prefixed_and_escaping_names_stay_inside_root(project_root: Path) -> None:
    materialize_file(project_root, "projects/todo-app/index.html", "<html></html>")
    materialize_file(project_root, "../../outside.txt", "nope")

    assert (project_root / "todo-app" / "index.html").is_file()
    assert (project_root / "outside.txt").is_file()
    assert not (project_root.parent / "outside.txt").exists()
    assert not (project_root / "projects").exists()


def test_unicode_content_round_trips(project_root: Path) -> None:
    materialize_file(project_root, "notes.md", "café ✅")

    assert (project_root / "notes.md").read_text(encoding="utf-8") == "café ✅"


def test_io_failure_is_reported_not_raised(project_root: Path) -> None:
    (project_root / "app").mkdir(parents=True)

    result = materialize_file(project_root, "app", "content")

    assert result.outcome is MaterializeOutcome.FAILED
    assert not result.succeeded
    assert result.message.startswith("Error creating/updating file:")


def test_nul_byte_in_file_name_is_reported_not_raised(project_root: Path) -> None:
    result = materialize_file(project_root, "app/a\x00b.txt", "hi")

    assert result.outcome is MaterializeOutcome.FAILED
    assert not result.succeeded
    assert result.message.startswith("Error creating/updating file:")


def test_unencodable_content_is_reported_not_raised(project_root: Path) -> None:
    result = materialize_file(project_root, "app/x.txt", "\ud800")

    assert result.outcome is MaterializeOutcome.FAILED
    assert result.message.startswith("Error creating/updating file:")
    assert not (project_root / "app" / "x.txt").exists()
