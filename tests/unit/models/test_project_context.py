"""Tests for the per-run project context."""

from __future__ import annotations

from stepwise.models.project_context import ProjectContext
from stepwise.utils.extraction import RequestKind


def test_classification_sets_exactly_one_flag() -> None:
    context = ProjectContext(request="css file is not working")

    context.apply_classification(RequestKind.UPDATE)
    assert context.is_update_request and not context.is_execution_request
    assert context.update_issue == "css file is not working"
    assert context.kind is RequestKind.UPDATE

    context.apply_classification(RequestKind.EXECUTION)
    assert context.is_execution_request and not context.is_update_request
    assert context.update_issue is None


def test_structure_approval_only_for_unreviewed_new_projects() -> None:
    context = ProjectContext(request="Create a to-do list")
    assert not context.needs_structure_approval

    context.proposed_structure = ["projects/todo-app/index.html"]
    assert context.needs_structure_approval

    context.structure_reviewed = True
    assert not context.needs_structure_approval

    context.structure_reviewed = False
    context.apply_classification(RequestKind.EXECUTION)
    assert not context.needs_structure_approval


def test_reset_clears_every_field() -> None:
    context = ProjectContext(
        request="fix it",
        project_type="HTML web app",
        project_name="todo-app",
        proposed_structure=["a"],
        is_update_request=True,
        update_issue="fix it",
        update_file="todo-app/style.css",
        structure_reviewed=True,
    )

    context.reset()

    assert context == ProjectContext()


def test_a_different_structure_needs_a_fresh_review() -> None:
    context = ProjectContext(request="Create a to-do list")
    context.propose_structure(["projects/a/index.html"])
    context.structure_reviewed = True

    context.propose_structure(["projects/a/index.html"])
    assert not context.needs_structure_approval

    context.propose_structure(["projects/b/run.sh"])
    assert context.needs_structure_approval
    assert context.proposed_structure == ["projects/b/run.sh"]
