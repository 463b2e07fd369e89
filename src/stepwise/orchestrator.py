"""Five-step workflow driver for Stepwise.

The driver never picks the next step itself: it asks the backend for the next
step given the full conversation, validates the reply, reacts to it, and
loops until ``final_result`` or an abort.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from stepwise.approval import ApprovalDecision, ApprovalGate
from stepwise.config import DEFAULT_UPDATE_PROJECT_TYPE, EXECUTION_GUIDE_FILENAME, PROCEED_MESSAGE
from stepwise.event_bus import EventBus, get_event_bus
from stepwise.events import (
    ApprovalResolved,
    ExecutionComplete,
    RunStarted,
    StatusUpdate,
    StepReceived,
    StructureProposed,
)
from stepwise.exceptions import StepParseError, StepwiseValidationError, ToolArgumentError
from stepwise.models import (
    ConversationState,
    CreateDynamicFileArgs,
    FileSpec,
    GenerateFileContentArgs,
    ProjectContext,
    StepName,
    StepRecord,
    ToolCall,
    ToolName,
    TurnRole,
    is_known_tool,
    parse_step_reply,
    parse_structure_result,
    parse_tool_call,
)
from stepwise.prompts import build_system_instruction
from stepwise.services.gemini_backend import Backend
from stepwise.tools.tool_manager import ToolManager
from stepwise.utils.extraction import (
    classify_request,
    extract_project_name,
    extract_project_type,
    extract_update_file,
)
from stepwise.utils.settings import DEFAULT_MAX_STEPS

LOGGER = logging.getLogger(__name__)

BACKEND_FAILURE_MESSAGE = "Failed to get a response from the backend."
REJECTION_MESSAGE = "Structure not approved. Aborting project creation."


class RunStatus(str, Enum):
    DONE = "done"
    ABORTED = "aborted"


class AbortReason(str, Enum):
    REJECTED = "rejected"
    PARSE_FAILURE = "parse_failure"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    TOOL_ARGUMENTS = "tool_arguments"
    STEP_LIMIT = "step_limit"


@dataclass(frozen=True)
class RunResult:
    """Outcome of one request, snapshotted before the context reset."""

    status: RunStatus
    message: str
    root_name: str
    steps: int
    reason: Optional[AbortReason] = None
    project_name: Optional[str] = None
    project_type: Optional[str] = None
    is_update_request: bool = False
    is_execution_request: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.DONE

    @property
    def project_location(self) -> str:
        """Return ``<root>/<project>`` for presentation."""
        return f"{self.root_name}/{self.project_name or 'unknown'}"

    @property
    def execution_guide_path(self) -> str:
        """Return where the project's execution instructions live."""
        return f"{self.project_location}/{EXECUTION_GUIDE_FILENAME}"


class Orchestrator:
    """Drive one user request at a time through the five-step protocol."""

    def __init__(
        self,
        backend: Backend,
        tool_manager: ToolManager,
        approval_gate: ApprovalGate,
        *,
        conversation: ConversationState | None = None,
        event_bus: EventBus | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
        system_instruction: str | None = None,
    ) -> None:
        self._backend = backend
        self._tool_manager = tool_manager
        self._approval_gate = approval_gate
        self._event_bus = event_bus or get_event_bus()
        self._max_steps = max_steps
        self._system_instruction = system_instruction or build_system_instruction(
            tool_manager.root_name,
            tool_manager.describe_tools(),
        )
        self.conversation = conversation or ConversationState()
        self.context = ProjectContext()

    @property
    def system_instruction(self) -> str:
        return self._system_instruction

    def run(self, request: str) -> RunResult:
        """Process ``request`` to completion or abort.

        Backend, parse and tool-argument failures end the run and are reported
        in the returned RunResult; they are never raised.

        Raises:
            StepwiseValidationError: If the request is blank
        """
        sanitized = (request or "").strip()
        if not sanitized:
            raise StepwiseValidationError("Request must be provided.")

        self.context.reset()
        self.context.request = sanitized
        self.conversation.append(TurnRole.USER, sanitized)
        self._event_bus.emit(RunStarted(request=sanitized))
        LOGGER.info("Run started | request_preview=%s", sanitized[:80])

        steps = 0
        while steps < self._max_steps:
            steps += 1
            reply = self._backend.generate(
                self.conversation.all(),
                system_instruction=self._system_instruction,
            )
            if not reply:
                return self._abort(AbortReason.BACKEND_UNAVAILABLE, BACKEND_FAILURE_MESSAGE, steps)

            try:
                record = parse_step_reply(reply)
                self.conversation.append(TurnRole.MODEL, record.to_json())
                self._event_bus.emit(
                    StepReceived(step=record.step.value, content=record.content, function=record.function)
                )
                LOGGER.info("Step %d | %s | function=%s", steps, record.step.value, record.function)
                outcome = self._advance(record, steps)
            except StepParseError as exc:
                return self._abort(AbortReason.PARSE_FAILURE, f"Error processing response: {exc}", steps)
            except ToolArgumentError as exc:
                return self._abort(AbortReason.TOOL_ARGUMENTS, f"Invalid tool call: {exc}", steps)

            if outcome is not None:
                return outcome
            self.conversation.append(TurnRole.USER, PROCEED_MESSAGE)

        return self._abort(
            AbortReason.STEP_LIMIT,
            f"No final result after {self._max_steps} steps.",
            steps,
        )

    def _advance(self, record: StepRecord, steps: int) -> Optional[RunResult]:
        """Apply one step; return a RunResult when the run ends here."""
        if record.step is StepName.INITIALIZATION:
            self.context.apply_classification(classify_request(self.context.request))
            LOGGER.info("Request classified as %s", self.context.kind.value)
            self._event_bus.emit(
                StatusUpdate(message=f"Request classified as {self.context.kind.value}", phase=record.step.value)
            )
        elif record.step is StepName.ANALYZE:
            self._absorb_analysis(record.content)

        self._perform_step_action(record)

        if record.step is StepName.GENERATE_STRUCTURE and self.context.needs_structure_approval:
            if not self._review_structure():
                return self._abort(AbortReason.REJECTED, REJECTION_MESSAGE, steps)

        if record.is_terminal:
            return self._finish(record, steps)
        return None

    def _absorb_analysis(self, content: str) -> None:
        """Pull project identity out of the analyze step's prose."""
        self.context.project_type = extract_project_type(content) or self.context.project_type
        self.context.project_name = extract_project_name(content) or self.context.project_name
        if self.context.is_update_request:
            self.context.update_file = extract_update_file(content) or self.context.update_file
        LOGGER.debug(
            "Analysis | type=%s | name=%s | update_file=%s",
            self.context.project_type,
            self.context.project_name,
            self.context.update_file,
        )

    def _perform_step_action(self, record: StepRecord) -> None:
        """Run the step's tool, if any, and feed the result back to the backend.

        On an update request with a known target file, ``generate_files`` runs
        a forced regeneration of that file instead of whatever the backend
        declared for the step.
        """
        if (
            record.step is StepName.GENERATE_FILES
            and self.context.is_update_request
            and self.context.update_file
        ):
            result: Any = self._regenerate_update_file(record)
        elif record.function:
            if not is_known_tool(record.function):
                LOGGER.warning("Ignoring unknown tool declared by backend: %s", record.function)
                return
            call = parse_tool_call(record.function, record.args)
            result = self._tool_manager.dispatch(call, self.context)
            if call.name is ToolName.GENERATE_PROJECT_STRUCTURE:
                self.context.propose_structure(parse_structure_result(result))
        else:
            return

        self.conversation.append(TurnRole.USER, json.dumps(result, ensure_ascii=False, default=str))

    def _regenerate_update_file(self, record: StepRecord) -> str:
        """Regenerate ``update_file`` with the recorded issue and write it."""
        update_file = self.context.update_file or ""
        declared = record.args if isinstance(record.args, dict) else {}
        project_type = (
            _string_arg(declared, "projectType")
            or self.context.project_type
            or DEFAULT_UPDATE_PROJECT_TYPE
        )
        description = _string_arg(declared, "description") or self.context.request
        LOGGER.info("Overriding generate_files to repair %s", update_file)

        content = self._tool_manager.dispatch(
            ToolCall(
                name=ToolName.GENERATE_FILE_CONTENT,
                arguments=GenerateFileContentArgs(
                    file_path=update_file,
                    project_type=project_type,
                    description=description,
                ),
            ),
            self.context,
            forced=True,
        )
        return self._tool_manager.dispatch(
            ToolCall(
                name=ToolName.CREATE_DYNAMIC_FILE,
                arguments=CreateDynamicFileArgs(files=[FileSpec(file_name=update_file, content=content)]),
            ),
            self.context,
            forced=True,
        )

    def _review_structure(self) -> bool:
        """Ask the approval gate about the current structure; return True when approved."""
        structure = tuple(self.context.proposed_structure)
        self.context.structure_reviewed = True
        self._event_bus.emit(StructureProposed(structure=structure))
        approved = self._approval_gate.request(structure) is ApprovalDecision.APPROVE
        self._event_bus.emit(ApprovalResolved(approved=approved, structure=structure))
        return approved

    def _finish(self, record: StepRecord, steps: int) -> RunResult:
        result = self._snapshot(RunStatus.DONE, record.content, steps)
        self.context.reset()
        LOGGER.info("Run completed | steps=%d | project=%s", steps, result.project_name)
        self._event_bus.emit(ExecutionComplete(summary=record.content, success=True))
        return result

    def _abort(self, reason: AbortReason, message: str, steps: int) -> RunResult:
        result = self._snapshot(RunStatus.ABORTED, message, steps, reason=reason)
        self.context.reset()
        LOGGER.warning("Run aborted | reason=%s | steps=%d | %s", reason.value, steps, message)
        self._event_bus.emit(ExecutionComplete(summary=message, success=False, reason=reason.value))
        return result

    def _snapshot(
        self,
        status: RunStatus,
        message: str,
        steps: int,
        *,
        reason: Optional[AbortReason] = None,
    ) -> RunResult:
        return RunResult(
            status=status,
            message=message,
            root_name=self._tool_manager.root_name,
            steps=steps,
            reason=reason,
            project_name=self.context.project_name,
            project_type=self.context.project_type,
            is_update_request=self.context.is_update_request,
            is_execution_request=self.context.is_execution_request,
        )


def _string_arg(arguments: dict, key: str) -> Optional[str]:
    value = arguments.get(key)
    return value if isinstance(value, str) and value.strip() else None


__all__ = ["AbortReason", "Orchestrator", "RunResult", "RunStatus"]
