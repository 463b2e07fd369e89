"""Reusable helpers for Stepwise's automated tests."""

from __future__ import annotations

import json
from collections import deque
from typing import Any, Iterable, Optional, Sequence

from stepwise.event_bus import EventBus
from stepwise.models.conversation import ConversationTurn


class ScriptedBackend:
    """Backend double that replays canned replies.

    ``replies`` feed :meth:`generate` (step replies); ``texts`` feed
    :meth:`generate_text` (tool prompts). An exhausted queue answers ``None``,
    the same way a failed transport does.
    """

    def __init__(self, replies: Iterable[Optional[str]] = (), texts: Iterable[Optional[str]] = ()) -> None:
        self.replies: deque[Optional[str]] = deque(replies)
        self.texts: deque[Optional[str]] = deque(texts)
        self.calls: list[tuple[ConversationTurn, ...]] = []
        self.system_instructions: list[Optional[str]] = []
        self.prompts: list[str] = []

    def queue(self, *replies: Optional[str]) -> None:
        self.replies.extend(replies)

    def queue_text(self, *texts: Optional[str]) -> None:
        self.texts.extend(texts)

    def generate(
        self,
        turns: Sequence[ConversationTurn],
        *,
        system_instruction: Optional[str] = None,
    ) -> Optional[str]:
        self.calls.append(tuple(turns))
        self.system_instructions.append(system_instruction)
        return self.replies.popleft() if self.replies else None

    def generate_text(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self.texts.popleft() if self.texts else None


def step_reply(
    step: str,
    content: str,
    function: str | None = None,
    args: Any = None,
    *,
    fenced: bool = False,
) -> str:
    """Build a backend step reply the way the model formats it."""
    payload = json.dumps({"step": step, "content": content, "function": function, "args": args})
    if fenced:
        return f"```json\n{payload}\n```"
    return payload


class EventRecorder:
    """Subscribes to every event on a bus and keeps them in order."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[object] = []
        bus.subscribe(object, self.events.append)

    def of_type(self, event_type: type) -> list[Any]:
        return [event for event in self.events if isinstance(event, event_type)]


class ScriptedAnswers:
    """Line reader double for the approval gate and the REPL."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = deque(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        if not self._answers:
            raise EOFError
        return self._answers.popleft()
