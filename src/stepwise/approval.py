"""Human approval checkpoint for proposed project structures."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from stepwise.config import AFFIRMATIVE_ANSWER

LOGGER = logging.getLogger(__name__)

APPROVAL_QUESTION = f"Do you approve this structure? ({AFFIRMATIVE_ANSWER}/no)"

AskFn = Callable[[str], str]
PresentFn = Callable[[Sequence[str]], None]


class ApprovalDecision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


def interpret_answer(answer: str | None, affirmative: str = AFFIRMATIVE_ANSWER) -> ApprovalDecision:
    """Approve only on an exact, case-insensitive match of the affirmative token."""
    if (answer or "").strip().lower() == affirmative.lower():
        return ApprovalDecision.APPROVE
    return ApprovalDecision.REJECT


class ApprovalGate:
    """Show a proposed structure and block until the user answers.

    ``ask`` is any blocking line reader; ``present`` renders the list before
    the question. There is no timeout.
    """

    def __init__(
        self,
        ask: AskFn,
        present: Optional[PresentFn] = None,
        *,
        affirmative: str = AFFIRMATIVE_ANSWER,
    ) -> None:
        self._ask = ask
        self._present = present
        self._affirmative = affirmative

    def request(self, structure: Sequence[str]) -> ApprovalDecision:
        """Present ``structure`` and return the user's decision."""
        if self._present is not None:
            self._present(list(structure))
        answer = self._ask(APPROVAL_QUESTION)
        decision = interpret_answer(answer, self._affirmative)
        LOGGER.info("Structure review | paths=%d | decision=%s", len(structure), decision.value)
        return decision


__all__ = ["APPROVAL_QUESTION", "ApprovalDecision", "ApprovalGate", "interpret_answer"]
