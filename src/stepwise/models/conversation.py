"""
Append-only conversation log shared with the backend.

The backend keeps no state between calls; the full ordered log is sent with
every request, so this log is the only memory of the workflow.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)


class TurnRole:
    """Constants for supported turn roles."""

    USER = "user"
    MODEL = "model"
    _ALL = frozenset({USER, MODEL})

    @classmethod
    def validate(cls, role: str) -> None:
        """Ensure the provided role is supported."""
        if role not in cls._ALL:
            allowed = ", ".join(sorted(cls._ALL))
            raise ValueError(f"Invalid role: {role}. Must be one of: {allowed}")


@dataclass(frozen=True)
class ConversationTurn:
    """
    A single turn exchanged with the backend.

    Attributes:
        role: 'user' for human requests and tool results, 'model' for replies
        text: Turn text as transmitted
    """

    role: str
    text: str

    def __post_init__(self):
        """Validate role after initialization."""
        TurnRole.validate(self.role)

    def to_dict(self) -> dict:
        """Return the turn in the backend's ``contents`` wire shape."""
        return {"role": self.role, "parts": [{"text": self.text}]}


class ConversationState:
    """Ordered, append-only log of turns."""

    def __init__(self) -> None:
        self._turns: List[ConversationTurn] = []

    def append(self, role: str, text: str) -> ConversationTurn:
        """
        Append a turn to the end of the log.

        Args:
            role: Turn role ('user' or 'model')
            text: Turn text

        Returns:
            The stored turn

        Raises:
            ValueError: If role is invalid
        """
        turn = ConversationTurn(role=role, text=text)
        self._turns.append(turn)
        logger.debug("Appended %s turn #%d (%d chars)", role, len(self._turns), len(text))
        return turn

    def all(self) -> Tuple[ConversationTurn, ...]:
        """Return every turn in append order."""
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(tuple(self._turns))
