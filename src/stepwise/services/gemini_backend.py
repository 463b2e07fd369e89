"""Gemini backend used for step replies and content generation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from google import genai
from google.genai import types

from stepwise.models.conversation import ConversationTurn, TurnRole
from stepwise.utils.settings import DEFAULT_MODEL, DEFAULT_TEMPERATURE

LOGGER = logging.getLogger(__name__)


class Backend(Protocol):
    """What the workflow core needs from a generative backend."""

    def generate(
        self,
        turns: Sequence[ConversationTurn],
        *,
        system_instruction: Optional[str] = None,
    ) -> Optional[str]:
        """Return the reply text, or None when no usable reply was obtained."""

    def generate_text(self, prompt: str) -> Optional[str]:
        """Return the reply to a single standalone prompt."""


@dataclass
class GeminiBackend:
    """Stateless request/response wrapper around the Gemini API.

    Transport failures never propagate: they are logged and reported as
    ``None`` so callers can turn them into placeholder data.
    """

    api_key: str
    model_name: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    _client: genai.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize the Gemini client."""
        self._client = genai.Client(api_key=self.api_key)

    def generate(
        self,
        turns: Sequence[ConversationTurn],
        *,
        system_instruction: Optional[str] = None,
    ) -> Optional[str]:
        """Send the ordered turns and return the reply text.

        Args:
            turns: Full conversation, oldest first
            system_instruction: Optional fixed instruction for the request

        Returns:
            Reply text, or None if the call failed
        """
        started = time.perf_counter()
        LOGGER.info(
            "Gemini request started | model=%s | turns=%d",
            self.model_name,
            len(turns),
        )
        contents = [
            types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
            for turn in turns
        ]
        request_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature,
        )

        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=request_config,
            )
            text = response.text or ""
        except Exception:  # noqa: BLE001
            LOGGER.exception(
                "Gemini request failed | duration=%.2fs | turns=%d",
                time.perf_counter() - started,
                len(turns),
            )
            return None

        LOGGER.info(
            "Gemini request completed | duration=%.2fs | chars=%d",
            time.perf_counter() - started,
            len(text),
        )
        return text

    def generate_text(self, prompt: str) -> Optional[str]:
        """Send a single user prompt without conversation history."""
        return self.generate([ConversationTurn(role=TurnRole.USER, text=prompt)])


__all__ = ["Backend", "GeminiBackend"]
