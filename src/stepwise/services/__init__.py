"""Service layer for Stepwise."""

from .gemini_backend import Backend, GeminiBackend

__all__ = [
    "Backend",
    "GeminiBackend",
]
