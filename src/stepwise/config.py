"""Configuration constants for the Stepwise terminal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColorPalette:
    """Rich style strings used by the console display."""

    header: str
    text: str
    accent: str
    success: str
    updated: str
    unchanged: str
    error: str
    prompt: str
    secondary: str


@dataclass(frozen=True)
class Icons:
    """Defines the iconography used in terminal output."""

    STEP: str = "📍"
    NOTE: str = "📝"
    REQUEST: str = "📋"
    FOLDER: str = "📂"
    CREATED: str = "✅"
    UPDATED: str = "🔄"
    UNCHANGED: str = "📄"
    ERROR: str = "❌"
    TOOL: str = "⚙"
    GUIDE: str = "📜"
    WAVE: str = "👋"
    HINT: str = "🔹"


COLORS = ColorPalette(
    header="bold cyan",
    text="white",
    accent="cyan",
    success="green",
    updated="blue",
    unchanged="yellow",
    error="bold red",
    prompt="bold cyan",
    secondary="dim",
)

ICONS = Icons()

APP_NAME: str = "Stepwise"
DEFAULT_PROJECT_ROOT: str = "projects"
EXECUTION_GUIDE_FILENAME: str = "execute.md"

AFFIRMATIVE_ANSWER: str = "yes"
PROCEED_MESSAGE: str = "Proceed to next step"
EXIT_COMMANDS: frozenset[str] = frozenset({"exit", "quit"})
HELP_COMMAND: str = "help"

# Checked in order; update wins over execution.
UPDATE_KEYWORDS: tuple[str, ...] = ("not working", "fix", "update")
EXECUTION_KEYWORDS: tuple[str, ...] = ("run", "execute", "start")

DEFAULT_UPDATE_PROJECT_TYPE: str = "HTML web app"

OUTPUT_SECTION_WIDTH: int = 45

__all__ = [
    "COLORS",
    "ICONS",
    "ColorPalette",
    "Icons",
    "APP_NAME",
    "DEFAULT_PROJECT_ROOT",
    "EXECUTION_GUIDE_FILENAME",
    "AFFIRMATIVE_ANSWER",
    "PROCEED_MESSAGE",
    "EXIT_COMMANDS",
    "HELP_COMMAND",
    "UPDATE_KEYWORDS",
    "EXECUTION_KEYWORDS",
    "DEFAULT_UPDATE_PROJECT_TYPE",
    "OUTPUT_SECTION_WIDTH",
]
