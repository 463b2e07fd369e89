"""Terminal presentation of workflow events and run results."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from stepwise.config import (
    APP_NAME,
    COLORS,
    ICONS,
    OUTPUT_SECTION_WIDTH,
)
from stepwise.event_bus import EventBus, get_event_bus
from stepwise.events import (
    FileMaterialized,
    RunStarted,
    StatusUpdate,
    StepReceived,
    ToolCallStarted,
)
from stepwise.orchestrator import RunResult
from stepwise.ui.banner import print_banner

LOGGER = logging.getLogger(__name__)

_OUTCOME_STYLES = {
    "created": (ICONS.CREATED, COLORS.success),
    "updated": (ICONS.UPDATED, COLORS.updated),
    "unchanged": (ICONS.UNCHANGED, COLORS.unchanged),
    "failed": (ICONS.ERROR, COLORS.error),
}


class ConsoleDisplay:
    """Subscribe to the event bus and render events with rich.

    The workflow core never prints; everything the user sees goes through
    this class, either from events or from the explicit ``show_*`` calls the
    REPL makes.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        root_name: str,
        event_bus: EventBus | None = None,
    ) -> None:
        self.console = console or Console()
        self._root_name = root_name
        self._event_bus = event_bus or get_event_bus()
        self._subscribe_to_events()

    def _subscriptions(self) -> dict[type, Callable[[Any], None]]:
        return {
            RunStarted: self._on_run_started,
            StepReceived: self._on_step_received,
            ToolCallStarted: self._on_tool_call_started,
            FileMaterialized: self._on_file_materialized,
            StatusUpdate: self._on_status_update,
        }

    def _subscribe_to_events(self) -> None:
        self._event_bus.subscribe_many(self._subscriptions())
        LOGGER.debug("Console display subscribed to events.")

    def close(self) -> None:
        for event_type, handler in self._subscriptions().items():
            self._event_bus.unsubscribe(event_type, handler)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_run_started(self, event: RunStarted) -> None:
        self._section("Processing Request")
        self._line(f"{ICONS.REQUEST} Request: {event.request}")
        self._rule()

    def _on_step_received(self, event: StepReceived) -> None:
        self._line(f"{ICONS.STEP} Step: {event.step}", COLORS.accent)
        self._line(f"{ICONS.NOTE} {event.content}")

    def _on_tool_call_started(self, event: ToolCallStarted) -> None:
        label = f"{ICONS.TOOL} {event.tool_name}"
        if event.forced:
            label += " (update)"
        self._line(label, COLORS.secondary)

    def _on_file_materialized(self, event: FileMaterialized) -> None:
        icon, style = _OUTCOME_STYLES.get(event.outcome, (ICONS.NOTE, COLORS.text))
        self._line(f"{icon} {event.message}", style)

    def _on_status_update(self, event: StatusUpdate) -> None:
        self._line(f"  {event.message}", COLORS.secondary)

    # ------------------------------------------------------------------
    # Explicit output
    # ------------------------------------------------------------------
    def show_welcome(self) -> None:
        print_banner(self.console)
        self._section(f"Welcome to {APP_NAME}")
        self._line("🌟 Create amazing projects with ease!")
        self._line(f'{ICONS.FOLDER} All projects will be created/updated in the "{self._root_name}" directory')
        self._line('💡 Type your request or "help" to see available commands')
        self._rule()
        self.console.print()

    def show_help(self) -> None:
        self._section(f"{APP_NAME} Help")
        self._line(f"{ICONS.GUIDE} Here's how to use it:\n")
        self._line(f"{ICONS.HINT} Create a new project:")
        self._line('  "Create a to-do list in HTML"')
        self._line('  "Write a Python script for a calculator"')
        self._line(f"{ICONS.HINT} Update an existing project:")
        self._line('  "css file is not working"')
        self._line(f"{ICONS.HINT} Run or execute a project:")
        self._line('  "run the project"')
        self._line('  "execute the python script"')
        self._line(f"\n{ICONS.HINT} Other commands:")
        self._line("  help - Show this help message")
        self._line("  exit/quit - Exit the program")
        self._line(f'\n{ICONS.FOLDER} All projects are stored in the "{self._root_name}" directory.')
        self._rule()
        self.console.print()

    def show_goodbye(self) -> None:
        self._section("Goodbye!")
        self._line(f"{ICONS.WAVE} Thank you for using {APP_NAME}!")
        self._rule()

    def show_structure(self, structure: Sequence[str]) -> None:
        """Presenter for the approval gate."""
        self._section("Proposed Project Structure")
        for path in structure:
            self._line(f"  {ICONS.FOLDER} {path}")
        self._rule()

    def show_result(self, result: RunResult) -> None:
        if not result.succeeded:
            self._line(f"{ICONS.ERROR} {result.message}", COLORS.error)
            return

        self._section("Project Summary")
        self._line(f"{ICONS.NOTE} {result.message}")
        if result.is_execution_request:
            self._section("Execution Instructions")
            self._line(f"{ICONS.GUIDE} Detailed instructions are available in:")
            self._line(f"   {result.execution_guide_path}")
            self._line(
                "   This includes steps to run the project, dependencies, "
                "compatibility, and troubleshooting."
            )
        else:
            verb = "updated" if result.is_update_request else "created"
            self._line(f"{ICONS.FOLDER} Project {verb} in: {result.project_location}", COLORS.success)
            self._line(f"{ICONS.GUIDE} See {result.execution_guide_path} for how to run it.")
        self._rule()

    def show_error(self, message: str) -> None:
        self._line(f"{ICONS.ERROR} {message}", COLORS.error)

    def ask(self, question: str) -> str:
        """Blocking line reader used by the REPL and the approval gate."""
        return Prompt.ask(Text(question, style=COLORS.prompt), console=self.console, default="", show_default=False)

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------
    def _section(self, title: str) -> None:
        self.console.print(Text(f" {title} ".center(OUTPUT_SECTION_WIDTH, "="), style=COLORS.header))

    def _rule(self) -> None:
        self.console.print(Text("=" * OUTPUT_SECTION_WIDTH, style=COLORS.header))

    def _line(self, message: str, style: str | None = None) -> None:
        self.console.print(Text(message, style=style or COLORS.text))


__all__ = ["ConsoleDisplay"]
