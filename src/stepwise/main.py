"""Application entry point for Stepwise."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

from stepwise import config
from stepwise.approval import ApprovalGate
from stepwise.exceptions import StepwiseConfigurationError
from stepwise.orchestrator import Orchestrator
from stepwise.services import GeminiBackend
from stepwise.tools import ToolManager
from stepwise.ui import ConsoleDisplay
from stepwise.utils import load_settings
from stepwise.utils.settings import DEFAULT_LOG_LEVEL


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
LOGGER = logging.getLogger(__name__)

API_KEY_ENV_VAR = "GEMINI_API_KEY"


def configure_logging(console_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure application-wide structured logging outputs."""
    logs_root = Path(__file__).resolve().parents[2] / "logs"
    logs_root.mkdir(parents=True, exist_ok=True)
    log_path = logs_root / "stepwise.log"

    root_logger = logging.getLogger()
    if getattr(configure_logging, "_configured", False):
        return

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console level comes from the log_level setting.
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.WARNING))
    console_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    configure_logging._configured = True  # type: ignore[attr-defined]


class ApplicationController:
    """Creates the workflow components and runs the interactive loop."""

    def __init__(self) -> None:
        self.settings: dict = {}
        self.display: ConsoleDisplay | None = None
        self.orchestrator: Orchestrator | None = None

    def setup(self, settings: dict | None = None) -> Orchestrator:
        """Create and wire all application components.

        Args:
            settings: Loaded settings; read from disk when omitted

        Raises:
            StepwiseConfigurationError: If the API key is missing

        Returns:
            The orchestrator ready to accept requests
        """
        self.settings = settings if settings is not None else load_settings()
        api_key = self._require_api_key()

        backend = GeminiBackend(
            api_key=api_key,
            model_name=self.settings["model_name"],
            temperature=self.settings["temperature"],
        )
        tool_manager = ToolManager(Path(self.settings["project_root"]), backend)
        self.display = ConsoleDisplay(root_name=tool_manager.root_name)
        gate = ApprovalGate(self.display.ask, self.display.show_structure)
        self.orchestrator = Orchestrator(
            backend,
            tool_manager,
            gate,
            max_steps=self.settings["max_steps"],
        )
        LOGGER.info(
            "Stepwise ready | model=%s | root=%s",
            self.settings["model_name"],
            tool_manager.project_root,
        )
        return self.orchestrator

    def _require_api_key(self) -> str:
        """Return a validated Gemini API key.

        Raises:
            StepwiseConfigurationError: If the key is not set
        """
        api_key = os.getenv(API_KEY_ENV_VAR, "").strip()
        if not api_key:
            raise StepwiseConfigurationError(
                f"Gemini API key required. Set {API_KEY_ENV_VAR} (or add it to .env) and restart Stepwise.",
                context={"env_var": API_KEY_ENV_VAR},
            )
        return api_key

    def repl(self) -> int:
        """Read requests until the user exits."""
        if self.display is None or self.orchestrator is None:
            raise RuntimeError("ApplicationController.setup() must be called before repl().")

        display = self.display
        display.show_welcome()
        while True:
            try:
                line = display.ask(">")
            except (EOFError, KeyboardInterrupt):
                display.console.print()
                display.show_goodbye()
                return 0

            command = line.strip()
            if not command:
                continue
            if command.lower() in config.EXIT_COMMANDS:
                display.show_goodbye()
                return 0
            if command.lower() == config.HELP_COMMAND:
                display.show_help()
                continue

            try:
                result = self.orchestrator.run(command)
            except KeyboardInterrupt:
                LOGGER.warning("Request interrupted by user")
                display.show_error("Request interrupted.")
                continue
            except EOFError:
                LOGGER.warning("Input closed during request")
                display.console.print()
                display.show_goodbye()
                return 0
            display.show_result(result)
            display.console.print()


def run() -> int:
    """Run the Stepwise terminal loop."""
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.get("log_level", DEFAULT_LOG_LEVEL))

    controller = ApplicationController()
    try:
        controller.setup(settings)
    except StepwiseConfigurationError as exc:
        LOGGER.error("Failed to initialize Stepwise: %s", exc)
        ConsoleDisplay(root_name=config.DEFAULT_PROJECT_ROOT).show_error(exc.message)
        return 2
    return controller.repl()


def main() -> None:
    """Launch the Stepwise terminal."""
    try:
        exit_code = run()
    except Exception:  # noqa: BLE001
        logging.getLogger("stepwise").exception("Stepwise terminated unexpectedly")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
