import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict

from stepwise.config import DEFAULT_PROJECT_ROOT

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_MAX_STEPS = 12
DEFAULT_TEMPERATURE = 0.2
DEFAULT_LOG_LEVEL = "WARNING"
MODEL_MIGRATIONS: Dict[str, str] = {
    "gemini-pro": DEFAULT_MODEL,
    "gemini-1.0-pro": DEFAULT_MODEL,
}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
PROJECT_ROOT_ENV_VAR = "STEPWISE_PROJECT_ROOT"

MAX_STEPS_RANGE = (5, 50)
TEMPERATURE_RANGE = (0.0, 2.0)


def _store(settings: Dict[str, Any], key: str, value: Any) -> bool:
    """Write ``value`` under ``key``; return True if the stored value changed."""
    changed = key not in settings or settings[key] != value
    settings[key] = value
    return changed


def _normalize_model(settings: Dict[str, Any]) -> bool:
    """Replace blank or retired model identifiers."""
    value = settings.get("model_name")
    model = value.strip() if isinstance(value, str) else ""
    if not model:
        return _store(settings, "model_name", DEFAULT_MODEL)
    if model in MODEL_MIGRATIONS:
        logger.info("Upgrading model_name from %s to %s", model, MODEL_MIGRATIONS[model])
        model = MODEL_MIGRATIONS[model]
    return _store(settings, "model_name", model)


def _clamp(
    settings: Dict[str, Any],
    key: str,
    default: Any,
    bounds: tuple[Any, Any],
    cast: Callable[[Any], Any],
) -> bool:
    """Coerce ``key`` with ``cast`` and pin it inside ``bounds``.

    Values that cannot be coerced fall back to ``default``.
    """
    try:
        value = cast(settings.get(key, default))
    except (TypeError, ValueError):
        value = default
    low, high = bounds
    return _store(settings, key, min(max(value, low), high))


def _normalize_log_level(settings: Dict[str, Any]) -> bool:
    """Upper-case the log level and fall back to the default when unknown."""
    value = settings.get("log_level")
    level = value.strip().upper() if isinstance(value, str) else DEFAULT_LOG_LEVEL
    return _store(settings, "log_level", level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL)


def _normalize_project_root(settings: Dict[str, Any]) -> bool:
    value = settings.get("project_root")
    if isinstance(value, str) and value.strip():
        return False
    return _store(settings, "project_root", DEFAULT_PROJECT_ROOT)


def _default_settings() -> Dict[str, Any]:
    """Return a fresh copy of default settings."""
    return {
        "model_name": DEFAULT_MODEL,
        "project_root": DEFAULT_PROJECT_ROOT,
        "max_steps": DEFAULT_MAX_STEPS,
        "temperature": DEFAULT_TEMPERATURE,
        "log_level": DEFAULT_LOG_LEVEL,
    }


def get_settings_path() -> Path:
    """Return the location of the user's settings file."""
    return Path.home() / ".stepwise" / "settings.json"


def _read_settings_file(settings_path: Path) -> Dict[str, Any] | None:
    """Return the stored settings object, or None when it is missing or unusable."""
    if not settings_path.exists():
        logger.info("Settings file not found. Using default settings.")
        return None
    try:
        stored = json.loads(settings_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.error("Failed to load or parse settings file: %s. Using defaults.", exc)
        return None
    if not isinstance(stored, dict):
        logger.error("Settings file %s does not hold an object. Using defaults.", settings_path)
        return None
    return stored


def load_settings() -> Dict[str, Any]:
    """
    Load settings, repairing and persisting out-of-range values.

    ``STEPWISE_PROJECT_ROOT`` overrides the stored project root for this
    process only; the override is never written back.

    Returns:
        Dict[str, Any]: model_name, project_root, max_steps, temperature and
        log_level
    """
    settings = _read_settings_file(get_settings_path())
    if settings is None:
        return _apply_environment(_default_settings())

    repairs = [
        _normalize_model(settings),
        _normalize_project_root(settings),
        _clamp(settings, "max_steps", DEFAULT_MAX_STEPS, MAX_STEPS_RANGE, int),
        _clamp(settings, "temperature", DEFAULT_TEMPERATURE, TEMPERATURE_RANGE, float),
        _normalize_log_level(settings),
    ]
    if any(repairs):
        save_settings(settings)
    return _apply_environment(settings)


def _apply_environment(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment overrides that are never persisted."""
    root_override = os.getenv(PROJECT_ROOT_ENV_VAR, "").strip()
    if not root_override:
        return settings
    return {**settings, "project_root": root_override}


def save_settings(settings: Dict[str, Any]) -> None:
    """Write ``settings`` as indented JSON; failures are logged, not raised."""
    settings_path = get_settings_path()
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings, indent=4), encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to save settings to %s: %s", settings_path, exc)
        return
    logger.info("Settings saved to %s", settings_path)
