"""Path confinement for everything Stepwise writes or reads."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def confine_path(file_path: str | None, root: str | Path) -> Path:
    """Clamp ``file_path`` into ``root``.

    Separators are normalized, empty, ``.`` and ``..`` segments are dropped,
    and a leading drive is discarded. When the root's own name shows up in
    the path (``projects/todo-app/index.html`` or ``a/projects/x``), the
    occurrence and everything before it are treated as redundant nesting.

    Args:
        file_path: Caller-supplied path, usually relative
        root: The single project root directory

    Returns:
        A path whose leading segments are exactly ``root``
    """
    root_path = Path(root)
    normalized = posixpath.normpath((file_path or "").replace("\\", "/"))
    parts = [part for part in normalized.split("/") if part and part not in (".", "..")]
    if parts and parts[0].endswith(":"):
        parts = parts[1:]

    if root_path.name in parts:
        parts = parts[parts.index(root_path.name) + 1 :]

    confined = root_path.joinpath(*parts)
    LOGGER.debug("Confined %s -> %s", file_path, confined)
    return confined


def ensure_root(root: str | Path) -> Path:
    """Create the project root when missing and return it."""
    root_path = Path(root)
    root_path.mkdir(parents=True, exist_ok=True)
    return root_path


__all__ = ["confine_path", "ensure_root"]
