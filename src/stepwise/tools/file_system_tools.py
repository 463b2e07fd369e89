"""File system-related tool functions for Stepwise.

This module contains the read-only directory listing tool.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from stepwise.utils.paths import confine_path, ensure_root

LOGGER = logging.getLogger(__name__)


def read_directory(root: str | Path, path: str | None = None) -> dict[str, Any]:
    """List the immediate children of a directory under the project root.

    Args:
        root: Project root the listing is confined to
        path: Directory to list, relative to the root (default: the root)

    Returns:
        Dictionary with "path", "items" and "message" keys. Each item has:
        name, path, is_directory, size, created
    """
    LOGGER.info("TOOL CALLED: read_directory(%s)", path)
    display_path = path or "."
    try:
        target = confine_path(path, root)
        display_path = target.as_posix()
        ensure_root(root)
        items = [_describe(entry) for entry in sorted(target.iterdir(), key=lambda p: p.name)]
        return {
            "path": display_path,
            "items": items,
            "message": f"Successfully read directory: {display_path}",
        }
    except (OSError, ValueError) as exc:
        LOGGER.warning("Failed to read directory %s: %s", display_path, exc)
        return {
            "path": display_path,
            "items": [],
            "message": f"Error reading directory {display_path}: {exc}",
        }


def _describe(entry: Path) -> dict[str, Any]:
    """Return the listing record for one directory entry."""
    stats = entry.stat()
    created = getattr(stats, "st_birthtime", None) or stats.st_ctime
    return {
        "name": entry.name,
        "path": str(entry.resolve()),
        "is_directory": entry.is_dir(),
        "size": stats.st_size,
        "created": datetime.fromtimestamp(created, tz=timezone.utc).isoformat(),
    }


__all__ = ["read_directory"]
