"""File operation tools for materializing generated content.

All writes go through :func:`materialize_file`, which confines the target
under the project root and reports whether the file was created, updated,
or left untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from stepwise.utils.paths import confine_path, ensure_root

LOGGER = logging.getLogger(__name__)


class MaterializeOutcome(str, Enum):
    """Result kinds of a materialization."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MaterializeResult:
    """Outcome of writing a single file."""

    outcome: MaterializeOutcome
    path: str
    message: str

    @property
    def succeeded(self) -> bool:
        return self.outcome is not MaterializeOutcome.FAILED


def materialize_file(root: str | Path, file_name: str, content: str) -> MaterializeResult:
    """Create or update a file under ``root``.

    Args:
        root: Project root every write is confined to
        file_name: Path of the file, relative to the root
        content: Full file contents

    Returns:
        A MaterializeResult; I/O failures are reported, never raised
    """
    LOGGER.info("TOOL CALLED: materialize_file(%s)", file_name)
    display_path = file_name
    try:
        ensure_root(root)
        target = confine_path(file_name, root)
        display_path = target.as_posix()
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = content.encode("utf-8")

        if target.exists():
            if target.read_bytes() == payload:
                LOGGER.info("Unchanged file: %s", display_path)
                return MaterializeResult(
                    MaterializeOutcome.UNCHANGED,
                    display_path,
                    f"File {display_path} unchanged (content identical)",
                )
            target.write_bytes(payload)
            LOGGER.info("Updated file: %s (%d bytes)", display_path, len(payload))
            return MaterializeResult(
                MaterializeOutcome.UPDATED,
                display_path,
                f"File {display_path} updated successfully",
            )

        target.write_bytes(payload)
        LOGGER.info("Created file: %s (%d bytes)", display_path, len(payload))
        return MaterializeResult(
            MaterializeOutcome.CREATED,
            display_path,
            f"File {display_path} created successfully",
        )
    except (OSError, ValueError) as exc:
        LOGGER.exception("Failed to materialize file %s: %s", file_name, exc)
        return MaterializeResult(
            MaterializeOutcome.FAILED,
            display_path,
            f"Error creating/updating file: {exc}",
        )


__all__ = ["MaterializeOutcome", "MaterializeResult", "materialize_file"]
