"""Tool utilities for Stepwise."""

from __future__ import annotations

from .file_operations import MaterializeOutcome, MaterializeResult, materialize_file
from .file_system_tools import read_directory
from .tool_manager import TOOL_DESCRIPTIONS, ToolManager

__all__ = [
    "MaterializeOutcome",
    "MaterializeResult",
    "TOOL_DESCRIPTIONS",
    "ToolManager",
    "materialize_file",
    "read_directory",
]
