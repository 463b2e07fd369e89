"""Utility modules for the Stepwise application."""

from .extraction import (
    RequestKind,
    classify_request,
    extract_project_name,
    extract_project_type,
    extract_update_file,
)
from .paths import confine_path, ensure_root
from .settings import load_settings, save_settings

__all__ = [
    "RequestKind",
    "classify_request",
    "confine_path",
    "ensure_root",
    "extract_project_name",
    "extract_project_type",
    "extract_update_file",
    "load_settings",
    "save_settings",
]
