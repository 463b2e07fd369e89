"""Field extraction from the backend's free-text step content.

Each extractor returns ``None`` when its patterns do not match; callers keep
whatever value they already had in that case.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from stepwise.config import EXECUTION_KEYWORDS, UPDATE_KEYWORDS

# "The project is ... identified as an HTML web app."
_PROJECT_TYPE_PATTERN = re.compile(r"identified as an? ([\w\s]+)\.")
# Name patterns in precedence order.
_PROJECT_NAME_PATTERNS = (
    re.compile(r"I'll name it '([^']+)'"),
    re.compile(r"Found project '([^']+)'"),
)
# "Found project 'todo-app' in 'projects' with a style.css."
_UPDATE_FILE_PATTERN = re.compile(r"Found project '([^']+)' in '.*' with a ([^']+)\.(\w+)")


class RequestKind(str, Enum):
    """Classification of a user request."""

    NEW_PROJECT = "new_project"
    UPDATE = "update"
    EXECUTION = "execution"


def classify_request(request: str) -> RequestKind:
    """Classify a request by keyword; update words take precedence."""
    lowered = (request or "").lower()
    if any(keyword in lowered for keyword in UPDATE_KEYWORDS):
        return RequestKind.UPDATE
    if any(keyword in lowered for keyword in EXECUTION_KEYWORDS):
        return RequestKind.EXECUTION
    return RequestKind.NEW_PROJECT


def extract_project_type(content: str) -> Optional[str]:
    """Return the project type from ``identified as a(n) X.`` phrasing."""
    match = _PROJECT_TYPE_PATTERN.search(content or "")
    return match.group(1) if match else None


def extract_project_name(content: str) -> Optional[str]:
    """Return the project name; ``I'll name it`` wins over ``Found project``."""
    for pattern in _PROJECT_NAME_PATTERNS:
        match = pattern.search(content or "")
        if match:
            return match.group(1)
    return None


def extract_update_file(content: str) -> Optional[str]:
    """Return ``project/file.ext`` for the file an update request targets."""
    match = _UPDATE_FILE_PATTERN.search(content or "")
    if not match:
        return None
    project, stem, extension = match.groups()
    return f"{project}/{stem}.{extension}"


__all__ = [
    "RequestKind",
    "classify_request",
    "extract_project_name",
    "extract_project_type",
    "extract_update_file",
]
