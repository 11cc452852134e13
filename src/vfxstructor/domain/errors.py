from __future__ import annotations

"""
Domain Error Hierarchy.

All failures surfaced by the core services derive from StructorError and carry
a human-readable message suitable for direct display in the CLI.
"""

from typing import Optional


class StructorError(Exception):
    """Base class for every error raised by the vfxstructor core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StructorIOError(StructorError):
    """
    Filesystem failure (missing path, unreadable entry, permission denied).

    Attributes:
        path: The offending filesystem path.
        reason: Underlying OS error message, if any.
    """

    def __init__(self, message: str, path: str = "", reason: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.reason = reason


class TemplateParseError(StructorError):
    """Template document is not valid JSON or does not match the schema."""


class ValidationError(StructorError):
    """Requested operation violates a structural rule of the project layout."""
