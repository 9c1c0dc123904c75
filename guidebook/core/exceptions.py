from __future__ import annotations

"""Guidebook exception classes.

Only loading-time problems (prototype files, content resources) are raised.
Tree construction, selection and filtering degrade to a visible UI state
instead and report through logging.
"""

from typing import Optional


class GuidebookError(Exception):
    """Base exception for all guidebook errors."""

    def __init__(self, message: str, entry_id: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.entry_id = entry_id
        self.cause = cause

    def __str__(self) -> str:
        if self.entry_id:
            return f"[Entry: {self.entry_id}] {super().__str__()}"
        return super().__str__()


class PrototypeError(GuidebookError):
    """Raised when guide entry prototype data is invalid or unreadable."""

    def __init__(self, message: str, entry_id: Optional[str] = None,
                 validation_errors: Optional[list[str]] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, entry_id, cause)
        self.validation_errors = validation_errors or []


class ResourceNotFoundError(GuidebookError):
    """Raised when a content reference does not resolve to a readable file."""

    def __init__(self, reference: str, cause: Optional[Exception] = None) -> None:
        self.reference = reference
        super().__init__(f"Content resource not found: '{reference}'", cause=cause)
