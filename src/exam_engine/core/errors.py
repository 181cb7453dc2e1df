"""
Exception types raised by the exam engine.

Fatal errors (InvalidQuestionSet, InvalidTransition, AttemptFinished) bubble
to the caller. CorruptPersistedState is raised and handled inside the
autosave manager; callers never see it.
"""

from __future__ import annotations

from typing import Any


class ExamEngineError(Exception):
    """Base class for all engine errors."""


class ValidationError(ExamEngineError):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class InvalidQuestionSet(ValidationError):
    """Raised when a question set cannot be used to start an attempt."""


class CorruptPersistedState(ExamEngineError):
    """Raised when a persisted attempt blob cannot be restored."""

    def __init__(self, message: str, session_key: str = ""):
        super().__init__(message)
        self.session_key = session_key


class InvalidTransition(ExamEngineError):
    """Raised when the status machine receives a value it does not know."""

    def __init__(self, status: Any, event: Any):
        super().__init__(f"No transition for status={status!r} event={event!r}")
        self.status = status
        self.event = event


class AttemptFinished(ExamEngineError):
    """Raised when an attempt is mutated after it has been submitted."""
