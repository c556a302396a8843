"""
Custom exception classes and error handling.

Every failure the session engine can recover from is a CourtsideError.
The navigator shows str(exc) in the status line and stays on the current
screen; nothing here is fatal.
"""
from typing import Optional


class CourtsideError(Exception):
    """Base application exception with consistent structure."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code

    def __str__(self) -> str:
        return self.detail


class ValidationError(CourtsideError):
    """User input failed a declared rule."""

    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(detail=detail, error_code=error_code)
        self.field = field


class NotFoundError(CourtsideError):
    """Referenced record vanished between listing and action."""

    def __init__(self, resource: str, identifier):
        super().__init__(
            detail=f"{resource} not found: {identifier}",
            error_code="NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class ConflictError(CourtsideError):
    """Resource conflict (e.g., duplicate subscription)."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="CONFLICT")


class PersistenceError(CourtsideError):
    """A repository call failed."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="PERSISTENCE_ERROR")
