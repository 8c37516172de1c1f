from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UpstreamError(DomainError):
    """Raised when the records API is unreachable or answers badly."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PrimaryFetchError(UpstreamError):
    """The work-log fetch failed, so no attendance can be computed for the employee."""


class StorageError(DomainError):
    """Raised when the local settings database cannot be read or written."""
