"""
Error types raised by the report services.

``ParameterValidationError`` is always caused by the client and maps
to HTTP 400.  ``UpstreamError`` wraps failures of the storage layer
and maps to HTTP 500.  Neither is retried.
"""

from enum import Enum


class ValidationErrorKind(str, Enum):
    INVALID_MONTH = "InvalidMonth"
    INVALID_YEAR = "InvalidYear"
    MISSING_CLIENT_CODE = "MissingClientCode"
    INVALID_CODE = "InvalidCode"


class ParameterValidationError(ValueError):
    """A query-string parameter failed validation.

    ``message`` is human readable and is returned to the caller as is.
    """

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class UpstreamError(RuntimeError):
    """The reporting database failed or returned an unusable row."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
