"""
Domain Exceptions.

Configuration and invocation errors are raised immediately and never routed
through a reporter. AttributeComputationError is the only recoverable,
per-record error; FatalRunError is raised by reporters to end a run early.
"""

from __future__ import annotations

from typing import Any, Optional

from structure_curation.domain.entities import ErrorCode


class CurationError(Exception):
    """Base class for all curation errors."""


class NullInputError(CurationError, TypeError):
    """Raised when a required argument is None."""

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument
        self.message = message


class InvalidConfigurationError(CurationError, ValueError):
    """Raised when a processing step or pipeline is configured with illegal values."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class MissingIdentityError(CurationError, LookupError):
    """Raised when a record has never been assigned a record id."""


class MalformedIdentityError(CurationError, ValueError):
    """Raised when a stored record id is not a non-negative integral value or is not unique."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class NotInitializedError(CurationError, RuntimeError):
    """Raised when a reporter is used before initialize() was called."""


class AttributeComputationError(CurationError):
    """Raised when an attribute of a single record cannot be computed."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNEXPECTED_EXCEPTION_ERROR,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message


class FatalRunError(CurationError):
    """Raised by a reporter to terminate a curation run early."""


class ReportValidationError(CurationError):
    """Raised by finalize() when the collected diagnostics are not acceptable."""

    def __init__(
        self,
        message: str,
        disallowed_count: int = 0,
        ended_with_fatal_exception: bool = False,
    ) -> None:
        super().__init__(message)
        self.disallowed_count = disallowed_count
        self.ended_with_fatal_exception = ended_with_fatal_exception
