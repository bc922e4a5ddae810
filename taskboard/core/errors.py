"""
Typed application errors.

Every error raised across layer boundaries is an AppError carrying a fixed
ErrorKind plus context. The HTTP boundary inspects the kind explicitly to
pick a status code and body.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorKind(str, Enum):
    """Error kind enumeration."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL = "INTERNAL"


class AppError(Exception):
    """Base error with a kind, a human message and free-form context."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, message={self.message!r})"


class PayloadValidationError(AppError):
    """Client payload failed schema rules."""

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Iterable[Any]):
        errors = list(errors)
        super().__init__("Request payload is invalid", {"errors": errors})
        self.errors: List[Any] = errors


class RecordNotFound(AppError):
    """No record matches the given id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, record_id: str):
        super().__init__(f"Record not found: {record_id}", {"id": record_id})
        self.record_id = record_id


class InvalidRecordId(AppError):
    """The id cannot identify any record in this storage engine."""

    kind = ErrorKind.INVALID_ID

    def __init__(self, record_id: Any, reason: str = "Invalid task id"):
        super().__init__(reason, {"id": record_id})
        self.record_id = record_id


class StorageUnavailable(AppError):
    """The storage engine is unreachable or failed for a reason other than absence."""

    kind = ErrorKind.STORAGE_UNAVAILABLE

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        message = f"Storage operation '{operation}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, {"operation": operation})
        self.operation = operation
