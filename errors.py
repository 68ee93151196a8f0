"""
Error taxonomy for LedgerDesk.

Every failure reaching a caller is one of the ``AppError`` subclasses below.
Each kind has a stable machine-readable ``code``. Infrastructure errors
(database, file system, serialization) additionally keep the low-level cause
in ``details``; domain errors never expose internals.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for all errors surfaced by the transaction core."""

    code = "APP_ERROR"
    label = "Application"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"{self.label} error: {self.message}"


class ValidationError(AppError):
    """Malformed or out-of-range input. The caller can fix the request."""

    code = "VALIDATION_ERROR"
    label = "Validation"


class NotFoundError(AppError):
    """A referenced entity or id does not exist."""

    code = "NOT_FOUND"
    label = "Not found"


class BusinessError(AppError):
    """The operation violates a domain rule."""

    code = "BUSINESS_ERROR"
    label = "Business logic"


class ExternalError(AppError):
    code = "EXTERNAL_ERROR"
    label = "External service"


class InfrastructureError(AppError):
    """
    Base for faults below the domain layer.
    The user-facing message is fixed; the cause goes into ``details``.
    """

    public_message = "Operation failed"

    def __init__(self, cause: Any):
        super().__init__(self.public_message, details=str(cause))

    def __str__(self) -> str:
        return f"{self.label} error: {self.details}"


class DatabaseError(InfrastructureError):
    code = "DATABASE_ERROR"
    label = "Database"
    public_message = "Database operation failed"


class IoError(InfrastructureError):
    code = "IO_ERROR"
    label = "IO"
    public_message = "File system operation failed"


class SerializationError(InfrastructureError):
    code = "SERIALIZATION_ERROR"
    label = "Serialization"
    public_message = "Data serialization failed"


@dataclass
class ErrorResponse:
    """Serializable error payload handed back across the command boundary."""
    error: str
    code: str
    details: Optional[str] = None

    @classmethod
    def from_error(cls, exc: AppError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code, details=exc.details)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_dict())
        except (TypeError, ValueError) as e:
            raise SerializationError(e) from e
