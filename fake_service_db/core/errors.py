"""Error Hierarchy — typed, categorized exceptions for every fake-service-db failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status an envelope reporting it should use
    - message is the raw text; callers decide whether it reaches a client

Design Decisions:
    - Single hierarchy with FakeServiceError base: one global handler turns any of them
      into an envelope response
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DATABASE = "database"
    SERIALIZATION = "serialization"
    DECODE = "decode"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None


class FakeServiceError(Exception):
    """Base exception for all fake-service-db errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def log_fields(self) -> dict:
        """Extra fields for structured log records."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "operation": self.context.operation,
        }


# ─── Envelope Errors ────────────────────────────────────────────

class DecodeError(FakeServiceError):
    """JSON document could not be decoded into an envelope."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DECODE_ERROR", ErrorCategory.DECODE,
            ErrorSeverity.ERROR, context, 400,
        )


class SerializationError(FakeServiceError):
    """Envelope holds a value with no JSON representation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SERIALIZATION_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Store Errors ───────────────────────────────────────────────

class StoreConnectionError(FakeServiceError):
    """Store connection pool could not be created at startup."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STORE_CONNECTION_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class DataAccessError(FakeServiceError):
    """Query execution or row decoding failed.

    message is the underlying driver text, unprefixed: it becomes the
    envelope body of the failing request.
    """
    def __init__(
        self,
        message: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DATABASE,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "DATA_ACCESS_ERROR", category,
            ErrorSeverity.ERROR, ctx, 500,
        )
        self.operation = operation
