"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are the caller's fault; store errors (500-level) are ours
    - The failure kind survives every layer: a timeout is never reported as not-found
    - Original causes are chained (raise ... from exc), never swallowed
    - to_response() produces the REST envelope; no internal details in messages

Design Decisions:
    - Single hierarchy with GatewayError base: FastAPI global handler catches all
    - MalformedQueryError subclasses ClientInputError: callers catching "bad input"
      also catch bad queries, handlers still see the precise code
    - StoreTimeoutError, not TimeoutError: the builtin name stays available for
      the services that translate it
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    TIMEOUT = "timeout"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    content_hash: str | None = None
    index_name: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "content_hash": self.context.content_hash,
                    "index_name": self.context.index_name,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ClientInputError(GatewayError):
    """Request input rejected before or by the store."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: ErrorContext | None = None,
        code: str = "INVALID_INPUT",
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class MalformedQueryError(ClientInputError):
    """Serialized query could not be decoded into a SearchQuery."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed query: {reason}", "query", context, "MALFORMED_QUERY",
        )


class NotFoundError(GatewayError):
    """No content stored under the requested hash."""
    def __init__(self, content_hash: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.content_hash = content_hash
        super().__init__(
            f"No content found for hash '{content_hash}'",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.content_hash = content_hash


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreTimeoutError(GatewayError):
    """Backing store call did not complete before its deadline."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} timed out",
            "STORE_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, context, 504,
        )
        self.operation = operation


class BackendError(GatewayError):
    """Any other backing store failure."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Store {operation} failed: {message}",
            "BACKEND_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.operation = operation
