"""Error Hierarchy — typed, categorized exceptions for SeatFinder failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Empty results, inverted rank ranges and unknown categories are NOT errors —
      the pipeline represents them as empty ResultSets
    - to_response() produces the REST envelope; to_view_error() the compact form
      stored on a catalogue view
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SeatFinderError base: FastAPI global handler catches all
    - SourceTimeoutError subclasses SourceUnavailableError: callers that only care
      "the fetch failed" catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    view_id: str | None = None
    request_seq: int | None = None
    source_url: str | None = None
    user_message: str | None = None


class SeatFinderError(Exception):
    """Base exception for all SeatFinder errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "view_id": self.context.view_id,
                    "request_seq": self.context.request_seq,
                    "source_url": self.context.source_url,
                },
            }
        }

    def to_view_error(self) -> dict:
        """Compact error shape stored on a catalogue view after a failed refresh."""
        return {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "severity": self.severity.value,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ViewNotFoundError(SeatFinderError):
    """Requested catalogue view does not exist (or was evicted)."""
    def __init__(self, view_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Catalogue view '{view_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.view_id = view_id


class UnsupportedExportFormatError(SeatFinderError):
    """Export requested in a format no renderer handles."""
    def __init__(self, export_format: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported export format: {export_format}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.export_format = export_format


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SourceUnavailableError(SeatFinderError):
    """Student data source failed: network, non-success status, or malformed payload."""
    def __init__(
        self,
        message: str,
        reason: str,
        context: ErrorContext | None = None,
        *,
        code: str = "SOURCE_UNAVAILABLE",
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        http_status: int = 503,
    ):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "Failed to load data. Please try again."
        super().__init__(
            f"Student source unavailable ({reason}): {message}",
            code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.reason = reason


class SourceTimeoutError(SourceUnavailableError):
    """Student data source did not answer within the configured timeout."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"no response within {timeout_seconds}s", "timeout", context,
            code="SOURCE_TIMEOUT", category=ErrorCategory.TIMEOUT,
            http_status=504,
        )
        self.timeout_seconds = timeout_seconds


class RefreshInterruptedError(SeatFinderError):
    """A view refresh ended without a source outcome (cancelled or crashed)."""
    def __init__(self, cause: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "Loading was interrupted. Please try again."
        super().__init__(
            f"View refresh interrupted: {cause}",
            "REFRESH_INTERRUPTED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, ctx, 500,
        )
        self.cause = cause
