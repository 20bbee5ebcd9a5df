"""Error Hierarchy — typed, categorized exceptions for all BannerDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are only raised in strict mode; mutators never raise
    - Persistence errors (500-level) always propagate to the caller — no local recovery
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with BannerDeskError base: FastAPI global handler catches all
    - ErrorContext as dataclass: tree coordinates travel with the error, not the logger
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    department_id: int | None = None
    section_id: int | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class BannerDeskError(Exception):
    """Base exception for all BannerDesk errors."""

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
                    "department_id": self.context.department_id,
                    "section_id": self.context.section_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DepartmentNotFoundError(BannerDeskError):
    """Referenced department id does not exist."""
    def __init__(self, department_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.department_id = department_id
        super().__init__(
            f"Department {department_id} not found",
            "DEPARTMENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.department_id = department_id


class SectionNotFoundError(BannerDeskError):
    """Referenced section id does not exist within its department."""
    def __init__(
        self, department_id: int, section_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.department_id = department_id
        ctx.section_id = section_id
        super().__init__(
            f"Section {section_id} not found in department {department_id}",
            "SECTION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.department_id = department_id
        self.section_id = section_id


class BannerCapacityExceededError(BannerDeskError):
    """Section already holds the maximum number of banners."""
    def __init__(
        self,
        department_id: int,
        section_id: int,
        capacity: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.department_id = department_id
        ctx.section_id = section_id
        super().__init__(
            f"Section {section_id} already holds {capacity}/{capacity} banners",
            "BANNER_CAPACITY_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.capacity = capacity


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(BannerDeskError):
    """Loading or saving the tree document failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "PERSISTENCE_ERROR",
        category: ErrorCategory = ErrorCategory.PERSISTENCE,
        http_status: int = 503,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.operation = operation


class DocumentNotFoundError(PersistenceError):
    """The persisted tree document does not exist yet."""
    def __init__(self, source: str, context: ErrorContext | None = None):
        super().__init__(
            f"Tree document not found: {source}", "load", context,
            code="DOCUMENT_NOT_FOUND", http_status=404,
        )
        self.source = source


class DocumentMalformedError(PersistenceError):
    """The persisted tree document is not valid JSON or has the wrong shape."""
    def __init__(
        self, source: str, details: list[str], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"details": details}
        super().__init__(
            f"Tree document is malformed: {source}", "load", ctx,
            code="DOCUMENT_MALFORMED", http_status=422,
        )
        self.source = source
        self.details = details


class DatabaseError(PersistenceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}", operation, context,
            code="DATABASE_ERROR", category=ErrorCategory.DATABASE,
        )
