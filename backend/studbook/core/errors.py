"""Error Hierarchy — typed, categorized exceptions for all Studbook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Precondition errors (400-level) are raised BEFORE any new snapshot is computed
    - IntegrityFaultError and PersistenceFailureError are the only errors that may leave
      the durable store out of step with the in-memory model
    - to_response() produces the REST envelope; no internal details in user-facing messages

Design Decisions:
    - Single hierarchy with StudbookError base: FastAPI global handler catches all
    - ErrorContext as dataclass: operation + affected ids for manual reconciliation,
      without coupling the core to the logging framework
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
    DATABASE = "database"
    INTEGRITY = "integrity"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and reconciliation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    project_id: str | None = None
    affected_ids: list[str] = field(default_factory=list)
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class StudbookError(Exception):
    """Base exception for all Studbook errors."""

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
                    "operation": self.context.operation,
                    "project_id": self.context.project_id,
                    "affected_ids": self.context.affected_ids,
                },
            }
        }


# ─── Precondition Errors (400-level) ────────────────────────────

class NoOpTransferError(StudbookError):
    """Source and target partition are the same."""
    def __init__(self, project_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Source and target project are both '{project_id}'",
            "NO_OP_TRANSFER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.project_id = project_id


class EmptySelectionError(StudbookError):
    """Transfer requested with nothing selected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Selection is empty. Pick at least one record to transfer.",
            "EMPTY_SELECTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidReferenceError(StudbookError):
    """A named id does not exist where the operation requires it."""
    def __init__(
        self, resource_type: str, resource_id: str, reason: str = "not found",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' {reason}",
            "INVALID_REFERENCE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidProjectNameError(StudbookError):
    """Project name is empty after stripping whitespace."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Project name cannot be empty or whitespace",
            "INVALID_PROJECT_NAME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class LastProjectViolationError(StudbookError):
    """Deleting the project would leave the system with zero partitions."""
    def __init__(self, project_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Project '{project_id}' is the only remaining project and cannot be deleted",
            "LAST_PROJECT_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.project_id = project_id


# ─── Fault Errors (500-level) ───────────────────────────────────

class IntegrityFaultError(StudbookError):
    """Post-condition hierarchy check failed — a logic bug, not user error."""
    def __init__(
        self, operation: str, violations: list, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        if not ctx.affected_ids:
            ctx.affected_ids = [v.record_id for v in violations]
        ctx.user_message = ctx.user_message or (
            "The operation was aborted because it would break record integrity."
        )
        detail = ", ".join(f"{v.kind.value}:{v.record_id}" for v in violations)
        if not detail and ctx.debug_info:
            detail = str(ctx.debug_info.get("reason", ""))
        super().__init__(
            f"{operation} failed the integrity check: {detail}",
            "INTEGRITY_FAULT", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.violations = violations


class DatabaseError(StudbookError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class PersistenceFailureError(StudbookError):
    """Write-back failed after a successful in-memory computation."""
    def __init__(
        self,
        operation: str,
        committed_steps: list[str],
        failed_step: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        ctx.debug_info = {
            **(ctx.debug_info or {}),
            "committed_steps": committed_steps,
            "failed_step": failed_step,
        }
        committed = ", ".join(committed_steps) or "none"
        super().__init__(
            f"{operation} failed writing {failed_step}; already committed: {committed}",
            "PERSISTENCE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
        self.committed_steps = committed_steps
        self.failed_step = failed_step

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["context"]["committed_steps"] = self.committed_steps
        response["error"]["context"]["failed_step"] = self.failed_step
        return response
