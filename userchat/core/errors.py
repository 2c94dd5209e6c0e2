"""Error Hierarchy — typed, categorized exceptions for all userchat failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Operation errors (validation, not found, conflict) are recoverable;
      infrastructure errors (database, LLM) are critical
    - render() produces the plain-text line shown to the chat user
    - to_result() produces the dispatch result envelope

Design Decisions:
    - Single hierarchy with UserChatError base: dispatcher boundary catches all
    - Not-found and unknown-operation render without the "Error: " prefix:
      they are negative answers, not failures
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and console handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    retry_after_ms: int | None = None


class UserChatError(Exception):
    """Base exception for all userchat errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def render(self) -> str:
        """Plain-text line for the chat user."""
        return f"Error: {self.message}"

    def to_result(self) -> dict:
        """Convert to dispatch result envelope."""
        return {
            "status": "error",
            "operation": self.context.operation,
            "error_code": self.code,
            "category": self.category.value,
            "message": self.render(),
        }


# ─── Operation Errors ───────────────────────────────────────────

class OperationValidationError(UserChatError):
    """Operation parameters missing, blank or mistyped."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field


class UnknownOperationError(UserChatError):
    """Operation name not in the recognized alias set."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown operation: {operation}",
            "UNKNOWN_OPERATION", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.operation = operation

    def render(self) -> str:
        return self.message


class ResourceNotFoundError(UserChatError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, lookup: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with {lookup} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context,
        )
        self.resource_type = resource_type
        self.lookup = lookup

    def render(self) -> str:
        return self.message


class DuplicateEmailError(UserChatError):
    """Another user already owns the email."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"A user with email '{email}' already exists",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context,
        )
        self.email = email


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(UserChatError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class LLMAPIError(UserChatError):
    """Inference server call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"LLM API error ({api_error_type}): {message}",
            "LLM_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.api_error_type = api_error_type
