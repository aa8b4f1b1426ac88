"""Error Hierarchy - typed, categorized exceptions for every chat failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are raised before any store access and name one parameter
    - Store errors always carry the operation name and the original cause (__cause__)
    - to_response() produces the REST envelope; debug_info never leaves the process

Design Decisions:
    - Single hierarchy with ChatError base: FastAPI global handler catches all
    - InvalidParameterError is also an AssertionError so callers can treat it as
      a failed precondition
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
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for diagnostics."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class ChatError(Exception):
    """Base exception for all chat backend errors."""

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
            }
        }


# --- Caller Errors (400-level) ----------------------------------

class InvalidParameterError(ChatError, AssertionError):
    """A parameter failed a shape or type check."""
    def __init__(self, message: str, param: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.param = param


class AuthenticationRequiredError(ChatError):
    """Caller is not logged in, or the login has expired."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Login required", "AUTHENTICATION_REQUIRED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(ChatError):
    """Caller is logged in but may not touch the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(ChatError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# --- Infrastructure Errors (500-level) --------------------------

class DatabaseError(ChatError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class UsernameTakenError(DatabaseError):
    """Insert lost a race against another login for the same username."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"username '{username}' already exists", "create_user", context,
        )
        self.code = "USERNAME_TAKEN"
        self.category = ErrorCategory.CONFLICT
        self.severity = ErrorSeverity.WARNING
        self.http_status = 409
        self.username = username


class InternalError(ChatError):
    """Anything the backend did not anticipate; details stay in the logs."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context, 500,
        )
