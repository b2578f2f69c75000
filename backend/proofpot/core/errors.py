"""Error Hierarchy — typed, categorized exceptions for all ProofPot failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller; infrastructure errors (500-level) are critical
    - Each constraint violation maps to exactly one error class, so callers can tell
      "already exists" from "not permitted" from "not found"
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ProofPotError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    PERMISSION = "permission"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    content_hash: str | None = None
    token_id: str | None = None
    caller: str | None = None


class ProofPotError(Exception):
    """Base exception for all ProofPot errors."""

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
                    "token_id": self.context.token_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(ProofPotError):
    """Boundary input failed validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class DuplicateHashError(ProofPotError):
    """Content hash already has a registry entry."""
    def __init__(self, content_hash: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.content_hash = content_hash
        super().__init__(
            f"Recipe hash {content_hash} already exists",
            "DUPLICATE_HASH", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.content_hash = content_hash


class InvalidCreatorError(ProofPotError):
    """Creator identity is the null identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Creator address cannot be zero",
            "INVALID_CREATOR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidOwnerError(ProofPotError):
    """Token recipient is the null identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Token owner address cannot be zero",
            "INVALID_OWNER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidAdministratorError(ProofPotError):
    """Proposed administrator is the null identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Administrator address cannot be zero",
            "INVALID_ADMINISTRATOR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnauthorizedError(ProofPotError):
    """Caller is not permitted to perform the operation."""
    def __init__(self, caller: str | None, action: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.caller = caller
        super().__init__(
            f"Caller is not permitted to {action}",
            "UNAUTHORIZED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.caller = caller
        self.action = action


class TokenNotFoundError(ProofPotError):
    """Token id is unknown to the ledger."""
    def __init__(self, token_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.token_id = token_id
        super().__init__(
            f"Token '{token_id}' not found",
            "TOKEN_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.token_id = token_id


class ResourceNotFoundError(ProofPotError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ProofPotError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(ProofPotError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
