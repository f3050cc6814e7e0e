"""Error Hierarchy — typed, categorized exceptions for eligibility failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input-shape errors (400-level) mean the caller broke the document contract
    - Configuration errors (500-level) mean the service cannot build its policy
    - A check failing is NEVER an exception: it is a HidePaymentMethod decision
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EligibilityError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    policy_mode: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class EligibilityError(Exception):
    """Base exception for all eligibility engine errors."""

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
                    "policy_mode": self.context.policy_mode,
                    "field": self.context.field,
                },
            }
        }


# ─── Contract Errors (400-level) ────────────────────────────────

class InputShapeError(EligibilityError):
    """Input document violates its structural contract (wrong container type)."""
    def __init__(self, field: str, expected: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            f"Input field '{field}' must be {expected}",
            "INPUT_SHAPE_VIOLATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


# ─── Configuration Errors (500-level) ───────────────────────────

class UnknownPolicyModeError(EligibilityError):
    """Configured policy mode is not one of the known generations."""
    def __init__(self, mode: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.policy_mode = str(mode)
        super().__init__(
            f"Unknown policy mode '{mode}'",
            "UNKNOWN_POLICY_MODE", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.mode = mode


class PolicyConfigurationError(EligibilityError):
    """A policy override has a value the engine cannot run with."""
    def __init__(self, setting: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid policy setting '{setting}': {reason}",
            "POLICY_MISCONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting
