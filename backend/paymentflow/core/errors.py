"""Error Hierarchy — typed, categorized exceptions for failures outside the pure pipeline.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() always produces the InstructionResult envelope with status_code SY03,
      so clients see one schema whether the instruction or the request was bad
    - No internal details leaked in user-facing messages

Design Decisions:
    - The pipeline itself never raises; these errors exist for the shell (request decoding,
      unexpected exceptions) and are rendered by the global handlers
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from paymentflow.core.domain_types import StatusCode
from paymentflow.core.instruction_result import malformed
from paymentflow.core.status_messages import get_status_reason


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class PaymentFlowError(Exception):
    """Base exception for all shell-level failures."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 200,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the SY03 result envelope."""
        return malformed(self.message).to_response()


class MalformedRequestError(PaymentFlowError):
    """Request body is not JSON or does not match {accounts, instruction}."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        first = details[0] if details else {}
        where = first.get("field") or "body"
        super().__init__(
            f"Malformed request: {where}: {first.get('message', 'invalid value')}",
            "MALFORMED_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.details = details


class InternalProcessingError(PaymentFlowError):
    """Unexpected exception while serving a request — message stays generic."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            get_status_reason(StatusCode.MALFORMED_INSTRUCTION),
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context,
        )
