"""Error Hierarchy - typed, categorized exceptions for all BizDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BizDeskError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    INTERNAL = "internal"
    CONFLICT = "conflict"
    RENDERING = "rendering"


@dataclass
class ErrorContext:
    """Context carried by an error into logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None
    bill_id: str | None = None
    booking_id: str | None = None
    debug_info: dict[str, Any] | None = None


class BizDeskError(Exception):
    """Base exception for all BizDesk errors."""

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
                    "customer_id": self.context.customer_id,
                    "bill_id": self.context.bill_id,
                    "booking_id": self.context.booking_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BillValidationError(BizDeskError):
    """Bill or payment input violates a billing rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BILL_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class PricingValidationError(BizDeskError):
    """Booking pricing inputs are invalid. Carries every problem found."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        super().__init__(
            "; ".join(errors), "PRICING_VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = list(self.errors)
        return response


class InvalidStateTransitionError(BizDeskError):
    """Entity cannot move from its current status to the requested one."""
    def __init__(
        self, entity: str, current: str, requested: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{entity} cannot move from '{current}' to '{requested}'",
            "INVALID_STATE_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.current = current
        self.requested = requested


class DuplicateTaxInvoiceError(BizDeskError):
    """A booking already has its tax invoice."""
    def __init__(self, booking_id: str, bill_number: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.booking_id = booking_id
        super().__init__(
            f"Booking '{booking_id}' already has tax invoice {bill_number}",
            "DUPLICATE_TAX_INVOICE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.bill_number = bill_number


class PayoutAlreadyExistsError(BizDeskError):
    """A payment payout was already recorded for the booking payout record."""
    def __init__(self, record_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Payment already exists for booking record '{record_id}'",
            "PAYOUT_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class CustomerHasDealsError(BizDeskError):
    """A customer still referenced by deals cannot be deleted."""
    def __init__(self, customer_id: str, deal_count: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.customer_id = customer_id
        super().__init__(
            f"Customer '{customer_id}' still has {deal_count} deal(s)",
            "CUSTOMER_HAS_DEALS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.deal_count = deal_count


class ResourceNotFoundError(BizDeskError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BizDeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DataIntegrityError(BizDeskError):
    """A write broke a database constraint (unique key, foreign key)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATA_INTEGRITY_ERROR", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class DocumentRenderError(BizDeskError):
    """PDF rendering of a bill document failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Document rendering failed: {message}",
            "DOCUMENT_RENDER_ERROR", ErrorCategory.RENDERING,
            ErrorSeverity.CRITICAL, context, 500,
        )
