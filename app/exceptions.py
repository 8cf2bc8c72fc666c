from typing import Any, Mapping, Optional


class CanteenError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message, returned to the client as-is
        details: optional mapping with extra context (offending ids, limits)
        code: machine-readable error code used in the response envelope
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Unexpected error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(CanteenError):
    """Raised when a request field is missing, malformed or out of range (400)."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "INVALID_INPUT"


class UnauthorizedError(CanteenError):
    """Raised when the bearer credential is missing or cannot be verified (401)."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(CanteenError):
    """Raised when an authenticated account may not perform the action (403)."""

    http_status = 403
    default_message = "Access denied"
    default_code = "FORBIDDEN"


class NotFoundError(CanteenError):
    """Raised when a requested resource was not found (404)."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(CanteenError):
    """Raised on uniqueness violations, stale references or amount mismatches.

    Reported as 400 so clients see the same status for a token collision
    whether it was caught by the pre-check or by the unique index.
    """

    http_status = 400
    default_message = "Conflict"
    default_code = "CONFLICT"
