from pydantic import ValidationError

from apartment_booking.booking.domain.exception import (
    BookingConflictException,
    BookingValidationException,
    PolicyViolationException,
)
from apartment_booking.booking.handlers.event_utils import UnauthorizedRequestError
from apartment_booking.booking.handlers.response_models import ErrorResponse
from apartment_booking.shared.domain import (
    AccessDeniedException,
    DomainException,
    ResourceNotFoundException,
)
from apartment_booking.shared.utils import api_response

# Exceptions answered with a 4xx response; anything else is a 500
CLIENT_ERRORS = (DomainException, UnauthorizedRequestError, ValueError)


def _error_response(
    status_code: int, error_code: str, message: str, details: list | None = None
) -> dict:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
    ).model_dump(exclude_none=True)
    return api_response(status_code, body)


def to_error_response(error: Exception) -> dict:
    """Map a domain or request error to an HTTP response"""
    if isinstance(error, ValidationError):
        details = [
            {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
            for e in error.errors()
        ]
        return _error_response(400, "INVALID_REQUEST", "Malformed request", details)
    if isinstance(error, BookingValidationException):
        details = [{"field": e.field, "message": e.message} for e in error.errors]
        return _error_response(
            422, "VALIDATION_FAILED", "Booking request is invalid", details
        )
    if isinstance(error, BookingConflictException):
        return _error_response(409, "CONFLICT", str(error))
    if isinstance(error, PolicyViolationException):
        return _error_response(
            409, "POLICY_VIOLATION", str(error), [{"reason": error.reason.value}]
        )
    if isinstance(error, ResourceNotFoundException):
        return _error_response(404, "NOT_FOUND", str(error))
    if isinstance(error, AccessDeniedException):
        return _error_response(403, "FORBIDDEN", str(error))
    if isinstance(error, UnauthorizedRequestError):
        return _error_response(401, "UNAUTHORIZED", str(error))
    if isinstance(error, DomainException):
        return _error_response(422, "BUSINESS_RULE_VIOLATION", str(error))
    return _error_response(400, "INVALID_REQUEST", str(error))


def internal_error_response() -> dict:
    return _error_response(500, "INTERNAL_ERROR", "Internal server error")
