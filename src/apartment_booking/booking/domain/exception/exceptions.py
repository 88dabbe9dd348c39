from __future__ import annotations

from typing import TYPE_CHECKING

from apartment_booking.shared.domain import (
    BusinessRuleViolationException,
    DomainException,
)

if TYPE_CHECKING:
    from apartment_booking.booking.domain.enum import PolicyViolationReason
    from apartment_booking.booking.domain.service.booking_validator import (
        ValidationError,
    )


class InvalidRangeException(ValueError):
    """Date range whose end is not after its start"""

    pass


class BookingValidationException(BusinessRuleViolationException):
    """One or more booking rules failed; carries every failure"""

    def __init__(self, errors: tuple[ValidationError, ...]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class BookingConflictException(DomainException):
    """Commit lost a race against a concurrent overlapping admission"""

    pass


class PolicyViolationException(BusinessRuleViolationException):
    """Edit or cancellation refused by the cancellation policy"""

    def __init__(self, reason: PolicyViolationReason, message: str) -> None:
        self.reason = reason
        super().__init__(message)
