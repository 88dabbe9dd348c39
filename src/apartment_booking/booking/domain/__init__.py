from .entity import Booking
from .enum import BookingStatus, PolicyViolationReason
from .exception import (
    BookingConflictException,
    BookingValidationException,
    InvalidRangeException,
    PolicyViolationException,
)
from .factory import BookingFactory, NormalizedBooking
from .repository import BookingCalendar, BookingRepository
from .service import (
    BookingValidator,
    CancellationPolicy,
    ValidationError,
    ValidationResult,
    compute_price,
    find_conflicts,
    is_available,
)
from .value_object import BookingId, BookingRequest, DateRange

__all__ = [
    "Booking",
    "BookingId",
    "BookingRequest",
    "BookingStatus",
    "DateRange",
    "PolicyViolationReason",
    "InvalidRangeException",
    "BookingValidationException",
    "BookingConflictException",
    "PolicyViolationException",
    "BookingFactory",
    "NormalizedBooking",
    "BookingCalendar",
    "BookingRepository",
    "BookingValidator",
    "CancellationPolicy",
    "ValidationError",
    "ValidationResult",
    "compute_price",
    "find_conflicts",
    "is_available",
]
