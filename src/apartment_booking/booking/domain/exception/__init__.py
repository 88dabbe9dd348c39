from .exceptions import (
    BookingConflictException,
    BookingValidationException,
    InvalidRangeException,
    PolicyViolationException,
)

__all__ = [
    "InvalidRangeException",
    "BookingValidationException",
    "BookingConflictException",
    "PolicyViolationException",
]
