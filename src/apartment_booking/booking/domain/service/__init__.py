from .availability_checker import find_conflicts, is_available
from .booking_validator import (
    BookingValidator,
    ValidationError,
    ValidationResult,
)
from .cancellation_policy import CancellationPolicy
from .price_calculator import compute_price

__all__ = [
    "compute_price",
    "is_available",
    "find_conflicts",
    "BookingValidator",
    "ValidationError",
    "ValidationResult",
    "CancellationPolicy",
]
