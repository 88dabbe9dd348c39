from enum import Enum


class PolicyViolationReason(str, Enum):
    CANCELLATION_WINDOW_EXPIRED = "CancellationWindowExpired"
    BOOKING_ALREADY_CANCELLED = "BookingAlreadyCancelled"
