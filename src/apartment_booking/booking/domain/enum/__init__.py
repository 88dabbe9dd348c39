from .booking_status import BookingStatus
from .policy_violation_reason import PolicyViolationReason

__all__ = ["BookingStatus", "PolicyViolationReason"]
