from enum import Enum


class BookingStatus(str, Enum):
    """Booking lifecycle state"""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
