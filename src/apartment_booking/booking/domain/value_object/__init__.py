from .booking_id import BookingId
from .booking_request import BookingRequest
from .date_range import DateRange

__all__ = ["BookingId", "BookingRequest", "DateRange"]
