from .admission_engine import BookingAdmissionEngine
from .booking_queries import BookingQueryService

__all__ = ["BookingAdmissionEngine", "BookingQueryService"]
