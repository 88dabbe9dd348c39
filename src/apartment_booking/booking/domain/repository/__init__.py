from .booking_repository import BookingCalendar, BookingRepository

__all__ = ["BookingCalendar", "BookingRepository"]
