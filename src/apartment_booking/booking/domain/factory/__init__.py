from .booking_factory import BookingFactory, NormalizedBooking

__all__ = ["BookingFactory", "NormalizedBooking"]
