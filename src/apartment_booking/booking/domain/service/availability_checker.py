from collections.abc import Iterable

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.value_object import BookingId, DateRange
from apartment_booking.listing.domain.value_object import ApartmentId


def find_conflicts(
    apartment_id: ApartmentId,
    candidate: DateRange,
    existing_bookings: Iterable[Booking],
    exclude_booking_id: BookingId | None = None,
) -> list[Booking]:
    """Active bookings of the apartment whose stay overlaps ``candidate``"""
    return [
        booking
        for booking in existing_bookings
        if _competes(booking, apartment_id, exclude_booking_id)
        and booking.stay.overlaps(candidate)
    ]


def is_available(
    apartment_id: ApartmentId,
    candidate: DateRange,
    existing_bookings: Iterable[Booking],
    exclude_booking_id: BookingId | None = None,
) -> bool:
    """True when no other active booking of the apartment overlaps ``candidate``

    Linear scan; an apartment holds few active bookings at a time.
    """
    for booking in existing_bookings:
        if not _competes(booking, apartment_id, exclude_booking_id):
            continue
        if booking.stay.overlaps(candidate):
            return False
    return True


def _competes(
    booking: Booking,
    apartment_id: ApartmentId,
    exclude_booking_id: BookingId | None,
) -> bool:
    return (
        booking.is_active
        and booking.apartment_id == apartment_id
        and booking.id != exclude_booking_id
    )
