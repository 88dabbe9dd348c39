from dataclasses import dataclass

from apartment_booking.booking.domain.entity.booking import Booking
from apartment_booking.booking.domain.enum import BookingStatus
from apartment_booking.booking.domain.value_object import BookingId, DateRange
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import IsoDateTime, Money, UserId


@dataclass(frozen=True)
class NormalizedBooking:
    """Validated booking data with the server-computed price"""

    apartment_id: ApartmentId
    guest_id: UserId
    host_id: UserId
    stay: DateRange
    guest_count: int
    total_price: Money


class BookingFactory:
    """Builds new Booking aggregates"""

    def create(self, normalized: NormalizedBooking, created_at: IsoDateTime) -> Booking:
        """Create an active booking with a freshly issued id"""
        return Booking(
            id=BookingId.generate(normalized.apartment_id),
            apartment_id=normalized.apartment_id,
            guest_id=normalized.guest_id,
            host_id=normalized.host_id,
            stay=normalized.stay,
            guest_count=normalized.guest_count,
            total_price=normalized.total_price,
            created_at=created_at,
            status=BookingStatus.ACTIVE,
        )
