from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import UserId


@dataclass(frozen=True)
class BookingRequest:
    """Create/edit input accepted by the admission engine

    ``claimed_total_price`` is whatever the client displayed; it is kept
    for logging only and never used as the booking price.
    """

    apartment_id: ApartmentId
    guest_id: UserId
    start_date: date
    end_date: date
    guest_count: int
    claimed_total_price: Decimal | None = None
