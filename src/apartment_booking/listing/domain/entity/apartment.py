from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import Entity, Money, UserId


class Apartment(Entity[ApartmentId]):
    """Apartment listing as seen by the booking engine (read-only)"""

    def __init__(
        self,
        id: ApartmentId,
        owner_id: UserId,
        price_per_night: Money,
        max_occupancy: int,
        is_available: bool = True,
    ) -> None:
        super().__init__(id)
        if price_per_night.amount <= 0:
            raise ValueError("Price per night must be positive")
        if max_occupancy < 1:
            raise ValueError("Maximum occupancy must be at least 1")
        self._owner_id = owner_id
        self._price_per_night = price_per_night
        self._max_occupancy = max_occupancy
        self._is_available = is_available

    @property
    def owner_id(self) -> UserId:
        return self._owner_id

    @property
    def price_per_night(self) -> Money:
        return self._price_per_night

    @property
    def max_occupancy(self) -> int:
        return self._max_occupancy

    @property
    def is_available(self) -> bool:
        """Host-controlled listing flag, independent of existing bookings"""
        return self._is_available

    def is_owned_by(self, user_id: UserId) -> bool:
        return self._owner_id == user_id
