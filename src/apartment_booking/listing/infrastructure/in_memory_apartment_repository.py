from threading import Lock

from apartment_booking.listing.domain.entity import Apartment
from apartment_booking.listing.domain.repository import ApartmentRepository
from apartment_booking.listing.domain.value_object import ApartmentId


class InMemoryApartmentRepository(ApartmentRepository):
    """Process-local listing store for local runs and tests"""

    def __init__(self, apartments: list[Apartment] | None = None) -> None:
        self._items: dict[ApartmentId, Apartment] = {}
        self._lock = Lock()
        for apartment in apartments or []:
            self.save(apartment)

    def save(self, apartment: Apartment) -> None:
        with self._lock:
            self._items[apartment.id] = apartment

    def find_by_id(self, apartment_id: ApartmentId) -> Apartment | None:
        with self._lock:
            return self._items.get(apartment_id)
