from abc import abstractmethod

from apartment_booking.listing.domain.entity import Apartment
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import Repository


class ApartmentRepository(Repository[Apartment, ApartmentId]):
    """Listing store interface"""

    @abstractmethod
    def find_by_id(self, apartment_id: ApartmentId) -> Apartment | None:
        """Find an apartment by id"""
        raise NotImplementedError

    @abstractmethod
    def save(self, apartment: Apartment) -> None:
        """Create or replace an apartment listing"""
        raise NotImplementedError
