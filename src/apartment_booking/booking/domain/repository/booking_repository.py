from abc import abstractmethod
from dataclasses import dataclass
from datetime import date

from apartment_booking.booking.domain.entity.booking import Booking
from apartment_booking.booking.domain.enum import BookingStatus
from apartment_booking.booking.domain.value_object import BookingId
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import IsoDateTime, Repository, UserId


@dataclass(frozen=True)
class BookingCalendar:
    """Active bookings of one apartment as of a calendar version

    ``version`` increases with every committed admission or edit on the
    apartment. Commits pass it back so the store can refuse writes based
    on a stale read.
    """

    apartment_id: ApartmentId
    bookings: tuple[Booking, ...]
    version: int = 0


class BookingRepository(Repository[Booking, BookingId]):
    """Booking store interface

    ``save`` and ``update`` must be atomic with respect to the calendar
    version: a write based on a stale calendar raises
    ``OptimisticLockException`` and changes nothing.
    """

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_calendar(
        self, apartment_id: ApartmentId, since: date | None = None
    ) -> BookingCalendar:
        """Load the apartment's active bookings and current calendar version

        With ``since``, bookings checking out on or before that day are left
        out; they cannot overlap a stay starting on ``since`` or later.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_guest_id(self, guest_id: UserId) -> list[Booking]:
        """Bookings made by a guest, newest first"""
        raise NotImplementedError

    @abstractmethod
    def find_by_host_id(self, host_id: UserId) -> list[Booking]:
        """Bookings on a host's apartments, newest first"""
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking, expected_version: int) -> None:
        """Insert a new booking if the calendar is still at ``expected_version``"""
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: Booking, expected_version: int) -> None:
        """Replace an active booking if the calendar is still at ``expected_version``"""
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        expected_status: BookingStatus,
        updated_at: IsoDateTime,
    ) -> None:
        """Change the status if it still equals ``expected_status``"""
        raise NotImplementedError
