import copy
from datetime import date
from threading import Lock

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.enum import BookingStatus
from apartment_booking.booking.domain.repository import (
    BookingCalendar,
    BookingRepository,
)
from apartment_booking.booking.domain.value_object import BookingId
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import (
    DuplicateResourceException,
    IsoDateTime,
    OptimisticLockException,
    ResourceNotFoundException,
    UserId,
)


class InMemoryBookingRepository(BookingRepository):
    """Process-local booking store

    One lock covers the version check and the write, which makes every
    commit atomic. Stored bookings are copies so callers mutating a loaded
    aggregate never touch the stored state.
    """

    def __init__(self) -> None:
        self._items: dict[BookingId, Booking] = {}
        self._versions: dict[ApartmentId, int] = {}
        self._lock = Lock()

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        with self._lock:
            booking = self._items.get(booking_id)
            return copy.deepcopy(booking) if booking else None

    def find_calendar(
        self, apartment_id: ApartmentId, since: date | None = None
    ) -> BookingCalendar:
        with self._lock:
            bookings = tuple(
                copy.deepcopy(b)
                for b in self._items.values()
                if b.apartment_id == apartment_id
                and b.is_active
                and (since is None or b.stay.end > since)
            )
            return BookingCalendar(
                apartment_id=apartment_id,
                bookings=bookings,
                version=self._versions.get(apartment_id, 0),
            )

    def find_by_guest_id(self, guest_id: UserId) -> list[Booking]:
        return self._newest_first(lambda b: b.guest_id == guest_id)

    def find_by_host_id(self, host_id: UserId) -> list[Booking]:
        return self._newest_first(lambda b: b.host_id == host_id)

    def save(self, booking: Booking, expected_version: int) -> None:
        with self._lock:
            self._check_version(booking.apartment_id, expected_version)
            if booking.id in self._items:
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                )
            self._items[booking.id] = copy.deepcopy(booking)
            self._bump_version(booking.apartment_id)

    def update(self, booking: Booking, expected_version: int) -> None:
        with self._lock:
            stored = self._items.get(booking.id)
            if stored is None:
                raise ResourceNotFoundException(f"Booking not found: {booking.id}")
            if not stored.is_active:
                raise OptimisticLockException(
                    f"Booking {booking.id} is no longer active"
                )
            self._check_version(booking.apartment_id, expected_version)
            self._items[booking.id] = copy.deepcopy(booking)
            self._bump_version(booking.apartment_id)

    def update_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        expected_status: BookingStatus,
        updated_at: IsoDateTime,
    ) -> None:
        with self._lock:
            stored = self._items.get(booking_id)
            if stored is None:
                raise ResourceNotFoundException(f"Booking not found: {booking_id}")
            if stored.status != expected_status:
                raise OptimisticLockException(
                    f"Booking status conflict: expected {expected_status.value}, "
                    f"found {stored.status.value}, booking_id={booking_id}"
                )
            self._items[booking_id] = Booking(
                id=stored.id,
                apartment_id=stored.apartment_id,
                guest_id=stored.guest_id,
                host_id=stored.host_id,
                stay=stored.stay,
                guest_count=stored.guest_count,
                total_price=stored.total_price,
                created_at=stored.created_at,
                updated_at=updated_at,
                status=status,
            )

    def _check_version(self, apartment_id: ApartmentId, expected_version: int) -> None:
        current = self._versions.get(apartment_id, 0)
        if current != expected_version:
            raise OptimisticLockException(
                f"Calendar version conflict for apartment {apartment_id}: "
                f"expected {expected_version}, found {current}"
            )

    def _bump_version(self, apartment_id: ApartmentId) -> None:
        self._versions[apartment_id] = self._versions.get(apartment_id, 0) + 1

    def _newest_first(self, predicate) -> list[Booking]:
        with self._lock:
            matches = [copy.deepcopy(b) for b in self._items.values() if predicate(b)]
        return sorted(matches, key=lambda b: b.created_at.value, reverse=True)
