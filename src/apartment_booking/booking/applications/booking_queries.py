from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.repository import BookingRepository
from apartment_booking.booking.domain.value_object import BookingId
from apartment_booking.shared.domain import (
    AccessDeniedException,
    ResourceNotFoundException,
    UserId,
)


class BookingQueryService:
    """Read-side use cases for guests and hosts"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get_booking(self, booking_id: BookingId, requester_id: UserId) -> Booking:
        """Fetch one booking; only its guest and the apartment's host may see it"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if not booking.is_visible_to(requester_id):
            raise AccessDeniedException(
                f"User {requester_id} cannot view booking {booking_id}"
            )
        return booking

    def list_for_guest(self, guest_id: UserId) -> list[Booking]:
        return self._repository.find_by_guest_id(guest_id)

    def list_for_host(self, host_id: UserId) -> list[Booking]:
        return self._repository.find_by_host_id(host_id)
