from apartment_booking.booking.domain.enum import BookingStatus
from apartment_booking.booking.domain.value_object import BookingId, DateRange
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    IsoDateTime,
    Money,
    UserId,
)


class Booking(AggregateRoot[BookingId]):
    """Apartment booking aggregate"""

    def __init__(
        self,
        id: BookingId,
        apartment_id: ApartmentId,
        guest_id: UserId,
        host_id: UserId,
        stay: DateRange,
        guest_count: int,
        total_price: Money,
        created_at: IsoDateTime,
        updated_at: IsoDateTime | None = None,
        status: BookingStatus = BookingStatus.ACTIVE,
    ) -> None:
        super().__init__(id)
        if guest_count < 1:
            raise ValueError("Guest count must be at least 1")
        self._apartment_id = apartment_id
        self._guest_id = guest_id
        self._host_id = host_id
        self._stay = stay
        self._guest_count = guest_count
        self._total_price = total_price
        self._created_at = created_at
        self._updated_at = updated_at
        self._status = status

    @property
    def apartment_id(self) -> ApartmentId:
        return self._apartment_id

    @property
    def guest_id(self) -> UserId:
        return self._guest_id

    @property
    def host_id(self) -> UserId:
        return self._host_id

    @property
    def stay(self) -> DateRange:
        return self._stay

    @property
    def guest_count(self) -> int:
        return self._guest_count

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime | None:
        return self._updated_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == BookingStatus.ACTIVE

    def is_visible_to(self, user_id: UserId) -> bool:
        """Guests see their own bookings, hosts the bookings of their listings"""
        return user_id in (self._guest_id, self._host_id)

    def reschedule(
        self,
        stay: DateRange,
        guest_count: int,
        total_price: Money,
        at: IsoDateTime,
    ) -> None:
        """Replace stay, party size and price in one step"""
        if not self.is_active:
            raise BusinessRuleViolationException("Cannot edit a cancelled booking")
        if guest_count < 1:
            raise ValueError("Guest count must be at least 1")
        self._stay = stay
        self._guest_count = guest_count
        self._total_price = total_price
        self._updated_at = at

    def cancel(self, at: IsoDateTime) -> None:
        if not self.is_active:
            raise BusinessRuleViolationException("Booking is already cancelled")
        self._status = BookingStatus.CANCELLED
        self._updated_at = at
