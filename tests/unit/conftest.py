from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from apartment_booking.booking.applications import BookingAdmissionEngine
from apartment_booking.booking.domain import (
    Booking,
    BookingId,
    BookingRequest,
    BookingStatus,
    DateRange,
)
from apartment_booking.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from apartment_booking.listing.domain import Apartment, ApartmentId
from apartment_booking.listing.infrastructure.in_memory_apartment_repository import (
    InMemoryApartmentRepository,
)
from apartment_booking.shared.domain import IsoDateTime, Money, UserId

FIXED_NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Wall-clock time every engine under test sees"""
    return FIXED_NOW


@pytest.fixture
def day():
    """day(n) -> the date n days after the fixed 'today'"""

    def _day(offset: int) -> date:
        return FIXED_NOW.date() + timedelta(days=offset)

    return _day


@pytest.fixture
def guest_id() -> UserId:
    return UserId(value="guest-1")


@pytest.fixture
def host_id() -> UserId:
    return UserId(value="host-1")


@pytest.fixture
def create_apartment():
    """Apartment factory fixture (factories as fixtures)"""

    def _factory(
        apartment_id: str = "apt-1",
        owner_id: str = "host-1",
        price_per_night: str = "100.00",
        currency: str = "EUR",
        max_occupancy: int = 4,
        is_available: bool = True,
    ) -> Apartment:
        return Apartment(
            id=ApartmentId(value=apartment_id),
            owner_id=UserId(value=owner_id),
            price_per_night=Money.of(price_per_night, currency),
            max_occupancy=max_occupancy,
            is_available=is_available,
        )

    return _factory


@pytest.fixture
def create_booking(day):
    """Booking factory fixture"""

    def _factory(
        booking_id: str | None = None,
        apartment_id: str = "apt-1",
        guest_id: str = "guest-1",
        host_id: str = "host-1",
        start: int = 3,
        end: int = 5,
        guest_count: int = 2,
        price_amount: str = "200.00",
        status: BookingStatus = BookingStatus.ACTIVE,
        created_at: datetime = FIXED_NOW,
    ) -> Booking:
        apartment = ApartmentId(value=apartment_id)
        return Booking(
            id=BookingId(value=booking_id)
            if booking_id
            else BookingId.generate(apartment),
            apartment_id=apartment,
            guest_id=UserId(value=guest_id),
            host_id=UserId(value=host_id),
            stay=DateRange(start=day(start), end=day(end)),
            guest_count=guest_count,
            total_price=Money.of(price_amount, "EUR"),
            created_at=IsoDateTime(created_at),
            status=status,
        )

    return _factory


@pytest.fixture
def create_request(day):
    """BookingRequest factory fixture; dates are offsets from today"""

    def _factory(
        apartment_id: str = "apt-1",
        guest_id: str = "guest-1",
        start: int = 3,
        end: int = 5,
        guest_count: int = 2,
        claimed_total_price: Decimal | None = None,
    ) -> BookingRequest:
        return BookingRequest(
            apartment_id=ApartmentId(value=apartment_id),
            guest_id=UserId(value=guest_id),
            start_date=day(start),
            end_date=day(end),
            guest_count=guest_count,
            claimed_total_price=claimed_total_price,
        )

    return _factory


@pytest.fixture
def apartment_repository(create_apartment):
    return InMemoryApartmentRepository([create_apartment()])


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def engine(apartment_repository, booking_repository, now):
    return BookingAdmissionEngine(
        apartment_repository=apartment_repository,
        booking_repository=booking_repository,
        clock=lambda: now,
    )


@pytest.fixture
def mock_repository():
    """Repository mock fixture"""
    return MagicMock()
