from apartment_booking.booking.domain import (
    BookingStatus,
    DateRange,
    find_conflicts,
    is_available,
)
from apartment_booking.listing.domain import ApartmentId

APARTMENT = ApartmentId(value="apt-1")


class TestIsAvailable:
    def test_empty_calendar_is_available(self, day):
        assert is_available(APARTMENT, DateRange(start=day(3), end=day(5)), [])

    def test_overlapping_booking_is_not_available(self, create_booking, day):
        existing = [create_booking(start=3, end=5)]
        candidate = DateRange(start=day(4), end=day(6))
        assert not is_available(APARTMENT, candidate, existing)

    def test_adjacent_booking_is_available(self, create_booking, day):
        existing = [create_booking(start=3, end=5)]
        candidate = DateRange(start=day(5), end=day(7))
        assert is_available(APARTMENT, candidate, existing)

    def test_excluded_booking_is_ignored(self, create_booking, day):
        own = create_booking(start=3, end=5)
        candidate = DateRange(start=day(3), end=day(5))
        assert is_available(APARTMENT, candidate, [own], exclude_booking_id=own.id)

    def test_exclusion_only_skips_that_booking(self, create_booking, day):
        own = create_booking(start=3, end=5)
        other = create_booking(start=6, end=8)
        candidate = DateRange(start=day(4), end=day(7))
        assert not is_available(
            APARTMENT, candidate, [own, other], exclude_booking_id=own.id
        )

    def test_cancelled_booking_does_not_block(self, create_booking, day):
        existing = [create_booking(start=3, end=5, status=BookingStatus.CANCELLED)]
        candidate = DateRange(start=day(3), end=day(5))
        assert is_available(APARTMENT, candidate, existing)

    def test_other_apartment_does_not_block(self, create_booking, day):
        existing = [create_booking(apartment_id="apt-2", start=3, end=5)]
        candidate = DateRange(start=day(3), end=day(5))
        assert is_available(APARTMENT, candidate, existing)


class TestFindConflicts:
    def test_returns_every_overlapping_booking(self, create_booking, day):
        first = create_booking(start=3, end=5)
        second = create_booking(start=6, end=9)
        untouched = create_booking(start=10, end=12)
        candidate = DateRange(start=day(4), end=day(7))

        conflicts = find_conflicts(APARTMENT, candidate, [first, second, untouched])

        assert conflicts == [first, second]
