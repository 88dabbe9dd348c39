from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.factory import NormalizedBooking
from apartment_booking.booking.domain.service.availability_checker import (
    is_available,
)
from apartment_booking.booking.domain.service.price_calculator import compute_price
from apartment_booking.booking.domain.value_object import (
    BookingId,
    BookingRequest,
    DateRange,
)
from apartment_booking.listing.domain.entity import Apartment

DEFAULT_MAX_ADVANCE_DAYS = 180


@dataclass(frozen=True)
class ValidationError:
    """A single failed booking rule, keyed by the offending field"""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a booking request

    Exactly one of ``booking`` and ``errors`` is populated.
    """

    booking: NormalizedBooking | None = None
    errors: tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


class BookingValidator:
    """Business-rule checks shared by booking creation and edits

    Every rule runs even after an earlier one fails, so the caller can
    report all problems with a request at once.
    """

    def __init__(self, max_advance_days: int = DEFAULT_MAX_ADVANCE_DAYS) -> None:
        self._max_advance_days = max_advance_days

    def validate(
        self,
        request: BookingRequest,
        apartment: Apartment,
        existing_bookings: Iterable[Booking],
        today: date,
        exclude_booking_id: BookingId | None = None,
        require_listed: bool = True,
    ) -> ValidationResult:
        errors: list[ValidationError] = []

        if request.start_date <= today:
            errors.append(
                ValidationError("start_date", "Start date must be in the future")
            )
        elif request.start_date > today + timedelta(days=self._max_advance_days):
            errors.append(
                ValidationError(
                    "start_date",
                    f"Start date cannot be more than {self._max_advance_days} "
                    "days ahead",
                )
            )

        stay: DateRange | None = None
        if request.end_date <= request.start_date:
            errors.append(
                ValidationError("end_date", "End date must be after the start date")
            )
        else:
            stay = DateRange(start=request.start_date, end=request.end_date)

        if request.guest_count < 1:
            errors.append(
                ValidationError("guest_count", "At least one guest is required")
            )
        elif request.guest_count > apartment.max_occupancy:
            errors.append(
                ValidationError(
                    "guest_count",
                    f"Guest count cannot exceed {apartment.max_occupancy}",
                )
            )

        if apartment.is_owned_by(request.guest_id):
            errors.append(
                ValidationError("guest_id", "Hosts cannot book their own apartment")
            )

        if request.apartment_id != apartment.id:
            errors.append(
                ValidationError(
                    "apartment_id", "Booking request does not match the apartment"
                )
            )
        if require_listed and not apartment.is_available:
            errors.append(
                ValidationError(
                    "apartment_id", "This apartment is not open for bookings"
                )
            )

        # no range to check when the dates are inverted
        if stay is not None and not is_available(
            apartment.id, stay, existing_bookings, exclude_booking_id
        ):
            errors.append(
                ValidationError(
                    "stay", "The apartment is not available for the selected dates"
                )
            )

        if errors or stay is None:
            return ValidationResult(errors=tuple(errors))

        return ValidationResult(
            booking=NormalizedBooking(
                apartment_id=apartment.id,
                guest_id=request.guest_id,
                host_id=apartment.owner_id,
                stay=stay,
                guest_count=request.guest_count,
                total_price=compute_price(stay, apartment.price_per_night),
            )
        )
