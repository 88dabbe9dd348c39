import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.enum import BookingStatus, PolicyViolationReason
from apartment_booking.booking.domain.exception import (
    BookingConflictException,
    BookingValidationException,
    PolicyViolationException,
)
from apartment_booking.booking.domain.factory import BookingFactory
from apartment_booking.booking.domain.repository import (
    BookingCalendar,
    BookingRepository,
)
from apartment_booking.booking.domain.service import (
    BookingValidator,
    CancellationPolicy,
    ValidationResult,
    find_conflicts,
)
from apartment_booking.booking.domain.value_object import (
    BookingId,
    BookingRequest,
    DateRange,
)
from apartment_booking.listing.domain.entity import Apartment
from apartment_booking.listing.domain.repository import ApartmentRepository
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import (
    AccessDeniedException,
    IsoDateTime,
    OptimisticLockException,
    ResourceNotFoundException,
    UserId,
)
from apartment_booking.shared.utils import get_logger

logger = get_logger()

DEFAULT_MAX_ATTEMPTS = 3

# Hard stop for commits lost to bookings on other dates. Each such loss means
# another commit landed, so this only trips under sustained write load.
MAX_COMMIT_ROUNDS = 50

BACKOFF_BASE_SECONDS = 0.01
BACKOFF_CAP_SECONDS = 0.2


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _LostCommits:
    overlapping: int = 0
    total: int = 0


class BookingAdmissionEngine:
    """Admits, reschedules and cancels bookings

    Reads are allowed to be stale; the versioned commit in the booking
    repository is what keeps overlapping bookings out. After a lost commit
    the calendar is read again. If a booking overlapping the stay has been
    committed meanwhile, the loss counts against ``max_attempts`` and the
    request is re-validated. A loss to bookings on other dates is retried
    after a jittered backoff without using up that budget.
    """

    def __init__(
        self,
        apartment_repository: ApartmentRepository,
        booking_repository: BookingRepository,
        validator: BookingValidator | None = None,
        policy: CancellationPolicy | None = None,
        factory: BookingFactory | None = None,
        clock: Callable[[], datetime] = utc_now,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._apartments = apartment_repository
        self._bookings = booking_repository
        self._validator = validator or BookingValidator()
        self._policy = policy or CancellationPolicy()
        self._factory = factory or BookingFactory()
        self._clock = clock
        self._max_attempts = max_attempts
        self._sleep = sleep

    def admit(self, request: BookingRequest) -> Booking:
        """Create a booking for a free date range"""
        apartment = self._load_apartment(request.apartment_id)
        lost = _LostCommits()
        calendar = self._bookings.find_calendar(
            apartment.id, since=self._clock().date()
        )

        while True:
            now = self._clock()
            result = self._validator.validate(
                request, apartment, calendar.bookings, today=now.date()
            )
            self._raise_if_invalid(result, request)

            booking = self._factory.create(result.booking, IsoDateTime(now))
            try:
                self._bookings.save(booking, expected_version=calendar.version)
            except OptimisticLockException:
                calendar = self._after_lost_commit(apartment.id, booking.stay, lost)
                continue

            self._log_ignored_price(request, booking)
            logger.info(
                "Booking admitted",
                extra={
                    "booking_id": str(booking.id),
                    "apartment_id": str(apartment.id),
                    "stay": str(booking.stay),
                    "total_price": str(booking.total_price),
                },
            )
            return booking

    def reschedule(self, booking_id: BookingId, request: BookingRequest) -> Booking:
        """Move an active booking to new dates or a new party size"""
        booking = self._load_booking(booking_id)
        self._ensure_guest(booking, request.guest_id)
        apartment = self._load_apartment(booking.apartment_id)
        lost = _LostCommits()
        calendar = self._bookings.find_calendar(
            apartment.id, since=self._clock().date()
        )

        while True:
            now = self._clock()
            self._policy.ensure_can_edit(booking, now)
            result = self._validator.validate(
                request,
                apartment,
                calendar.bookings,
                today=now.date(),
                exclude_booking_id=booking.id,
                require_listed=False,
            )
            self._raise_if_invalid(result, request)

            normalized = result.booking
            booking.reschedule(
                stay=normalized.stay,
                guest_count=normalized.guest_count,
                total_price=normalized.total_price,
                at=IsoDateTime(now),
            )
            try:
                self._bookings.update(booking, expected_version=calendar.version)
            except OptimisticLockException:
                calendar = self._after_lost_commit(
                    apartment.id, normalized.stay, lost, exclude_booking_id=booking.id
                )
                # the stored booking may have been cancelled meanwhile
                booking = self._load_booking(booking_id)
                continue

            self._log_ignored_price(request, booking)
            logger.info(
                "Booking rescheduled",
                extra={
                    "booking_id": str(booking.id),
                    "apartment_id": str(apartment.id),
                    "stay": str(booking.stay),
                    "total_price": str(booking.total_price),
                },
            )
            return booking

    def cancel(self, booking_id: BookingId, requester_id: UserId) -> Booking:
        booking = self._load_booking(booking_id)
        self._ensure_guest(booking, requester_id)
        now = self._clock()
        self._policy.ensure_can_cancel(booking, now)

        booking.cancel(at=IsoDateTime(now))
        try:
            self._bookings.update_status(
                booking.id,
                BookingStatus.CANCELLED,
                expected_status=BookingStatus.ACTIVE,
                updated_at=booking.updated_at,
            )
        except OptimisticLockException as e:
            raise PolicyViolationException(
                PolicyViolationReason.BOOKING_ALREADY_CANCELLED,
                f"Booking {booking_id} was cancelled concurrently",
            ) from e

        logger.info(
            "Booking cancelled",
            extra={
                "booking_id": str(booking.id),
                "apartment_id": str(booking.apartment_id),
            },
        )
        return booking

    def _after_lost_commit(
        self,
        apartment_id: ApartmentId,
        stay: DateRange,
        lost: _LostCommits,
        exclude_booking_id: BookingId | None = None,
    ) -> BookingCalendar:
        """Re-read the calendar after a lost commit and decide whether to go on"""
        lost.total += 1
        calendar = self._bookings.find_calendar(
            apartment_id, since=self._clock().date()
        )
        rivals = find_conflicts(
            apartment_id, stay, calendar.bookings, exclude_booking_id
        )

        if rivals:
            lost.overlapping += 1
            logger.warning(
                "Overlapping booking committed concurrently, re-validating",
                extra={
                    "apartment_id": str(apartment_id),
                    "stay": str(stay),
                    "rivals": [str(b.id) for b in rivals],
                    "attempt": lost.overlapping,
                },
            )
            if lost.overlapping >= self._max_attempts:
                raise BookingConflictException(
                    f"Apartment {apartment_id} was booked concurrently "
                    f"for dates overlapping {stay}"
                )
            return calendar

        if lost.total >= MAX_COMMIT_ROUNDS:
            raise BookingConflictException(
                f"Calendar of apartment {apartment_id} changed on each of "
                f"{lost.total} commit attempts"
            )
        delay = random.uniform(
            0, min(BACKOFF_CAP_SECONDS, BACKOFF_BASE_SECONDS * 2**lost.total)
        )
        logger.info(
            "Calendar changed on other dates before commit, retrying",
            extra={
                "apartment_id": str(apartment_id),
                "round": lost.total,
                "delay": round(delay, 3),
            },
        )
        self._sleep(delay)
        return calendar

    def _load_apartment(self, apartment_id: ApartmentId) -> Apartment:
        apartment = self._apartments.find_by_id(apartment_id)
        if apartment is None:
            raise ResourceNotFoundException(f"Apartment not found: {apartment_id}")
        return apartment

    def _load_booking(self, booking_id: BookingId) -> Booking:
        booking = self._bookings.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    @staticmethod
    def _ensure_guest(booking: Booking, requester_id: UserId) -> None:
        if booking.guest_id != requester_id:
            raise AccessDeniedException(
                f"User {requester_id} cannot modify booking {booking.id}"
            )

    @staticmethod
    def _raise_if_invalid(result: ValidationResult, request: BookingRequest) -> None:
        if result.is_valid:
            return
        logger.warning(
            "Booking request rejected",
            extra={
                "apartment_id": str(request.apartment_id),
                "errors": [f"{e.field}: {e.message}" for e in result.errors],
            },
        )
        raise BookingValidationException(result.errors)

    @staticmethod
    def _log_ignored_price(request: BookingRequest, booking: Booking) -> None:
        claimed = request.claimed_total_price
        if claimed is not None and claimed != booking.total_price.amount:
            logger.info(
                "Client-supplied total price replaced",
                extra={
                    "booking_id": str(booking.id),
                    "claimed_total_price": str(claimed),
                    "total_price": str(booking.total_price.amount),
                },
            )
