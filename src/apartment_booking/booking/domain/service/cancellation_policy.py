from datetime import datetime, timedelta

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.enum import PolicyViolationReason
from apartment_booking.booking.domain.exception import PolicyViolationException

DEFAULT_WINDOW = timedelta(hours=48)


class CancellationPolicy:
    """Time gate for mutating an existing booking

    ACTIVE -> CANCELLED on cancel, ACTIVE -> ACTIVE on edit. CANCELLED is
    terminal. Both transitions require the stay to start strictly more than
    ``window`` after ``now``.
    """

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    def ensure_can_cancel(self, booking: Booking, now: datetime) -> None:
        self._ensure_mutable(booking, now, action="cancelled")

    def ensure_can_edit(self, booking: Booking, now: datetime) -> None:
        self._ensure_mutable(booking, now, action="edited")

    def _ensure_mutable(self, booking: Booking, now: datetime, action: str) -> None:
        if not booking.is_active:
            raise PolicyViolationException(
                PolicyViolationReason.BOOKING_ALREADY_CANCELLED,
                f"Booking {booking.id} is cancelled and cannot be {action}",
            )
        if booking.stay.start_instant(now.tzinfo) - now <= self._window:
            hours = int(self._window.total_seconds() // 3600)
            raise PolicyViolationException(
                PolicyViolationReason.CANCELLATION_WINDOW_EXPIRED,
                f"Bookings starting within {hours} hours cannot be {action}",
            )
