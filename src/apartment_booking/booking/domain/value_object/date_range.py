from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo

from apartment_booking.booking.domain.exception import InvalidRangeException


@dataclass(frozen=True)
class DateRange:
    """Half-open stay period ``[start, end)`` at day granularity

    ``start`` is the check-in day and ``end`` the check-out day, so a stay
    ending on day X and another starting on day X share no night.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidRangeException(
                f"End date {self.end} must be after start date {self.start}"
            )

    @classmethod
    def from_iso(cls, check_in: str, check_out: str) -> DateRange:
        """Build from ``YYYY-MM-DD`` strings"""
        try:
            start = date.fromisoformat(check_in)
            end = date.fromisoformat(check_out)
        except ValueError as e:
            raise ValueError(f"Invalid date format: {e}") from e
        return cls(start=start, end=end)

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"

    def nights(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, other: DateRange) -> bool:
        return self.start < other.end and other.start < self.end

    def start_instant(self, tz: tzinfo = timezone.utc) -> datetime:
        """Moment the stay begins (check-in day at midnight)"""
        return datetime.combine(self.start, time.min, tzinfo=tz)
