from __future__ import annotations

import uuid
from dataclasses import dataclass

from apartment_booking.listing.domain.value_object import ApartmentId

_SEPARATOR = "_"


@dataclass(frozen=True)
class BookingId:
    """Booking identifier

    Format: ``<apartment_id>_<32 hex chars>``. The apartment part lets the
    store locate a booking without a secondary index.
    """

    value: str

    def __post_init__(self) -> None:
        prefix, sep, suffix = self.value.rpartition(_SEPARATOR)
        if not prefix or not sep or not suffix:
            raise ValueError(f"Invalid booking id: {self.value}")

    def __str__(self) -> str:
        return self.value

    @property
    def apartment_id(self) -> ApartmentId:
        return ApartmentId(value=self.value.rpartition(_SEPARATOR)[0])

    @classmethod
    def generate(cls, apartment_id: ApartmentId) -> BookingId:
        """Issue a fresh id for a booking of the given apartment"""
        return cls(value=f"{apartment_id}{_SEPARATOR}{uuid.uuid4().hex}")
