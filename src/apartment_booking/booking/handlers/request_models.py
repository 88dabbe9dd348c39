from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from apartment_booking.booking.domain.value_object import BookingRequest
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import UserId
from apartment_booking.shared.utils import to_decimal


class BookingRequestBody(BaseModel):
    """Body of POST /bookings and PUT /bookings/{booking_id}"""

    apartment_id: str = Field(..., min_length=1, max_length=100)
    start_date: date = Field(
        ...,
        description="Check-in day (YYYY-MM-DD)",
        examples=["2026-11-03"],
    )
    end_date: date = Field(
        ...,
        description="Check-out day (YYYY-MM-DD), exclusive",
        examples=["2026-11-05"],
    )
    guest_count: int = Field(..., description="Number of guests")
    total_price: Decimal | None = Field(
        default=None,
        description="Price shown to the client; ignored, the server computes it",
    )

    @field_validator("total_price", mode="before")
    @classmethod
    def convert_total_price_to_decimal(cls, v: object) -> Decimal | None:
        if v is None:
            return None
        return to_decimal(v)

    def to_domain(self, guest_id: UserId) -> BookingRequest:
        return BookingRequest(
            apartment_id=ApartmentId(value=self.apartment_id),
            guest_id=guest_id,
            start_date=self.start_date,
            end_date=self.end_date,
            guest_count=self.guest_count,
            claimed_total_price=self.total_price,
        )
