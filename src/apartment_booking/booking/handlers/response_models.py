from __future__ import annotations

from pydantic import BaseModel

from apartment_booking.booking.domain.entity import Booking


class BookingData(BaseModel):
    """Booking as returned by the API"""

    booking_id: str
    apartment_id: str
    guest_id: str
    host_id: str
    check_in_date: str
    check_out_date: str
    nights: int
    guest_count: int
    total_price_amount: str
    total_price_currency: str
    status: str
    created_at: str
    updated_at: str | None = None


class SuccessResponse(BaseModel):
    status: str = "success"
    data: BookingData


class BookingListResponse(BaseModel):
    status: str = "success"
    data: list[BookingData]
    count: int


class ErrorResponse(BaseModel):
    status: str = "error"
    error_code: str
    message: str
    details: list[dict] | None = None


def to_booking_data(booking: Booking) -> BookingData:
    return BookingData(
        booking_id=str(booking.id),
        apartment_id=str(booking.apartment_id),
        guest_id=str(booking.guest_id),
        host_id=str(booking.host_id),
        check_in_date=booking.stay.start.isoformat(),
        check_out_date=booking.stay.end.isoformat(),
        nights=booking.stay.nights(),
        guest_count=booking.guest_count,
        total_price_amount=str(booking.total_price.amount),
        total_price_currency=str(booking.total_price.currency),
        status=booking.status.value,
        created_at=str(booking.created_at),
        updated_at=str(booking.updated_at) if booking.updated_at else None,
    )


def to_response(booking: Booking) -> dict:
    """Convert a Booking entity to the response body"""
    return SuccessResponse(data=to_booking_data(booking)).model_dump()


def to_list_response(bookings: list[Booking]) -> dict:
    return BookingListResponse(
        data=[to_booking_data(b) for b in bookings],
        count=len(bookings),
    ).model_dump()
