import os
from datetime import timedelta

from apartment_booking.booking.applications import (
    BookingAdmissionEngine,
    BookingQueryService,
)
from apartment_booking.booking.domain.service import (
    BookingValidator,
    CancellationPolicy,
)
from apartment_booking.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from apartment_booking.listing.infrastructure.dynamodb_apartment_repository import (
    DynamoDBApartmentRepository,
)


def build_admission_engine() -> BookingAdmissionEngine:
    """Engine wired to DynamoDB and configured from the environment"""
    window_hours = int(os.getenv("BOOKING_CANCELLATION_WINDOW_HOURS", "48"))
    return BookingAdmissionEngine(
        apartment_repository=DynamoDBApartmentRepository(),
        booking_repository=DynamoDBBookingRepository(),
        validator=BookingValidator(
            max_advance_days=int(os.getenv("BOOKING_MAX_ADVANCE_DAYS", "180"))
        ),
        policy=CancellationPolicy(window=timedelta(hours=window_hours)),
        max_attempts=int(os.getenv("BOOKING_ADMISSION_ATTEMPTS", "3")),
    )


def build_query_service() -> BookingQueryService:
    return BookingQueryService(repository=DynamoDBBookingRepository())
