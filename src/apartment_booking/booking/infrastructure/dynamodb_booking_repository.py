import os
from collections.abc import Iterator
from datetime import date, timedelta
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from apartment_booking.booking.domain.entity import Booking
from apartment_booking.booking.domain.enum import BookingStatus
from apartment_booking.booking.domain.repository import (
    BookingCalendar,
    BookingRepository,
)
from apartment_booking.booking.domain.value_object import BookingId, DateRange
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import (
    Currency,
    DuplicateResourceException,
    IsoDateTime,
    Money,
    OptimisticLockException,
    ResourceNotFoundException,
    UserId,
)

CALENDAR_SK = "CALENDAR"
STAY_PREFIX = "STAY#"
# sorts after every ISO date and booking id
STAY_UPPER_BOUND = "STAY#~"

STATUS_CHANGE_ATTEMPTS = 3


class DynamoDBBookingRepository(BookingRepository):
    """BookingRepository backed by the single DynamoDB table

    Bookings live in their apartment's partition next to a ``CALENDAR`` item
    holding the calendar version. Admissions and edits are written in one
    transaction with a conditional bump of that version, so two requests
    that read the same calendar cannot both commit.

    Every active booking also has a ``STAY#<check-out>#<booking-id>`` item in
    the same partition. Cancelling deletes it, so the calendar read is a
    sort-key range over stays that have not ended yet.
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        item = self._get_booking_item(booking_id)
        if not item:
            return None
        return self._to_entity(item)

    def find_calendar(
        self, apartment_id: ApartmentId, since: date | None = None
    ) -> BookingCalendar:
        """Calendar version plus the stays checking out after ``since``"""
        response = self.table.get_item(
            Key={"PK": f"APARTMENT#{apartment_id}", "SK": CALENDAR_SK},
            ConsistentRead=True,
        )
        calendar_item = response.get("Item")
        version = int(calendar_item["version"]) if calendar_item else 0

        lower = STAY_PREFIX
        if since is not None:
            lower = f"{STAY_PREFIX}{(since + timedelta(days=1)).isoformat()}"
        bookings = tuple(
            self._to_entity(item)
            for item in self._query(
                KeyConditionExpression=Key("PK").eq(f"APARTMENT#{apartment_id}")
                & Key("SK").between(lower, STAY_UPPER_BOUND),
                ConsistentRead=True,
            )
        )
        return BookingCalendar(
            apartment_id=apartment_id,
            bookings=bookings,
            version=version,
        )

    def find_by_guest_id(self, guest_id: UserId) -> list[Booking]:
        return [
            self._to_entity(item)
            for item in self._query(
                IndexName="GSI1",
                KeyConditionExpression=Key("GSI1PK").eq(f"GUEST#{guest_id}"),
                ScanIndexForward=False,
            )
        ]

    def find_by_host_id(self, host_id: UserId) -> list[Booking]:
        return [
            self._to_entity(item)
            for item in self._query(
                IndexName="GSI2",
                KeyConditionExpression=Key("GSI2PK").eq(f"HOST#{host_id}"),
                ScanIndexForward=False,
            )
        ]

    def save(self, booking: Booking, expected_version: int) -> None:
        """Insert the booking and its stay, bumping the calendar version atomically"""
        try:
            self.table.meta.client.transact_write_items(
                TransactItems=[
                    self._calendar_bump(booking.apartment_id, expected_version),
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": self._to_item(booking),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    self._stay_put(booking),
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            if self._failed_conditions(e) == [1]:
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise OptimisticLockException(
                f"Calendar version conflict for apartment {booking.apartment_id}: "
                f"expected {expected_version}"
            ) from e

    def update(self, booking: Booking, expected_version: int) -> None:
        """Rewrite stay, guests and price of an active booking atomically

        The stored check-out day locates the stay item to replace. Any edit
        committed after the caller's calendar read bumps the version, so
        the stored item read here cannot go stale unnoticed.
        """
        stored = self._get_booking_item(booking.id)
        if stored is None:
            raise ResourceNotFoundException(f"Booking not found: {booking.id}")

        transact_items = [
            self._calendar_bump(booking.apartment_id, expected_version),
            {
                "Update": {
                    "TableName": self.table_name,
                    "Key": self._booking_key(booking.id),
                    "UpdateExpression": (
                        "SET check_in_date = :check_in, "
                        "check_out_date = :check_out, "
                        "guest_count = :guest_count, "
                        "price_amount = :price_amount, "
                        "price_currency = :price_currency, "
                        "updated_at = :updated_at"
                    ),
                    "ConditionExpression": "#status = :active",
                    "ExpressionAttributeNames": {"#status": "status"},
                    "ExpressionAttributeValues": {
                        ":check_in": booking.stay.start.isoformat(),
                        ":check_out": booking.stay.end.isoformat(),
                        ":guest_count": booking.guest_count,
                        ":price_amount": str(booking.total_price.amount),
                        ":price_currency": str(booking.total_price.currency),
                        ":updated_at": str(booking.updated_at),
                        ":active": BookingStatus.ACTIVE.value,
                    },
                }
            },
        ]
        old_stay_key = self._stay_key(booking.id, stored["check_out_date"])
        if old_stay_key != self._stay_key(booking.id, booking.stay.end.isoformat()):
            transact_items.append(
                {"Delete": {"TableName": self.table_name, "Key": old_stay_key}}
            )
        transact_items.append(self._stay_put(booking))

        try:
            self.table.meta.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            raise OptimisticLockException(
                f"Booking {booking.id} changed before the edit was committed"
            ) from e

    def update_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        expected_status: BookingStatus,
        updated_at: IsoDateTime,
    ) -> None:
        """Change the status and drop the stay item once the booking leaves ACTIVE

        The status write is conditioned on the check-out day that located
        the stay item. A reschedule landing in between fails that condition
        and the booking is read again.
        """
        for _ in range(STATUS_CHANGE_ATTEMPTS):
            stored = self._get_booking_item(booking_id)
            if stored is None:
                raise ResourceNotFoundException(f"Booking not found: {booking_id}")
            if stored["status"] != expected_status.value:
                raise OptimisticLockException(
                    f"Booking status conflict: expected {expected_status.value}, "
                    f"found {stored['status']}, booking_id={booking_id}"
                )

            check_out = stored["check_out_date"]
            transact_items = [
                {
                    "Update": {
                        "TableName": self.table_name,
                        "Key": self._booking_key(booking_id),
                        "UpdateExpression": (
                            "SET #status = :status, updated_at = :updated_at"
                        ),
                        "ConditionExpression": (
                            "#status = :expected AND check_out_date = :check_out"
                        ),
                        "ExpressionAttributeNames": {"#status": "status"},
                        "ExpressionAttributeValues": {
                            ":status": status.value,
                            ":updated_at": str(updated_at),
                            ":expected": expected_status.value,
                            ":check_out": check_out,
                        },
                    }
                }
            ]
            if status != BookingStatus.ACTIVE:
                transact_items.append(
                    {
                        "Delete": {
                            "TableName": self.table_name,
                            "Key": self._stay_key(booking_id, check_out),
                        }
                    }
                )

            try:
                self.table.meta.client.transact_write_items(
                    TransactItems=transact_items
                )
                return
            except ClientError as e:
                if e.response["Error"]["Code"] != "TransactionCanceledException":
                    raise

        raise OptimisticLockException(
            f"Booking {booking_id} kept changing during the status update"
        )

    def _get_booking_item(self, booking_id: BookingId) -> dict | None:
        response = self.table.get_item(
            Key=self._booking_key(booking_id),
            ConsistentRead=True,
        )
        return response.get("Item")

    def _calendar_bump(self, apartment_id: ApartmentId, expected_version: int) -> dict:
        values: dict = {":next": expected_version + 1}
        if expected_version == 0:
            condition = "attribute_not_exists(#version)"
        else:
            condition = "#version = :expected"
            values[":expected"] = expected_version
        return {
            "Update": {
                "TableName": self.table_name,
                "Key": {"PK": f"APARTMENT#{apartment_id}", "SK": CALENDAR_SK},
                "UpdateExpression": "SET #version = :next",
                "ConditionExpression": condition,
                "ExpressionAttributeNames": {"#version": "version"},
                "ExpressionAttributeValues": values,
            }
        }

    def _stay_put(self, booking: Booking) -> dict:
        item = self._booking_attributes(booking)
        item.update(self._stay_key(booking.id, booking.stay.end.isoformat()))
        item["entity_type"] = "STAY"
        return {"Put": {"TableName": self.table_name, "Item": item}}

    @staticmethod
    def _failed_conditions(error: ClientError) -> list[int]:
        """Indexes of transaction items whose condition failed"""
        reasons = error.response.get("CancellationReasons", [])
        return [
            index
            for index, reason in enumerate(reasons)
            if reason.get("Code") == "ConditionalCheckFailed"
        ]

    def _query(self, **kwargs) -> Iterator[dict]:
        while True:
            response = self.table.query(**kwargs)
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    @staticmethod
    def _booking_key(booking_id: BookingId) -> dict:
        return {
            "PK": f"APARTMENT#{booking_id.apartment_id}",
            "SK": f"BOOKING#{booking_id}",
        }

    @staticmethod
    def _stay_key(booking_id: BookingId, check_out: str) -> dict:
        return {
            "PK": f"APARTMENT#{booking_id.apartment_id}",
            "SK": f"{STAY_PREFIX}{check_out}#{booking_id}",
        }

    @staticmethod
    def _booking_attributes(booking: Booking) -> dict:
        item = {
            "booking_id": str(booking.id),
            "apartment_id": str(booking.apartment_id),
            "guest_id": str(booking.guest_id),
            "host_id": str(booking.host_id),
            "check_in_date": booking.stay.start.isoformat(),
            "check_out_date": booking.stay.end.isoformat(),
            "guest_count": booking.guest_count,
            "price_amount": str(booking.total_price.amount),
            "price_currency": str(booking.total_price.currency),
            "status": booking.status.value,
            "created_at": str(booking.created_at),
        }
        if booking.updated_at is not None:
            item["updated_at"] = str(booking.updated_at)
        return item

    def _to_item(self, booking: Booking) -> dict:
        return {
            **self._booking_key(booking.id),
            **self._booking_attributes(booking),
            "entity_type": "BOOKING",
            "GSI1PK": f"GUEST#{booking.guest_id}",
            "GSI1SK": str(booking.created_at),
            "GSI2PK": f"HOST#{booking.host_id}",
            "GSI2SK": str(booking.created_at),
        }

    def _to_entity(self, item: dict) -> Booking:
        """Convert a booking or stay item to the domain entity"""
        updated_at = item.get("updated_at")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            apartment_id=ApartmentId(value=item["apartment_id"]),
            guest_id=UserId(value=item["guest_id"]),
            host_id=UserId(value=item["host_id"]),
            stay=DateRange(
                start=date.fromisoformat(item["check_in_date"]),
                end=date.fromisoformat(item["check_out_date"]),
            ),
            guest_count=int(item["guest_count"]),
            total_price=Money(
                amount=Decimal(item["price_amount"]),
                currency=Currency(item["price_currency"]),
            ),
            created_at=IsoDateTime.from_string(item["created_at"]),
            updated_at=IsoDateTime.from_string(updated_at) if updated_at else None,
            status=BookingStatus(item["status"]),
        )
