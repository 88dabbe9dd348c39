from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from apartment_booking.booking.domain import BookingId, BookingStatus, DateRange
from apartment_booking.booking.infrastructure.dynamodb_booking_repository import (
    CALENDAR_SK,
    STAY_UPPER_BOUND,
    DynamoDBBookingRepository,
)
from apartment_booking.listing.domain import ApartmentId
from apartment_booking.shared.domain import (
    DuplicateResourceException,
    IsoDateTime,
    OptimisticLockException,
    ResourceNotFoundException,
    UserId,
)


def _transaction_cancelled(*codes: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": code} for code in codes],
        },
        "TransactWriteItems",
    )


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def repository(table):
    with patch(
        "apartment_booking.booking.infrastructure.dynamodb_booking_repository.boto3"
    ) as mock_boto3:
        mock_boto3.resource.return_value.Table.return_value = table
        yield DynamoDBBookingRepository(table_name="booking-table")


class TestSave:
    def test_writes_booking_and_calendar_bump(self, repository, table, create_booking):
        booking = create_booking()

        repository.save(booking, expected_version=2)

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        bump = items[0]["Update"]
        assert bump["Key"] == {"PK": "APARTMENT#apt-1", "SK": CALENDAR_SK}
        assert bump["ConditionExpression"] == "#version = :expected"
        assert bump["ExpressionAttributeValues"] == {":next": 3, ":expected": 2}
        put = items[1]["Put"]
        assert put["Item"]["SK"] == f"BOOKING#{booking.id}"
        assert put["Item"]["GSI1PK"] == "GUEST#guest-1"
        assert put["Item"]["GSI2PK"] == "HOST#host-1"
        assert put["Item"]["price_amount"] == "200.00"
        stay = items[2]["Put"]["Item"]
        assert stay["SK"] == f"STAY#{booking.stay.end.isoformat()}#{booking.id}"
        assert stay["entity_type"] == "STAY"

    def test_first_booking_requires_missing_version(
        self, repository, table, create_booking
    ):
        repository.save(create_booking(), expected_version=0)

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        assert items[0]["Update"]["ConditionExpression"] == (
            "attribute_not_exists(#version)"
        )

    def test_stale_calendar_raises_optimistic_lock(
        self, repository, table, create_booking
    ):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "ConditionalCheckFailed", "None"
        )
        with pytest.raises(OptimisticLockException):
            repository.save(create_booking(), expected_version=1)

    def test_existing_booking_raises_duplicate(
        self, repository, table, create_booking
    ):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "None", "ConditionalCheckFailed"
        )
        with pytest.raises(DuplicateResourceException):
            repository.save(create_booking(), expected_version=1)

    def test_other_client_errors_propagate(self, repository, table, create_booking):
        table.meta.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException"}},
            "TransactWriteItems",
        )
        with pytest.raises(ClientError):
            repository.save(create_booking(), expected_version=1)


class TestUpdate:
    def test_rewrites_active_booking(self, repository, table, create_booking, now):
        booking = create_booking(start=10, end=12)
        table.get_item.return_value = {"Item": repository._to_item(booking)}
        booking.reschedule(
            stay=booking.stay,
            guest_count=3,
            total_price=booking.total_price,
            at=IsoDateTime(now),
        )

        repository.update(booking, expected_version=4)

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        update = items[1]["Update"]
        assert update["ConditionExpression"] == "#status = :active"
        assert update["ExpressionAttributeValues"][":guest_count"] == 3
        # same check-out day: the stay item is overwritten in place
        assert len(items) == 3
        assert items[2]["Put"]["Item"]["guest_count"] == 3

    def test_moved_check_out_replaces_stay_item(
        self, repository, table, create_booking, day, now
    ):
        booking = create_booking(start=10, end=12)
        table.get_item.return_value = {"Item": repository._to_item(booking)}
        booking.reschedule(
            stay=DateRange(start=day(10), end=day(14)),
            guest_count=2,
            total_price=booking.total_price,
            at=IsoDateTime(now),
        )

        repository.update(booking, expected_version=4)

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        assert items[2]["Delete"]["Key"]["SK"] == (
            f"STAY#{day(12).isoformat()}#{booking.id}"
        )
        assert items[3]["Put"]["Item"]["SK"] == (
            f"STAY#{day(14).isoformat()}#{booking.id}"
        )

    def test_missing_booking(self, repository, table, create_booking):
        table.get_item.return_value = {}
        with pytest.raises(ResourceNotFoundException):
            repository.update(create_booking(), expected_version=1)
        table.meta.client.transact_write_items.assert_not_called()

    def test_lost_race_raises_optimistic_lock(
        self, repository, table, create_booking
    ):
        booking = create_booking()
        table.get_item.return_value = {"Item": repository._to_item(booking)}
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "None", "ConditionalCheckFailed"
        )
        with pytest.raises(OptimisticLockException):
            repository.update(booking, expected_version=1)


class TestUpdateStatus:
    def test_cancel_drops_stay_item(self, repository, table, create_booking, now):
        booking = create_booking(booking_id="apt-1_abc", start=3, end=5)
        table.get_item.return_value = {"Item": repository._to_item(booking)}

        repository.update_status(
            booking.id,
            BookingStatus.CANCELLED,
            expected_status=BookingStatus.ACTIVE,
            updated_at=IsoDateTime(now),
        )

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        update = items[0]["Update"]
        assert update["Key"] == {"PK": "APARTMENT#apt-1", "SK": "BOOKING#apt-1_abc"}
        assert update["ExpressionAttributeValues"][":status"] == "CANCELLED"
        assert update["ExpressionAttributeValues"][":check_out"] == (
            booking.stay.end.isoformat()
        )
        assert items[1]["Delete"]["Key"] == {
            "PK": "APARTMENT#apt-1",
            "SK": f"STAY#{booking.stay.end.isoformat()}#apt-1_abc",
        }

    def test_status_mismatch(self, repository, table, create_booking, now):
        booking = create_booking(booking_id="apt-1_abc", status=BookingStatus.CANCELLED)
        table.get_item.return_value = {"Item": repository._to_item(booking)}
        with pytest.raises(OptimisticLockException):
            repository.update_status(
                booking.id,
                BookingStatus.CANCELLED,
                expected_status=BookingStatus.ACTIVE,
                updated_at=IsoDateTime(now),
            )
        table.meta.client.transact_write_items.assert_not_called()

    def test_missing_booking(self, repository, table, now):
        table.get_item.return_value = {}
        with pytest.raises(ResourceNotFoundException):
            repository.update_status(
                BookingId(value="apt-1_abc"),
                BookingStatus.CANCELLED,
                expected_status=BookingStatus.ACTIVE,
                updated_at=IsoDateTime(now),
            )

    def test_rereads_after_concurrent_reschedule(
        self, repository, table, create_booking, now
    ):
        before = create_booking(booking_id="apt-1_abc", start=3, end=5)
        after = create_booking(booking_id="apt-1_abc", start=3, end=7)
        table.get_item.side_effect = [
            {"Item": repository._to_item(before)},
            {"Item": repository._to_item(after)},
        ]
        table.meta.client.transact_write_items.side_effect = [
            _transaction_cancelled("ConditionalCheckFailed", "None"),
            None,
        ]

        repository.update_status(
            after.id,
            BookingStatus.CANCELLED,
            expected_status=BookingStatus.ACTIVE,
            updated_at=IsoDateTime(now),
        )

        last = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        assert last[1]["Delete"]["Key"]["SK"] == (
            f"STAY#{after.stay.end.isoformat()}#apt-1_abc"
        )


class TestReads:
    def test_find_by_id_round_trips_item(self, repository, table, create_booking):
        booking = create_booking()
        table.get_item.return_value = {"Item": repository._to_item(booking)}

        loaded = repository.find_by_id(booking.id)

        assert loaded == booking
        assert loaded.stay == booking.stay
        assert loaded.total_price.amount == Decimal("200.00")
        assert loaded.updated_at is None

    def test_find_by_id_missing(self, repository, table):
        table.get_item.return_value = {}
        assert repository.find_by_id(BookingId(value="apt-1_abc")) is None

    def test_find_calendar_reads_only_current_stays(
        self, repository, table, create_booking, day
    ):
        first = create_booking(start=3, end=5)
        second = create_booking(start=6, end=8)
        table.get_item.return_value = {
            "Item": {"PK": "APARTMENT#apt-1", "SK": CALENDAR_SK, "version": Decimal(7)}
        }
        table.query.side_effect = [
            {
                "Items": [repository._stay_put(first)["Put"]["Item"]],
                "LastEvaluatedKey": {"PK": "APARTMENT#apt-1", "SK": "STAY#x"},
            },
            {"Items": [repository._stay_put(second)["Put"]["Item"]]},
        ]

        calendar = repository.find_calendar(ApartmentId(value="apt-1"), since=day(0))

        assert calendar.version == 7
        assert [b.id for b in calendar.bookings] == [first.id, second.id]
        assert table.get_item.call_args.kwargs["ConsistentRead"] is True
        first_query = table.query.call_args_list[0].kwargs
        assert first_query["ConsistentRead"] is True
        assert first_query["KeyConditionExpression"] == Key("PK").eq(
            "APARTMENT#apt-1"
        ) & Key("SK").between(f"STAY#{day(1).isoformat()}", STAY_UPPER_BOUND)
        assert "ExclusiveStartKey" in table.query.call_args_list[1].kwargs

    def test_find_calendar_without_bookings(self, repository, table):
        table.get_item.return_value = {}
        table.query.return_value = {"Items": []}

        calendar = repository.find_calendar(ApartmentId(value="apt-1"))

        assert calendar.version == 0
        assert calendar.bookings == ()
        assert table.query.call_args.kwargs["KeyConditionExpression"] == Key(
            "PK"
        ).eq("APARTMENT#apt-1") & Key("SK").between("STAY#", STAY_UPPER_BOUND)

    def test_stay_key_sorts_by_check_out(self, repository, create_booking):
        early = repository._stay_put(create_booking(start=3, end=5))["Put"]["Item"]
        late = repository._stay_put(create_booking(start=1, end=9))["Put"]["Item"]

        assert early["SK"] < late["SK"] < STAY_UPPER_BOUND
        assert "GSI1PK" not in early

    def test_find_by_guest_id_uses_index(self, repository, table, create_booking):
        booking = create_booking()
        table.query.return_value = {"Items": [repository._to_item(booking)]}

        assert repository.find_by_guest_id(UserId(value="guest-1")) == [booking]
        kwargs = table.query.call_args.kwargs
        assert kwargs["IndexName"] == "GSI1"
        assert kwargs["ScanIndexForward"] is False

    def test_find_by_host_id_uses_index(self, repository, table):
        table.query.return_value = {"Items": []}

        assert repository.find_by_host_id(UserId(value="host-1")) == []
        assert table.query.call_args.kwargs["IndexName"] == "GSI2"
