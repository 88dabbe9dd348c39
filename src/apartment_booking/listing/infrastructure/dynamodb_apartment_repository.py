import os
from decimal import Decimal

import boto3

from apartment_booking.listing.domain.entity import Apartment
from apartment_booking.listing.domain.repository import ApartmentRepository
from apartment_booking.listing.domain.value_object import ApartmentId
from apartment_booking.shared.domain import Currency, Money, UserId


class DynamoDBApartmentRepository(ApartmentRepository):
    """ApartmentRepository backed by the single DynamoDB table"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, apartment: Apartment) -> None:
        item = {
            "PK": f"APARTMENT#{apartment.id}",
            "SK": "PROFILE",
            "entity_type": "APARTMENT",
            "apartment_id": str(apartment.id),
            "owner_id": str(apartment.owner_id),
            "price_amount": str(apartment.price_per_night.amount),
            "price_currency": str(apartment.price_per_night.currency),
            "max_occupancy": apartment.max_occupancy,
            "is_available": apartment.is_available,
        }
        self.table.put_item(Item=item)

    def find_by_id(self, apartment_id: ApartmentId) -> Apartment | None:
        response = self.table.get_item(
            Key={"PK": f"APARTMENT#{apartment_id}", "SK": "PROFILE"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def _to_entity(self, item: dict) -> Apartment:
        """Convert a DynamoDB item to the domain entity"""
        return Apartment(
            id=ApartmentId(value=item["apartment_id"]),
            owner_id=UserId(value=item["owner_id"]),
            price_per_night=Money(
                amount=Decimal(item["price_amount"]),
                currency=Currency(item["price_currency"]),
            ),
            max_occupancy=int(item["max_occupancy"]),
            is_available=bool(item.get("is_available", True)),
        )
