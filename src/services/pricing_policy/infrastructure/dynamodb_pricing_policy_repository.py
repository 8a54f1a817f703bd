import os

import boto3
from boto3.dynamodb.conditions import Key

from services.pricing_policy.domain import (
    PricingPolicy,
    PricingPolicyRepository,
    TimeRangePrice,
    TimeRangePrices,
)
from services.shared.domain import DayOfWeek, Money, PlaceId, RoomId, TimeRange, TimeSlot
from services.shared.infrastructure.dynamodb import query_all


def policy_key(room_id: RoomId) -> dict:
    return {"PK": f"ROOM#{room_id}", "SK": "PRICING_POLICY"}


def to_item(policy: PricingPolicy) -> dict:
    """PricingPolicy -> DynamoDB アイテム"""
    return {
        **policy_key(policy.room_id),
        "entity_type": "PRICING_POLICY",
        "room_id": policy.room_id.value,
        "place_id": policy.place_id.value,
        "time_slot": policy.time_slot.value,
        "default_price": str(policy.default_price),
        "time_range_prices": [
            {
                "day_of_week": price.day_of_week.value,
                "start_time": price.time_range.start.isoformat(timespec="minutes"),
                "end_time": price.time_range.end.isoformat(timespec="minutes"),
                "price_per_slot": str(price.price_per_slot),
            }
            for price in policy.time_range_prices
        ],
        "GSI1PK": f"PLACE#{policy.place_id}",
        "GSI1SK": f"ROOM#{policy.room_id}",
    }


def to_entity(item: dict) -> PricingPolicy:
    """DynamoDB アイテム -> PricingPolicy"""
    prices = TimeRangePrices.of(
        TimeRangePrice(
            day_of_week=DayOfWeek(entry["day_of_week"]),
            time_range=TimeRange.of(entry["start_time"], entry["end_time"]),
            price_per_slot=Money.of(entry["price_per_slot"]),
        )
        for entry in item.get("time_range_prices", [])
    )
    return PricingPolicy(
        id=RoomId(value=int(item["room_id"])),
        place_id=PlaceId(value=int(item["place_id"])),
        time_slot=TimeSlot(item["time_slot"]),
        default_price=Money.of(item["default_price"]),
        time_range_prices=prices,
    )


class DynamoDBPricingPolicyRepository(PricingPolicyRepository):
    """サービス共通テーブルを使う PricingPolicyRepository"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, policy: PricingPolicy) -> PricingPolicy:
        self.table.put_item(Item=to_item(policy))
        return policy

    def find_by_id(self, room_id: RoomId) -> PricingPolicy | None:
        response = self.table.get_item(Key=policy_key(room_id), ConsistentRead=True)
        item = response.get("Item")
        if item is None:
            return None
        return to_entity(item)

    def delete_by_id(self, room_id: RoomId) -> None:
        self.table.delete_item(Key=policy_key(room_id))

    def exists_by_id(self, room_id: RoomId) -> bool:
        response = self.table.get_item(
            Key=policy_key(room_id),
            ProjectionExpression="PK",
            ConsistentRead=True,
        )
        return "Item" in response

    def find_all_by_place_id(self, place_id: PlaceId) -> list[PricingPolicy]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"PLACE#{place_id}")
            & Key("GSI1SK").begins_with("ROOM#"),
        )
        return [to_entity(item) for item in items]
