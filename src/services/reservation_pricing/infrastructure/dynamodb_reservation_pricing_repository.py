import os
from collections.abc import Sequence
from datetime import datetime, timezone

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    policy_key,
)
from services.product.domain import PricingType, ProductPriceBreakdown
from services.reservation_pricing.domain import (
    ReservationPricing,
    ReservationPricingRepository,
    ReservationStatus,
    TimeSlotPriceBreakdown,
)
from services.shared.domain import (
    DuplicateResourceException,
    Money,
    OptimisticLockException,
    PlaceId,
    ProductId,
    ReservationId,
    ResourceNotFoundException,
    RoomId,
    TimeSlot,
)
from services.shared.domain.exception import ErrorCode
from services.shared.infrastructure.dynamodb import (
    is_conditional_check_failure,
    query_all,
)


def reservation_key(reservation_id: ReservationId) -> dict:
    return {"PK": f"RESERVATION#{reservation_id}", "SK": "PRICING"}


def _slot_iso(value: datetime) -> str:
    return value.isoformat(timespec="minutes")


def _utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def _window_sk(reservation: ReservationPricing) -> str:
    start = _slot_iso(reservation.time_slot_breakdown.start)
    return f"START#{start}#RESERVATION#{reservation.reservation_id}"


def to_item(
    reservation: ReservationPricing, place_id: PlaceId, version: int | None = None
) -> dict:
    """ReservationPricing -> DynamoDB アイテム

    GSI1 / GSI2 は最初のスロットでソートし、重複検索を開始時刻で絞り込めるようにする。
    GSI3 は PENDING の行を期限でソートする。
    """
    breakdown = reservation.time_slot_breakdown
    item = {
        **reservation_key(reservation.reservation_id),
        "entity_type": "RESERVATION_PRICING",
        "reservation_id": reservation.reservation_id.value,
        "room_id": reservation.room_id.value,
        "place_id": place_id.value,
        "status": reservation.status.value,
        "time_slot": breakdown.time_slot.value,
        "slot_prices": [
            {"slot_time": _slot_iso(slot), "price": str(price)}
            for slot, price in breakdown.slot_prices.items()
        ],
        "slot_start": _slot_iso(breakdown.start),
        "slot_end": _slot_iso(breakdown.end),
        "product_breakdowns": [
            {
                "product_id": b.product_id.value,
                "product_name": b.product_name,
                "quantity": b.quantity,
                "unit_price": str(b.unit_price),
                "total_price": str(b.total_price),
                "pricing_type": b.pricing_type.value,
            }
            for b in reservation.product_breakdowns
        ],
        "total_price": str(reservation.total_price),
        "calculated_at": _utc_iso(reservation.calculated_at),
        "version": reservation.version if version is None else version,
        "GSI1PK": f"PLACE#{place_id}",
        "GSI1SK": _window_sk(reservation),
        "GSI2PK": f"ROOM#{reservation.room_id}",
        "GSI2SK": _window_sk(reservation),
        "GSI3PK": f"STATUS#{reservation.status.value}",
        "GSI3SK": _utc_iso(reservation.expires_at or reservation.calculated_at),
    }
    if reservation.expires_at is not None:
        item["expires_at"] = _utc_iso(reservation.expires_at)
    return item


def to_entity(item: dict) -> ReservationPricing:
    """DynamoDB アイテム -> ReservationPricing"""
    slot_breakdown = TimeSlotPriceBreakdown(
        slot_prices={
            datetime.fromisoformat(entry["slot_time"]): Money.of(entry["price"])
            for entry in item["slot_prices"]
        },
        time_slot=TimeSlot(item["time_slot"]),
    )
    product_breakdowns = [
        ProductPriceBreakdown(
            product_id=ProductId(value=int(entry["product_id"])),
            product_name=entry["product_name"],
            quantity=int(entry["quantity"]),
            unit_price=Money.of(entry["unit_price"]),
            total_price=Money.of(entry["total_price"]),
            pricing_type=PricingType(entry["pricing_type"]),
        )
        for entry in item.get("product_breakdowns", [])
    ]
    expires_at = item.get("expires_at")
    return ReservationPricing(
        id=ReservationId(value=int(item["reservation_id"])),
        room_id=RoomId(value=int(item["room_id"])),
        status=ReservationStatus(item["status"]),
        time_slot_breakdown=slot_breakdown,
        product_breakdowns=product_breakdowns,
        total_price=Money.of(item["total_price"]),
        calculated_at=datetime.fromisoformat(item["calculated_at"]),
        expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        version=int(item.get("version", 0)),
    )


class DynamoDBReservationPricingRepository(ReservationPricingRepository):
    """サービス共通テーブルを使う ReservationPricingRepository"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, reservation: ReservationPricing) -> ReservationPricing:
        place_id = self._place_of(reservation.room_id)
        try:
            self.table.put_item(
                Item=to_item(reservation, place_id),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise DuplicateResourceException(
                    f"Reservation pricing already exists: {reservation.reservation_id}"
                )
            raise
        return reservation

    def update(self, reservation: ReservationPricing) -> ReservationPricing:
        place_id = self._place_of(reservation.room_id)
        try:
            self.table.put_item(
                Item=to_item(reservation, place_id, version=reservation.version + 1),
                ConditionExpression=Attr("version").eq(reservation.version),
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise OptimisticLockException(
                    f"Reservation pricing was changed concurrently: "
                    f"expected version {reservation.version}, "
                    f"reservation_id={reservation.reservation_id}"
                )
            raise
        reservation.increment_version()
        return reservation

    def find_by_id(self, reservation_id: ReservationId) -> ReservationPricing | None:
        response = self.table.get_item(
            Key=reservation_key(reservation_id), ConsistentRead=True
        )
        item = response.get("Item")
        if item is None:
            return None
        return to_entity(item)

    def find_by_room_id_and_time_range(
        self,
        room_id: RoomId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        return self._find_overlapping(
            "GSI2", f"ROOM#{room_id}", start, end, statuses
        )

    def find_by_place_id_and_time_range(
        self,
        place_id: PlaceId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        return self._find_overlapping(
            "GSI1", f"PLACE#{place_id}", start, end, statuses
        )

    def find_by_status_in(
        self, statuses: Sequence[ReservationStatus]
    ) -> list[ReservationPricing]:
        items: list[dict] = []
        for status in dict.fromkeys(statuses):
            items.extend(
                query_all(
                    self.table,
                    IndexName="GSI3",
                    KeyConditionExpression=Key("GSI3PK").eq(f"STATUS#{status.value}"),
                )
            )
        return [to_entity(item) for item in items]

    def find_expired_pending_reservations(
        self, now: datetime
    ) -> list[ReservationPricing]:
        items = query_all(
            self.table,
            IndexName="GSI3",
            KeyConditionExpression=Key("GSI3PK").eq(
                f"STATUS#{ReservationStatus.PENDING.value}"
            )
            & Key("GSI3SK").lte(_utc_iso(now)),
        )
        return [to_entity(item) for item in items]

    def delete_by_id(self, reservation_id: ReservationId) -> None:
        self.table.delete_item(Key=reservation_key(reservation_id))

    def exists_by_id(self, reservation_id: ReservationId) -> bool:
        response = self.table.get_item(
            Key=reservation_key(reservation_id),
            ProjectionExpression="PK",
            ConsistentRead=True,
        )
        return "Item" in response

    def _find_overlapping(
        self,
        index_name: str,
        partition: str,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        """slot_start < end かつ slot_end > start の行"""
        if not statuses:
            return []
        pk_name = f"{index_name}PK"
        sk_name = f"{index_name}SK"
        items = query_all(
            self.table,
            IndexName=index_name,
            KeyConditionExpression=Key(pk_name).eq(partition)
            & Key(sk_name).lt(f"START#{_slot_iso(end)}"),
            FilterExpression=Attr("slot_end").gt(_slot_iso(start))
            & Attr("status").is_in([s.value for s in statuses]),
        )
        return [to_entity(item) for item in items]

    def _place_of(self, room_id: RoomId) -> PlaceId:
        response = self.table.get_item(
            Key=policy_key(room_id), ProjectionExpression="place_id"
        )
        item = response.get("Item")
        if item is None:
            raise ResourceNotFoundException(
                f"Pricing policy not found for roomId: {room_id}",
                error_code=ErrorCode.RESERVATION_PRICING_POLICY_NOT_FOUND,
            )
        return PlaceId(value=int(item["place_id"]))
