"""予約料金のドメインイベント

全イベントは ReservationEvent に列挙する。
イベントを追加する場合はここに加え、event_type のリテラルを付ける。
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Literal, Union

from services.product.domain import ProductPriceBreakdown
from services.shared.domain import Money, PlaceId, ReservationId, RoomId


@dataclass(frozen=True)
class ReservationPricingCreated:
    event_type: ClassVar[Literal["ReservationPricingCreated"]] = (
        "ReservationPricingCreated"
    )

    reservation_id: ReservationId
    room_id: RoomId
    total_price: Money
    expires_at: datetime
    occurred_at: datetime


@dataclass(frozen=True)
class ReservationConfirmed:
    event_type: ClassVar[Literal["ReservationConfirmed"]] = "ReservationConfirmed"

    reservation_id: ReservationId
    room_id: RoomId
    total_price: Money
    occurred_at: datetime


@dataclass(frozen=True)
class ReservationCancelled:
    """キャンセル・返金（refunded=True）で発行する"""

    event_type: ClassVar[Literal["ReservationCancelled"]] = "ReservationCancelled"

    reservation_id: ReservationId
    room_id: RoomId
    refunded: bool
    occurred_at: datetime


@dataclass(frozen=True)
class ReservationPendingPayment:
    """expires_at までに total_price を決済するよう決済側に依頼する"""

    event_type: ClassVar[Literal["ReservationPendingPayment"]] = (
        "ReservationPendingPayment"
    )

    reservation_id: ReservationId
    place_id: PlaceId
    room_id: RoomId
    reservation_date: str
    slot_prices: tuple[tuple[datetime, Money], ...]
    product_breakdowns: tuple[ProductPriceBreakdown, ...]
    total_price: Money
    expires_at: datetime
    occurred_at: datetime


ReservationEvent = Union[
    ReservationPricingCreated,
    ReservationConfirmed,
    ReservationCancelled,
    ReservationPendingPayment,
]

EVENT_TYPES: dict[str, type] = {
    ReservationPricingCreated.event_type: ReservationPricingCreated,
    ReservationConfirmed.event_type: ReservationConfirmed,
    ReservationCancelled.event_type: ReservationCancelled,
    ReservationPendingPayment.event_type: ReservationPendingPayment,
}


def to_message(event: ReservationEvent) -> dict:
    """イベント -> JSON 互換のメッセージ本文"""
    if type(event) not in EVENT_TYPES.values():
        raise TypeError(f"Unknown reservation event: {type(event).__name__}")
    return {
        "event_type": event.event_type,
        "detail": {f.name: _to_primitive(getattr(event, f.name)) for f in fields(event)},
    }


def _to_primitive(value: object) -> object:
    if isinstance(value, (ReservationId, RoomId, PlaceId)):
        return value.value
    if isinstance(value, Money):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, ProductPriceBreakdown):
        return {
            "product_id": value.product_id.value,
            "product_name": value.product_name,
            "quantity": value.quantity,
            "unit_price": str(value.unit_price),
            "total_price": str(value.total_price),
            "pricing_type": value.pricing_type.value,
        }
    if isinstance(value, tuple):
        return [_to_primitive(v) for v in value]
    return value
