import copy
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from services.pricing_policy.domain import PricingPolicy, TimeRangePrice, TimeRangePrices
from services.product.domain import PricingStrategy, Product, ProductScope
from services.reservation_pricing.domain import (
    ReservationPricing,
    ReservationStatus,
    TimeSlotPriceBreakdown,
)
from services.shared.domain import (
    DayOfWeek,
    Money,
    PlaceId,
    ProductId,
    ReservationId,
    RoomId,
    TimeRange,
    TimeSlot,
)

# 2025-01-06 は月曜日
MONDAY = datetime(2025, 1, 6)


def at(hour: int, minute: int = 0, day: datetime = MONDAY) -> datetime:
    return day.replace(hour=hour, minute=minute)


@pytest.fixture
def room_id():
    return RoomId(value=10)


@pytest.fixture
def place_id():
    return PlaceId(value=1)


@pytest.fixture
def mock_repository():
    return MagicMock()


@pytest.fixture
def create_policy():
    """PricingPolicy を生成する Factory fixture（1時間10000円、月曜18:00-22:00は15000円）"""

    def _factory(
        room_id: int = 10,
        place_id: int = 1,
        time_slot: TimeSlot = TimeSlot.HOUR,
        default_price: str = "10000",
        overrides: list[tuple[DayOfWeek, str, str, str]] | None = None,
    ) -> PricingPolicy:
        if overrides is None:
            overrides = [(DayOfWeek.MONDAY, "18:00", "22:00", "15000")]
        return PricingPolicy.create_with_time_range_prices(
            RoomId(value=room_id),
            PlaceId(value=place_id),
            time_slot,
            Money.of(default_price),
            TimeRangePrices.of(
                TimeRangePrice(day, TimeRange.of(start, end), Money.of(price))
                for day, start, end, price in overrides
            ),
        )

    return _factory


@pytest.fixture
def create_product():
    def _factory(
        product_id: int = 100,
        scope: ProductScope = ProductScope.RESERVATION,
        name: str = "Projector",
        strategy: PricingStrategy | None = None,
        total_quantity: int = 5,
        place_id: int | None = None,
        room_id: int | None = None,
        reserved_quantity: int = 0,
    ) -> Product:
        if scope == ProductScope.PLACE and place_id is None:
            place_id = 1
        if scope == ProductScope.ROOM:
            place_id = place_id or 1
            room_id = room_id or 10
        return Product(
            id=ProductId(value=product_id),
            scope=scope,
            name=name,
            pricing_strategy=strategy or PricingStrategy.simple_stock(Money.of("1000")),
            total_quantity=total_quantity,
            place_id=PlaceId(value=place_id) if place_id else None,
            room_id=RoomId(value=room_id) if room_id else None,
            reserved_quantity=reserved_quantity,
        )

    return _factory


@pytest.fixture
def create_slot_breakdown():
    def _factory(
        start: datetime = at(10),
        slot_count: int = 2,
        price: str = "10000",
        time_slot: TimeSlot = TimeSlot.HOUR,
    ) -> TimeSlotPriceBreakdown:
        step = timedelta(minutes=time_slot.minutes)
        return TimeSlotPriceBreakdown(
            slot_prices={start + step * i: Money.of(price) for i in range(slot_count)},
            time_slot=time_slot,
        )

    return _factory


@pytest.fixture
def create_reservation(create_slot_breakdown):
    def _factory(
        reservation_id: int = 1000,
        room_id: int = 10,
        status: ReservationStatus = ReservationStatus.PENDING,
        start: datetime = at(10),
        slot_count: int = 2,
        product_breakdowns: tuple = (),
        calculated_at: datetime = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc),
    ) -> ReservationPricing:
        slot_breakdown = create_slot_breakdown(start=start, slot_count=slot_count)
        total = slot_breakdown.total_price.add(
            Money.total(b.total_price for b in product_breakdowns)
        )
        return ReservationPricing(
            id=ReservationId(value=reservation_id),
            room_id=RoomId(value=room_id),
            status=status,
            time_slot_breakdown=slot_breakdown,
            product_breakdowns=product_breakdowns,
            total_price=total,
            calculated_at=calculated_at,
            expires_at=(
                calculated_at + timedelta(minutes=20)
                if status == ReservationStatus.PENDING
                else None
            ),
        )

    return _factory


class InMemoryTable:
    """boto3 Table の代わりに dict で保持するテーブル

    Repository が使う条件式の演算子を評価する。
    条件付き書き込みとパーティション内の順序を確認するには十分。
    """

    def __init__(self) -> None:
        self.items: dict[tuple[str, str], dict] = {}

    def put_item(self, Item: dict, ConditionExpression=None, **kwargs) -> dict:
        key = (Item["PK"], Item["SK"])
        self._check(ConditionExpression, self.items.get(key), "PutItem")
        self.items[key] = copy.deepcopy(Item)
        return {}

    def get_item(self, Key: dict, **kwargs) -> dict:
        item = self.items.get((Key["PK"], Key["SK"]))
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def delete_item(self, Key: dict, ConditionExpression=None, **kwargs) -> dict:
        key = (Key["PK"], Key["SK"])
        self._check(ConditionExpression, self.items.get(key), "DeleteItem")
        self.items.pop(key, None)
        return {}

    @contextmanager
    def batch_writer(self):
        yield self

    def query(self, KeyConditionExpression, Select=None, **kwargs) -> dict:
        items = [
            copy.deepcopy(item)
            for _, item in sorted(self.items.items())
            if _matches(KeyConditionExpression, item)
        ]
        if Select == "COUNT":
            return {"Count": len(items)}
        return {"Items": items, "Count": len(items)}

    def _check(self, condition, item, operation: str) -> None:
        if condition is not None and not _matches(condition, item or {}):
            raise ClientError(
                {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
                operation,
            )


def _matches(condition, item: dict) -> bool:
    expression = condition.get_expression()
    operator = expression["operator"]
    values = expression["values"]
    if operator == "AND":
        return all(_matches(value, item) for value in values)
    name = values[0].name
    if operator == "attribute_exists":
        return name in item
    if operator == "attribute_not_exists":
        return name not in item
    if operator == "=":
        return name in item and item[name] == values[1]
    if operator == "begins_with":
        return str(item.get(name, "")).startswith(values[1])
    raise NotImplementedError(operator)


@pytest.fixture
def table():
    return InMemoryTable()
