from decimal import Decimal
from typing import TypedDict

from services.pricing_policy.domain.entity import PricingPolicy
from services.pricing_policy.domain.value_object import TimeRangePrice, TimeRangePrices
from services.shared.domain import (
    BusinessRuleViolationException,
    DayOfWeek,
    Money,
    PlaceId,
    RoomId,
    TimeRange,
    TimeSlot,
)
from services.shared.domain.exception import ErrorCode


class TimeRangePriceDetails(TypedDict):
    """時間帯別料金1件分の入力"""

    day_of_week: str
    start_time: str
    end_time: str
    price_per_slot: Decimal


class PricingPolicyFactory:
    """プリミティブな入力から料金ポリシーと時間帯別料金を生成する"""

    def create_default(
        self, room_id: RoomId, place_id: PlaceId, time_slot: str
    ) -> PricingPolicy:
        """新しい部屋の料金ポリシー（設定されるまで0円）"""
        return PricingPolicy.create(
            room_id=room_id,
            place_id=place_id,
            time_slot=TimeSlot(time_slot),
        )

    def create_time_range_prices(
        self, details: list[TimeRangePriceDetails]
    ) -> TimeRangePrices:
        return TimeRangePrices.of(self._to_time_range_price(d) for d in details)

    def _to_time_range_price(self, details: TimeRangePriceDetails) -> TimeRangePrice:
        try:
            time_range = TimeRange.of(details["start_time"], details["end_time"])
        except ValueError as e:
            raise BusinessRuleViolationException(
                str(e), error_code=ErrorCode.INVALID_TIME_RANGE
            ) from e

        return TimeRangePrice(
            day_of_week=DayOfWeek(details["day_of_week"]),
            time_range=time_range,
            price_per_slot=Money.of(details["price_per_slot"]),
        )
