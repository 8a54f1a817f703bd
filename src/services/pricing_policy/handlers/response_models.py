from __future__ import annotations

from datetime import time

from pydantic import BaseModel

from services.pricing_policy.domain import PricingPolicy
from services.shared.domain import Money


class TimeRangePriceData(BaseModel):
    day_of_week: str
    start_time: str
    end_time: str
    price_per_slot: str


class PricingPolicyData(BaseModel):
    """料金ポリシーのレスポンスモデル"""

    room_id: int
    place_id: int
    time_slot: str
    default_price: str
    time_range_prices: list[TimeRangePriceData]


class SuccessResponse(BaseModel):
    status: str = "success"
    data: PricingPolicyData


class DatePricingResponse(BaseModel):
    status: str = "success"
    room_id: int
    date: str
    prices: dict[str, str]


def to_data(policy: PricingPolicy) -> PricingPolicyData:
    return PricingPolicyData(
        room_id=policy.room_id.value,
        place_id=policy.place_id.value,
        time_slot=policy.time_slot.value,
        default_price=str(policy.default_price),
        time_range_prices=[
            TimeRangePriceData(
                day_of_week=price.day_of_week.value,
                start_time=price.time_range.start.isoformat(timespec="minutes"),
                end_time=price.time_range.end.isoformat(timespec="minutes"),
                price_per_slot=str(price.price_per_slot),
            )
            for price in policy.time_range_prices
        ],
    )


def to_response(policy: PricingPolicy) -> dict:
    """PricingPolicy -> レスポンス dict"""
    return SuccessResponse(data=to_data(policy)).model_dump()


def to_date_pricing_response(room_id: int, date: str, prices: dict[time, Money]) -> dict:
    return DatePricingResponse(
        room_id=room_id,
        date=date,
        prices={
            slot.isoformat(timespec="minutes"): str(price)
            for slot, price in prices.items()
        },
    ).model_dump()
