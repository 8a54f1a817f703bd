from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from services.shared.domain import DayOfWeek, TimeSlot
from services.shared.utils import to_decimal


class TimeRangePriceRequest(BaseModel):
    """曜日・時間帯ごとの料金1件"""

    day_of_week: DayOfWeek
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$", examples=["09:00"])
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$", examples=["18:00"])
    price_per_slot: Decimal = Field(..., ge=0)

    @field_validator("price_per_slot", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)


class UpdatePricingPolicyRequest(BaseModel):
    """部屋の料金の部分更新（省略したフィールドは変更しない）"""

    default_price: Decimal | None = Field(default=None, ge=0)
    time_range_prices: list[TimeRangePriceRequest] | None = None
    time_slot: TimeSlot | None = None

    @field_validator("default_price", mode="before")
    @classmethod
    def convert_default_price_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)


class CopyPricingPolicyRequest(BaseModel):
    source_room_id: int = Field(..., gt=0)


class DatePricingQuery(BaseModel):
    date: date
