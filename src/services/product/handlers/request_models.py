from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from services.product.domain import PricingType, ProductScope
from services.product.domain.factory import PricingStrategyDetails, ProductDetails
from services.shared.utils import to_decimal, to_naive_datetime


class PricingStrategyRequest(BaseModel):
    pricing_type: PricingType
    initial_price: Decimal = Field(..., ge=0)
    additional_price: Decimal | None = Field(default=None, ge=0)

    @field_validator("initial_price", "additional_price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)

    def to_details(self) -> PricingStrategyDetails:
        return {
            "pricing_type": self.pricing_type.value,
            "initial_price": self.initial_price,
            "additional_price": self.additional_price,
        }


class RegisterProductRequest(BaseModel):
    scope: ProductScope
    name: str = Field(..., min_length=1)
    pricing_strategy: PricingStrategyRequest
    total_quantity: int = Field(..., ge=0)
    place_id: int | None = Field(default=None, gt=0)
    room_id: int | None = Field(default=None, gt=0)

    def to_details(self) -> ProductDetails:
        return {
            "scope": self.scope.value,
            "name": self.name,
            "pricing_strategy": self.pricing_strategy.to_details(),
            "total_quantity": self.total_quantity,
            "place_id": self.place_id,
            "room_id": self.room_id,
        }


class UpdateProductRequest(BaseModel):
    """部分更新（省略したフィールドは変更しない）"""

    name: str | None = Field(default=None, min_length=1)
    pricing_strategy: PricingStrategyRequest | None = None
    total_quantity: int | None = Field(default=None, ge=0)


class ListProductsQuery(BaseModel):
    """フィルタは1つだけ（place_id と room_id の組み合わせは利用可能な商品の一覧）"""

    place_id: int | None = Field(default=None, gt=0)
    room_id: int | None = Field(default=None, gt=0)
    scope: ProductScope | None = None

    @model_validator(mode="after")
    def check_filter(self):
        if self.place_id is None and self.room_id is None and self.scope is None:
            raise ValueError("One of place_id, room_id or scope is required")
        return self


class ProductAvailabilityRequest(BaseModel):
    place_id: int = Field(..., gt=0)
    room_id: int = Field(..., gt=0)
    slots: list[datetime] = Field(..., min_length=1)

    @field_validator("slots", mode="before")
    @classmethod
    def convert_slots_to_naive(cls, v):
        if not isinstance(v, list):
            return v
        return [to_naive_datetime(slot) for slot in v]
