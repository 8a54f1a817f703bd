from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from services.reservation_pricing.applications import ProductRequest
from services.shared.domain import ProductId
from services.shared.utils import to_naive_datetime


class ProductRequestModel(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class SlotsRequestModel(BaseModel):
    slots: list[datetime] = Field(..., min_length=1)

    @field_validator("slots", mode="before")
    @classmethod
    def convert_slots_to_naive(cls, v):
        if not isinstance(v, list):
            return v
        return [to_naive_datetime(slot) for slot in v]


class CreateReservationPricingRequest(SlotsRequestModel):
    """スロット開始時刻は施設の現地時刻"""

    reservation_id: int = Field(..., gt=0)
    room_id: int = Field(..., gt=0)
    products: list[ProductRequestModel] = Field(default_factory=list)


class PreviewReservationPricingRequest(SlotsRequestModel):
    room_id: int = Field(..., gt=0)
    products: list[ProductRequestModel] = Field(default_factory=list)


class UpdateReservationProductsRequest(BaseModel):
    products: list[ProductRequestModel]


def to_product_requests(products: list[ProductRequestModel]) -> list[ProductRequest]:
    return [ProductRequest(ProductId(value=p.product_id), p.quantity) for p in products]
