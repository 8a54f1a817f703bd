from pydantic import BaseModel

from services.product.domain import ProductPriceBreakdown
from services.reservation_pricing.applications.reservation_quote import (
    ReservationQuote,
)
from services.reservation_pricing.domain import (
    ReservationPricing,
    TimeSlotPriceBreakdown,
)


class SlotPriceData(BaseModel):
    slot_time: str
    price: str


class ProductPriceData(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    total_price: str
    pricing_type: str


class ReservationPricingData(BaseModel):
    """予約料金のレスポンスモデル"""

    reservation_id: int
    room_id: int
    status: str
    time_slot: str
    slot_prices: list[SlotPriceData]
    product_breakdowns: list[ProductPriceData]
    time_slot_total: str
    product_total: str
    total_price: str
    calculated_at: str
    expires_at: str | None


class PricePreviewData(BaseModel):
    time_slot: str
    slot_prices: list[SlotPriceData]
    product_breakdowns: list[ProductPriceData]
    time_slot_total: str
    product_total: str
    total_price: str


class SuccessResponse(BaseModel):
    status: str = "success"
    data: ReservationPricingData


class PreviewResponse(BaseModel):
    status: str = "success"
    data: PricePreviewData


def _slots(breakdown: TimeSlotPriceBreakdown) -> list[SlotPriceData]:
    return [
        SlotPriceData(slot_time=slot.isoformat(timespec="minutes"), price=str(price))
        for slot, price in breakdown.slot_prices.items()
    ]


def _products(breakdowns: tuple[ProductPriceBreakdown, ...]) -> list[ProductPriceData]:
    return [
        ProductPriceData(
            product_id=b.product_id.value,
            product_name=b.product_name,
            quantity=b.quantity,
            unit_price=str(b.unit_price),
            total_price=str(b.total_price),
            pricing_type=b.pricing_type.value,
        )
        for b in breakdowns
    ]


def to_response(reservation: ReservationPricing) -> dict:
    """ReservationPricing -> レスポンス dict"""
    return SuccessResponse(
        data=ReservationPricingData(
            reservation_id=reservation.reservation_id.value,
            room_id=reservation.room_id.value,
            status=reservation.status.value,
            time_slot=reservation.time_slot_breakdown.time_slot.value,
            slot_prices=_slots(reservation.time_slot_breakdown),
            product_breakdowns=_products(reservation.product_breakdowns),
            time_slot_total=str(reservation.time_slot_total),
            product_total=str(reservation.product_total),
            total_price=str(reservation.total_price),
            calculated_at=reservation.calculated_at.isoformat(),
            expires_at=(
                reservation.expires_at.isoformat() if reservation.expires_at else None
            ),
        )
    ).model_dump()


def to_preview_response(quote: ReservationQuote) -> dict:
    return PreviewResponse(
        data=PricePreviewData(
            time_slot=quote.time_slot_breakdown.time_slot.value,
            slot_prices=_slots(quote.time_slot_breakdown),
            product_breakdowns=_products(quote.product_breakdowns),
            time_slot_total=str(quote.time_slot_total),
            product_total=str(quote.product_total),
            total_price=str(quote.total_price),
        )
    ).model_dump()
