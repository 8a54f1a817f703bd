from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from services.shared.domain import Money


@dataclass(frozen=True)
class SlotPrice:
    slot_time: datetime
    price: Money


@dataclass(frozen=True)
class PriceBreakdown:
    """区間のスロット別料金（時刻順）とその合計"""

    slot_prices: tuple[SlotPrice, ...]

    def __post_init__(self) -> None:
        slot_prices = tuple(self.slot_prices)
        if not slot_prices:
            raise ValueError("Price breakdown must contain at least one slot")
        object.__setattr__(self, "slot_prices", slot_prices)

    @property
    def total_price(self) -> Money:
        return Money.total(slot.price for slot in self.slot_prices)

    @property
    def slot_count(self) -> int:
        return len(self.slot_prices)

    def as_dict(self) -> dict[datetime, Money]:
        return {slot.slot_time: slot.price for slot in self.slot_prices}
