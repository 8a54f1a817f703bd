from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType

from services.pricing_policy.domain import PriceBreakdown
from services.shared.domain import Money, TimeSlot


@dataclass(frozen=True)
class TimeSlotPriceBreakdown:
    """予約のスロット開始時刻 -> 料金（開始時刻順）"""

    slot_prices: Mapping[datetime, Money]
    time_slot: TimeSlot
    _total: Money = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.slot_prices:
            raise ValueError("Slot prices cannot be empty")
        ordered = dict(sorted(self.slot_prices.items()))
        object.__setattr__(self, "slot_prices", MappingProxyType(ordered))
        object.__setattr__(self, "_total", Money.total(ordered.values()))

    def __hash__(self) -> int:
        return hash((tuple(self.slot_prices.items()), self.time_slot))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSlotPriceBreakdown):
            return NotImplemented
        return (
            dict(self.slot_prices) == dict(other.slot_prices)
            and self.time_slot == other.time_slot
        )

    @classmethod
    def from_price_breakdown(
        cls, breakdown: PriceBreakdown, time_slot: TimeSlot
    ) -> TimeSlotPriceBreakdown:
        return cls(slot_prices=breakdown.as_dict(), time_slot=time_slot)

    @property
    def total_price(self) -> Money:
        return self._total

    @property
    def slot_count(self) -> int:
        return len(self.slot_prices)

    @property
    def slot_times(self) -> list[datetime]:
        return list(self.slot_prices)

    @property
    def start(self) -> datetime:
        return next(iter(self.slot_prices))

    @property
    def end(self) -> datetime:
        """最後のスロットの終了時刻（含まない）"""
        return self.slot_times[-1] + timedelta(minutes=self.time_slot.minutes)

    def contains_slot(self, slot_time: datetime) -> bool:
        return slot_time in self.slot_prices

    def price_at(self, slot_time: datetime) -> Money:
        return self.slot_prices.get(slot_time, Money.ZERO)
