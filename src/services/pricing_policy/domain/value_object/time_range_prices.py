from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import time

from services.pricing_policy.domain.value_object.time_range_price import (
    TimeRangePrice,
)
from services.shared.domain import BusinessRuleViolationException, DayOfWeek, Money
from services.shared.domain.exception import ErrorCode


@dataclass(frozen=True)
class TimeRangePrices:
    """時間帯別料金のコレクション（同じ曜日で時間帯が重なってはならない）"""

    prices: tuple[TimeRangePrice, ...] = ()

    def __post_init__(self) -> None:
        prices = tuple(self.prices)
        object.__setattr__(self, "prices", prices)
        for i, current in enumerate(prices):
            for other in prices[i + 1 :]:
                if current.overlaps(other):
                    raise BusinessRuleViolationException(
                        f"Time range prices overlap: [{current}] and [{other}]",
                        error_code=ErrorCode.TIME_RANGE_OVERLAP,
                    )

    @classmethod
    def of(cls, prices: Iterable[TimeRangePrice]) -> TimeRangePrices:
        return cls(prices=tuple(prices))

    @classmethod
    def empty(cls) -> TimeRangePrices:
        return cls()

    def __iter__(self) -> Iterator[TimeRangePrice]:
        return iter(self.prices)

    def __len__(self) -> int:
        return len(self.prices)

    def is_empty(self) -> bool:
        return not self.prices

    def find_price_for_slot(self, day_of_week: DayOfWeek, at: time) -> Money | None:
        """スロット開始時刻を含む時間帯別料金（なければ None）"""
        for price in self.prices:
            if price.applies_to(day_of_week, at):
                return price.price_per_slot
        return None
