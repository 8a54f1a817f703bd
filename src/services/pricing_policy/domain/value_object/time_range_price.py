from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from services.shared.domain import DayOfWeek, Money, TimeRange


@dataclass(frozen=True)
class TimeRangePrice:
    """曜日・時間帯ごとのスロット料金"""

    day_of_week: DayOfWeek
    time_range: TimeRange
    price_per_slot: Money

    def __str__(self) -> str:
        return f"{self.day_of_week.value} {self.time_range}: {self.price_per_slot}"

    def overlaps(self, other: TimeRangePrice) -> bool:
        return (
            self.day_of_week == other.day_of_week
            and self.time_range.overlaps(other.time_range)
        )

    def applies_to(self, day_of_week: DayOfWeek, at: time) -> bool:
        return self.day_of_week == day_of_week and self.time_range.contains(at)
