from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from ..enum.time_slot import TimeSlot


@dataclass(frozen=True)
class TimeRange:
    """1日の中の時間帯 [start, end)"""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"Start time must be before end time: {self.start} - {self.end}"
            )

    def __str__(self) -> str:
        return f"{self.start.isoformat(timespec='minutes')} - {self.end.isoformat(timespec='minutes')}"

    @classmethod
    def of(cls, start: str | time, end: str | time) -> TimeRange:
        """'HH:MM' 形式の文字列または time から生成"""
        if isinstance(start, str):
            start = time.fromisoformat(start)
        if isinstance(end, str):
            end = time.fromisoformat(end)
        return cls(start=start, end=end)

    def contains(self, value: time) -> bool:
        return self.start <= value < self.end

    def overlaps(self, other: TimeRange) -> bool:
        return self.start < other.end and other.start < self.end

    def duration_minutes(self) -> int:
        anchor = date.min
        delta = datetime.combine(anchor, self.end) - datetime.combine(anchor, self.start)
        return int(delta.total_seconds() // 60)

    def calculate_slots(self, time_slot: TimeSlot) -> int:
        """時間帯に収まるスロットの数"""
        return self.duration_minutes() // time_slot.minutes
