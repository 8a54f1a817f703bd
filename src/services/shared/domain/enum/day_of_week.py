from __future__ import annotations

from datetime import date
from enum import Enum


class DayOfWeek(str, Enum):
    """時間帯別料金のキーとなる曜日"""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def number(self) -> int:
        """ISO の曜日番号（月曜=1 〜 日曜=7）"""
        return _ORDER.index(self) + 1

    @classmethod
    def from_date(cls, value: date) -> DayOfWeek:
        """date / datetime から曜日を求める"""
        return _ORDER[value.isoweekday() - 1]

    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)

    def is_weekday(self) -> bool:
        return not self.is_weekend()


_ORDER = list(DayOfWeek)
