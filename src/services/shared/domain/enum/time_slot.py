from enum import Enum


class TimeSlot(str, Enum):
    """部屋の予約・課金の単位"""

    HOUR = "HOUR"
    HALFHOUR = "HALFHOUR"

    @property
    def minutes(self) -> int:
        return _MINUTES[self.value]


_MINUTES = {"HOUR": 60, "HALFHOUR": 30}
