from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoomId:
    """予約可能な部屋のID"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"RoomId must be an integer: {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"RoomId must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def of(cls, value: int | str) -> RoomId:
        return cls(value=int(value))
