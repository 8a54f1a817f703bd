from enum import Enum


class ReservationStatus(str, Enum):
    """料金計算済み予約のステータス

    PENDING -> CONFIRMED | CANCELLED、CONFIRMED -> CANCELLED（返金）。
    CANCELLED は終端。
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    @classmethod
    def active(cls) -> tuple["ReservationStatus", ...]:
        """在庫を確保しているステータス"""
        return (cls.PENDING, cls.CONFIRMED)
