from collections.abc import Sequence
from datetime import datetime

from services.reservation_pricing.applications.reservation_quote import (
    ProductRequest,
    ReservationQuote,
    ReservationQuoter,
)
from services.shared.domain import RoomId


class PreviewReservationPricingService:
    """予約した場合の料金（在庫確保も保存もしない）"""

    def __init__(self, quoter: ReservationQuoter) -> None:
        self._quoter = quoter

    def preview(
        self,
        room_id: RoomId,
        slots: Sequence[datetime],
        requests: Sequence[ProductRequest] = (),
    ) -> ReservationQuote:
        return self._quoter.quote(room_id, slots, requests)
