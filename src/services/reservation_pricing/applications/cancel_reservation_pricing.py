from datetime import datetime, timezone

from services.reservation_pricing.applications.get_reservation_pricing import (
    find_reservation,
)
from services.reservation_pricing.applications.inventory_allocator import (
    InventoryAllocator,
)
from services.reservation_pricing.domain import (
    EventPublisher,
    ReservationPricing,
    ReservationPricingRepository,
)
from services.shared.domain import ReservationId
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class CancelReservationPricingService:
    """予約をキャンセルし、商品の在庫を戻す

    ステータス変更は読み込んだ version を条件に書き込む。
    在庫を戻すのは書き込みが成功した後だけなので、古いデータや
    同時実行のキャンセルで同じ在庫を二重に戻すことはない。
    戻せなかった在庫は補償キューに任せる。
    """

    def __init__(
        self,
        repository: ReservationPricingRepository,
        allocator: InventoryAllocator,
        publisher: EventPublisher,
    ) -> None:
        self._repository = repository
        self._allocator = allocator
        self._publisher = publisher

    def cancel(
        self, reservation_id: ReservationId, now: datetime | None = None
    ) -> ReservationPricing:
        reservation = find_reservation(self._repository, reservation_id)
        reservation.cancel(now)
        return self._finish(reservation, "Cancelled reservation pricing")

    def refund(
        self, reservation_id: ReservationId, now: datetime | None = None
    ) -> ReservationPricing:
        """返金後に CONFIRMED -> CANCELLED にする"""
        reservation = find_reservation(self._repository, reservation_id)
        reservation.refund(now)
        return self._finish(reservation, "Refunded reservation pricing")

    def cancel_if_expired(
        self, reservation_id: ReservationId, now: datetime | None = None
    ) -> ReservationPricing | None:
        """期限切れで PENDING のままの予約をキャンセルする

        その間に確定またはキャンセルされていれば None を返す。
        """
        now = now or datetime.now(timezone.utc)
        reservation = find_reservation(self._repository, reservation_id)
        if not reservation.is_expired(now):
            logger.info(
                "Reservation no longer expired, skipping",
                extra={
                    "reservation_id": reservation_id.value,
                    "status": reservation.status.value,
                },
            )
            return None
        reservation.cancel(now)
        return self._finish(reservation, "Cancelled expired reservation pricing")

    def _finish(self, reservation: ReservationPricing, message: str) -> ReservationPricing:
        self._repository.update(reservation)
        compensations = self._allocator.release_reservation(reservation)
        self._publisher.publish_all(reservation.flush_domain_events())
        logger.info(
            message,
            extra={
                "reservation_id": reservation.reservation_id.value,
                "pending_compensations": compensations,
            },
        )
        return reservation
