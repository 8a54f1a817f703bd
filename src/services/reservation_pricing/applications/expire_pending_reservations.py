from dataclasses import dataclass
from datetime import datetime, timezone

from services.reservation_pricing.applications.cancel_reservation_pricing import (
    CancelReservationPricingService,
)
from services.reservation_pricing.domain import ReservationPricingRepository
from services.shared.domain import OptimisticLockException
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


@dataclass(frozen=True)
class ExpirySweepResult:
    cancelled: int
    failed: int
    skipped: int = 0


class ExpirePendingReservationsService:
    """支払期限を過ぎた PENDING の予約をキャンセルする

    検索からキャンセルまでの間に確定された予約はスキップする
    （再読み込みで確定が見えた場合も、確定の書き込みが先に通った場合も）。
    """

    def __init__(
        self,
        repository: ReservationPricingRepository,
        cancel_service: CancelReservationPricingService,
    ) -> None:
        self._repository = repository
        self._cancel_service = cancel_service

    def expire(self, now: datetime | None = None) -> ExpirySweepResult:
        now = now or datetime.now(timezone.utc)
        expired = self._repository.find_expired_pending_reservations(now)
        cancelled = skipped = failed = 0
        for reservation in expired:
            extra = {"reservation_id": reservation.reservation_id.value}
            try:
                if self._cancel_service.cancel_if_expired(reservation.reservation_id, now):
                    cancelled += 1
                else:
                    skipped += 1
            except OptimisticLockException:
                skipped += 1
                logger.warning("Expired reservation changed during the sweep", extra=extra)
            except Exception:
                failed += 1
                logger.exception("Failed to cancel expired reservation", extra=extra)
        logger.info(
            "Expired pending reservations",
            extra={
                "found": len(expired),
                "cancelled": cancelled,
                "skipped": skipped,
                "failed": failed,
            },
        )
        return ExpirySweepResult(cancelled=cancelled, failed=failed, skipped=skipped)
