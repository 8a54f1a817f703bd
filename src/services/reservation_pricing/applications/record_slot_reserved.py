from collections.abc import Sequence
from datetime import date, datetime, time

from services.reservation_pricing.applications.reservation_quote import (
    ReservationQuoter,
)
from services.reservation_pricing.domain import (
    EventPublisher,
    ReservationPricing,
    ReservationPricingRepository,
)
from services.shared.domain import DuplicateResourceException, ReservationId, RoomId
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class RecordSlotReservedService:
    """他サービスで作成された予約の料金を PENDING で記録する

    メッセージは重複して届くことがあるため、料金計算済みの予約には
    何もしない。
    """

    def __init__(
        self,
        repository: ReservationPricingRepository,
        quoter: ReservationQuoter,
        publisher: EventPublisher,
        pending_timeout_minutes: int,
    ) -> None:
        self._repository = repository
        self._quoter = quoter
        self._publisher = publisher
        self._pending_timeout_minutes = pending_timeout_minutes

    def record(
        self,
        reservation_id: ReservationId,
        room_id: RoomId,
        reservation_date: date,
        start_times: Sequence[time],
    ) -> ReservationPricing | None:
        if self._repository.exists_by_id(reservation_id):
            logger.info(
                "Reservation pricing already exists, skipping",
                extra={"reservation_id": reservation_id.value},
            )
            return None

        policy = self._quoter.find_policy(room_id)
        slots = [datetime.combine(reservation_date, t) for t in start_times]
        reservation = ReservationPricing.calculate(
            reservation_id,
            room_id,
            self._quoter.slot_breakdown(policy, slots),
            (),
            self._pending_timeout_minutes,
        )
        try:
            self._repository.save(reservation)
        except DuplicateResourceException:
            logger.info(
                "Reservation pricing was recorded concurrently, skipping",
                extra={"reservation_id": reservation_id.value},
            )
            return None
        self._publisher.publish_all(reservation.flush_domain_events())
        logger.info(
            "Recorded slot reservation pricing",
            extra={
                "reservation_id": reservation_id.value,
                "room_id": room_id.value,
                "slot_count": reservation.time_slot_breakdown.slot_count,
            },
        )
        return reservation
