from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from services.reservation_pricing.applications.inventory_allocator import (
    InventoryAllocator,
)
from services.reservation_pricing.applications.reservation_quote import (
    ProductRequest,
    ReservationQuoter,
)
from services.reservation_pricing.domain import (
    EventPublisher,
    ReservationPricing,
    ReservationPricingRepository,
)
from services.reservation_pricing.domain.event import ReservationPendingPayment
from services.shared.domain import DuplicateResourceException, ReservationId, RoomId
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class CreateReservationPricingService:
    """予約の料金を計算し、商品在庫を確保して PENDING で保存する"""

    def __init__(
        self,
        repository: ReservationPricingRepository,
        quoter: ReservationQuoter,
        allocator: InventoryAllocator,
        publisher: EventPublisher,
        pending_timeout_minutes: int,
    ) -> None:
        self._repository = repository
        self._quoter = quoter
        self._allocator = allocator
        self._publisher = publisher
        self._pending_timeout_minutes = pending_timeout_minutes

    def create(
        self,
        reservation_id: ReservationId,
        room_id: RoomId,
        slots: Sequence[datetime],
        requests: Sequence[ProductRequest] = (),
    ) -> ReservationPricing:
        if self._repository.exists_by_id(reservation_id):
            raise DuplicateResourceException(
                f"Reservation pricing already exists: {reservation_id}"
            )
        policy = self._quoter.find_policy(room_id)
        products = self._quoter.load_products(requests)
        slot_breakdown = self._quoter.slot_breakdown(policy, slots)

        claims = self._allocator.allocate(
            room_id,
            policy.place_id,
            policy.time_slot,
            slot_breakdown.slot_times,
            products,
        )
        try:
            reservation = ReservationPricing.calculate(
                reservation_id,
                room_id,
                slot_breakdown,
                self._quoter.product_breakdowns(products),
                self._pending_timeout_minutes,
            )
            self._repository.save(reservation)
        except Exception:
            self._allocator.rollback(room_id, claims)
            raise

        events = reservation.flush_domain_events()
        events.append(
            ReservationPendingPayment(
                reservation_id=reservation_id,
                place_id=policy.place_id,
                room_id=room_id,
                reservation_date=slot_breakdown.start.date().isoformat(),
                slot_prices=tuple(slot_breakdown.slot_prices.items()),
                product_breakdowns=reservation.product_breakdowns,
                total_price=reservation.total_price,
                expires_at=reservation.expires_at,
                occurred_at=reservation.calculated_at,
            )
        )
        self._publisher.publish_all(events)
        logger.info(
            "Created reservation pricing",
            extra={
                "reservation_id": reservation_id.value,
                "room_id": room_id.value,
                "total_price": str(reservation.total_price),
            },
        )
        return reservation
