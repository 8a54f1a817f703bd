from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from services.product.domain import (
    Product,
    ProductAvailabilityService,
    ProductPriceBreakdown,
    ProductRepository,
    ProductScope,
)
from services.reservation_pricing.domain import (
    CompensationQueue,
    InventoryCompensationTask,
    ProductNotAvailableException,
    ReservationPricing,
    ReservationPricingRepository,
    ReservationStatus,
)
from services.shared.domain import PlaceId, ProductId, ReservationId, RoomId, TimeSlot
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


@dataclass(frozen=True)
class ProductClaim:
    """商品1件分の確保済み在庫（RESERVATION スコープでは slot_time は None）"""

    product: Product
    quantity: int
    slot_time: datetime | None = None


class InventoryAllocator:
    """予約の商品在庫を確保・解放する

    在庫は Repository のアトミックな操作で1件ずつ確保する。
    途中で失敗した場合は確保済みの分を新しい順に解放し、
    解放に失敗した分は補償キューに渡す。
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        reservation_repository: ReservationPricingRepository,
        compensation_queue: CompensationQueue,
        availability_service: ProductAvailabilityService | None = None,
    ) -> None:
        self._products = product_repository
        self._reservations = reservation_repository
        self._queue = compensation_queue
        self._availability = availability_service or ProductAvailabilityService()

    def allocate(
        self,
        room_id: RoomId,
        place_id: PlaceId,
        time_slot: TimeSlot,
        slots: Sequence[datetime],
        requests: Sequence[tuple[Product, int]],
        exclude: ReservationId | None = None,
    ) -> list[ProductClaim]:
        """要求された商品をすべて確保する（1つでも失敗したら何も確保しない）

        exclude は在庫判定で自身の使用分を無視する予約
        （商品を変更中の予約）。
        """
        claims: list[ProductClaim] = []
        for product, quantity in requests:
            if product.scope.requires_time_slots():
                self._check_time_scoped(
                    product, quantity, room_id, place_id, time_slot, slots, claims, exclude
                )
            for claim in self._claims_for(product, quantity, slots):
                if not self._reserve(claim):
                    logger.info(
                        "Stock claim rejected",
                        extra={
                            "product_id": product.product_id.value,
                            "quantity": quantity,
                            "slot_time": claim.slot_time.isoformat() if claim.slot_time else None,
                        },
                    )
                    self.rollback(room_id, claims)
                    raise ProductNotAvailableException(product.product_id, quantity)
                claims.append(claim)
        return claims

    def release(
        self,
        room_id: RoomId,
        slots: Sequence[datetime],
        releases: Sequence[tuple[Product, int]],
    ) -> int:
        """在庫を戻す（補償キューに回した件数を返す）"""
        claims = [
            claim
            for product, quantity in releases
            for claim in self._claims_for(product, quantity, slots)
        ]
        return self.rollback(room_id, claims)

    def rollback(self, room_id: RoomId, claims: Sequence[ProductClaim]) -> int:
        failed = 0
        for claim in reversed(claims):
            error = self._try_release(claim)
            if error is None:
                continue
            failed += 1
            self._queue.enqueue(
                InventoryCompensationTask(
                    product_id=claim.product.product_id,
                    quantity=claim.quantity,
                    original_error=error,
                    room_id=room_id,
                    time_slots=(claim.slot_time,) if claim.slot_time else (),
                )
            )
        return failed

    def release_reservation(self, reservation: ReservationPricing) -> int:
        """予約が確保している商品在庫を戻す"""
        return self.release_breakdowns(reservation, reservation.product_breakdowns)

    def release_breakdowns(
        self,
        reservation: ReservationPricing,
        breakdowns: Sequence[ProductPriceBreakdown],
    ) -> int:
        if not breakdowns:
            return 0
        quantities: dict[ProductId, int] = {}
        for breakdown in breakdowns:
            quantities[breakdown.product_id] = (
                quantities.get(breakdown.product_id, 0) + breakdown.quantity
            )
        products = {p.product_id: p for p in self._products.find_all_by_id(list(quantities))}
        missing = [pid.value for pid in quantities if pid not in products]
        if missing:
            logger.warning(
                "Products of reservation no longer exist, stock not released",
                extra={
                    "reservation_id": reservation.reservation_id.value,
                    "product_ids": missing,
                },
            )
        return self.release(
            reservation.room_id,
            reservation.time_slot_breakdown.slot_times,
            [(products[pid], qty) for pid, qty in quantities.items() if pid in products],
        )

    def _check_time_scoped(
        self,
        product: Product,
        quantity: int,
        room_id: RoomId,
        place_id: PlaceId,
        time_slot: TimeSlot,
        slots: Sequence[datetime],
        claims: list[ProductClaim],
        exclude: ReservationId | None,
    ) -> None:
        start = min(slots)
        end = max(slots) + timedelta(minutes=time_slot.minutes)
        statuses = ReservationStatus.active()
        if product.scope == ProductScope.ROOM:
            existing = self._reservations.find_by_room_id_and_time_range(
                room_id, start, end, statuses
            )
        else:
            existing = self._reservations.find_by_place_id_and_time_range(
                place_id, start, end, statuses
            )
        existing = [r for r in existing if r.reservation_id != exclude]
        if not self._availability.is_available(product, slots, quantity, existing):
            self.rollback(room_id, claims)
            raise ProductNotAvailableException(product.product_id, quantity)

    @staticmethod
    def _claims_for(
        product: Product, quantity: int, slots: Sequence[datetime]
    ) -> list[ProductClaim]:
        if product.scope.requires_time_slots():
            return [ProductClaim(product, quantity, slot) for slot in slots]
        return [ProductClaim(product, quantity)]

    def _reserve(self, claim: ProductClaim) -> bool:
        if claim.slot_time is None:
            return self._products.reserve_quantity(claim.product.product_id, claim.quantity)
        return self._products.reserve_time_slot_quantity(
            claim.product, claim.slot_time, claim.quantity
        )

    def _try_release(self, claim: ProductClaim) -> str | None:
        """確保1件分を解放する（失敗理由、成功時は None）"""
        try:
            if claim.slot_time is None:
                released = self._products.release_quantity(
                    claim.product.product_id, claim.quantity
                )
            else:
                released = self._products.release_time_slot_quantity(
                    claim.product, claim.slot_time, claim.quantity
                )
        except Exception as e:
            logger.exception(
                "Stock release failed",
                extra={"product_id": claim.product.product_id.value},
            )
            return f"{type(e).__name__}: {e}"
        if not released:
            return "Reserved quantity is lower than the released quantity"
        return None
