from collections.abc import Sequence

from services.reservation_pricing.applications.get_reservation_pricing import (
    find_reservation,
)
from services.reservation_pricing.applications.inventory_allocator import (
    InventoryAllocator,
)
from services.reservation_pricing.applications.reservation_quote import (
    ProductRequest,
    ReservationQuoter,
)
from services.reservation_pricing.domain import (
    InvalidReservationStatusException,
    ReservationPricing,
    ReservationPricingRepository,
    ReservationStatus,
)
from services.shared.domain import ReservationId
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class UpdateReservationProductsService:
    """PENDING の予約の商品を置き換える"""

    def __init__(
        self,
        repository: ReservationPricingRepository,
        quoter: ReservationQuoter,
        allocator: InventoryAllocator,
    ) -> None:
        self._repository = repository
        self._quoter = quoter
        self._allocator = allocator

    def update_products(
        self, reservation_id: ReservationId, requests: Sequence[ProductRequest]
    ) -> ReservationPricing:
        reservation = find_reservation(self._repository, reservation_id)
        if reservation.status != ReservationStatus.PENDING:
            raise InvalidReservationStatusException(
                reservation.status, "update products of"
            )

        policy = self._quoter.find_policy(reservation.room_id)
        products = self._quoter.load_products(requests)
        slots = reservation.time_slot_breakdown.slot_times
        previous = reservation.product_breakdowns

        self._allocator.release_breakdowns(reservation, previous)
        try:
            claims = self._allocator.allocate(
                reservation.room_id,
                policy.place_id,
                policy.time_slot,
                slots,
                products,
                exclude=reservation_id,
            )
        except Exception:
            self._restore(reservation, policy, previous)
            raise

        reservation.update_products(self._quoter.product_breakdowns(products))
        try:
            self._repository.update(reservation)
        except Exception:
            # 保存済みの行は変更前の商品のまま
            self._allocator.rollback(reservation.room_id, claims)
            self._restore(reservation, policy, previous)
            raise
        logger.info(
            "Updated reservation products",
            extra={
                "reservation_id": reservation_id.value,
                "total_price": str(reservation.total_price),
            },
        )
        return reservation

    def _restore(self, reservation, policy, previous) -> None:
        """変更に失敗した後、変更前の商品を確保し直す"""
        if not previous:
            return
        products = self._quoter.load_products(
            [ProductRequest(b.product_id, b.quantity) for b in previous]
        )
        try:
            self._allocator.allocate(
                reservation.room_id,
                policy.place_id,
                policy.time_slot,
                reservation.time_slot_breakdown.slot_times,
                products,
                exclude=reservation.reservation_id,
            )
        except Exception:
            logger.exception(
                "Could not restore previous products of reservation",
                extra={"reservation_id": reservation.reservation_id.value},
            )
