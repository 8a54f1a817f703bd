from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from services.pricing_policy.domain import PricingPolicyRepository
from services.product.domain import (
    Product,
    ProductAvailabilityService,
    ProductRepository,
    ProductScope,
)
from services.reservation_pricing.domain import (
    ReservationPricing,
    ReservationPricingRepository,
    ReservationStatus,
)
from services.shared.domain import PlaceId, ResourceNotFoundException, RoomId
from services.shared.domain.exception import ErrorCode
from services.shared.utils import get_logger

logger = get_logger("product")


@dataclass(frozen=True)
class ProductAvailability:
    product: Product
    available_quantity: int


class ProductAvailabilityQueryService:
    """部屋が利用できる各商品の残り数量"""

    def __init__(
        self,
        product_repository: ProductRepository,
        reservation_repository: ReservationPricingRepository,
        policy_repository: PricingPolicyRepository,
        availability_service: ProductAvailabilityService | None = None,
    ) -> None:
        self._products = product_repository
        self._reservations = reservation_repository
        self._policies = policy_repository
        self._availability = availability_service or ProductAvailabilityService()

    def query(
        self, place_id: PlaceId, room_id: RoomId, slots: Sequence[datetime]
    ) -> list[ProductAvailability]:
        if not slots:
            raise ValueError("Time slots cannot be empty")
        policy = self._policies.find_by_id(room_id)
        if policy is None:
            raise ResourceNotFoundException(
                f"Pricing policy not found for roomId: {room_id}",
                error_code=ErrorCode.PRICING_POLICY_NOT_FOUND,
            )
        start = min(slots)
        end = max(slots) + timedelta(minutes=policy.time_slot.minutes)

        products = self._products.find_accessible_products(place_id, room_id)
        # 重複する予約はスコープごとに1回だけ取得し、全商品で共有する
        overlapping: dict[ProductScope, list[ReservationPricing]] = {}
        result = []
        for product in products:
            if product.scope not in overlapping:
                overlapping[product.scope] = self._overlapping(
                    product.scope, place_id, room_id, start, end
                )
            result.append(
                ProductAvailability(
                    product=product,
                    available_quantity=self._availability.calculate_available_quantity(
                        product, slots, overlapping[product.scope]
                    ),
                )
            )
        logger.info(
            "Queried product availability",
            extra={
                "place_id": place_id.value,
                "room_id": room_id.value,
                "product_count": len(result),
            },
        )
        return result

    def _overlapping(
        self,
        scope: ProductScope,
        place_id: PlaceId,
        room_id: RoomId,
        start: datetime,
        end: datetime,
    ) -> list[ReservationPricing]:
        statuses = ReservationStatus.active()
        if scope == ProductScope.ROOM:
            return self._reservations.find_by_room_id_and_time_range(
                room_id, start, end, statuses
            )
        if scope == ProductScope.PLACE:
            return self._reservations.find_by_place_id_and_time_range(
                place_id, start, end, statuses
            )
        return []
