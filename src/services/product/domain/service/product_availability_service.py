from collections.abc import Sequence
from datetime import datetime

from services.product.domain.entity import Product
from services.product.domain.enum import ProductScope
from services.product.domain.service.availability_checker import (
    ReservationScopedChecker,
    ReservedUsage,
    ScopedAvailabilityChecker,
    TimeScopedChecker,
)


class ProductAvailabilityService:
    """商品スコープに応じた判定クラスに在庫判定を振り分ける"""

    def __init__(
        self, checkers: dict[ProductScope, ScopedAvailabilityChecker] | None = None
    ) -> None:
        if checkers is None:
            time_scoped = TimeScopedChecker()
            checkers = {
                ProductScope.PLACE: time_scoped,
                ProductScope.ROOM: time_scoped,
                ProductScope.RESERVATION: ReservationScopedChecker(),
            }
        missing = set(ProductScope) - set(checkers)
        if missing:
            raise ValueError(
                f"No availability checker for scopes: {sorted(s.value for s in missing)}"
            )
        self._checkers = checkers

    def is_available(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        requested_quantity: int,
        existing_reservations: Sequence[ReservedUsage],
    ) -> bool:
        if requested_quantity <= 0:
            raise ValueError(f"Requested quantity must be positive: {requested_quantity}")
        return self._checkers[product.scope].is_available(
            product, requested_slots, requested_quantity, existing_reservations
        )

    def calculate_available_quantity(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        return self._checkers[product.scope].calculate_available_quantity(
            product, requested_slots, existing_reservations
        )
