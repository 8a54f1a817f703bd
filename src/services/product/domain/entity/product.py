from __future__ import annotations

from services.product.domain.enum import ProductScope
from services.product.domain.value_object import PricingStrategy, ProductPriceBreakdown
from services.shared.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    PlaceId,
    ProductId,
    RoomId,
)
from services.shared.domain.exception import ErrorCode


class Product(AggregateRoot[ProductId]):
    """予約に追加できるオプション商品"""

    def __init__(
        self,
        id: ProductId,
        scope: ProductScope,
        name: str,
        pricing_strategy: PricingStrategy,
        total_quantity: int,
        place_id: PlaceId | None = None,
        room_id: RoomId | None = None,
        reserved_quantity: int = 0,
    ) -> None:
        super().__init__(id)
        self._validate_scope_ids(scope, place_id, room_id)
        self._validate_name(name)
        self._validate_total_quantity(total_quantity)
        if reserved_quantity < 0 or reserved_quantity > total_quantity:
            raise ValueError(
                f"Reserved quantity out of range: reserved={reserved_quantity}, "
                f"total={total_quantity}"
            )
        self._scope = scope
        self._place_id = place_id
        self._room_id = room_id
        self._name = name.strip()
        self._pricing_strategy = pricing_strategy
        self._total_quantity = total_quantity
        self._reserved_quantity = reserved_quantity

    @classmethod
    def create_place_scoped(
        cls,
        product_id: ProductId,
        place_id: PlaceId,
        name: str,
        pricing_strategy: PricingStrategy,
        total_quantity: int,
    ) -> Product:
        return cls(
            product_id,
            ProductScope.PLACE,
            name,
            pricing_strategy,
            total_quantity,
            place_id=place_id,
        )

    @classmethod
    def create_room_scoped(
        cls,
        product_id: ProductId,
        place_id: PlaceId,
        room_id: RoomId,
        name: str,
        pricing_strategy: PricingStrategy,
        total_quantity: int,
    ) -> Product:
        return cls(
            product_id,
            ProductScope.ROOM,
            name,
            pricing_strategy,
            total_quantity,
            place_id=place_id,
            room_id=room_id,
        )

    @classmethod
    def create_reservation_scoped(
        cls,
        product_id: ProductId,
        name: str,
        pricing_strategy: PricingStrategy,
        total_quantity: int,
    ) -> Product:
        return cls(
            product_id, ProductScope.RESERVATION, name, pricing_strategy, total_quantity
        )

    @staticmethod
    def _validate_scope_ids(
        scope: ProductScope, place_id: PlaceId | None, room_id: RoomId | None
    ) -> None:
        if scope == ProductScope.PLACE:
            if place_id is None:
                raise ValueError("PLACE scope requires place_id")
            if room_id is not None:
                raise ValueError("PLACE scope must not have room_id")
        elif scope == ProductScope.ROOM:
            if place_id is None or room_id is None:
                raise ValueError("ROOM scope requires place_id and room_id")
        elif place_id is not None or room_id is not None:
            raise ValueError("RESERVATION scope must not have place_id or room_id")

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name or not name.strip():
            raise ValueError("Product name cannot be empty")

    @staticmethod
    def _validate_total_quantity(total_quantity: int) -> None:
        if total_quantity < 0:
            raise ValueError(f"Total quantity cannot be negative: {total_quantity}")

    @property
    def product_id(self) -> ProductId:
        return self._id

    @property
    def scope(self) -> ProductScope:
        return self._scope

    @property
    def place_id(self) -> PlaceId | None:
        return self._place_id

    @property
    def room_id(self) -> RoomId | None:
        return self._room_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def pricing_strategy(self) -> PricingStrategy:
        return self._pricing_strategy

    @property
    def total_quantity(self) -> int:
        return self._total_quantity

    @property
    def reserved_quantity(self) -> int:
        """有効な予約が確保している数量（RESERVATION スコープのみ）"""
        return self._reserved_quantity

    @property
    def available_quantity(self) -> int:
        return self._total_quantity - self._reserved_quantity

    def can_reserve(self, quantity: int) -> bool:
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")
        return self.available_quantity >= quantity

    def update_name(self, name: str) -> None:
        self._validate_name(name)
        self._name = name.strip()

    def update_pricing_strategy(self, pricing_strategy: PricingStrategy) -> None:
        self._pricing_strategy = pricing_strategy

    def update_total_quantity(self, total_quantity: int) -> None:
        self._validate_total_quantity(total_quantity)
        if total_quantity < self._reserved_quantity:
            raise BusinessRuleViolationException(
                f"Total quantity {total_quantity} is below reserved quantity "
                f"{self._reserved_quantity} for product {self._id}",
                error_code=ErrorCode.TOTAL_QUANTITY_BELOW_RESERVED,
            )
        self._total_quantity = total_quantity

    def calculate_price(self, quantity: int) -> ProductPriceBreakdown:
        """指定数量でこの商品の明細を計算する"""
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")
        return ProductPriceBreakdown(
            product_id=self._id,
            product_name=self._name,
            quantity=quantity,
            unit_price=self._pricing_strategy.initial_price,
            total_price=self._pricing_strategy.calculate(quantity),
            pricing_type=self._pricing_strategy.pricing_type,
        )
