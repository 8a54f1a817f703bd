from decimal import Decimal
from typing import NotRequired, TypedDict

from services.product.domain.entity import Product
from services.product.domain.enum import PricingType, ProductScope
from services.product.domain.value_object import PricingStrategy
from services.shared.domain import Money, PlaceId, ProductId, RoomId
from services.shared.utils.id_generator import SnowflakeIdGenerator


class PricingStrategyDetails(TypedDict):
    pricing_type: str
    initial_price: Decimal
    additional_price: NotRequired[Decimal | None]


class ProductDetails(TypedDict):
    """商品登録の入力"""

    scope: str
    name: str
    pricing_strategy: PricingStrategyDetails
    total_quantity: int
    place_id: NotRequired[int | None]
    room_id: NotRequired[int | None]


class ProductFactory:
    """新しいIDを採番して商品を生成する"""

    def __init__(self, id_generator: SnowflakeIdGenerator | None = None) -> None:
        self._id_generator = id_generator or SnowflakeIdGenerator()

    def create(self, details: ProductDetails) -> Product:
        product_id = ProductId(value=self._id_generator.next_id())
        scope = ProductScope(details["scope"])
        strategy = self.create_pricing_strategy(details["pricing_strategy"])
        place_id = details.get("place_id")
        room_id = details.get("room_id")

        if scope == ProductScope.PLACE:
            if place_id is None:
                raise ValueError("PLACE scope requires place_id")
            return Product.create_place_scoped(
                product_id,
                PlaceId(value=place_id),
                details["name"],
                strategy,
                details["total_quantity"],
            )
        if scope == ProductScope.ROOM:
            if place_id is None or room_id is None:
                raise ValueError("ROOM scope requires place_id and room_id")
            return Product.create_room_scoped(
                product_id,
                PlaceId(value=place_id),
                RoomId(value=room_id),
                details["name"],
                strategy,
                details["total_quantity"],
            )
        return Product.create_reservation_scoped(
            product_id, details["name"], strategy, details["total_quantity"]
        )

    def create_pricing_strategy(self, details: PricingStrategyDetails) -> PricingStrategy:
        additional = details.get("additional_price")
        return PricingStrategy(
            pricing_type=PricingType(details["pricing_type"]),
            initial_price=Money.of(details["initial_price"]),
            additional_price=Money.of(additional) if additional is not None else None,
        )
