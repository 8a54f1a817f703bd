import threading
from collections.abc import Sequence
from datetime import datetime

from services.product.domain import Product, ProductRepository, ProductScope
from services.shared.domain import (
    BusinessRuleViolationException,
    PlaceId,
    ProductId,
    RoomId,
)
from services.shared.domain.exception import ErrorCode


def _copy(product: Product, reserved_quantity: int) -> Product:
    return Product(
        id=product.product_id,
        scope=product.scope,
        name=product.name,
        pricing_strategy=product.pricing_strategy,
        total_quantity=product.total_quantity,
        place_id=product.place_id,
        room_id=product.room_id,
        reserved_quantity=reserved_quantity,
    )


class InMemoryProductRepository(ProductRepository):
    """ローカル実行・テスト用のプロセス内 ProductRepository

    全在庫カウンタを1つのロックで保護し、reserve / release を
    互いにアトミックにする。
    """

    def __init__(self) -> None:
        self._products: dict[ProductId, Product] = {}
        self._reserved: dict[ProductId, int] = {}
        self._slot_reserved: dict[tuple[ProductId, str, datetime], int] = {}
        self._lock = threading.Lock()

    def save(self, product: Product) -> Product:
        with self._lock:
            reserved = self._reserved.get(product.product_id, 0)
            if product.total_quantity < reserved:
                raise BusinessRuleViolationException(
                    f"Total quantity {product.total_quantity} is below reserved stock "
                    f"of product {product.product_id}",
                    error_code=ErrorCode.TOTAL_QUANTITY_BELOW_RESERVED,
                )
            self._products[product.product_id] = _copy(product, reserved)
            self._reserved[product.product_id] = reserved
        return product

    def find_by_id(self, product_id: ProductId) -> Product | None:
        with self._lock:
            return self._load(product_id)

    def find_all_by_id(self, product_ids: Sequence[ProductId]) -> list[Product]:
        with self._lock:
            found = (self._load(pid) for pid in dict.fromkeys(product_ids))
            return [product for product in found if product is not None]

    def find_by_place_id(self, place_id: PlaceId) -> list[Product]:
        return self._select(lambda p: p.place_id == place_id)

    def find_by_room_id(self, room_id: RoomId) -> list[Product]:
        return self._select(lambda p: p.room_id == room_id)

    def find_by_scope(self, scope: ProductScope) -> list[Product]:
        return self._select(lambda p: p.scope == scope)

    def find_accessible_products(self, place_id: PlaceId, room_id: RoomId) -> list[Product]:
        def accessible(product: Product) -> bool:
            if product.scope == ProductScope.PLACE:
                return product.place_id == place_id
            if product.scope == ProductScope.ROOM:
                return product.room_id == room_id
            return True

        return self._select(accessible)

    def delete_by_id(self, product_id: ProductId) -> None:
        with self._lock:
            self._products.pop(product_id, None)
            self._reserved.pop(product_id, None)
            for key in [k for k in self._slot_reserved if k[0] == product_id]:
                del self._slot_reserved[key]

    def exists_by_id(self, product_id: ProductId) -> bool:
        with self._lock:
            return product_id in self._products

    def reserve_quantity(self, product_id: ProductId, quantity: int) -> bool:
        self._check_quantity(quantity)
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                return False
            reserved = self._reserved[product_id]
            if product.total_quantity - reserved < quantity:
                return False
            self._reserved[product_id] = reserved + quantity
            return True

    def release_quantity(self, product_id: ProductId, quantity: int) -> bool:
        self._check_quantity(quantity)
        with self._lock:
            reserved = self._reserved.get(product_id, 0)
            if reserved < quantity:
                return False
            self._reserved[product_id] = reserved - quantity
            return True

    def reserve_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        self._check_quantity(quantity)
        key = self._slot_key(product, slot_time)
        with self._lock:
            reserved = self._slot_reserved.get(key, 0)
            if reserved + quantity > product.total_quantity:
                return False
            self._slot_reserved[key] = reserved + quantity
            return True

    def release_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        self._check_quantity(quantity)
        key = self._slot_key(product, slot_time)
        with self._lock:
            reserved = self._slot_reserved.get(key, 0)
            if reserved < quantity:
                return False
            self._slot_reserved[key] = reserved - quantity
            return True

    def slot_reserved_quantity(self, product: Product, slot_time: datetime) -> int:
        with self._lock:
            return self._slot_reserved.get(self._slot_key(product, slot_time), 0)

    def _load(self, product_id: ProductId) -> Product | None:
        product = self._products.get(product_id)
        if product is None:
            return None
        return _copy(product, self._reserved[product_id])

    def _select(self, predicate) -> list[Product]:
        with self._lock:
            return [
                self._load(pid) for pid, product in self._products.items() if predicate(product)
            ]

    @staticmethod
    def _slot_key(product: Product, slot_time: datetime) -> tuple[ProductId, str, datetime]:
        if product.scope == ProductScope.ROOM:
            owner = f"ROOM#{product.room_id}"
        elif product.scope == ProductScope.PLACE:
            owner = f"PLACE#{product.place_id}"
        else:
            raise ValueError(f"{product.scope.value} products have no time slot stock")
        return (product.product_id, owner, slot_time)

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")
