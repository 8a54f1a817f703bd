from abc import abstractmethod
from collections.abc import Sequence
from datetime import datetime

from services.product.domain.entity import Product
from services.product.domain.enum import ProductScope
from services.shared.domain import PlaceId, ProductId, Repository, RoomId


class ProductRepository(Repository[Product, ProductId]):
    """商品カタログと在庫カウンタの Repository

    在庫は reserve_* / release_* でのみ変更する。
    いずれもチェックと更新を1回のアトミックな操作で行う。
    """

    @abstractmethod
    def save(self, product: Product) -> Product:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, product_id: ProductId) -> Product | None:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_id(self, product_ids: Sequence[ProductId]) -> list[Product]:
        """ID のうち存在する商品（順序は保証しない）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_place_id(self, place_id: PlaceId) -> list[Product]:
        raise NotImplementedError

    @abstractmethod
    def find_by_room_id(self, room_id: RoomId) -> list[Product]:
        raise NotImplementedError

    @abstractmethod
    def find_by_scope(self, scope: ProductScope) -> list[Product]:
        raise NotImplementedError

    @abstractmethod
    def find_accessible_products(self, place_id: PlaceId, room_id: RoomId) -> list[Product]:
        """プレイスの PLACE 商品、部屋の ROOM 商品、全 RESERVATION 商品"""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, product_id: ProductId) -> None:
        raise NotImplementedError

    @abstractmethod
    def exists_by_id(self, product_id: ProductId) -> bool:
        raise NotImplementedError

    @abstractmethod
    def reserve_quantity(self, product_id: ProductId, quantity: int) -> bool:
        """total - reserved >= quantity なら在庫を確保する（不足時は False）"""
        raise NotImplementedError

    @abstractmethod
    def release_quantity(self, product_id: ProductId, quantity: int) -> bool:
        """在庫を戻す（確保数が quantity 未満なら False）"""
        raise NotImplementedError

    @abstractmethod
    def reserve_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        """時間スコープの商品の在庫を1スロット分確保する

        カウンタは ROOM スコープなら部屋ごと、PLACE スコープならプレイスごと。
        上限は product.total_quantity。
        """
        raise NotImplementedError

    @abstractmethod
    def release_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        raise NotImplementedError
