from services.product.domain import Product, ProductRepository, ProductScope
from services.shared.domain import PlaceId, ProductId, ResourceNotFoundException, RoomId
from services.shared.domain.exception import ErrorCode


def find_product(repository: ProductRepository, product_id: ProductId) -> Product:
    product = repository.find_by_id(product_id)
    if product is None:
        raise ResourceNotFoundException(
            f"Product not found for productId: {product_id}",
            error_code=ErrorCode.PRODUCT_NOT_FOUND,
        )
    return product


class GetProductService:
    """商品カタログの参照"""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get(self, product_id: ProductId) -> Product:
        return find_product(self._repository, product_id)

    def list_by_place(self, place_id: PlaceId) -> list[Product]:
        return self._repository.find_by_place_id(place_id)

    def list_by_room(self, room_id: RoomId) -> list[Product]:
        return self._repository.find_by_room_id(room_id)

    def list_by_scope(self, scope: ProductScope) -> list[Product]:
        return self._repository.find_by_scope(scope)

    def list_accessible(self, place_id: PlaceId, room_id: RoomId) -> list[Product]:
        """部屋の予約に追加できる商品"""
        return self._repository.find_accessible_products(place_id, room_id)
