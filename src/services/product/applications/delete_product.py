from services.product.domain import ProductRepository
from services.shared.domain import ProductId, ResourceNotFoundException
from services.shared.domain.exception import ErrorCode
from services.shared.utils import get_logger

logger = get_logger("product")


class DeleteProductService:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def delete(self, product_id: ProductId) -> None:
        if not self._repository.exists_by_id(product_id):
            raise ResourceNotFoundException(
                f"Product not found for productId: {product_id}",
                error_code=ErrorCode.PRODUCT_NOT_FOUND,
            )
        self._repository.delete_by_id(product_id)
        logger.info("Deleted product", extra={"product_id": product_id.value})
