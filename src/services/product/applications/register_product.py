from services.product.domain import Product, ProductFactory, ProductRepository
from services.product.domain.factory import ProductDetails
from services.shared.utils import get_logger

logger = get_logger("product")


class RegisterProductService:
    """商品をカタログに登録する"""

    def __init__(self, repository: ProductRepository, factory: ProductFactory) -> None:
        self._repository = repository
        self._factory = factory

    def register(self, details: ProductDetails) -> Product:
        product = self._factory.create(details)
        self._repository.save(product)
        logger.info(
            "Registered product",
            extra={"product_id": product.product_id.value, "scope": product.scope.value},
        )
        return product
