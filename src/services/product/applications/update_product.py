from services.product.applications.get_product import find_product
from services.product.domain import Product, ProductFactory, ProductRepository
from services.product.domain.factory import PricingStrategyDetails
from services.shared.domain import ProductId
from services.shared.utils import get_logger

logger = get_logger("product")


class UpdateProductService:
    """管理者による商品の変更（省略した値は変更しない）"""

    def __init__(self, repository: ProductRepository, factory: ProductFactory) -> None:
        self._repository = repository
        self._factory = factory

    def update(
        self,
        product_id: ProductId,
        name: str | None = None,
        pricing_strategy: PricingStrategyDetails | None = None,
        total_quantity: int | None = None,
    ) -> Product:
        product = find_product(self._repository, product_id)
        if name is not None:
            product.update_name(name)
        if pricing_strategy is not None:
            product.update_pricing_strategy(
                self._factory.create_pricing_strategy(pricing_strategy)
            )
        if total_quantity is not None:
            product.update_total_quantity(total_quantity)

        self._repository.save(product)
        logger.info("Updated product", extra={"product_id": product_id.value})
        return product
