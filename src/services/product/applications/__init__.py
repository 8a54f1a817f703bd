from .delete_product import DeleteProductService as DeleteProductService
from .get_product import GetProductService as GetProductService
from .query_product_availability import (
    ProductAvailability as ProductAvailability,
)
from .query_product_availability import (
    ProductAvailabilityQueryService as ProductAvailabilityQueryService,
)
from .register_product import RegisterProductService as RegisterProductService
from .update_product import UpdateProductService as UpdateProductService
