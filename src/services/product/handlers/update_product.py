from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.product.applications import UpdateProductService
from services.product.domain import ProductFactory
from services.product.handlers.request_models import UpdateProductRequest
from services.product.handlers.response_models import to_response
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.shared.domain import ProductId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBProductRepository()
service = UpdateProductService(repository=repository, factory=ProductFactory())


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """商品更新 Lambda Handler

    PATCH /products/{product_id}
    """
    product_id = ProductId.of((event.path_parameters or {})["product_id"])
    request = UpdateProductRequest.model_validate_json(event.body or "{}")

    logger.info("Updating product", extra={"product_id": product_id.value})
    product = service.update(
        product_id,
        name=request.name,
        pricing_strategy=(
            request.pricing_strategy.to_details() if request.pricing_strategy else None
        ),
        total_quantity=request.total_quantity,
    )
    return api_response(200, to_response(product))
