from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.product.applications import RegisterProductService
from services.product.domain import ProductFactory
from services.product.handlers.request_models import RegisterProductRequest
from services.product.handlers.response_models import to_response
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBProductRepository()
service = RegisterProductService(repository=repository, factory=ProductFactory())


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """商品登録 Lambda Handler

    POST /products
    """
    request = RegisterProductRequest.model_validate_json(event.body or "{}")
    logger.info("Registering product", extra={"scope": request.scope.value})
    product = service.register(request.to_details())
    return api_response(201, to_response(product))
