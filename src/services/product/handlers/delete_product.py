from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.product.applications import DeleteProductService
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.shared.domain import ProductId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBProductRepository()
service = DeleteProductService(repository=repository)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """商品削除 Lambda Handler

    DELETE /products/{product_id}
    """
    product_id = ProductId.of((event.path_parameters or {})["product_id"])
    service.delete(product_id)
    return api_response(200, {"status": "success"})
