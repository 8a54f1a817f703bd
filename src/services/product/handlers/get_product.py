from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.product.applications import GetProductService
from services.product.handlers.request_models import ListProductsQuery
from services.product.handlers.response_models import to_list_response, to_response
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.shared.domain import PlaceId, ProductId, RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBProductRepository()
service = GetProductService(repository=repository)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """商品取得 Lambda Handler

    GET /products/{product_id} または GET /products?place_id=&room_id=&scope=
    """
    path_params = event.path_parameters or {}
    if "product_id" in path_params:
        product = service.get(ProductId.of(path_params["product_id"]))
        return api_response(200, to_response(product))

    query = ListProductsQuery.model_validate(event.query_string_parameters or {})
    if query.place_id is not None and query.room_id is not None:
        products = service.list_accessible(
            PlaceId(value=query.place_id), RoomId(value=query.room_id)
        )
    elif query.place_id is not None:
        products = service.list_by_place(PlaceId(value=query.place_id))
    elif query.room_id is not None:
        products = service.list_by_room(RoomId(value=query.room_id))
    else:
        products = service.list_by_scope(query.scope)
    return api_response(200, to_list_response(products))
