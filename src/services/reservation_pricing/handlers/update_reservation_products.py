from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.applications import UpdateReservationProductsService
from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.request_models import (
    UpdateReservationProductsRequest,
    to_product_requests,
)
from services.reservation_pricing.handlers.response_models import to_response
from services.shared.domain import ReservationId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

service = UpdateReservationProductsService(
    dependencies.reservation_repository(),
    dependencies.quoter(),
    dependencies.allocator(),
)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約商品変更 Lambda Handler

    PUT /reservations/{reservation_id}/pricing/products
    """
    reservation_id = ReservationId.of((event.path_parameters or {})["reservation_id"])
    request = UpdateReservationProductsRequest.model_validate_json(event.body or "{}")
    reservation = service.update_products(
        reservation_id, to_product_requests(request.products)
    )
    return api_response(200, to_response(reservation))
