from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.request_models import (
    CreateReservationPricingRequest,
    to_product_requests,
)
from services.reservation_pricing.handlers.response_models import to_response
from services.shared.domain import ReservationId, RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

service = dependencies.create_service()


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約料金作成 Lambda Handler

    POST /reservations/pricing
    """
    request = CreateReservationPricingRequest.model_validate_json(event.body or "{}")

    logger.info(
        "Creating reservation pricing",
        extra={"reservation_id": request.reservation_id, "room_id": request.room_id},
    )

    reservation = service.create(
        ReservationId(value=request.reservation_id),
        RoomId(value=request.room_id),
        request.slots,
        to_product_requests(request.products),
    )
    return api_response(201, to_response(reservation))
