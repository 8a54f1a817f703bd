from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.applications import PreviewReservationPricingService
from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.request_models import (
    PreviewReservationPricingRequest,
    to_product_requests,
)
from services.reservation_pricing.handlers.response_models import to_preview_response
from services.shared.domain import RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

service = PreviewReservationPricingService(dependencies.quoter())


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約料金プレビュー Lambda Handler

    POST /reservations/pricing/preview
    """
    request = PreviewReservationPricingRequest.model_validate_json(event.body or "{}")
    quote = service.preview(
        RoomId(value=request.room_id),
        request.slots,
        to_product_requests(request.products),
    )
    return api_response(200, to_preview_response(quote))
