from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.applications import GetReservationPricingService
from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.response_models import to_response
from services.shared.domain import ReservationId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

service = GetReservationPricingService(dependencies.reservation_repository())


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約料金取得 Lambda Handler

    GET /reservations/{reservation_id}/pricing
    """
    reservation_id = ReservationId.of((event.path_parameters or {})["reservation_id"])
    return api_response(200, to_response(service.get(reservation_id)))
