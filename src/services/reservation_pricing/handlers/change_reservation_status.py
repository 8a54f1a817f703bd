from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.response_models import to_response
from services.shared.domain import ReservationId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

confirm_service = dependencies.confirm_service()
cancel_service = dependencies.cancel_service()

ACTIONS = {
    "confirm": confirm_service.confirm,
    "cancel": cancel_service.cancel,
    "refund": cancel_service.refund,
}


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約ステータス変更 Lambda Handler

    POST /reservations/{reservation_id}/pricing/{action}
    action は confirm / cancel / refund のいずれか。
    """
    path_params = event.path_parameters or {}
    reservation_id = ReservationId.of(path_params["reservation_id"])
    action = path_params.get("action", "")
    if action not in ACTIONS:
        raise ValueError(f"Unknown action: {action}")

    logger.info(
        "Changing reservation status",
        extra={"reservation_id": reservation_id.value, "action": action},
    )
    reservation = ACTIONS[action](reservation_id)
    return api_response(200, to_response(reservation))
