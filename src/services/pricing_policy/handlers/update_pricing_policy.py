from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.pricing_policy.applications.update_pricing_policy import (
    UpdatePricingPolicyService,
)
from services.pricing_policy.domain.factory import (
    PricingPolicyFactory,
    TimeRangePriceDetails,
)
from services.pricing_policy.handlers.request_models import (
    TimeRangePriceRequest,
    UpdatePricingPolicyRequest,
)
from services.pricing_policy.handlers.response_models import to_response
from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    DynamoDBPricingPolicyRepository,
)
from services.shared.domain import Money, RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBPricingPolicyRepository()
factory = PricingPolicyFactory()
service = UpdatePricingPolicyService(repository=repository, factory=factory)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """料金ポリシー更新 Lambda Handler

    PATCH /rooms/{room_id}/pricing-policy
    """
    room_id = RoomId.of((event.path_parameters or {})["room_id"])
    request = UpdatePricingPolicyRequest.model_validate_json(event.body or "{}")

    logger.info("Updating pricing policy", extra={"room_id": room_id.value})

    policy = None
    if request.default_price is not None:
        policy = service.update_default_price(room_id, Money.of(request.default_price))
    if request.time_range_prices is not None:
        details = [_to_details(price) for price in request.time_range_prices]
        policy = service.update_time_range_prices(room_id, details)
    if request.time_slot is not None:
        policy = service.update_time_slot(room_id, request.time_slot)

    if policy is None:
        return api_response(400, {"code": "VALIDATION", "message": "Nothing to update"})
    return api_response(200, to_response(policy))


def _to_details(request: TimeRangePriceRequest) -> TimeRangePriceDetails:
    return {
        "day_of_week": request.day_of_week.value,
        "start_time": request.start_time,
        "end_time": request.end_time,
        "price_per_slot": request.price_per_slot,
    }
