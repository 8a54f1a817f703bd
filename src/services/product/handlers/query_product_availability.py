from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    DynamoDBPricingPolicyRepository,
)
from services.product.applications import ProductAvailabilityQueryService
from services.product.handlers.request_models import ProductAvailabilityRequest
from services.product.handlers.response_models import to_availability_response
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.reservation_pricing.infrastructure import (
    DynamoDBReservationPricingRepository,
)
from services.shared.domain import PlaceId, RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

service = ProductAvailabilityQueryService(
    product_repository=DynamoDBProductRepository(),
    reservation_repository=DynamoDBReservationPricingRepository(),
    policy_repository=DynamoDBPricingPolicyRepository(),
)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """商品在庫照会 Lambda Handler

    POST /products/availability
    """
    request = ProductAvailabilityRequest.model_validate_json(event.body or "{}")
    availabilities = service.query(
        PlaceId(value=request.place_id), RoomId(value=request.room_id), request.slots
    )
    return api_response(
        200, to_availability_response(request.place_id, request.room_id, availabilities)
    )
