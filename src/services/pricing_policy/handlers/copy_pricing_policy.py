from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.pricing_policy.applications.copy_pricing_policy import (
    CopyPricingPolicyService,
)
from services.pricing_policy.handlers.request_models import CopyPricingPolicyRequest
from services.pricing_policy.handlers.response_models import to_response
from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    DynamoDBPricingPolicyRepository,
)
from services.shared.domain import RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBPricingPolicyRepository()
service = CopyPricingPolicyService(repository=repository)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """料金ポリシーコピー Lambda Handler

    POST /rooms/{room_id}/pricing-policy/copy
    """
    target_room_id = RoomId.of((event.path_parameters or {})["room_id"])
    request = CopyPricingPolicyRequest.model_validate_json(event.body or "{}")

    policy = service.copy_from_room(target_room_id, RoomId(value=request.source_room_id))
    return api_response(200, to_response(policy))
