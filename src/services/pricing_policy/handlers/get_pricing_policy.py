from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.pricing_policy.applications.get_pricing_policy import (
    GetPricingPolicyService,
)
from services.pricing_policy.handlers.request_models import DatePricingQuery
from services.pricing_policy.handlers.response_models import (
    to_date_pricing_response,
    to_response,
)
from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    DynamoDBPricingPolicyRepository,
)
from services.shared.domain import RoomId
from services.shared.utils import api_error_boundary, api_response

logger = Logger()

repository = DynamoDBPricingPolicyRepository()
service = GetPricingPolicyService(repository=repository)


@logger.inject_lambda_context
@api_error_boundary(logger)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """料金ポリシー取得 Lambda Handler

    GET /rooms/{room_id}/pricing-policy[?date=YYYY-MM-DD]
    date 指定時はポリシーの代わりにその日のスロット料金表を返す。
    """
    path_params = event.path_parameters or {}
    room_id = RoomId.of(path_params["room_id"])
    query = event.query_string_parameters or {}

    logger.info("Fetching pricing policy", extra={"room_id": room_id.value})

    if "date" in query:
        target = DatePricingQuery.model_validate(query).date
        prices = service.get_prices_for_date(room_id, target)
        return api_response(
            200, to_date_pricing_response(room_id.value, target.isoformat(), prices)
        )

    return api_response(200, to_response(service.get(room_id)))
