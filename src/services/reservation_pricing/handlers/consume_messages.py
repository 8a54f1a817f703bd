from functools import partial

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.batch import (
    BatchProcessor,
    EventType,
    process_partial_response,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.pricing_policy.applications.create_pricing_policy import (
    CreatePricingPolicyService,
)
from services.pricing_policy.domain import PricingPolicyFactory
from services.reservation_pricing.handlers import dependencies
from services.reservation_pricing.handlers.messages import MessageServices, apply_record

logger = Logger()

processor = BatchProcessor(event_type=EventType.SQS)

services = MessageServices(
    create_policy=CreatePricingPolicyService(
        dependencies.policy_repository(), PricingPolicyFactory()
    ),
    record_slot_reserved=dependencies.record_slot_reserved_service(),
    confirm=dependencies.confirm_service(),
    cancel=dependencies.cancel_service(),
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """SQS で届いた部屋・予約・決済のメッセージを処理する

    失敗したレコードだけを返し、それだけが再配信されるようにする。
    """
    return process_partial_response(
        event=event,
        record_handler=partial(apply_record, services=services),
        processor=processor,
        context=context,
    )
