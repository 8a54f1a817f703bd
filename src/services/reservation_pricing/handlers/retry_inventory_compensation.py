from datetime import timedelta

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.applications import RetryInventoryCompensationService
from services.reservation_pricing.handlers import dependencies
from services.shared.infrastructure import DynamoDBDistributedLock
from services.shared.utils import get_settings, run_with_lock

logger = Logger()

LOCK_NAME = "retry-inventory-compensation"

settings = get_settings()
lock = DynamoDBDistributedLock(settings.table_name or None)
service = RetryInventoryCompensationService(
    dependencies.product_repository(),
    dependencies.compensation_queue(),
    max_retry_count=settings.compensation_max_retry_count,
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """失敗した在庫解放をリトライする定期実行"""
    result = run_with_lock(
        lock,
        LOCK_NAME,
        timedelta(seconds=settings.compensation_job_lock_seconds),
        service.retry_pending,
    )
    if result is None:
        return {"status": "skipped"}
    return {
        "status": "done",
        "succeeded": result.succeeded,
        "requeued": result.requeued,
        "abandoned": result.abandoned,
    }
