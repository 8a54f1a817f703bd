from datetime import timedelta

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.reservation_pricing.applications import ExpirePendingReservationsService
from services.reservation_pricing.handlers import dependencies
from services.shared.infrastructure import DynamoDBDistributedLock
from services.shared.utils import get_settings, run_with_lock

logger = Logger()

LOCK_NAME = "expire-pending-reservations"

settings = get_settings()
lock = DynamoDBDistributedLock(settings.table_name or None)
service = ExpirePendingReservationsService(
    dependencies.reservation_repository(), dependencies.cancel_service()
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """期限切れの PENDING の予約をキャンセルする定期実行"""
    result = run_with_lock(
        lock,
        LOCK_NAME,
        timedelta(seconds=settings.expiry_job_lock_seconds),
        service.expire,
    )
    if result is None:
        return {"status": "skipped"}
    return {
        "status": "done",
        "cancelled": result.cancelled,
        "skipped": result.skipped,
        "failed": result.failed,
    }
