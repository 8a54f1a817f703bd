from services.reservation_pricing.domain import InventoryCompensationTask
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


def alert_enqueued(task: InventoryCompensationTask, size: int, warning_size: int) -> None:
    logger.warning(
        "Compensation task enqueued",
        extra={
            "task_id": task.task_id,
            "product_id": task.product_id.value,
            "quantity": task.quantity,
            "retry_count": task.retry_count,
            "queue_size": size,
        },
    )
    if size > warning_size:
        logger.error("Compensation queue is growing", extra={"queue_size": size})


def alert_dropped(task: InventoryCompensationTask, capacity: int) -> None:
    logger.critical(
        "Compensation queue is full, task dropped",
        extra={
            "task_id": task.task_id,
            "product_id": task.product_id.value,
            "quantity": task.quantity,
            "time_slots": [slot.isoformat() for slot in task.time_slots],
            "original_error": task.original_error,
            "capacity": capacity,
        },
    )
