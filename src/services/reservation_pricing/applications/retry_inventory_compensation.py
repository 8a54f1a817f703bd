from dataclasses import dataclass

from services.product.domain import ProductRepository
from services.reservation_pricing.domain import (
    CompensationQueue,
    InventoryCompensationTask,
)
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


@dataclass(frozen=True)
class CompensationSweepResult:
    succeeded: int
    requeued: int
    abandoned: int


class RetryInventoryCompensationService:
    """失敗した在庫解放をリトライする

    待機中のタスクは1回のスイープにつき1回だけ試す。
    max_retry_count 回失敗したタスクは CRITICAL でログ出力し、再投入しない。
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        queue: CompensationQueue,
        max_retry_count: int = 5,
    ) -> None:
        self._products = product_repository
        self._queue = queue
        self._max_retry_count = max_retry_count

    def retry_pending(self) -> CompensationSweepResult:
        succeeded = abandoned = 0
        failed: list[InventoryCompensationTask] = []
        # 開始時点のタスクだけを処理し、失敗分は取り出し終えてから戻す
        for _ in range(self._queue.size()):
            task = self._queue.dequeue()
            if task is None:
                break
            error = self._release(task)
            if error is None:
                succeeded += 1
                continue
            retried = task.increment_retry_count()
            if retried.retry_count >= self._max_retry_count:
                abandoned += 1
                logger.critical(
                    "Inventory compensation exhausted retries, manual intervention required",
                    extra=self._describe(retried, error),
                )
            else:
                failed.append(retried)
        for task in failed:
            self._queue.enqueue(task)
        requeued = len(failed)
        if succeeded or requeued or abandoned:
            logger.info(
                "Inventory compensation sweep finished",
                extra={"succeeded": succeeded, "requeued": requeued, "abandoned": abandoned},
            )
        return CompensationSweepResult(succeeded, requeued, abandoned)

    def _release(self, task: InventoryCompensationTask) -> str | None:
        try:
            if not task.time_slots:
                released = self._products.release_quantity(task.product_id, task.quantity)
                return None if released else "Release rejected"
            product = self._products.find_by_id(task.product_id)
            if product is None:
                return f"Product not found: {task.product_id}"
            for slot in task.time_slots:
                if not self._products.release_time_slot_quantity(product, slot, task.quantity):
                    return f"Release rejected for slot {slot.isoformat()}"
        except Exception as e:
            logger.warning(
                "Inventory compensation attempt failed",
                extra=self._describe(task, str(e)),
            )
            return f"{type(e).__name__}: {e}"
        return None

    @staticmethod
    def _describe(task: InventoryCompensationTask, error: str) -> dict:
        return {
            "task_id": task.task_id,
            "product_id": task.product_id.value,
            "room_id": task.room_id.value if task.room_id else None,
            "quantity": task.quantity,
            "time_slots": [slot.isoformat() for slot in task.time_slots],
            "retry_count": task.retry_count,
            "original_error": task.original_error,
            "last_error": error,
        }
