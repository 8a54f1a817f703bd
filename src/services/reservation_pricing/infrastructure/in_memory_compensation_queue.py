import threading
from collections import deque

from services.reservation_pricing.domain import (
    CompensationQueue,
    InventoryCompensationTask,
)
from services.reservation_pricing.infrastructure.compensation_alerts import (
    alert_dropped,
    alert_enqueued,
)


class InMemoryCompensationQueue(CompensationQueue):
    """プロセス内メモリの上限付き FIFO キュー

    タスクは再起動で失われる。満杯の場合、新しいタスクは破棄して
    CRITICAL でログ出力する。
    """

    def __init__(self, capacity: int = 1000, warning_size: int = 10) -> None:
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive: {capacity}")
        self._capacity = capacity
        self._warning_size = warning_size
        self._tasks: deque[InventoryCompensationTask] = deque()
        self._lock = threading.Lock()

    def enqueue(self, task: InventoryCompensationTask) -> None:
        with self._lock:
            if len(self._tasks) >= self._capacity:
                alert_dropped(task, self._capacity)
                return
            self._tasks.append(task)
            size = len(self._tasks)
        alert_enqueued(task, size, self._warning_size)

    def dequeue(self) -> InventoryCompensationTask | None:
        with self._lock:
            if not self._tasks:
                return None
            return self._tasks.popleft()

    def size(self) -> int:
        with self._lock:
            return len(self._tasks)
