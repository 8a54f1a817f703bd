from abc import ABC, abstractmethod

from services.reservation_pricing.domain.compensation.inventory_compensation_task import (
    InventoryCompensationTask,
)


class CompensationQueue(ABC):
    """未完了の在庫解放の FIFO キュー"""

    @abstractmethod
    def enqueue(self, task: InventoryCompensationTask) -> None:
        raise NotImplementedError

    @abstractmethod
    def dequeue(self) -> InventoryCompensationTask | None:
        """次のタスク（キューが空なら None）"""
        raise NotImplementedError

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError
