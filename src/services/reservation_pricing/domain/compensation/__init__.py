from .compensation_queue import CompensationQueue as CompensationQueue
from .inventory_compensation_task import (
    InventoryCompensationTask as InventoryCompensationTask,
)
