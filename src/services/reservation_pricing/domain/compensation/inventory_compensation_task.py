from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from services.shared.domain import ProductId, RoomId


@dataclass(frozen=True)
class InventoryCompensationTask:
    """失敗してリトライが必要な在庫解放

    RESERVATION スコープの在庫では time_slots は空。
    それ以外はスロットごとに解放する。
    """

    product_id: ProductId
    quantity: int
    original_error: str
    room_id: RoomId | None = None
    time_slots: tuple[datetime, ...] = ()
    retry_count: int = 0
    task_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive: {self.quantity}")
        if self.retry_count < 0:
            raise ValueError(f"Retry count cannot be negative: {self.retry_count}")

    def increment_retry_count(self) -> InventoryCompensationTask:
        return replace(self, retry_count=self.retry_count + 1)
