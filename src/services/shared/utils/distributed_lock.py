from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import timedelta
from typing import TypeVar

from services.shared.utils.logger import get_logger

logger = get_logger("distributed-lock")

T = TypeVar("T")


class DistributedLock(ABC):
    """全インスタンスで共有する名前付きロック

    ロックは TTL 経過で自動的に失効するため、保持者が落ちても
    ジョブが止まり続けることはない。
    """

    @abstractmethod
    def try_acquire(self, name: str, lock_at_most_for: timedelta) -> bool:
        """誰も保持していなければロックを取得する（待機しない）"""
        raise NotImplementedError

    @abstractmethod
    def release(self, name: str) -> None:
        raise NotImplementedError


def run_with_lock(
    lock: DistributedLock,
    name: str,
    lock_at_most_for: timedelta,
    job: Callable[[], T],
) -> T | None:
    """名前付きロックを保持している間だけジョブを実行する

    他のインスタンスがロックを保持していれば、実行せずに None を返す。
    """
    if not lock.try_acquire(name, lock_at_most_for):
        logger.info("Lock held elsewhere, skipping job", extra={"lock_name": name})
        return None

    try:
        return job()
    finally:
        lock.release(name)
