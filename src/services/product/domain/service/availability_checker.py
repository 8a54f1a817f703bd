from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from services.product.domain.entity import Product
from services.shared.domain import ProductId


class ReservedUsage(Protocol):
    """在庫判定に必要な既存予約の情報"""

    def contains_slot(self, slot_time: datetime) -> bool: ...

    def quantity_of(self, product_id: ProductId) -> int: ...


class ScopedAvailabilityChecker(ABC):
    """商品スコープごとの在庫判定ルール"""

    @abstractmethod
    def is_available(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        requested_quantity: int,
        existing_reservations: Sequence[ReservedUsage],
    ) -> bool:
        raise NotImplementedError

    @abstractmethod
    def calculate_available_quantity(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        raise NotImplementedError


class TimeScopedChecker(ScopedAvailabilityChecker):
    """PLACE / ROOM スコープ: 同じスロットの予約間で在庫を共有する

    上限を決めるのは要求スロットの合計ではなく、最も混んでいるスロット。
    """

    def is_available(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        requested_quantity: int,
        existing_reservations: Sequence[ReservedUsage],
    ) -> bool:
        max_used = self._max_used(product, requested_slots, existing_reservations)
        return max_used + requested_quantity <= product.total_quantity

    def calculate_available_quantity(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        max_used = self._max_used(product, requested_slots, existing_reservations)
        return max(0, product.total_quantity - max_used)

    def _max_used(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        if not requested_slots:
            raise ValueError("Requested time slots cannot be empty")
        return max(
            self._used_at(product.product_id, slot, existing_reservations)
            for slot in requested_slots
        )

    @staticmethod
    def _used_at(
        product_id: ProductId,
        slot: datetime,
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        return sum(
            reservation.quantity_of(product_id)
            for reservation in existing_reservations
            if reservation.contains_slot(slot)
        )


class ReservationScopedChecker(ScopedAvailabilityChecker):
    """RESERVATION スコープ: 時間に依存せず、総在庫だけが上限

    同時の確保は Repository のアトミックな reserve で決着させる。
    """

    def is_available(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        requested_quantity: int,
        existing_reservations: Sequence[ReservedUsage],
    ) -> bool:
        return requested_quantity <= product.total_quantity

    def calculate_available_quantity(
        self,
        product: Product,
        requested_slots: Sequence[datetime],
        existing_reservations: Sequence[ReservedUsage],
    ) -> int:
        return product.total_quantity
