from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from services.product.domain import ProductPriceBreakdown
from services.reservation_pricing.domain.enum import ReservationStatus
from services.reservation_pricing.domain.event import (
    ReservationCancelled,
    ReservationConfirmed,
    ReservationPricingCreated,
)
from services.reservation_pricing.domain.exception import (
    InvalidReservationStatusException,
)
from services.reservation_pricing.domain.value_object import TimeSlotPriceBreakdown
from services.shared.domain import AggregateRoot, Money, ProductId, ReservationId, RoomId


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ReservationPricing(AggregateRoot[ReservationId]):
    """予約の料金計算結果とステータス"""

    def __init__(
        self,
        id: ReservationId,
        room_id: RoomId,
        status: ReservationStatus,
        time_slot_breakdown: TimeSlotPriceBreakdown,
        product_breakdowns: Sequence[ProductPriceBreakdown],
        total_price: Money,
        calculated_at: datetime,
        expires_at: datetime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id)
        product_breakdowns = tuple(product_breakdowns)
        expected = time_slot_breakdown.total_price.add(
            Money.total(b.total_price for b in product_breakdowns)
        )
        if total_price != expected:
            raise ValueError(
                f"Total price mismatch: expected {expected} but got {total_price}"
            )
        self._room_id = room_id
        self._status = status
        self._time_slot_breakdown = time_slot_breakdown
        self._product_breakdowns = product_breakdowns
        self._total_price = total_price
        self._calculated_at = calculated_at
        self._expires_at = expires_at
        self._version = version

    @classmethod
    def calculate(
        cls,
        reservation_id: ReservationId,
        room_id: RoomId,
        time_slot_breakdown: TimeSlotPriceBreakdown,
        product_breakdowns: Sequence[ProductPriceBreakdown],
        pending_timeout_minutes: int,
        now: datetime | None = None,
    ) -> ReservationPricing:
        """pending_timeout_minutes 後に期限切れとなる PENDING の料金を作成する"""
        if pending_timeout_minutes <= 0:
            raise ValueError(
                f"Pending timeout must be positive: {pending_timeout_minutes}"
            )
        calculated_at = now or _now()
        product_breakdowns = tuple(product_breakdowns)
        total = time_slot_breakdown.total_price.add(
            Money.total(b.total_price for b in product_breakdowns)
        )
        pricing = cls(
            id=reservation_id,
            room_id=room_id,
            status=ReservationStatus.PENDING,
            time_slot_breakdown=time_slot_breakdown,
            product_breakdowns=product_breakdowns,
            total_price=total,
            calculated_at=calculated_at,
            expires_at=calculated_at + timedelta(minutes=pending_timeout_minutes),
        )
        pricing.add_domain_event(
            ReservationPricingCreated(
                reservation_id=reservation_id,
                room_id=room_id,
                total_price=total,
                expires_at=pricing.expires_at,
                occurred_at=calculated_at,
            )
        )
        return pricing

    @property
    def reservation_id(self) -> ReservationId:
        return self._id

    @property
    def room_id(self) -> RoomId:
        return self._room_id

    @property
    def status(self) -> ReservationStatus:
        return self._status

    @property
    def time_slot_breakdown(self) -> TimeSlotPriceBreakdown:
        return self._time_slot_breakdown

    @property
    def product_breakdowns(self) -> tuple[ProductPriceBreakdown, ...]:
        return self._product_breakdowns

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def calculated_at(self) -> datetime:
        return self._calculated_at

    @property
    def expires_at(self) -> datetime | None:
        """PENDING の予約の期限（PENDING 以外では None）"""
        return self._expires_at

    @property
    def version(self) -> int:
        """作成後に保存された更新の回数"""
        return self._version

    def increment_version(self) -> None:
        self._version += 1

    @property
    def time_slot_total(self) -> Money:
        return self._time_slot_breakdown.total_price

    @property
    def product_total(self) -> Money:
        return Money.total(b.total_price for b in self._product_breakdowns)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (
            self._status == ReservationStatus.PENDING
            and self._expires_at is not None
            and self._expires_at <= (now or _now())
        )

    def contains_slot(self, slot_time: datetime) -> bool:
        return self._time_slot_breakdown.contains_slot(slot_time)

    def quantity_of(self, product_id: ProductId) -> int:
        """この予約が確保している商品の数量"""
        return sum(
            b.quantity for b in self._product_breakdowns if b.product_id == product_id
        )

    def confirm(self, now: datetime | None = None) -> None:
        if self._status != ReservationStatus.PENDING:
            raise InvalidReservationStatusException(self._status, "confirm")
        self._status = ReservationStatus.CONFIRMED
        self._expires_at = None
        self.add_domain_event(
            ReservationConfirmed(
                reservation_id=self._id,
                room_id=self._room_id,
                total_price=self._total_price,
                occurred_at=now or _now(),
            )
        )

    def cancel(self, now: datetime | None = None) -> None:
        """PENDING または CONFIRMED からキャンセルする（二重キャンセルはエラー）"""
        if self._status == ReservationStatus.CANCELLED:
            raise InvalidReservationStatusException(self._status, "cancel")
        self._to_cancelled(refunded=False, now=now)

    def refund(self, now: datetime | None = None) -> None:
        if self._status != ReservationStatus.CONFIRMED:
            raise InvalidReservationStatusException(self._status, "refund")
        self._to_cancelled(refunded=True, now=now)

    def update_products(
        self, product_breakdowns: Sequence[ProductPriceBreakdown]
    ) -> None:
        """PENDING の予約の商品明細を置き換えて再計算する"""
        if self._status != ReservationStatus.PENDING:
            raise InvalidReservationStatusException(self._status, "update products of")
        self._product_breakdowns = tuple(product_breakdowns)
        self._total_price = self.time_slot_total.add(self.product_total)

    def _to_cancelled(self, refunded: bool, now: datetime | None) -> None:
        self._status = ReservationStatus.CANCELLED
        self._expires_at = None
        self.add_domain_event(
            ReservationCancelled(
                reservation_id=self._id,
                room_id=self._room_id,
                refunded=refunded,
                occurred_at=now or _now(),
            )
        )
