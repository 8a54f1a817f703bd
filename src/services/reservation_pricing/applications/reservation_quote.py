from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from services.pricing_policy.domain import PricingPolicy, PricingPolicyRepository
from services.product.domain import Product, ProductPriceBreakdown, ProductRepository
from services.reservation_pricing.domain import TimeSlotPriceBreakdown
from services.shared.domain import Money, ProductId, ResourceNotFoundException, RoomId
from services.shared.domain.exception import ErrorCode


@dataclass(frozen=True)
class ProductRequest:
    product_id: ProductId
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive: {self.quantity}")


@dataclass(frozen=True)
class ReservationQuote:
    """保存しない料金計算結果"""

    time_slot_breakdown: TimeSlotPriceBreakdown
    product_breakdowns: tuple[ProductPriceBreakdown, ...]

    @property
    def time_slot_total(self) -> Money:
        return self.time_slot_breakdown.total_price

    @property
    def product_total(self) -> Money:
        return Money.total(b.total_price for b in self.product_breakdowns)

    @property
    def total_price(self) -> Money:
        return self.time_slot_total.add(self.product_total)


class ReservationQuoter:
    """料金計算に使う料金ポリシーと商品を取得する"""

    def __init__(
        self,
        policy_repository: PricingPolicyRepository,
        product_repository: ProductRepository,
    ) -> None:
        self._policies = policy_repository
        self._products = product_repository

    def find_policy(self, room_id: RoomId) -> PricingPolicy:
        policy = self._policies.find_by_id(room_id)
        if policy is None:
            raise ResourceNotFoundException(
                f"Pricing policy not found for roomId: {room_id}",
                error_code=ErrorCode.RESERVATION_PRICING_POLICY_NOT_FOUND,
            )
        return policy

    def load_products(
        self, requests: Sequence[ProductRequest]
    ) -> list[tuple[Product, int]]:
        """要求された商品（要求順、1回の取得で読み込む）"""
        if not requests:
            return []
        found = {
            p.product_id: p
            for p in self._products.find_all_by_id([r.product_id for r in requests])
        }
        missing = [r.product_id.value for r in requests if r.product_id not in found]
        if missing:
            raise ResourceNotFoundException(
                f"Products not found: {missing}",
                error_code=ErrorCode.RESERVATION_PRODUCT_NOT_FOUND,
            )
        return [(found[r.product_id], r.quantity) for r in requests]

    @staticmethod
    def slot_breakdown(
        policy: PricingPolicy, slots: Sequence[datetime]
    ) -> TimeSlotPriceBreakdown:
        """最初の要求スロットから最後のスロットの終わりまで全スロットの料金を計算する"""
        if not slots:
            raise ValueError("Time slots cannot be empty")
        start = min(slots)
        end = max(slots) + timedelta(minutes=policy.time_slot.minutes)
        return TimeSlotPriceBreakdown.from_price_breakdown(
            policy.calculate_price_breakdown(start, end), policy.time_slot
        )

    @staticmethod
    def product_breakdowns(
        products: Sequence[tuple[Product, int]],
    ) -> tuple[ProductPriceBreakdown, ...]:
        return tuple(product.calculate_price(quantity) for product, quantity in products)

    def quote(
        self,
        room_id: RoomId,
        slots: Sequence[datetime],
        requests: Sequence[ProductRequest],
    ) -> ReservationQuote:
        policy = self.find_policy(room_id)
        return ReservationQuote(
            time_slot_breakdown=self.slot_breakdown(policy, slots),
            product_breakdowns=self.product_breakdowns(self.load_products(requests)),
        )
