from __future__ import annotations

from dataclasses import dataclass

from services.product.domain.enum import PricingType
from services.shared.domain import Money, ProductId


@dataclass(frozen=True)
class ProductPriceBreakdown:
    """予約の商品明細（料金計算時点のスナップショット）"""

    product_id: ProductId
    product_name: str
    quantity: int
    unit_price: Money
    total_price: Money
    pricing_type: PricingType

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive: {self.quantity}")
        if not self.product_name or not self.product_name.strip():
            raise ValueError("Product name cannot be empty")
