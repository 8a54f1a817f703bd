from __future__ import annotations

from dataclasses import dataclass

from services.product.domain.enum import PricingType
from services.shared.domain import Money


@dataclass(frozen=True)
class PricingStrategy:
    """商品明細の課金方式

    - ONE_TIME: 数量に関係なく initial_price を1回
    - SIMPLE_STOCK: 1個あたり initial_price
    - INITIAL_PLUS_ADDITIONAL: 1個目は initial_price、
      2個目以降は1個あたり additional_price
    """

    pricing_type: PricingType
    initial_price: Money
    additional_price: Money | None = None

    def __post_init__(self) -> None:
        if self.pricing_type == PricingType.INITIAL_PLUS_ADDITIONAL:
            if self.additional_price is None:
                raise ValueError(
                    "Additional price is required for INITIAL_PLUS_ADDITIONAL type"
                )
        elif self.additional_price is not None:
            raise ValueError(
                f"Additional price must be empty for {self.pricing_type.value} type"
            )

    @classmethod
    def initial_plus_additional(
        cls, initial_price: Money, additional_price: Money
    ) -> PricingStrategy:
        return cls(PricingType.INITIAL_PLUS_ADDITIONAL, initial_price, additional_price)

    @classmethod
    def one_time(cls, price: Money) -> PricingStrategy:
        return cls(PricingType.ONE_TIME, price)

    @classmethod
    def simple_stock(cls, unit_price: Money) -> PricingStrategy:
        return cls(PricingType.SIMPLE_STOCK, unit_price)

    def calculate(self, quantity: int) -> Money:
        """指定数量での明細合計"""
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")

        if self.pricing_type == PricingType.ONE_TIME:
            return self.initial_price
        if self.pricing_type == PricingType.SIMPLE_STOCK:
            return self.initial_price.multiply(quantity)
        # INITIAL_PLUS_ADDITIONAL
        return self.initial_price.add(self.additional_price.multiply(quantity - 1))
