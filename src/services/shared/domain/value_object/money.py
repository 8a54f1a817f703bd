from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

_SCALE = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """金額（0以上、小数点以下2桁・HALF_UP）

    生成時に小数点以下2桁に正規化するため、
    Money(Decimal("100.0")) == Money(Decimal("100.00")) でハッシュも一致する。
    """

    amount: Decimal

    ZERO: ClassVar[Money]

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        if amount < 0:
            raise ValueError(f"Amount cannot be negative: {amount}")
        object.__setattr__(
            self, "amount", amount.quantize(_SCALE, rounding=ROUND_HALF_UP)
        )

    def __str__(self) -> str:
        return str(self.amount)

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> Money:
        """数値から Money を生成"""
        return cls(amount=Decimal(str(value)))

    @classmethod
    def total(cls, amounts: Iterable[Money]) -> Money:
        """金額の合計"""
        result = cls.ZERO
        for money in amounts:
            result = result.add(money)
        return result

    def add(self, other: Money) -> Money:
        return Money(amount=self.amount + other.amount)

    def subtract(self, other: Money) -> Money:
        """金額を減算する（0未満はエラー）"""
        result = self.amount - other.amount
        if result < 0:
            raise ValueError(
                f"Subtraction result cannot be negative: {self.amount} - {other.amount}"
            )
        return Money(amount=result)

    def multiply(self, factor: int | Decimal) -> Money:
        if factor < 0:
            raise ValueError(f"Multiplier cannot be negative: {factor}")
        return Money(amount=self.amount * Decimal(factor))

    def is_greater_than(self, other: Money) -> bool:
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        return self.amount >= other.amount

    def is_less_than(self, other: Money) -> bool:
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return self.amount == 0


Money.ZERO = Money(amount=Decimal("0"))
