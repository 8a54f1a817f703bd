from __future__ import annotations

from datetime import date, datetime, time, timedelta

from services.pricing_policy.domain.value_object import (
    PriceBreakdown,
    SlotPrice,
    TimeRangePrices,
)
from services.shared.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    DayOfWeek,
    Money,
    PlaceId,
    RoomId,
    TimeSlot,
)
from services.shared.domain.exception import ErrorCode


class PricingPolicy(AggregateRoot[RoomId]):
    """部屋の料金表（スロット単位のデフォルト料金と曜日別の時間帯料金）"""

    def __init__(
        self,
        id: RoomId,
        place_id: PlaceId,
        time_slot: TimeSlot,
        default_price: Money,
        time_range_prices: TimeRangePrices | None = None,
    ) -> None:
        super().__init__(id)
        self._place_id = place_id
        self._time_slot = time_slot
        self._default_price = default_price
        self._time_range_prices = time_range_prices or TimeRangePrices.empty()

    @classmethod
    def create(
        cls,
        room_id: RoomId,
        place_id: PlaceId,
        time_slot: TimeSlot,
        default_price: Money = Money.ZERO,
    ) -> PricingPolicy:
        return cls(room_id, place_id, time_slot, default_price)

    @classmethod
    def create_with_time_range_prices(
        cls,
        room_id: RoomId,
        place_id: PlaceId,
        time_slot: TimeSlot,
        default_price: Money,
        time_range_prices: TimeRangePrices,
    ) -> PricingPolicy:
        return cls(room_id, place_id, time_slot, default_price, time_range_prices)

    @property
    def room_id(self) -> RoomId:
        return self._id

    @property
    def place_id(self) -> PlaceId:
        return self._place_id

    @property
    def time_slot(self) -> TimeSlot:
        return self._time_slot

    @property
    def default_price(self) -> Money:
        return self._default_price

    @property
    def time_range_prices(self) -> TimeRangePrices:
        return self._time_range_prices

    def update_default_price(self, default_price: Money) -> None:
        self._default_price = default_price

    def reset_prices(self, time_range_prices: TimeRangePrices) -> None:
        """時間帯別料金を一括で置き換える"""
        self._time_range_prices = time_range_prices

    def update_time_slot(self, time_slot: TimeSlot) -> None:
        """スロット単位を変更する（計算済みの予約は元の単位のまま）"""
        if self._time_slot == time_slot:
            return
        self._time_slot = time_slot

    def copy_prices_from(self, source: PricingPolicy) -> None:
        """同じプレイスの部屋からデフォルト料金と時間帯別料金を引き継ぐ"""
        if source.place_id != self._place_id:
            raise BusinessRuleViolationException(
                f"Cannot copy pricing policy between different places: "
                f"source place={source.place_id}, target place={self._place_id}",
                error_code=ErrorCode.CANNOT_COPY_DIFFERENT_PLACE,
            )
        self.update_default_price(source.default_price)
        self.reset_prices(source.time_range_prices)

    def price_at(self, slot_time: datetime) -> Money:
        """slot_time から始まるスロットの料金"""
        day_of_week = DayOfWeek.from_date(slot_time)
        override = self._time_range_prices.find_price_for_slot(
            day_of_week, slot_time.time()
        )
        return override if override is not None else self._default_price

    def calculate_price_breakdown(self, start: datetime, end: datetime) -> PriceBreakdown:
        """[start, end) の各スロットの料金をスロット単位で計算する

        末尾の端数スロットは1スロット分として課金する。
        """
        if start >= end:
            raise ValueError(
                f"Start date time must be before end date time: {start} - {end}"
            )

        step = timedelta(minutes=self._time_slot.minutes)
        slot_prices: list[SlotPrice] = []
        current = start
        while current < end:
            slot_prices.append(SlotPrice(slot_time=current, price=self.price_at(current)))
            current += step

        return PriceBreakdown(slot_prices=tuple(slot_prices))

    def prices_for_date(self, target: date) -> dict[time, Money]:
        """1日の全スロット開始時刻（00:00〜23:59）の料金"""
        start = datetime.combine(target, time.min)
        end = start + timedelta(days=1)
        breakdown = self.calculate_price_breakdown(start, end)
        return {slot.slot_time.time(): slot.price for slot in breakdown.slot_prices}
