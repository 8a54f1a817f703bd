from datetime import datetime

import pytest

from services.reservation_pricing.domain import TimeSlotPriceBreakdown
from services.shared.domain import Money, TimeSlot


def slot(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 6, hour, minute)


class TestTimeSlotPriceBreakdown:
    def test_orders_slots_and_sums(self):
        breakdown = TimeSlotPriceBreakdown(
            slot_prices={slot(11): Money.of("15000"), slot(10): Money.of("10000")},
            time_slot=TimeSlot.HOUR,
        )

        assert breakdown.slot_times == [slot(10), slot(11)]
        assert breakdown.total_price == Money.of("25000")
        assert breakdown.start == slot(10)
        assert breakdown.end == slot(12)

    def test_half_hour_end(self):
        breakdown = TimeSlotPriceBreakdown(
            slot_prices={slot(10): Money.of("1"), slot(10, 30): Money.of("1")},
            time_slot=TimeSlot.HALFHOUR,
        )
        assert breakdown.end == slot(11)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            TimeSlotPriceBreakdown(slot_prices={}, time_slot=TimeSlot.HOUR)

    def test_price_at_unknown_slot_is_zero(self, create_slot_breakdown):
        breakdown = create_slot_breakdown()
        assert breakdown.price_at(slot(20)) == Money.ZERO
        assert not breakdown.contains_slot(slot(20))

    def test_equality_ignores_insertion_order(self):
        a = TimeSlotPriceBreakdown({slot(10): Money.of("1"), slot(11): Money.of("2")}, TimeSlot.HOUR)
        b = TimeSlotPriceBreakdown({slot(11): Money.of("2"), slot(10): Money.of("1")}, TimeSlot.HOUR)
        assert a == b
        assert hash(a) == hash(b)

    def test_immutable_prices(self, create_slot_breakdown):
        with pytest.raises(TypeError):
            create_slot_breakdown().slot_prices[slot(20)] = Money.of("1")
