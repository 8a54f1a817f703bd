from datetime import datetime

import pytest

from services.product.domain import ProductAvailabilityService, ProductScope
from services.product.domain.service import ReservationScopedChecker, TimeScopedChecker


def at(hour: int) -> datetime:
    return datetime(2025, 1, 6, hour)


@pytest.fixture
def room_product(create_product):
    return create_product(scope=ProductScope.ROOM, total_quantity=5)


@pytest.fixture
def existing(create_reservation, room_product):
    """10:00-12:00 に3個、11:00-13:00 に2個を確保済み"""
    return [
        create_reservation(
            reservation_id=1,
            start=at(10),
            product_breakdowns=(room_product.calculate_price(3),),
        ),
        create_reservation(
            reservation_id=2,
            start=at(11),
            product_breakdowns=(room_product.calculate_price(2),),
        ),
    ]


class TestTimeScopedChecker:
    def test_busiest_slot_binds(self, room_product, existing):
        checker = TimeScopedChecker()
        assert checker.calculate_available_quantity(room_product, [at(10), at(11)], existing) == 0
        assert checker.calculate_available_quantity(room_product, [at(10)], existing) == 2
        assert checker.calculate_available_quantity(room_product, [at(12)], existing) == 3

    def test_request_filling_stock_exactly_is_available(self, room_product, existing):
        checker = TimeScopedChecker()
        assert checker.is_available(room_product, [at(10)], 2, existing)
        assert not checker.is_available(room_product, [at(10)], 3, existing)

    def test_free_slots(self, room_product, existing):
        checker = TimeScopedChecker()
        assert checker.is_available(room_product, [at(14), at(15)], 5, existing)
        assert not checker.is_available(room_product, [at(14)], 6, existing)

    def test_other_products_are_ignored(self, create_product, existing):
        other = create_product(product_id=200, scope=ProductScope.ROOM, total_quantity=1)
        assert TimeScopedChecker().is_available(other, [at(11)], 1, existing)

    def test_empty_slots_rejected(self, room_product):
        with pytest.raises(ValueError):
            TimeScopedChecker().calculate_available_quantity(room_product, [], [])


class TestReservationScopedChecker:
    def test_bounded_by_total_only(self, create_product, existing):
        product = create_product(total_quantity=4)
        checker = ReservationScopedChecker()

        assert checker.is_available(product, [at(10)], 4, existing)
        assert not checker.is_available(product, [at(10)], 5, existing)
        assert checker.calculate_available_quantity(product, [], existing) == 4


class TestProductAvailabilityService:
    def test_dispatches_by_scope(self, create_product, room_product, existing):
        service = ProductAvailabilityService()
        place_product = create_product(product_id=100, scope=ProductScope.PLACE, total_quantity=5)

        assert service.calculate_available_quantity(room_product, [at(11)], existing) == 0
        assert service.calculate_available_quantity(place_product, [at(11)], existing) == 0
        assert (
            service.calculate_available_quantity(create_product(total_quantity=5), [at(11)], existing)
            == 5
        )

    def test_quantity_must_be_positive(self, room_product):
        with pytest.raises(ValueError):
            ProductAvailabilityService().is_available(room_product, [at(10)], 0, [])

    def test_every_scope_needs_a_checker(self):
        with pytest.raises(ValueError):
            ProductAvailabilityService({ProductScope.ROOM: TimeScopedChecker()})
