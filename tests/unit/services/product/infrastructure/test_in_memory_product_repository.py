import threading
from datetime import datetime

import pytest

from services.product.domain import ProductScope
from services.product.infrastructure import InMemoryProductRepository
from services.shared.domain import (
    BusinessRuleViolationException,
    PlaceId,
    ProductId,
    RoomId,
)

SLOT = datetime(2025, 1, 6, 10)


@pytest.fixture
def repository():
    return InMemoryProductRepository()


class TestReservationScopedStock:
    def test_reserve_and_release(self, repository, create_product):
        repository.save(create_product(total_quantity=5))

        assert repository.reserve_quantity(ProductId(value=100), 3)
        assert not repository.reserve_quantity(ProductId(value=100), 3)
        assert repository.find_by_id(ProductId(value=100)).available_quantity == 2

        assert repository.release_quantity(ProductId(value=100), 3)
        assert repository.find_by_id(ProductId(value=100)).reserved_quantity == 0

    def test_release_never_goes_negative(self, repository, create_product):
        repository.save(create_product(total_quantity=5))
        repository.reserve_quantity(ProductId(value=100), 1)

        assert not repository.release_quantity(ProductId(value=100), 2)
        assert repository.find_by_id(ProductId(value=100)).reserved_quantity == 1

    def test_reserve_unknown_product(self, repository):
        assert not repository.reserve_quantity(ProductId(value=999), 1)

    def test_concurrent_reserves_never_oversell(self, repository, create_product):
        repository.save(create_product(total_quantity=5))
        results = []
        barrier = threading.Barrier(10)

        def reserve():
            barrier.wait()
            results.append(repository.reserve_quantity(ProductId(value=100), 1))

        threads = [threading.Thread(target=reserve) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 5
        assert repository.find_by_id(ProductId(value=100)).available_quantity == 0

    def test_save_keeps_reserved_stock(self, repository, create_product):
        repository.save(create_product(total_quantity=5))
        repository.reserve_quantity(ProductId(value=100), 2)

        repository.save(create_product(name="Renamed", total_quantity=6))

        product = repository.find_by_id(ProductId(value=100))
        assert product.name == "Renamed"
        assert product.reserved_quantity == 2

    def test_save_below_reserved_rejected(self, repository, create_product):
        repository.save(create_product(total_quantity=5))
        repository.reserve_quantity(ProductId(value=100), 4)

        with pytest.raises(BusinessRuleViolationException):
            repository.save(create_product(total_quantity=3))


class TestTimeSlotStock:
    def test_room_counter_is_per_slot(self, repository, create_product):
        product = create_product(scope=ProductScope.ROOM, total_quantity=2)
        repository.save(product)

        assert repository.reserve_time_slot_quantity(product, SLOT, 2)
        assert not repository.reserve_time_slot_quantity(product, SLOT, 1)
        assert repository.reserve_time_slot_quantity(product, datetime(2025, 1, 6, 11), 2)

        assert repository.release_time_slot_quantity(product, SLOT, 1)
        assert repository.slot_reserved_quantity(product, SLOT) == 1
        assert not repository.release_time_slot_quantity(product, SLOT, 2)

    def test_reservation_scope_has_no_slot_stock(self, repository, create_product):
        product = create_product()
        with pytest.raises(ValueError):
            repository.reserve_time_slot_quantity(product, SLOT, 1)


class TestFinders:
    def test_accessible_products(self, repository, create_product):
        repository.save(create_product(product_id=1, scope=ProductScope.PLACE, place_id=1))
        repository.save(create_product(product_id=2, scope=ProductScope.PLACE, place_id=2))
        repository.save(create_product(product_id=3, scope=ProductScope.ROOM, room_id=10))
        repository.save(create_product(product_id=4, scope=ProductScope.ROOM, room_id=11))
        repository.save(create_product(product_id=5))

        products = repository.find_accessible_products(PlaceId(value=1), RoomId(value=10))

        assert sorted(p.product_id.value for p in products) == [1, 3, 5]

    def test_find_all_by_id_skips_missing(self, repository, create_product):
        repository.save(create_product(product_id=1))

        products = repository.find_all_by_id([ProductId(value=1), ProductId(value=2)])

        assert [p.product_id.value for p in products] == [1]

    def test_delete(self, repository, create_product):
        repository.save(create_product(product_id=1))
        repository.delete_by_id(ProductId(value=1))
        assert not repository.exists_by_id(ProductId(value=1))

    def test_delete_drops_slot_counters(self, repository, create_product):
        product = create_product(product_id=1, scope=ProductScope.ROOM, total_quantity=2)
        repository.save(product)
        assert repository.reserve_time_slot_quantity(product, datetime(2025, 1, 6, 10), 2)

        repository.delete_by_id(ProductId(value=1))
        repository.save(product)

        assert repository.slot_reserved_quantity(product, datetime(2025, 1, 6, 10)) == 0
        assert repository.reserve_time_slot_quantity(product, datetime(2025, 1, 6, 10), 2)
