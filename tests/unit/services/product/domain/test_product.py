import pytest

from services.product.domain import PricingStrategy, PricingType, Product, ProductScope
from services.shared.domain import (
    BusinessRuleViolationException,
    ErrorCode,
    Money,
    PlaceId,
    ProductId,
    RoomId,
)


class TestProductScope:
    def test_place_scope_requires_place_id(self):
        with pytest.raises(ValueError):
            Product(
                id=ProductId(value=1),
                scope=ProductScope.PLACE,
                name="Whiteboard",
                pricing_strategy=PricingStrategy.one_time(Money.of("500")),
                total_quantity=1,
            )

    def test_place_scope_rejects_room_id(self):
        with pytest.raises(ValueError):
            Product(
                id=ProductId(value=1),
                scope=ProductScope.PLACE,
                name="Whiteboard",
                pricing_strategy=PricingStrategy.one_time(Money.of("500")),
                total_quantity=1,
                place_id=PlaceId(value=1),
                room_id=RoomId(value=10),
            )

    def test_reservation_scope_rejects_ids(self):
        with pytest.raises(ValueError):
            Product(
                id=ProductId(value=1),
                scope=ProductScope.RESERVATION,
                name="Drink",
                pricing_strategy=PricingStrategy.one_time(Money.of("500")),
                total_quantity=1,
                place_id=PlaceId(value=1),
            )

    def test_room_scoped_factory(self):
        product = Product.create_room_scoped(
            ProductId(value=1),
            PlaceId(value=1),
            RoomId(value=10),
            "  Mic  ",
            PricingStrategy.simple_stock(Money.of("800")),
            2,
        )
        assert product.scope == ProductScope.ROOM
        assert product.name == "Mic"
        assert product.scope.requires_time_slots()

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            Product.create_reservation_scoped(
                ProductId(value=1), "   ", PricingStrategy.one_time(Money.of("1")), 1
            )


class TestProductQuantity:
    def test_available_quantity(self, create_product):
        product = create_product(total_quantity=5, reserved_quantity=2)
        assert product.available_quantity == 3
        assert product.can_reserve(3)
        assert not product.can_reserve(4)

    def test_update_total_quantity_below_reserved(self, create_product):
        product = create_product(total_quantity=5, reserved_quantity=3)

        with pytest.raises(BusinessRuleViolationException) as exc_info:
            product.update_total_quantity(2)
        assert exc_info.value.error_code == ErrorCode.TOTAL_QUANTITY_BELOW_RESERVED
        assert product.total_quantity == 5

    def test_update_total_quantity(self, create_product):
        product = create_product(total_quantity=5, reserved_quantity=3)
        product.update_total_quantity(3)
        assert product.available_quantity == 0

    def test_calculate_price(self, create_product):
        product = create_product(
            name="Projector",
            strategy=PricingStrategy.initial_plus_additional(Money.of("3000"), Money.of("1000")),
        )

        breakdown = product.calculate_price(3)

        assert breakdown.product_id == ProductId(value=100)
        assert breakdown.product_name == "Projector"
        assert breakdown.quantity == 3
        assert breakdown.unit_price == Money.of("3000")
        assert breakdown.total_price == Money.of("5000")
        assert breakdown.pricing_type == PricingType.INITIAL_PLUS_ADDITIONAL
