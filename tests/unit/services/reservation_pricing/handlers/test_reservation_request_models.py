from datetime import datetime

import pytest
from pydantic import ValidationError

from services.reservation_pricing.handlers.request_models import (
    CreateReservationPricingRequest,
    to_product_requests,
)
from services.reservation_pricing.handlers.response_models import to_response
from services.shared.domain import ProductId


class TestCreateReservationPricingRequest:
    def test_offsets_are_dropped_from_slots(self):
        request = CreateReservationPricingRequest.model_validate(
            {
                "reservation_id": 1,
                "room_id": 10,
                "slots": ["2025-01-06T10:00:00+09:00", "2025-01-06T11:00:00Z"],
            }
        )

        assert request.slots == [datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11)]
        assert request.products == []

    def test_slots_required(self):
        with pytest.raises(ValidationError):
            CreateReservationPricingRequest.model_validate(
                {"reservation_id": 1, "room_id": 10, "slots": []}
            )

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CreateReservationPricingRequest.model_validate(
                {
                    "reservation_id": 1,
                    "room_id": 10,
                    "slots": ["2025-01-06T10:00:00"],
                    "products": [{"product_id": 1, "quantity": 0}],
                }
            )

    def test_to_product_requests(self):
        request = CreateReservationPricingRequest.model_validate(
            {
                "reservation_id": 1,
                "room_id": 10,
                "slots": ["2025-01-06T10:00:00"],
                "products": [{"product_id": 5, "quantity": 2}],
            }
        )

        [product_request] = to_product_requests(request.products)

        assert product_request.product_id == ProductId(value=5)
        assert product_request.quantity == 2


class TestToResponse:
    def test_serialises_reservation(self, create_reservation, create_product):
        reservation = create_reservation(
            product_breakdowns=(create_product().calculate_price(2),)
        )

        data = to_response(reservation)["data"]

        assert data["status"] == "PENDING"
        assert data["slot_prices"][0] == {"slot_time": "2025-01-06T10:00", "price": "10000.00"}
        assert data["product_total"] == "2000.00"
        assert data["total_price"] == "22000.00"
        assert data["expires_at"] == "2025-01-01T09:20:00+00:00"
