from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from services.product.domain import ProductScope
from services.reservation_pricing.applications import (
    ConfirmReservationPricingService,
    ExpirePendingReservationsService,
    ProductRequest,
)
from services.reservation_pricing.domain import ReservationStatus
from services.shared.domain import OptimisticLockException, ProductId, ReservationId, RoomId

SLOT = datetime(2025, 1, 6, 10)


@pytest.fixture
def room_product(create_product, product_repository):
    product = create_product(product_id=1, scope=ProductScope.ROOM, total_quantity=2)
    product_repository.save(product)
    return product


@pytest.fixture
def sweep(reservation_repository, cancel_service):
    return ExpirePendingReservationsService(reservation_repository, cancel_service)


def status_of(reservation_repository, reservation_id: int) -> ReservationStatus:
    return reservation_repository.find_by_id(ReservationId(value=reservation_id)).status


class TestExpirePendingReservationsService:
    def test_cancels_only_overdue_pending(
        self, sweep, create_service, reservation_repository, product_repository, room_product, publisher
    ):
        overdue = create_service.create(
            ReservationId(value=1), RoomId(value=10), [SLOT], [ProductRequest(ProductId(value=1), 1)]
        )
        create_service.create(ReservationId(value=2), RoomId(value=11), [SLOT])
        ConfirmReservationPricingService(reservation_repository, publisher).confirm(
            ReservationId(value=2)
        )

        result = sweep.expire(overdue.expires_at + timedelta(seconds=1))

        assert result.cancelled == 1
        assert result.failed == 0
        assert status_of(reservation_repository, 1) == ReservationStatus.CANCELLED
        assert status_of(reservation_repository, 2) == ReservationStatus.CONFIRMED
        assert product_repository.slot_reserved_quantity(room_product, SLOT) == 0

    def test_not_yet_expired(self, sweep, create_service, reservation_repository):
        pending = create_service.create(ReservationId(value=1), RoomId(value=10), [SLOT])

        result = sweep.expire(pending.expires_at - timedelta(seconds=1))

        assert result.cancelled == 0
        assert status_of(reservation_repository, 1) == ReservationStatus.PENDING

    def test_confirm_winning_the_race_keeps_reservation(
        self,
        sweep,
        create_service,
        reservation_repository,
        product_repository,
        room_product,
        publisher,
    ):
        pending = create_service.create(
            ReservationId(value=1), RoomId(value=10), [SLOT], [ProductRequest(ProductId(value=1), 2)]
        )
        confirm_service = ConfirmReservationPricingService(reservation_repository, publisher)
        update = reservation_repository.update

        def confirmed_first(reservation):
            reservation_repository.update = update
            confirm_service.confirm(ReservationId(value=1))
            return update(reservation)

        reservation_repository.update = confirmed_first

        result = sweep.expire(pending.expires_at + timedelta(seconds=1))

        assert result.cancelled == 0
        assert result.skipped == 1
        assert status_of(reservation_repository, 1) == ReservationStatus.CONFIRMED
        assert product_repository.slot_reserved_quantity(room_product, SLOT) == 2

    def test_confirmed_after_scan_is_skipped(self, create_reservation):
        repository = MagicMock()
        repository.find_expired_pending_reservations.return_value = [create_reservation()]
        cancel = MagicMock()
        cancel.cancel_if_expired.return_value = None

        result = ExpirePendingReservationsService(repository, cancel).expire(
            datetime(2025, 1, 2, tzinfo=timezone.utc)
        )

        assert result.cancelled == 0
        assert result.skipped == 1

    def test_one_failure_does_not_stop_the_sweep(self, create_reservation):
        repository = MagicMock()
        repository.find_expired_pending_reservations.return_value = [
            create_reservation(reservation_id=1),
            create_reservation(reservation_id=2),
            create_reservation(reservation_id=3),
        ]
        cancel = MagicMock()
        cancel.cancel_if_expired.side_effect = [
            RuntimeError("table unavailable"),
            OptimisticLockException("changed"),
            create_reservation(reservation_id=3, status=ReservationStatus.CANCELLED),
        ]

        result = ExpirePendingReservationsService(repository, cancel).expire(
            datetime(2025, 1, 2, tzinfo=timezone.utc)
        )

        assert result.cancelled == 1
        assert result.skipped == 1
        assert result.failed == 1
        assert cancel.cancel_if_expired.call_count == 3
