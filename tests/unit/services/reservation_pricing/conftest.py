from unittest.mock import MagicMock

import pytest

from services.product.infrastructure import InMemoryProductRepository
from services.reservation_pricing.applications import (
    CancelReservationPricingService,
    CreateReservationPricingService,
    InventoryAllocator,
    ReservationQuoter,
)
from services.reservation_pricing.infrastructure import (
    InMemoryCompensationQueue,
    InMemoryReservationPricingRepository,
)
from services.shared.domain import PlaceId, RoomId


@pytest.fixture
def product_repository():
    return InMemoryProductRepository()


@pytest.fixture
def reservation_repository():
    repository = InMemoryReservationPricingRepository()
    repository.register_room(RoomId(value=10), PlaceId(value=1))
    repository.register_room(RoomId(value=11), PlaceId(value=1))
    return repository


@pytest.fixture
def policy_repository(create_policy):
    policies = {RoomId(value=10): create_policy(room_id=10), RoomId(value=11): create_policy(room_id=11)}
    repository = MagicMock()
    repository.find_by_id.side_effect = policies.get
    return repository


@pytest.fixture
def compensation_queue():
    return InMemoryCompensationQueue(capacity=100)


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def quoter(policy_repository, product_repository):
    return ReservationQuoter(policy_repository, product_repository)


@pytest.fixture
def allocator(product_repository, reservation_repository, compensation_queue):
    return InventoryAllocator(product_repository, reservation_repository, compensation_queue)


@pytest.fixture
def create_service(reservation_repository, quoter, allocator, publisher):
    return CreateReservationPricingService(
        reservation_repository, quoter, allocator, publisher, pending_timeout_minutes=10
    )


@pytest.fixture
def cancel_service(reservation_repository, allocator, publisher):
    return CancelReservationPricingService(reservation_repository, allocator, publisher)
