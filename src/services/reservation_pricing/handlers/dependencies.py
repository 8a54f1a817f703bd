"""予約料金 Lambda の依存関係の組み立て

各ビルダーはキャッシュし、同じ実行環境の handler モジュール間で
クライアントを共有する。
"""

from functools import lru_cache

from services.pricing_policy.infrastructure.dynamodb_pricing_policy_repository import (
    DynamoDBPricingPolicyRepository,
)
from services.product.infrastructure.dynamodb_product_repository import (
    DynamoDBProductRepository,
)
from services.reservation_pricing.applications import (
    CancelReservationPricingService,
    ConfirmReservationPricingService,
    CreateReservationPricingService,
    InventoryAllocator,
    RecordSlotReservedService,
    ReservationQuoter,
)
from services.reservation_pricing.infrastructure import (
    DynamoDBCompensationQueue,
    DynamoDBReservationPricingRepository,
    EventBridgeEventPublisher,
)
from services.shared.utils import get_settings


def _table_name() -> str | None:
    return get_settings().table_name or None


@lru_cache
def policy_repository() -> DynamoDBPricingPolicyRepository:
    return DynamoDBPricingPolicyRepository(_table_name())


@lru_cache
def product_repository() -> DynamoDBProductRepository:
    return DynamoDBProductRepository(_table_name())


@lru_cache
def reservation_repository() -> DynamoDBReservationPricingRepository:
    return DynamoDBReservationPricingRepository(_table_name())


@lru_cache
def compensation_queue() -> DynamoDBCompensationQueue:
    settings = get_settings()
    return DynamoDBCompensationQueue(
        _table_name(),
        capacity=settings.compensation_queue_capacity,
        warning_size=settings.compensation_queue_warning_size,
    )


@lru_cache
def event_publisher() -> EventBridgeEventPublisher:
    settings = get_settings()
    return EventBridgeEventPublisher(settings.event_bus_name, settings.event_source)


@lru_cache
def quoter() -> ReservationQuoter:
    return ReservationQuoter(policy_repository(), product_repository())


@lru_cache
def allocator() -> InventoryAllocator:
    return InventoryAllocator(
        product_repository(), reservation_repository(), compensation_queue()
    )


def create_service() -> CreateReservationPricingService:
    return CreateReservationPricingService(
        reservation_repository(),
        quoter(),
        allocator(),
        event_publisher(),
        get_settings().pending_timeout_minutes,
    )


def record_slot_reserved_service() -> RecordSlotReservedService:
    return RecordSlotReservedService(
        reservation_repository(),
        quoter(),
        event_publisher(),
        get_settings().pending_timeout_minutes,
    )


def confirm_service() -> ConfirmReservationPricingService:
    return ConfirmReservationPricingService(reservation_repository(), event_publisher())


def cancel_service() -> CancelReservationPricingService:
    return CancelReservationPricingService(
        reservation_repository(), allocator(), event_publisher()
    )
