from .dynamodb_compensation_queue import (
    DynamoDBCompensationQueue as DynamoDBCompensationQueue,
)
from .dynamodb_reservation_pricing_repository import (
    DynamoDBReservationPricingRepository as DynamoDBReservationPricingRepository,
)
from .eventbridge_event_publisher import (
    EventBridgeEventPublisher as EventBridgeEventPublisher,
)
from .in_memory_compensation_queue import (
    InMemoryCompensationQueue as InMemoryCompensationQueue,
)
from .in_memory_reservation_pricing_repository import (
    InMemoryReservationPricingRepository as InMemoryReservationPricingRepository,
)
