from .compensation import CompensationQueue as CompensationQueue
from .compensation import InventoryCompensationTask as InventoryCompensationTask
from .entity import ReservationPricing as ReservationPricing
from .enum import ReservationStatus as ReservationStatus
from .event import ReservationEvent as ReservationEvent
from .exception import (
    InvalidReservationStatusException as InvalidReservationStatusException,
)
from .exception import ProductNotAvailableException as ProductNotAvailableException
from .publisher import EventPublisher as EventPublisher
from .repository import ReservationPricingRepository as ReservationPricingRepository
from .value_object import TimeSlotPriceBreakdown as TimeSlotPriceBreakdown
