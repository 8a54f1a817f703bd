from .availability_checker import ReservationScopedChecker as ReservationScopedChecker
from .availability_checker import ReservedUsage as ReservedUsage
from .availability_checker import ScopedAvailabilityChecker as ScopedAvailabilityChecker
from .availability_checker import TimeScopedChecker as TimeScopedChecker
from .product_availability_service import (
    ProductAvailabilityService as ProductAvailabilityService,
)
