from .reservation_pricing_repository import (
    ReservationPricingRepository as ReservationPricingRepository,
)
