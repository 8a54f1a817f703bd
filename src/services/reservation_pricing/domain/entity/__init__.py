from .reservation_pricing import ReservationPricing as ReservationPricing
