from services.reservation_pricing.domain import (
    ReservationPricing,
    ReservationPricingRepository,
)
from services.shared.domain import ReservationId, ResourceNotFoundException
from services.shared.domain.exception import ErrorCode


def find_reservation(
    repository: ReservationPricingRepository, reservation_id: ReservationId
) -> ReservationPricing:
    reservation = repository.find_by_id(reservation_id)
    if reservation is None:
        raise ResourceNotFoundException(
            f"Reservation pricing not found for reservationId: {reservation_id}",
            error_code=ErrorCode.RESERVATION_NOT_FOUND,
        )
    return reservation


class GetReservationPricingService:
    def __init__(self, repository: ReservationPricingRepository) -> None:
        self._repository = repository

    def get(self, reservation_id: ReservationId) -> ReservationPricing:
        return find_reservation(self._repository, reservation_id)
