from services.reservation_pricing.applications.get_reservation_pricing import (
    find_reservation,
)
from services.reservation_pricing.domain import (
    EventPublisher,
    ReservationPricing,
    ReservationPricingRepository,
)
from services.shared.domain import ReservationId
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class ConfirmReservationPricingService:
    """決済完了後に PENDING -> CONFIRMED にする"""

    def __init__(
        self, repository: ReservationPricingRepository, publisher: EventPublisher
    ) -> None:
        self._repository = repository
        self._publisher = publisher

    def confirm(self, reservation_id: ReservationId) -> ReservationPricing:
        reservation = find_reservation(self._repository, reservation_id)
        reservation.confirm()
        self._repository.update(reservation)
        self._publisher.publish_all(reservation.flush_domain_events())
        logger.info(
            "Confirmed reservation pricing",
            extra={"reservation_id": reservation_id.value},
        )
        return reservation
