from abc import ABC, abstractmethod
from collections.abc import Iterable

from services.reservation_pricing.domain.event import ReservationEvent


class EventPublisher(ABC):
    @abstractmethod
    def publish(self, event: ReservationEvent) -> None:
        raise NotImplementedError

    def publish_all(self, events: Iterable[ReservationEvent]) -> None:
        for event in events:
            self.publish(event)
