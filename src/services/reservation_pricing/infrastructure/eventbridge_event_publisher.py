import json

import boto3

from services.reservation_pricing.domain import EventPublisher, ReservationEvent
from services.reservation_pricing.domain.event import to_message
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class EventBridgeEventPublisher(EventPublisher):
    """予約イベントを EventBridge に発行する"""

    def __init__(self, event_bus_name: str, source: str, client=None) -> None:
        self.event_bus_name = event_bus_name
        self.source = source
        self.client = client or boto3.client("events")

    def publish(self, event: ReservationEvent) -> None:
        message = to_message(event)
        response = self.client.put_events(
            Entries=[
                {
                    "EventBusName": self.event_bus_name,
                    "Source": self.source,
                    "DetailType": message["event_type"],
                    "Detail": json.dumps(message["detail"]),
                }
            ]
        )
        if response.get("FailedEntryCount", 0):
            # 送信は投げっぱなし、拒否されたエントリはログに残すだけ
            logger.error(
                "Failed to publish reservation event",
                extra={
                    "event_type": message["event_type"],
                    "entries": response.get("Entries", []),
                },
            )
            return
        logger.debug("Published reservation event", extra={"event_type": message["event_type"]})
