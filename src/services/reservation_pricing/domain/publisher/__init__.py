from .event_publisher import EventPublisher as EventPublisher
