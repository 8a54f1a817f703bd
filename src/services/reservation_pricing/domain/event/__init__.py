from .events import EVENT_TYPES as EVENT_TYPES
from .events import ReservationCancelled as ReservationCancelled
from .events import ReservationConfirmed as ReservationConfirmed
from .events import ReservationEvent as ReservationEvent
from .events import ReservationPendingPayment as ReservationPendingPayment
from .events import ReservationPricingCreated as ReservationPricingCreated
from .events import to_message as to_message
