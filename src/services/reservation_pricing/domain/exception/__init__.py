from .exceptions import (
    InvalidReservationStatusException as InvalidReservationStatusException,
)
from .exceptions import (
    ProductNotAvailableException as ProductNotAvailableException,
)
