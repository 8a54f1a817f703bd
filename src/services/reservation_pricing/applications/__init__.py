from .cancel_reservation_pricing import (
    CancelReservationPricingService as CancelReservationPricingService,
)
from .confirm_reservation_pricing import (
    ConfirmReservationPricingService as ConfirmReservationPricingService,
)
from .create_reservation_pricing import (
    CreateReservationPricingService as CreateReservationPricingService,
)
from .expire_pending_reservations import (
    ExpirePendingReservationsService as ExpirePendingReservationsService,
)
from .get_reservation_pricing import (
    GetReservationPricingService as GetReservationPricingService,
)
from .inventory_allocator import InventoryAllocator as InventoryAllocator
from .preview_reservation_pricing import (
    PreviewReservationPricingService as PreviewReservationPricingService,
)
from .record_slot_reserved import RecordSlotReservedService as RecordSlotReservedService
from .reservation_quote import ProductRequest as ProductRequest
from .reservation_quote import ReservationQuoter as ReservationQuoter
from .retry_inventory_compensation import (
    RetryInventoryCompensationService as RetryInventoryCompensationService,
)
from .update_reservation_products import (
    UpdateReservationProductsService as UpdateReservationProductsService,
)
