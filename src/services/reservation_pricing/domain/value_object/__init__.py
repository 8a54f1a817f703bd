from .time_slot_price_breakdown import (
    TimeSlotPriceBreakdown as TimeSlotPriceBreakdown,
)
