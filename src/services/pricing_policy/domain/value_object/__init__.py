from .price_breakdown import PriceBreakdown as PriceBreakdown
from .price_breakdown import SlotPrice as SlotPrice
from .time_range_price import TimeRangePrice as TimeRangePrice
from .time_range_prices import TimeRangePrices as TimeRangePrices
