from .entity import PricingPolicy as PricingPolicy
from .factory import PricingPolicyFactory as PricingPolicyFactory
from .repository import PricingPolicyRepository as PricingPolicyRepository
from .value_object import PriceBreakdown as PriceBreakdown
from .value_object import SlotPrice as SlotPrice
from .value_object import TimeRangePrice as TimeRangePrice
from .value_object import TimeRangePrices as TimeRangePrices
