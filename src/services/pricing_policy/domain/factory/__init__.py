from .pricing_policy_factory import PricingPolicyFactory as PricingPolicyFactory
from .pricing_policy_factory import TimeRangePriceDetails as TimeRangePriceDetails
