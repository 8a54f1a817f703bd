from .pricing_policy import PricingPolicy as PricingPolicy
