from .pricing_policy_repository import (
    PricingPolicyRepository as PricingPolicyRepository,
)
