from .pricing_type import PricingType as PricingType
from .product_scope import ProductScope as ProductScope
