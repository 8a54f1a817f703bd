from .pricing_strategy import PricingStrategy as PricingStrategy
from .product_price_breakdown import ProductPriceBreakdown as ProductPriceBreakdown
