from .product_factory import PricingStrategyDetails as PricingStrategyDetails
from .product_factory import ProductDetails as ProductDetails
from .product_factory import ProductFactory as ProductFactory
