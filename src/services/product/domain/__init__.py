from .entity import Product as Product
from .enum import PricingType as PricingType
from .enum import ProductScope as ProductScope
from .factory import ProductFactory as ProductFactory
from .repository import ProductRepository as ProductRepository
from .service import ProductAvailabilityService as ProductAvailabilityService
from .value_object import PricingStrategy as PricingStrategy
from .value_object import ProductPriceBreakdown as ProductPriceBreakdown
