from enum import Enum


class PricingType(str, Enum):
    INITIAL_PLUS_ADDITIONAL = "INITIAL_PLUS_ADDITIONAL"
    ONE_TIME = "ONE_TIME"
    SIMPLE_STOCK = "SIMPLE_STOCK"
