from .product import Product as Product
